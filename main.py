#!/usr/bin/env python3
"""
Refresh every pool's lap swim schedule and show which pools have lap swim.

By default prints the pools with lap swim right now. With --day (and
optionally --range) prints each pool's sessions for that day instead.
The refreshed schedules are written to map_data/lap_swim_schedules_latest.json.
"""

import argparse
import json
import os
from datetime import datetime

from availability import TIME_RANGES, available_pools, pools_with_sessions
from constants import LOG_JSON, LOG_LEVEL, MANUAL_SCHEDULES_FILE, MAP_DATA_DIR
from log_setup import setup_logging
from schedule_cache import FAILED, ScheduleCache, load_manual_schedules

LATEST_FILE = "lap_swim_schedules_latest.json"


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Find pools with lap swim.")
    parser.add_argument("--date", help="Date to check, YYYY-MM-DD (default: today).")
    parser.add_argument("--time", help="Time to check, HH:MM (default: now).")
    parser.add_argument("--day", help="Show sessions for this day instead, e.g. Monday.")
    parser.add_argument(
        "--range",
        default="all",
        choices=sorted(TIME_RANGES),
        help="Time of day filter used with --day (default: all).",
    )
    parser.add_argument(
        "--favorite",
        action="append",
        default=[],
        help="Pool id to list first, may be repeated.",
    )
    parser.add_argument(
        "--manual-schedules",
        default=MANUAL_SCHEDULES_FILE,
        help=f"Manual schedule overrides (default: {MANUAL_SCHEDULES_FILE}).",
    )
    parser.add_argument("--output-dir", default=MAP_DATA_DIR, help="Where to write the schedules JSON.")
    return parser.parse_args(argv)


def requested_time(date_str=None, time_str=None):
    """Combine --date and --time into a naive local datetime, defaulting to now."""
    now = datetime.now()
    if not date_str and not time_str:
        return now
    day = datetime.strptime(date_str, "%Y-%m-%d").date() if date_str else now.date()
    clock = datetime.strptime(time_str, "%H:%M").time() if time_str else now.time()
    return datetime.combine(day, clock)


def write_schedules(schedules, output_dir):
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, LATEST_FILE)
    with open(output_path, "w") as f:
        json.dump([schedule.dict_output() for schedule in schedules], f, indent=2)
    return output_path


def main(argv=None):
    args = _parse_args(argv)
    setup_logging(json_output=LOG_JSON, log_level=LOG_LEVEL)

    cache = ScheduleCache(manual_schedules=load_manual_schedules(args.manual_schedules))
    results = cache.refresh_all()
    schedules = cache.get_all_schedules()

    output_path = write_schedules(schedules, args.output_dir)
    print(f"Saved {len(schedules)} schedules to {output_path}")

    failed = [result.pool_id for result in results if result.status == FAILED]
    if failed:
        print(f"Could not refresh: {', '.join(failed)}")

    if args.day:
        matches = pools_with_sessions(schedules, args.day, args.range, favorites=args.favorite)
        print(f"\nLap swim on {args.day} ({args.range}):")
        if not matches:
            print("  No lap swim sessions available for this day/time")
        for item in matches:
            print(f"  {item['pool']['name']}{' (manual)' if item['is_manual'] else ''}")
            for session in item['sessions']:
                print(f"    {session.time_str()}  {session.notes}".rstrip())
        return 0

    when = requested_time(args.date, args.time)
    available = available_pools(schedules, when)
    print(f"\nLap swim at {when.strftime('%A %Y-%m-%d %H:%M')}:")
    if not available:
        print("  No pools have lap swim at this time")
    for item in available:
        print(f"  {item['pool']['name']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
