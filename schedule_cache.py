"""
Per-pool lap swim schedules, kept in memory.

Each pool's schedule is resolved in this order:
1. A manual override from manual_schedules.json always wins, no fetch happens.
2. A pool without a schedule PDF is unavailable and its cache entry is left as is.
3. Otherwise the PDF text is fetched and parsed.

A refresh that fails keeps whatever was cached for that pool before, so a
flaky download never wipes a good schedule. Refreshing all pools runs the
pools in parallel and waits until every one of them has finished.
"""

import json
import re
import threading
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime

from constants import DISCOVER_SCHEDULE_URLS, LAP_SWIM, MANUAL_SCHEDULES_FILE, MAX_REFRESH_WORKERS
from errors import ConfigurationError
from log_setup import get_logger
from pdf_fetch import get_schedule_url, make_text_fetcher
from pdf_parser import extract_lap_swim_schedule
from pools import POOLS, find_pool
from swim_session import LapSwimSession, PoolSchedule
from swim_time import twelve_hour

logger = get_logger(__name__)

MANUAL_RAW_TEXT = "Manual schedule override"

MANUAL = "manual"
EXTRACTED = "extracted"
UNAVAILABLE = "unavailable"
FAILED = "failed"

RefreshResult = namedtuple("RefreshResult", ["pool_id", "status", "schedule", "error"])

RANGE_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})\s*-\s*(\d{1,2}):(\d{2})$')


def load_manual_schedules(path=MANUAL_SCHEDULES_FILE):
    """Load manual overrides ({"schedules": {pool_id: {...}}}) keyed by pool id."""
    try:
        with open(path, 'r') as f:
            return json.load(f).get("schedules", {}) or {}
    except FileNotFoundError:
        logger.info("no_manual_schedules", path=path)
    except (OSError, ValueError) as e:
        logger.warning("manual_schedules_unreadable", path=path, error=str(e))
    return {}


def convert_time_range(time_str):
    """
    Convert '6:00-8:00' (24-hour) into ['6:00 am', '8:00 am'].
    Returns None if the string is not a H:MM-H:MM range.
    """
    match = RANGE_PATTERN.match(time_str.strip())
    if not match:
        return None
    start_hour, start_min, end_hour, end_min = match.groups()
    return [twelve_hour(int(start_hour), start_min), twelve_hour(int(end_hour), end_min)]


def process_manual_schedule(manual_schedule):
    """
    Expand a manual override into sessions.

    Each time range of a day group becomes its own session carrying the whole
    day group and its notes. A day group with no times becomes one session
    without hours ("open, hours unknown").
    """
    sessions = []
    for entry in manual_schedule.get("lapSwimSessions", []):
        days = entry.get("days", [])
        notes = entry.get("notes") or ""
        times = entry.get("times") or []

        if not times:
            sessions.append(LapSwimSession(days=days, times=[], notes=notes))
            continue

        for time_str in times:
            converted = convert_time_range(time_str)
            if converted is None:
                logger.warning("manual_time_range_skipped", days=days, time=time_str)
                continue
            sessions.append(LapSwimSession(days=days, times=converted, notes=notes))

    return sessions


class ScheduleCache:
    """Owns the pool_id -> PoolSchedule map and the refresh policy."""

    def __init__(self, pools=POOLS, fetch_text=None, manual_schedules=None,
                 max_workers=MAX_REFRESH_WORKERS, discover_urls=DISCOVER_SCHEDULE_URLS,
                 activity=LAP_SWIM, clock=datetime.now):
        self.pools = list(pools)
        self.fetch_text = fetch_text if fetch_text is not None else make_text_fetcher()
        self.manual_schedules = manual_schedules if manual_schedules is not None else {}
        self.max_workers = max_workers
        self.discover_urls = discover_urls
        self.activity = activity
        self.clock = clock
        self._schedules = {}
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self._schedules)

    def get_pool(self, pool_id):
        return find_pool(pool_id, self.pools)

    def _require_pool(self, pool_or_id):
        if isinstance(pool_or_id, dict):
            return pool_or_id
        pool = self.get_pool(pool_or_id)
        if pool is None:
            raise ConfigurationError(f"Pool not found: {pool_or_id}")
        return pool

    def put(self, schedule):
        with self._lock:
            self._schedules[schedule.pool_id] = schedule

    def _manual_schedule(self, pool):
        sessions = process_manual_schedule(self.manual_schedules[pool["id"]])
        return PoolSchedule(
            pool_id=pool["id"],
            pool_name=pool["name"],
            sessions=sessions,
            raw_text=MANUAL_RAW_TEXT,
            last_updated=self.clock(),
            is_manual=True,
            pool=dict(pool),
        )

    def refresh_pool(self, pool_or_id):
        """Refresh one pool and return a RefreshResult saying which branch was taken."""
        pool = self._require_pool(pool_or_id)
        pool_id = pool["id"]

        try:
            if self.manual_schedules.get(pool_id):
                logger.info("using_manual_schedule", pool=pool["name"])
                schedule = self._manual_schedule(pool)
                self.put(schedule)
                return RefreshResult(pool_id, MANUAL, schedule.copy(), None)

            pool_names = [p["name"] for p in self.pools]
            schedule_url = get_schedule_url(pool, discover=self.discover_urls, pool_names=pool_names)
            if not schedule_url:
                logger.info("no_schedule_url", pool=pool["name"])
                return RefreshResult(pool_id, UNAVAILABLE, None, None)

            pdf_text = self.fetch_text(schedule_url)
            extracted = extract_lap_swim_schedule(pdf_text, pool["name"], activity=self.activity)
            schedule = extracted.stamped(pool, self.clock(), schedule_url=schedule_url)
        except Exception as e:
            logger.exception("schedule_update_failed", pool=pool["name"], error=str(e))
            return RefreshResult(pool_id, FAILED, None, e)

        self.put(schedule)
        logger.info("schedule_updated", pool=pool["name"], sessions=len(schedule.sessions))
        return RefreshResult(pool_id, EXTRACTED, schedule.copy(), None)

    def refresh_all(self):
        """Refresh every pool in parallel. Returns RefreshResults in pool order once all have finished."""
        logger.info("updating_all_schedules", pools=len(self.pools))
        if not self.pools:
            return []

        results = {}
        max_workers = max(1, min(len(self.pools), self.max_workers))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            future_to_pool = {executor.submit(self.refresh_pool, pool): pool for pool in self.pools}
            for future in as_completed(future_to_pool):
                pool = future_to_pool[future]
                try:
                    results[pool["id"]] = future.result()
                except Exception as e:
                    logger.exception("schedule_update_failed", pool=pool["name"], error=str(e))
                    results[pool["id"]] = RefreshResult(pool["id"], FAILED, None, e)

        failed = [pool_id for pool_id, result in results.items() if result.status == FAILED]
        logger.info("schedule_update_complete", loaded=len(self), failed=failed)
        return [results[pool["id"]] for pool in self.pools]

    def get_schedule(self, pool_id):
        """
        Return a copy of the pool's schedule, or None when it is not available.

        Reading an empty cache refreshes all pools first. A pool missing from a
        loaded cache is refreshed on its own.
        """
        pool = self._require_pool(pool_id)
        if len(self) == 0:
            self.refresh_all()
        else:
            with self._lock:
                cached = pool_id in self._schedules
            if not cached:
                self.refresh_pool(pool)

        with self._lock:
            schedule = self._schedules.get(pool["id"])
        return schedule.copy() if schedule else None

    def get_all_schedules(self):
        """Return copies of all cached schedules in pool order, refreshing first if the cache is empty."""
        if len(self) == 0:
            self.refresh_all()
        with self._lock:
            return [self._schedules[pool["id"]].copy() for pool in self.pools if pool["id"] in self._schedules]

    def health(self):
        return {
            "status": "ok",
            "schedules_loaded": len(self),
            "total_pools": len(self.pools),
        }
