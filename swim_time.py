"""
Clock time helpers shared by the PDF parser, the manual schedule loader and
the availability checks. Times are local wall clock times, stored as minutes
since midnight.
"""

import re

TWELVE_HOUR_PATTERN = re.compile(r'(\d{1,2}):(\d{2})\s*(am|pm)', re.IGNORECASE)


def parse_time(time_str):
    """
    Parse a time like '7:00 am' or '6:30PM' into (hours, minutes).
    Returns None if the string does not hold a 12-hour time.
    """
    if not time_str:
        return None
    match = TWELVE_HOUR_PATTERN.search(time_str)
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2))
    period = match.group(3).lower()
    if hours > 12 or minutes > 59:
        return None

    if period == 'pm' and hours != 12:
        hours += 12
    if period == 'am' and hours == 12:
        hours = 0

    return hours, minutes


def time_to_minutes(time_str):
    """Convert time string like '9:00 am' to minutes since midnight, or None"""
    parsed = parse_time(time_str)
    if parsed is None:
        return None
    hours, minutes = parsed
    return hours * 60 + minutes


def minutes_to_time(minutes):
    """Convert minutes since midnight to time string like '9:00 am'"""
    hours = minutes // 60
    mins = minutes % 60
    return twelve_hour(hours, mins)


def twelve_hour(hours, minutes):
    """Format a 24-hour clock time as '6:05 pm'. Hour 0 is '12:.. am', hour 12 is '12:.. pm'."""
    period = 'pm' if hours >= 12 else 'am'
    if hours > 12:
        hours -= 12
    elif hours == 0:
        hours = 12
    return f"{hours}:{int(minutes):02d} {period}"
