"""
Lap swim availability checks against extracted schedules.

The two checks treat session boundaries differently and must stay that way:
- is_lap_swim_available: a time equal to a session's start or end counts
  (inclusive on both ends).
- sessions_overlapping: a window that only touches a session's start or end
  does not count (strict overlap).
"""

# Index order matches datetime.isoweekday() % 7, so 0 is Sunday
WEEKDAY_ORDER = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

# Filter presets as [start, end) minutes since midnight
TIME_RANGES = {
    'all': (0, 24 * 60),
    'early-morning': (5 * 60, 8 * 60),  # 5am - 8am
    'morning': (8 * 60, 12 * 60),  # 8am - 12pm
    'midday': (12 * 60, 14 * 60),  # 12pm - 2pm
    'afternoon': (14 * 60, 17 * 60),  # 2pm - 5pm
    'evening': (17 * 60, 21 * 60),  # 5pm - 9pm
}


def day_name(day_of_week):
    """Accept a day name ('Monday', 'MON') or a number with 0 = Sunday."""
    if isinstance(day_of_week, int):
        return WEEKDAY_ORDER[day_of_week % 7]
    return day_of_week


def day_matches(session, day_of_week):
    """True if the first three letters of day_of_week appear in any of the session's days."""
    target = day_name(day_of_week).lower()[:3]
    return any(target in day.lower() for day in session.days)


def is_lap_swim_available(schedule, day_of_week, hours, minutes):
    """Check if lap swim is in session at the given day and clock time."""
    target_minutes = hours * 60 + minutes
    for session in schedule.sessions:
        if not session.has_hours() or not day_matches(session, day_of_week):
            continue
        if session.start <= target_minutes <= session.end:
            return True
    return False


def is_available_at(schedule, when):
    """is_lap_swim_available for a naive local datetime."""
    return is_lap_swim_available(schedule, when.isoweekday() % 7, when.hour, when.minute)


def sessions_overlapping(schedule, day_of_week, window_start, window_end):
    """Return the sessions on day_of_week that overlap [window_start, window_end) minutes."""
    matching = []
    for session in schedule.sessions:
        if not session.has_hours() or not day_matches(session, day_of_week):
            continue
        if session.start < window_end and session.end > window_start:
            matching.append(session)
    return matching


def available_pools(schedules, when):
    """Return [{'pool', 'schedule'}] for every schedule with lap swim at `when`."""
    available = []
    for schedule in schedules:
        if is_available_at(schedule, when):
            available.append({
                'pool': schedule.pool,
                'schedule': [session.dict_output() for session in schedule.sessions],
            })
    return available


def pools_with_sessions(schedules, day_of_week, time_range='all', favorites=()):
    """
    Sessions per pool for a day and one of the TIME_RANGES presets.

    Pools without a matching session are left out. Favorite pools come first,
    otherwise the input order is kept.
    """
    window_start, window_end = TIME_RANGES.get(time_range, TIME_RANGES['all'])
    results = []
    for schedule in schedules:
        if not schedule.sessions:
            continue
        matching = sessions_overlapping(schedule, day_of_week, window_start, window_end)
        if matching:
            results.append({
                'pool': schedule.pool,
                'pool_id': schedule.pool_id,
                'sessions': matching,
                'is_manual': schedule.is_manual,
            })

    favorites = set(favorites)
    results.sort(key=lambda item: item['pool_id'] not in favorites)
    return results
