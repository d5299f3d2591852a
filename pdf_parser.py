"""
Lap swim extraction from schedule PDF text.

The PDF text converter gives us one text line per table row, with cells
separated by tab characters. Tabs are the only column information we get, so
lines are never trimmed before splitting.

Strategy:
1. Find the header row: the first line naming two or more days of the week.
   Its day cells, in order, give the day for each column.
2. Scan the rows below it for the activity label (e.g. "LAP SWIM").
3. For each activity row, look ahead up to 3 lines for the row holding the
   times. A descriptive row like "(deep pool)" may sit in between.
4. For each column where the activity cell names the activity, take the first
   time range from the same column of the time row.
5. Drop duplicate (day, start, end) sessions, keeping the first one.

Text without a header row or without matching rows is not an error, it just
produces a schedule with no sessions.
"""

import re

from constants import LAP_SWIM
from log_setup import get_logger
from swim_session import LapSwimSession, PoolSchedule

logger = get_logger(__name__)

DAY_NAMES = ["MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", "SATURDAY", "SUNDAY"]

DAY_PATTERN = re.compile(r'(' + '|'.join(DAY_NAMES) + r')', re.IGNORECASE)

# hyphen-minus, hyphen, non-breaking hyphen, figure dash, en dash, em dash
DASHES = '-‐‑‒–—'

TIME_RANGE_PATTERN = re.compile(
    r'(\d{1,2}:\d{2}\s*(?:am|pm))\s*[' + DASHES + r']\s*(\d{1,2}:\d{2}\s*(?:am|pm))',
    re.IGNORECASE,
)

LOOKAHEAD_LINES = 3


def activity_pattern(activity):
    """Regex for an activity label that tolerates any whitespace between its words."""
    words = activity.split()
    return re.compile(r'\s*'.join(re.escape(word) for word in words), re.IGNORECASE)


def split_lines(pdf_text):
    """Split text into non-empty lines without trimming them."""
    lines = []
    for line in pdf_text.split('\n'):
        line = line.rstrip('\r')
        if line:
            lines.append(line)
    return lines


def find_day(cell):
    """Return the uppercase day named in a cell, or None."""
    match = DAY_PATTERN.search(cell)
    return match.group(0).upper() if match else None


def find_header_days(lines):
    """
    Find the header row and the days it names.

    Returns (header_index, days) where days lists the day of each day column
    in order, or (-1, []) if no line names two or more days.
    """
    for index, line in enumerate(lines):
        if len(DAY_PATTERN.findall(line)) < 2:
            continue
        days = []
        for cell in line.split('\t'):
            day = find_day(cell)
            if day:
                days.append(day)
        return index, days
    return -1, []


def find_time_range(text):
    """Return the (start, end) strings of the first time range in text, or None."""
    match = TIME_RANGE_PATTERN.search(text)
    if not match:
        return None
    return match.group(1).strip(), match.group(2).strip()


def find_time_line(lines, index, lookahead=LOOKAHEAD_LINES):
    """Return the first line after lines[index] (within lookahead) holding a time range."""
    for offset in range(1, lookahead + 1):
        if index + offset >= len(lines):
            break
        candidate = lines[index + offset]
        if TIME_RANGE_PATTERN.search(candidate):
            return candidate
    return None


def sessions_from_rows(activity_line, time_line, days, pattern):
    """Build one session per day column where the activity cell matches."""
    sessions = []
    activity_columns = activity_line.split('\t')
    time_columns = time_line.split('\t')

    for col, activity in enumerate(activity_columns):
        if col >= len(days):
            break
        if not pattern.search(activity):
            continue

        # only this column's cell, so a neighbouring day's times never leak in
        time_info = time_columns[col] if col < len(time_columns) else ''
        time_range = find_time_range(time_info)
        if not time_range:
            continue

        session = LapSwimSession(
            days=[days[col]],
            times=list(time_range),
            context=f"{activity.strip()} - {time_info.strip()}",
        )
        if not session.has_hours():
            logger.debug("unparseable_time_range", day=days[col], times=time_range)
            continue
        sessions.append(session)

    return sessions


def dedup_sessions(sessions):
    """Drop sessions repeating an earlier (day, start, end), keeping order."""
    seen = set()
    unique = []
    for session in sessions:
        key = session.key()
        if key in seen:
            continue
        seen.add(key)
        unique.append(session)
    return unique


def extract_sessions(pdf_text, activity=LAP_SWIM):
    """Return the deduplicated list of activity sessions found in pdf_text."""
    lines = split_lines(pdf_text or '')
    header_index, days = find_header_days(lines)
    if header_index == -1 or not days:
        logger.info("schedule_header_not_found", activity=activity)
        return []

    pattern = activity_pattern(activity)
    sessions = []
    for index in range(header_index + 1, len(lines)):
        line = lines[index]
        if not pattern.search(line):
            continue

        time_line = find_time_line(lines, index)
        if time_line is None:
            continue

        sessions.extend(sessions_from_rows(line, time_line, days, pattern))

    return dedup_sessions(sessions)


def extract_lap_swim_schedule(pdf_text, pool_name, activity=LAP_SWIM, pool_id=None):
    """
    Extract the lap swim schedule from PDF text.
    Returns a PoolSchedule; it has no sessions if nothing could be extracted.
    """
    sessions = extract_sessions(pdf_text, activity)
    logger.debug("extracted_sessions", pool=pool_name, sessions=len(sessions))
    return PoolSchedule(
        pool_id=pool_id,
        pool_name=pool_name,
        sessions=sessions,
        raw_text=pdf_text,
    )
