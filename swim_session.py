"""
Value classes for lap swim schedules.

A PoolSchedule is never edited after it is built. Refreshing a pool builds a
new PoolSchedule and swaps it into the cache.
"""

import copy

from swim_time import time_to_minutes


class LapSwimSession:
    """One recurring lap swim window on one day (or one day group for manual schedules)."""

    def __init__(self, days, times, context="", notes=""):
        self.days = list(days)
        self.times = list(times)
        self.context = context
        self.notes = notes
        if len(self.times) >= 2:
            self.start = time_to_minutes(self.times[0])
            self.end = time_to_minutes(self.times[1])
        else:
            self.start = None
            self.end = None

    def __str__(self):
        return f"LapSwimSession({', '.join(self.days)}, {self.time_str()}, {self.notes or self.context})"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, LapSwimSession):
            return NotImplemented
        return self.dict_output() == other.dict_output()

    def has_hours(self):
        return self.start is not None and self.end is not None

    def key(self):
        """(day, start, end) used to drop duplicate sessions"""
        return (self.days[0] if self.days else "", self.start, self.end)

    def time_str(self):
        return " - ".join(self.times)

    def dict_output(self):
        return {
            "days": list(self.days),
            "times": list(self.times),
            "start": self.start,
            "end": self.end,
            "context": self.context,
            "notes": self.notes,
        }


class PoolSchedule:
    """Lap swim sessions for one pool plus where they came from."""

    def __init__(self, pool_id, pool_name, sessions, raw_text, last_updated=None,
                 is_manual=False, schedule_url=None, pool=None):
        self.pool_id = pool_id
        self.pool_name = pool_name
        self.sessions = list(sessions)
        self.raw_text = raw_text
        self.last_updated = last_updated
        self.is_manual = is_manual
        self.schedule_url = schedule_url
        self.pool = pool

    def __str__(self):
        return f"PoolSchedule({self.pool_id}, {len(self.sessions)} sessions, manual={self.is_manual})"

    __repr__ = __str__

    def stamped(self, pool, last_updated, schedule_url=None, is_manual=False):
        """Return a copy of this schedule attached to a pool and a refresh time."""
        return PoolSchedule(
            pool_id=pool["id"],
            pool_name=pool["name"],
            sessions=self.sessions,
            raw_text=self.raw_text,
            last_updated=last_updated,
            is_manual=is_manual,
            schedule_url=schedule_url,
            pool=dict(pool),
        )

    def copy(self):
        return copy.deepcopy(self)

    def dict_output(self):
        return {
            "pool_id": self.pool_id,
            "pool_name": self.pool_name,
            "pool": dict(self.pool) if self.pool else None,
            "lap_swim_sessions": [session.dict_output() for session in self.sessions],
            "raw_text": self.raw_text,
            "schedule_url": self.schedule_url,
            "last_updated": self.last_updated.isoformat() if self.last_updated else None,
            "is_manual": self.is_manual,
        }
