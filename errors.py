"""Errors raised while building pool schedules.

Text that simply has no recognisable schedule is not an error: the parser
returns an empty schedule for it.
"""


class ScheduleError(Exception):
    """Base exception for schedule errors."""

    pass


class FetchError(ScheduleError):
    """A schedule PDF could not be downloaded or turned into text.

    Raised for network failures, HTTP error statuses and unreadable PDFs.
    The cache keeps the last good schedule when this happens.
    """

    def __init__(self, message, url=None):
        super().__init__(message)
        self.url = url


class ConfigurationError(ScheduleError):
    """A pool id that is not in the pool registry."""

    pass
