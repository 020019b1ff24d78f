"""
Exceptions raised by the season scheduler.

Only genuinely invalid requests raise:
- InsufficientClubsError: fewer than two clubs to schedule
- FinalsFormatError: malformed or unknown finals format, missing week/match
- LadderError: ladder too short for a rank a format references

Schedule problems are reported as Violation values, never raised.
"""


class SchedulerError(Exception):
    """Base exception for all scheduler errors."""
    pass


class InsufficientClubsError(SchedulerError, ValueError):
    """Fewer than two clubs were supplied."""
    pass


class FinalsError(SchedulerError):
    """Base exception for finals resolution errors."""
    pass


class FinalsFormatError(FinalsError):
    """A finals format definition is malformed or does not exist."""
    pass


class LadderError(FinalsError):
    """The ladder cannot satisfy a ladder-rank reference."""
    pass
