"""
Time helpers shared by the business rules

"Now" is always passed in by the caller; these helpers only reconcile
timestamps read back from the store with it.
"""

from datetime import date, datetime, tzinfo
from typing import Callable, Optional

Clock = Callable[[], datetime]


def align_timezone(value: datetime, reference: datetime) -> datetime:
    """Express ``value`` in the timezone of ``reference``.

    Naive values are taken to already be in the reference's local time, which
    is what SQLite hands back for timestamps written as local time. An aware
    value against a naive reference is converted to the host's local time.
    """
    if reference.tzinfo is None:
        if value.tzinfo is None:
            return value
        return value.astimezone().replace(tzinfo=None)
    if value.tzinfo is None:
        return value.replace(tzinfo=reference.tzinfo)
    return value.astimezone(reference.tzinfo)


def local_date(value: datetime, reference: datetime) -> date:
    """Calendar date of ``value`` as seen from ``reference``'s timezone"""
    return align_timezone(value, reference).date()


def now_in(zone: Optional[tzinfo]) -> datetime:
    """Current wall-clock time in ``zone``"""
    return datetime.now(zone)


def resolve_now(now: Optional[datetime], clock: Clock) -> datetime:
    """The caller's ``now``, or the clock's; a naive ``now`` is read in the clock's zone"""
    current = clock()
    if now is None:
        return current
    if now.tzinfo is None and current.tzinfo is not None:
        return now.replace(tzinfo=current.tzinfo)
    return now
