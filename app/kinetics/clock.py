"""
Local-time helpers shared by the kinetics modules.

The engine works in the timezone of the ``now`` it is given.  If ``now`` is
timezone-aware, aware event timestamps are converted into that zone and
naive ones are assumed to already be local.  If ``now`` is naive, everything
is treated as naive local time.  ``now`` is sampled once by the caller and
threaded through every helper so one computation is time-consistent.
"""

from __future__ import annotations

import datetime

_SECONDS_PER_HOUR = 3600.0


def to_local(dt: datetime.datetime, now: datetime.datetime) -> datetime.datetime:
    """Express ``dt`` in the same timezone convention as ``now``."""
    if now.tzinfo is None:
        if dt.tzinfo is not None:
            return dt.astimezone().replace(tzinfo=None)
        return dt
    if dt.tzinfo is None:
        return dt.replace(tzinfo=now.tzinfo)
    return dt.astimezone(now.tzinfo)


def local_date(dt: datetime.datetime, now: datetime.datetime) -> datetime.date:
    return to_local(dt, now).date()


def local_hour(dt: datetime.datetime, now: datetime.datetime) -> float:
    """Hour of day as a float in ``[0, 24)``."""
    local = to_local(dt, now)
    return local.hour + local.minute / 60.0


def start_of_local_day(now: datetime.datetime) -> datetime.datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def hours_between(start: datetime.datetime, end: datetime.datetime) -> float:
    """Signed hours from ``start`` to ``end`` (negative if ``start`` is later).

    Both arguments must follow the same convention (see :func:`to_local`).
    Aware values are compared in UTC, so a DST change between them counts
    as real elapsed time rather than wall-clock time.
    """
    if start.tzinfo is not None and end.tzinfo is not None:
        start = start.astimezone(datetime.timezone.utc)
        end = end.astimezone(datetime.timezone.utc)
    return (end - start).total_seconds() / _SECONDS_PER_HOUR


def add_hours(moment: datetime.datetime, hours: float) -> datetime.datetime:
    """``moment`` plus ``hours`` of real elapsed time, in ``moment``'s zone."""
    if moment.tzinfo is None:
        return moment + datetime.timedelta(hours=hours)
    shifted = moment.astimezone(datetime.timezone.utc) + datetime.timedelta(hours=hours)
    return shifted.astimezone(moment.tzinfo)


def next_bedtime(now: datetime.datetime, bedtime: datetime.time) -> datetime.datetime:
    """Next occurrence of ``bedtime`` strictly after ``now``.

    A bedtime equal to or earlier than the current time of day resolves to
    tomorrow.
    """
    candidate = now.replace(hour=bedtime.hour, minute=bedtime.minute, second=0, microsecond=0)
    if candidate <= now:
        candidate += datetime.timedelta(days=1)
    return candidate


def parse_hhmm(value: str | datetime.time) -> datetime.time:
    """Parse an ``HH:MM`` bedtime, falling back to 23:00 on garbage."""
    if isinstance(value, datetime.time):
        return value
    try:
        hours, minutes = value.strip().split(":", 1)
        return datetime.time(int(hours), int(minutes))
    except (AttributeError, ValueError):
        return datetime.time(23, 0)


def format_hour(hour: float) -> str:
    """Format a float hour-of-day as ``HH:MM``."""
    total_minutes = int(round(hour * 60)) % (24 * 60)
    hh, mm = divmod(total_minutes, 60)
    return f"{hh:02d}:{mm:02d}"
