"""
Sleep check-in helpers: yesterday's caffeine context and the prompt rule.

A check-in is requested on the first dose of a morning, asking how the
previous night went.  The prompt is shown only when all of these hold:

- it is before 14:00 local time,
- no check-in exists for today,
- yesterday had at least one dose,
- today has at most one dose (the one just logged).
"""

from __future__ import annotations

import datetime
from typing import Sequence

from app.kinetics.clock import start_of_local_day
from app.kinetics.doses import to_doses
from app.schemas.consumption import ConsumptionEvent
from app.schemas.sleep_checkin import SleepCheckin, YesterdaySummary

PROMPT_CUTOFF_HOUR = 14


def yesterday_summary(events: Sequence[ConsumptionEvent], now: datetime.datetime) -> YesterdaySummary:
    """Total mg, last dose hour and dose count for the previous local day."""
    yesterday = start_of_local_day(now).date() - datetime.timedelta(days=1)
    doses = [d for d in to_doses(events, now) if d.at.date() == yesterday]
    if not doses:
        return YesterdaySummary()
    return YesterdaySummary(
        total_mg=sum(d.mg for d in doses),
        last_hour=doses[-1].at.hour,
        count=len(doses),
    )


def needs_sleep_checkin(
    events: Sequence[ConsumptionEvent],
    checkins: Sequence[SleepCheckin],
    now: datetime.datetime,
) -> bool:
    if now.hour >= PROMPT_CUTOFF_HOUR:
        return False
    today = now.date()
    if any(c.date == today for c in checkins):
        return False
    if yesterday_summary(events, now).count == 0:
        return False
    today_count = sum(1 for d in to_doses(events, now) if d.at.date() == today)
    return today_count <= 1
