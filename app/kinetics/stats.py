"""
Rolling log statistics: today / last 7 days / last 30 days.

``average_daily_mg`` divides the 7-day total by 7 regardless of how many of
those days had entries, so a single big day does not read as a heavy habit.
``peak_consumption_hour`` is count-based (unlike the mg-weighted peak hour of
the pattern analyzer) and defaults to 9 with no history.
"""

from __future__ import annotations

import datetime
from collections import Counter
from typing import Sequence

from app.kinetics.clock import start_of_local_day
from app.kinetics.doses import Dose, in_window, to_doses
from app.schemas.consumption import ConsumptionEvent
from app.schemas.pattern import LogStats

WEEK_DAYS = 7
MONTH_DAYS = 30
_DEFAULT_PEAK_HOUR = 9


def tracking_streak(doses: Sequence[Dose], today: datetime.date) -> int:
    """Consecutive local dates with at least one dose, ending ``today``.

    0 when nothing was logged today.
    """
    logged = {d.at.date() for d in doses}
    streak = 0
    day = today
    while day in logged:
        streak += 1
        day -= datetime.timedelta(days=1)
    return streak


def compute_log_stats(events: Sequence[ConsumptionEvent], now: datetime.datetime) -> LogStats:
    doses = [d for d in to_doses(events, now) if d.at <= now]
    if not doses:
        return LogStats()

    today = in_window(doses, start_of_local_day(now), now)
    week = in_window(doses, now - datetime.timedelta(days=WEEK_DAYS), now)
    month = in_window(doses, now - datetime.timedelta(days=MONTH_DAYS), now)

    week_total = sum(d.mg for d in week)
    drink_counts = Counter(d.event.display_name or d.event.substance_id for d in month)
    hour_counts = Counter(d.at.hour for d in month)

    return LogStats(
        total_mg_today=sum(d.mg for d in today),
        total_mg_week=week_total,
        total_mg_month=sum(d.mg for d in month),
        drinks_today=len(today),
        drinks_week=len(week),
        drinks_month=len(month),
        average_daily_mg=week_total / WEEK_DAYS if week else 0.0,
        most_consumed_drink=drink_counts.most_common(1)[0][0] if drink_counts else None,
        peak_consumption_hour=hour_counts.most_common(1)[0][0] if hour_counts else _DEFAULT_PEAK_HOUR,
        last_consumed_at=doses[-1].at,
        tracking_streak_days=tracking_streak(doses, now.date()),
    )
