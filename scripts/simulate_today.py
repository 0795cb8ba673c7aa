"""What would the engine tell you through a typical coffee day?

Replays a fixed day of doses hour by hour and prints the caffeine level,
the bedtime projection and the guidance at each checkpoint, followed by
the weekly pattern summary of a synthetic week.

Usage:
    python scripts/simulate_today.py
"""

import datetime
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.kinetics.config import KineticsConfig
from app.kinetics.guidance import compute_guidance
from app.kinetics.patterns import analyze_patterns, generate_weekly_insights
from app.kinetics.profile import classify_personality
from app.kinetics.status import compute_status
from app.schemas.consumption import ConsumptionEvent

TODAY = datetime.datetime(2026, 10, 19)
BEDTIME = "23:00"
DAILY_LIMIT_MG = 400.0

# ─── (hour, minute, drink, mg) ──────────────────────────────────────
RAW_DAY = [
    (7, 30, "Drip coffee (medium)", 180),
    (10, 15, "Espresso (double)", 126),
    (13, 0, "Cold brew", 155),
    (16, 45, "Cappuccino", 75),
]

# Mon..Sun multipliers for the synthetic week
WEEK_SCALE = [1.0, 1.0, 0.8, 1.0, 1.2, 0.5, 0.4]

CHECKPOINTS = [7, 8, 10, 11, 13, 14, 16, 17, 19, 21, 22]


def build_events(day: datetime.datetime, scale: float = 1.0, prefix: str = "") -> list[ConsumptionEvent]:
    events = []
    for i, (hour, minute, drink, mg) in enumerate(RAW_DAY):
        at = day.replace(hour=hour, minute=minute)
        events.append(ConsumptionEvent(
            id=f"{prefix}{i}",
            substance_id=drink.lower().split(" ")[0],
            display_name=drink,
            caffeine_mg=mg * scale,
            consumed_at=at,
            logged_at=at,
        ))
    return events


def build_week(today: datetime.datetime) -> list[ConsumptionEvent]:
    events = []
    for days_back in range(7, 0, -1):
        day = today - datetime.timedelta(days=days_back)
        events.extend(build_events(day, WEEK_SCALE[day.weekday()], prefix=f"d{days_back}-"))
    return events


def main():
    cfg = KineticsConfig()
    events = build_events(TODAY)

    print()
    print("=" * 72)
    print(f"  Caffeine day — {TODAY.strftime('%A %d %B %Y')}  (bedtime {BEDTIME})")
    print("=" * 72)
    print()
    print(f"  {'Time':<6} {'Level':>6} {'Peak':>6} {'Today':>6} {'Bed':>5}  {'Sleep':<7} {'State':<12} Wait")
    print("  " + "-" * 68)

    for hour in CHECKPOINTS:
        now = TODAY.replace(hour=hour)
        status = compute_status(events, now, BEDTIME, DAILY_LIMIT_MG, config=cfg)
        guidance = compute_guidance(status, config=cfg)
        print(
            f"  {now:%H:%M}  {status.current_level_mg:>6} {status.peak_level_mg:>6} "
            f"{status.daily_consumed_mg:>6.0f} {status.projected_at_bedtime_mg:>5}  "
            f"{status.sleep_risk:<7} {guidance.state:<12} {guidance.wait_time_label or '-'}"
        )

    # ── Weekly summary ──────────────────────────────────────────────
    history = build_week(TODAY) + events
    end_of_day = TODAY.replace(hour=22)
    pattern = analyze_patterns(history, end_of_day, window_days=7, config=cfg)
    personality = classify_personality(pattern)

    print()
    print("  Weekly pattern:")
    print(f"    first / last dose   {pattern.average_first_dose} / {pattern.average_last_dose}")
    print(f"    peak hour           {pattern.peak_hour:02d}:00")
    print(f"    daily average       {pattern.average_daily_mg} mg")
    print(f"    weekend - weekday   {pattern.weekday_vs_weekend_diff_mg:+d} mg")
    print(f"    optimal timing      {pattern.optimal_timing_pct}%")
    print(f"    personality         {personality.name}: {personality.description}")
    print()

    for insight in generate_weekly_insights(history, end_of_day, BEDTIME, config=cfg):
        print(f"  [{insight.kind}] {insight.title}: {insight.message}")
        if insight.action:
            print(f"      → {insight.action}")
    print()


if __name__ == "__main__":
    main()
