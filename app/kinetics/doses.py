"""
Dose normalisation — the engine's single entry point for raw events.

Turns an arbitrary sequence of :class:`ConsumptionEvent` into a sorted list
of usable doses expressed in ``now``'s timezone convention.  Records with
no timestamp are dropped; non-finite or negative amounts become 0 mg.  The
input sequence is never mutated.
"""

from __future__ import annotations

import datetime
import logging
from typing import Iterable, NamedTuple

from app.kinetics.clock import to_local
from app.kinetics.decay import safe_mg
from app.schemas.consumption import ConsumptionEvent

logger = logging.getLogger(__name__)


class Dose(NamedTuple):
    at: datetime.datetime
    mg: float
    event: ConsumptionEvent


def to_doses(events: Iterable[ConsumptionEvent], now: datetime.datetime) -> list[Dose]:
    """Normalise and sort ``events`` by consumption time."""
    doses: list[Dose] = []
    for event in events:
        if event.consumed_at is None:
            logger.debug("Ignoring event %s without a consumption timestamp", event.id)
            continue
        mg = safe_mg(event.caffeine_mg)
        if mg == 0 and event.caffeine_mg != 0:
            logger.debug("Event %s has unusable amount %r, counting as 0 mg", event.id, event.caffeine_mg)
        doses.append(Dose(at=to_local(event.consumed_at, now), mg=mg, event=event))
    doses.sort(key=lambda d: d.at)
    return doses


def in_window(doses: list[Dose], start: datetime.datetime, end: datetime.datetime) -> list[Dose]:
    """Doses with ``start <= at <= end``."""
    return [d for d in doses if start <= d.at <= end]
