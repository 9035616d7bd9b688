from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Iterable

from src.domain.models import ArrivalEvent, DelaySeverity
from src.domain.models.arrival import as_utc

SLIGHT_DELAY_MAX_S = 60
ARRIVING_NOW_WINDOW_S = 60

_MINUTES_IN_DAY = 1440
_MINUTES_IN_MONTH = 43200
_MINUTES_IN_YEAR = 525600

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def order_arrivals(events: Iterable[ArrivalEvent]) -> tuple[ArrivalEvent, ...]:
    """Sort by effective time, earliest first.

    The sort is stable, so events with identical effective times keep their
    input order. Events without a parseable time go last, also in input order.
    """

    def key(event: ArrivalEvent) -> tuple[bool, datetime]:
        effective = event.effective_time
        if effective is None:
            return (True, _EARLIEST)
        return (False, as_utc(effective))

    return tuple(sorted(events, key=key))


def classify_delay(delay_s: int) -> DelaySeverity:
    if delay_s <= 0:
        return DelaySeverity.ON_TIME
    if delay_s <= SLIGHT_DELAY_MAX_S:
        return DelaySeverity.SLIGHT_DELAY
    return DelaySeverity.SIGNIFICANT_DELAY


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def distance_in_words(
    later: datetime, earlier: datetime, *, add_suffix: bool = False
) -> str:
    """Approximate distance between two instants in words.

    Uses the same buckets as date-fns `formatDistance` (without seconds):
    "less than a minute", "5 minutes", "about 2 hours", "3 days", ...
    With `add_suffix`, future distances read "in ..." and past ones "... ago".
    """

    seconds = (as_utc(later) - as_utc(earlier)).total_seconds()
    minutes = _round_half_up(abs(seconds) / 60.0)

    if minutes < 2:
        phrase = "less than a minute" if minutes == 0 else "1 minute"
    elif minutes < 45:
        phrase = f"{minutes} minutes"
    elif minutes < 90:
        phrase = "about 1 hour"
    elif minutes < _MINUTES_IN_DAY:
        phrase = f"about {_round_half_up(minutes / 60.0)} hours"
    elif minutes < 2520:
        phrase = "1 day"
    elif minutes < _MINUTES_IN_MONTH:
        phrase = f"{_round_half_up(minutes / _MINUTES_IN_DAY)} days"
    elif minutes < 2 * _MINUTES_IN_MONTH:
        phrase = "about 1 month"
    elif minutes < _MINUTES_IN_YEAR:
        phrase = f"{_round_half_up(minutes / _MINUTES_IN_MONTH)} months"
    else:
        years = _round_half_up(minutes / _MINUTES_IN_YEAR)
        phrase = "about 1 year" if years == 1 else f"about {years} years"

    if not add_suffix:
        return phrase
    return f"in {phrase}" if seconds >= 0 else f"{phrase} ago"


def _compact(phrase: str) -> str:
    text = phrase
    for filler in ("in about ", "in ", "about "):
        if text.startswith(filler):
            text = text[len(filler) :]
    text = text.replace("less than a minute", "< 1 min")
    text = text.replace(" minutes", " min").replace(" minute", " min")
    return text


def format_relative(effective_time: datetime | None, now: datetime) -> str:
    """Short rider-facing label for an arrival ("5 min", "Arriving now", ...)."""

    if effective_time is None:
        return "Invalid time"

    effective = as_utc(effective_time)
    current = as_utc(now)

    if effective < current:
        if (current - effective).total_seconds() < ARRIVING_NOW_WINDOW_S:
            return "Arriving now"
        return "Departed"

    return _compact(distance_in_words(effective, current, add_suffix=True))
