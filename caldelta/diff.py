"""Differences between calendar moments that survive DST shifts.

A single calendar subtraction can only be half right when the UTC offset
changes between two moments:

- Truly moving both moments to UTC preserves elapsed time (hours, minutes,
  seconds, total days) but may shift a wall clock across a day or month line,
  so years, months and days can be off.
- Relabeling both moments' wall clocks as UTC preserves the calendar fields
  but loses the offset change, so elapsed hours and total days can be off.

The exact regime computes both and keeps the correct half of each. The
habitual regime keeps only the wall-clock subtraction, so a calendar day is
always 24 hours.

Example:
    >>> from caldelta import at_tz, diff
    >>> at = at_tz("Europe/Copenhagen")
    >>> diff(at(2019, 3, 1), at(2019, 4, 1)).total_hours
    743
    >>> diff(at(2019, 3, 1), at(2019, 4, 1), "habitual").total_hours
    744
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Literal

from dateutil.relativedelta import relativedelta

from caldelta.errors import InvalidArgument
from caldelta.interval import CalendarComponents, TimeInterval
from caldelta.moment import ensure_aware, relabel, rezone
from caldelta.util import UTC

logger = logging.getLogger(__name__)


class DiffRegime(Enum):
    """How a difference treats a daylight saving time shift between moments."""

    EXACT = "exact"
    """Elapsed real time; a day spanning a DST shift is 23 or 25 hours."""

    HABITUAL = "habitual"
    """DST ignorant; every calendar day counts as 24 hours."""


RegimeLike = DiffRegime | Literal["exact", "habitual"]


def _coerce_regime(regime: RegimeLike) -> DiffRegime:
    if isinstance(regime, DiffRegime):
        return regime
    try:
        return DiffRegime(regime)
    except ValueError:
        valid = ", ".join(repr(r.value) for r in DiffRegime)
        raise InvalidArgument(
            f"Unknown diff regime {regime!r}.\n"
            f"Valid regimes: {valid} (or a DiffRegime member)"
        ) from None


def subtract(baseline: datetime, subject: datetime) -> CalendarComponents:
    """Calendar subtraction of two moments sharing one timezone.

    Magnitudes are always measured from the earlier moment to the later one,
    so swapping the arguments flips ``invert`` and nothing else.

    Args:
        baseline: Moment the difference is measured from
        subject: Moment the difference is measured to

    Returns:
        Normalized unsigned components; ``invert`` is True if ``subject``
        precedes ``baseline``
    """
    invert = subject < baseline
    earlier, later = (subject, baseline) if invert else (baseline, subject)

    delta = relativedelta(later, earlier)
    return CalendarComponents(
        years=delta.years,
        months=delta.months,
        days=delta.days,
        hours=delta.hours,
        minutes=delta.minutes,
        seconds=delta.seconds,
        microseconds=delta.microseconds,
        invert=invert,
        total_days=(later - earlier).days,
    )


def diff(
    baseline: datetime,
    subject: datetime,
    regime: RegimeLike = DiffRegime.EXACT,
) -> TimeInterval:
    """
    Difference from ``baseline`` to ``subject``.

    The moments may be in different timezones and in either order; a subject
    earlier than the baseline yields ``invert=True`` and negative signed
    fields.

    Args:
        baseline: Aware datetime the difference is measured from
        subject: Aware datetime the difference is measured to
        regime: ``DiffRegime.EXACT`` (default) or ``DiffRegime.HABITUAL``,
            or their string values

    Returns:
        Reconciled TimeInterval

    Raises:
        TypeError: If either moment is naive
        InvalidArgument: If ``regime`` is not a known regime
    """
    ensure_aware(baseline, "baseline")
    ensure_aware(subject, "subject")
    regime = _coerce_regime(regime)

    wall_clock = subtract(relabel(baseline, UTC), relabel(subject, UTC))
    if regime is DiffRegime.HABITUAL:
        return TimeInterval.from_components(wall_clock)

    absolute = subtract(rezone(baseline, UTC), rezone(subject, UTC))
    if absolute != wall_clock:
        logger.debug(
            "Offset change between %s and %s: calendar fields from %s, "
            "elapsed time from %s",
            baseline.isoformat(),
            subject.isoformat(),
            wall_clock,
            absolute,
        )
    return TimeInterval.reconcile(absolute, wall_clock)


__all__ = ["DiffRegime", "diff", "subtract"]
