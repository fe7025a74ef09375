"""Closed time spans and how they overlap.

A span includes both of its ends; a zero-length span marks a single instant.
Both ends live in one timezone, and comparisons between spans require that
the other span shares it.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum

from typing_extensions import override

from caldelta.diff import DiffRegime, RegimeLike, diff
from caldelta.errors import InvalidArgument, InvariantBroken
from caldelta.interval import TimeInterval
from caldelta.moment import at_tz, ensure_aware, epoch_micros, zone_name


class OverlapKind(Enum):
    """How another span relates to a baseline span."""

    NONE = "none"
    """Disjoint; there is a gap between the spans."""

    IDENTITY = "identity"
    """Same start and same end."""

    ENCLOSES = "encloses"
    """The other span fully contains the baseline."""

    IS_SUBSET = "is_subset"
    """The other span lies fully inside the baseline."""

    ENDS_WITHIN = "ends_within"
    """The other span starts before the baseline and ends inside it."""

    BEGINS_WITHIN = "begins_within"
    """The other span starts inside the baseline and ends after it."""


@dataclass(frozen=True)
class TimeSpan:
    """Closed range ``[start, end]`` of aware datetimes in one timezone.

    Attributes:
        start: First moment of the span (inclusive)
        end: Last moment of the span (inclusive), never earlier than start
        timezone: Zone name shared by both ends
        start_micros: Epoch microseconds of start, cached at construction
        end_micros: Epoch microseconds of end, cached at construction

    Raises:
        TypeError: If either end is a naive datetime
        InvalidArgument: If the ends are in different timezones or start is
            later than end
    """

    start: datetime
    end: datetime
    timezone: str = field(init=False)
    start_micros: int = field(init=False, repr=False)
    end_micros: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        ensure_aware(self.start, "start")
        ensure_aware(self.end, "end")

        start_zone = zone_name(self.start)
        end_zone = zone_name(self.end)
        if end_zone != start_zone:
            raise InvalidArgument(
                f"TimeSpan end timezone ({end_zone}) differs from start "
                f"timezone ({start_zone}).\n"
                f"Hint: Build both ends with one zone object, e.g. one "
                f"at_tz(...) factory"
            )

        start_micros = epoch_micros(self.start)
        end_micros = epoch_micros(self.end)
        # Equal ends are allowed; the span then covers a single instant.
        if start_micros > end_micros:
            raise InvalidArgument(
                f"TimeSpan start ({self.start.isoformat()}) must be <= "
                f"end ({self.end.isoformat()})"
            )

        object.__setattr__(self, "timezone", start_zone)
        object.__setattr__(self, "start_micros", start_micros)
        object.__setattr__(self, "end_micros", end_micros)

    @classmethod
    def of_days(
        cls, first: date, last: date | None = None, tz: str = "UTC"
    ) -> "TimeSpan":
        """
        Span covering whole calendar days in ``tz``.

        Runs from midnight of ``first`` to the last microsecond of ``last``.

        Args:
            first: First day included
            last: Last day included (default: ``first``, a one-day span)
            tz: IANA timezone name for day boundaries

        Example:
            >>> january = TimeSpan.of_days(date(2019, 1, 1), date(2019, 1, 31))
        """
        at = at_tz(tz)
        last = first if last is None else last
        return cls(
            at(datetime.combine(first, time.min)),
            at(datetime.combine(last, time.max)),
        )

    def _require_same_zone(self, other: "TimeSpan") -> None:
        if other.timezone != self.timezone:
            raise InvalidArgument(
                f"Cannot compare a TimeSpan in {other.timezone} with one in "
                f"{self.timezone}.\n"
                f"Spans are only comparable within a single timezone."
            )

    def overlap(self, other: "TimeSpan") -> OverlapKind:
        """Classify how ``other`` overlaps this span.

        The first matching kind wins: IDENTITY, ENCLOSES, IS_SUBSET,
        ENDS_WITHIN, BEGINS_WITHIN. Touching ends count as overlap since both
        spans are closed.

        Raises:
            InvalidArgument: If ``other`` is in another timezone
            InvariantBroken: If no kind explains an overlap
        """
        self._require_same_zone(other)

        base_start, base_end = self.start_micros, self.end_micros
        other_start, other_end = other.start_micros, other.end_micros

        if other_end < base_start or other_start > base_end:
            return OverlapKind.NONE
        if other_start == base_start and other_end == base_end:
            return OverlapKind.IDENTITY
        if other_start <= base_start and other_end >= base_end:
            return OverlapKind.ENCLOSES
        if other_start >= base_start and other_end <= base_end:
            return OverlapKind.IS_SUBSET
        if other_end < base_end:
            return OverlapKind.ENDS_WITHIN
        if other_start > base_start:
            return OverlapKind.BEGINS_WITHIN
        raise InvariantBroken(f"Failed to explain how {other} overlaps {self}")

    def distance(
        self, other: "TimeSpan", regime: RegimeLike = DiffRegime.EXACT
    ) -> OverlapKind | TimeInterval:
        """Gap between this span and ``other``, or how they overlap.

        Returns:
            The OverlapKind if the spans overlap at all. Otherwise the
            interval from this span's end to ``other``'s start when ``other``
            comes later, or from this span's start back to ``other``'s end
            (inverted) when ``other`` comes earlier.

        Raises:
            InvalidArgument: If ``other`` is in another timezone
        """
        kind = self.overlap(other)
        if kind is not OverlapKind.NONE:
            return kind
        if other.start_micros > self.end_micros:
            return diff(self.end, other.start, regime)
        return diff(self.start, other.end, regime)

    def interval(self, regime: RegimeLike = DiffRegime.EXACT) -> TimeInterval:
        """Length of this span, from start to end."""
        return diff(self.start, self.end, regime)

    @override
    def __str__(self) -> str:
        start, end = self.start.isoformat(), self.end.isoformat()
        return f"TimeSpan({start}→{end}, {self.timezone})"


__all__ = ["OverlapKind", "TimeSpan"]
