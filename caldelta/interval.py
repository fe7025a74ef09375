import re
from dataclasses import dataclass, field

from dateutil.relativedelta import relativedelta
from typing_extensions import override

from caldelta.errors import InvalidArgument
from caldelta.util import (
    HOURS_PER_DAY,
    MINUTES_PER_HOUR,
    MONTHS_PER_YEAR,
    SECOND,
    SECONDS_PER_MINUTE,
)

_MAGNITUDES = (
    "years",
    "months",
    "days",
    "hours",
    "minutes",
    "seconds",
    "microseconds",
)


def _check_magnitudes(obj: object, names: tuple[str, ...]) -> None:
    for name in names:
        value = getattr(obj, name)
        if value < 0:
            raise InvalidArgument(
                f"{type(obj).__name__}.{name} must be >= 0, got {value}.\n"
                f"Magnitudes are unsigned; direction is carried by invert."
            )


@dataclass(frozen=True, kw_only=True)
class CalendarComponents:
    """Unsigned calendar breakdown of a difference plus its direction.

    This is the shape a single calendar subtraction produces, and the
    compatibility shape handed out by :meth:`TimeInterval.to_raw_interval`.

    Attributes:
        years..microseconds: Normalized magnitudes, all >= 0
        invert: True if the subject precedes the baseline
        total_days: Whole elapsed days, unsigned
    """

    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    microseconds: int = 0
    invert: bool = False
    total_days: int = 0

    def __post_init__(self) -> None:
        _check_magnitudes(self, _MAGNITUDES + ("total_days",))


@dataclass(frozen=True, kw_only=True)
class TimeInterval:
    """Reconciled difference between two calendar moments.

    Raw fields are unsigned and mirror a conventional calendar interval;
    ``invert`` is their only sign. Every ``relative_*`` and ``total_*``
    field is signed and derived once at construction:

        total_months  = total_years * 12 + relative_months
        total_hours   = total_days * 24 + relative_hours
        total_minutes = total_hours * 60 + relative_minutes
        total_seconds = total_minutes * 60 + relative_seconds

    Instances come from :func:`caldelta.diff.diff` (or a time span's
    distance) and are read-only; assigning to any attribute raises
    :class:`caldelta.errors.ReadOnlyViolation`.
    """

    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    microseconds: int = 0
    invert: bool = False
    total_days_unsigned: int = 0

    relative_years: int = field(init=False, repr=False)
    relative_months: int = field(init=False, repr=False)
    relative_days: int = field(init=False, repr=False)
    relative_hours: int = field(init=False, repr=False)
    relative_minutes: int = field(init=False, repr=False)
    relative_seconds: int = field(init=False, repr=False)
    relative_microseconds: int = field(init=False, repr=False)

    total_years: int = field(init=False, repr=False)
    total_months: int = field(init=False, repr=False)
    total_days: int = field(init=False, repr=False)
    total_hours: int = field(init=False, repr=False)
    total_minutes: int = field(init=False, repr=False)
    total_seconds: int = field(init=False, repr=False)
    total_microseconds: int = field(init=False, repr=False)

    iso_duration: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        _check_magnitudes(self, _MAGNITUDES + ("total_days_unsigned",))

        sign = -1 if self.invert else 1
        relative: dict[str, int] = {
            name: sign * getattr(self, name) for name in _MAGNITUDES
        }

        total_years = relative["years"]
        total_months = total_years * MONTHS_PER_YEAR + relative["months"]
        total_days = sign * self.total_days_unsigned
        total_hours = total_days * HOURS_PER_DAY + relative["hours"]
        total_minutes = total_hours * MINUTES_PER_HOUR + relative["minutes"]
        total_seconds = total_minutes * SECONDS_PER_MINUTE + relative["seconds"]
        total_microseconds = total_seconds * SECOND + relative["microseconds"]

        derived: dict[str, int | str] = {
            f"relative_{name}": value for name, value in relative.items()
        }
        derived.update(
            total_years=total_years,
            total_months=total_months,
            total_days=total_days,
            total_hours=total_hours,
            total_minutes=total_minutes,
            total_seconds=total_seconds,
            total_microseconds=total_microseconds,
            # Deliberately non-minimal: every component is always present.
            iso_duration=(
                f"P{self.years}Y{self.months}M{self.days}D"
                f"T{self.hours}H{self.minutes}M{self.seconds}S"
            ),
        )
        for name, value in derived.items():
            object.__setattr__(self, name, value)

    @classmethod
    def from_components(cls, components: CalendarComponents) -> "TimeInterval":
        """Build an interval whose every field comes from one subtraction."""
        return cls(
            years=components.years,
            months=components.months,
            days=components.days,
            hours=components.hours,
            minutes=components.minutes,
            seconds=components.seconds,
            microseconds=components.microseconds,
            invert=components.invert,
            total_days_unsigned=components.total_days,
        )

    @classmethod
    def reconcile(
        cls, absolute: CalendarComponents, wall_clock: CalendarComponents
    ) -> "TimeInterval":
        """Merge the two partially-wrong breakdowns of a DST-aware difference.

        Args:
            absolute: Subtraction of both moments truly moved to UTC. Correct
                elapsed time: invert, hours..microseconds and total days.
            wall_clock: Subtraction of both moments' wall clocks relabeled as
                UTC. Correct calendar fields: years, months and days.
        """
        return cls(
            years=wall_clock.years,
            months=wall_clock.months,
            days=wall_clock.days,
            hours=absolute.hours,
            minutes=absolute.minutes,
            seconds=absolute.seconds,
            microseconds=absolute.microseconds,
            invert=absolute.invert,
            total_days_unsigned=absolute.total_days,
        )

    def to_raw_interval(self) -> CalendarComponents:
        """Unsigned fields plus invert, the conventional interval shape."""
        return CalendarComponents(
            years=self.years,
            months=self.months,
            days=self.days,
            hours=self.hours,
            minutes=self.minutes,
            seconds=self.seconds,
            microseconds=self.microseconds,
            invert=self.invert,
            total_days=self.total_days_unsigned,
        )

    def to_relativedelta(self) -> relativedelta:
        """Signed dateutil delta carrying the relative calendar fields."""
        return relativedelta(
            years=self.relative_years,
            months=self.relative_months,
            days=self.relative_days,
            hours=self.relative_hours,
            minutes=self.relative_minutes,
            seconds=self.relative_seconds,
            microseconds=self.relative_microseconds,
        )

    def format(self, pattern: str) -> str:
        """Substitute ``%`` tokens in ``pattern`` with this interval's fields.

        Tokens (upper case pads to two digits, ``%F`` to six):

            %y %Y  years          %h %H  hours
            %m %M  months         %i %I  minutes
            %d %D  days           %s %S  seconds
            %a     total days     %f %F  microseconds
            %R     "-" or "+"     %r     "-" or ""
            %%     literal "%"

        Values are the unsigned raw fields. Unknown tokens are kept verbatim.

        Example:
            >>> interval.format("%R%a days, %H:%I:%S")
            '+30 days, 23:00:00'
        """
        return _TOKEN.sub(lambda match: self._format_token(match.group(0)), pattern)

    def _format_token(self, token: str) -> str:
        code = token[1]
        if code == "%":
            return "%"
        if code == "R":
            return "-" if self.invert else "+"
        if code == "r":
            return "-" if self.invert else ""
        if code == "a":
            return str(self.total_days_unsigned)
        if code == "F":
            return f"{self.microseconds:06d}"
        name = _TOKEN_FIELDS.get(code.lower())
        if name is None:
            return token
        value = getattr(self, name)
        return f"{value:02d}" if code.isupper() else str(value)

    @override
    def __str__(self) -> str:
        """ISO duration, prefixed with "-" when the subject is earlier."""
        return f"-{self.iso_duration}" if self.invert else self.iso_duration


_TOKEN = re.compile(r"%.", re.DOTALL)

_TOKEN_FIELDS = {
    "y": "years",
    "m": "months",
    "d": "days",
    "h": "hours",
    "i": "minutes",
    "s": "seconds",
    "f": "microseconds",
}
