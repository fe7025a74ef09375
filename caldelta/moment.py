"""Boundary helpers for calendar moments.

A calendar moment is a timezone-aware :class:`datetime.datetime` whose
``tzinfo`` is a :class:`zoneinfo.ZoneInfo` (or ``datetime.timezone.utc``).
Its civil fields are simply ``year`` through ``microsecond``. This module
supplies the handful of operations the diff engine and time spans need on
top of that: exact epoch microseconds, a stable zone identifier, and the two
ways of moving a moment into another zone.

Example:
    >>> from caldelta.moment import at_tz, rezone, relabel
    >>> at = at_tz("Europe/Copenhagen")
    >>> moment = at(2019, 3, 1)
    >>> rezone(moment, "UTC").hour      # same instant, UTC wall clock
    23
    >>> relabel(moment, "UTC").hour     # same wall clock, different instant
    0
"""

from collections.abc import Callable
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

from dateutil.parser import isoparse

from caldelta.util import EPOCH, UTC

_ONE_MICROSECOND = timedelta(microseconds=1)


def ensure_aware(moment: datetime, name: str = "moment") -> datetime:
    """Return ``moment`` unchanged if it carries a timezone.

    Raises:
        TypeError: If ``moment`` is not a datetime, or is a naive one
    """
    if not isinstance(moment, datetime):
        raise TypeError(
            f"{name} must be a timezone-aware datetime.\n"
            f"Got {type(moment).__name__!r}: {moment!r}"
        )
    if moment.tzinfo is None or moment.utcoffset() is None:
        raise TypeError(
            f"{name} must be a timezone-aware datetime.\n"
            f"Got naive datetime: {moment!r}\n"
            f"Hint: Add timezone info:\n"
            f"  from zoneinfo import ZoneInfo\n"
            f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))  "
            f"# or 'Europe/Copenhagen', etc.\n"
            f"  # Or build moments with caldelta.at_tz:\n"
            f"  at = at_tz('Europe/Copenhagen'); dt = at(2019, 3, 1)"
        )
    return moment


def _zone(tz: str | tzinfo) -> tzinfo:
    if isinstance(tz, str):
        return UTC if tz == "UTC" else ZoneInfo(tz)
    return tz


def zone_name(moment: datetime) -> str:
    """Stable identifier of the moment's timezone.

    ``ZoneInfo`` zones report their IANA key and pytz zones their ``zone``.
    ``timezone.utc`` reports ``"UTC"``, so it compares equal to
    ``ZoneInfo("UTC")``. Fixed-offset ``timezone`` objects report their name.
    Any other tzinfo (e.g. ``dateutil.tz.gettz``) is identified by its
    ``repr``, never by ``tzname()``, which changes with daylight saving time.
    """
    ensure_aware(moment)
    zone = moment.tzinfo
    key = getattr(zone, "key", None) or getattr(zone, "zone", None)
    if isinstance(key, str):
        return key
    if zone is UTC:
        return "UTC"
    if isinstance(zone, timezone):
        return moment.tzname() or str(zone)
    return repr(zone)


def epoch_micros(moment: datetime) -> int:
    """Signed microseconds since 1970-01-01T00:00:00Z, computed exactly."""
    ensure_aware(moment)
    return (moment - EPOCH) // _ONE_MICROSECOND


def rezone(moment: datetime, tz: str | tzinfo) -> datetime:
    """Move ``moment`` into ``tz`` keeping the instant; wall clock changes."""
    ensure_aware(moment)
    return moment.astimezone(_zone(tz))


def relabel(moment: datetime, tz: str | tzinfo) -> datetime:
    """Swap the zone tag of ``moment`` keeping its wall clock digits.

    The result denotes a different instant whenever the two zones'
    offsets differ.
    """
    ensure_aware(moment)
    return moment.replace(tzinfo=_zone(tz))


def at_tz(tz: str = "UTC") -> Callable[..., datetime]:
    """
    Return a factory building aware datetimes in one timezone.

    The zone is an explicit configuration value; nothing in caldelta
    consults the process's local timezone.

    Args:
        tz: IANA timezone name (e.g., "UTC", "Europe/Copenhagen")

    Returns:
        Callable accepting one of:
        - ``(year, month, day[, hour[, minute[, second[, microsecond]]]])``
        - an ISO-8601 string (naive strings are read in ``tz``, strings
          carrying an offset are converted into ``tz``)
        - a ``date`` (midnight in ``tz``)
        - a ``datetime`` (naive ones are read in ``tz``)

    Example:
        >>> at = at_tz("Europe/Copenhagen")
        >>> at(2019, 3, 1)
        >>> at("2019-03-01T12:30:00")
        >>> at(date(2019, 3, 1))
    """
    zone = _zone(tz)

    def from_datetime(value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=zone)
        return value.astimezone(zone)

    def at(value: int | str | date | datetime, *fields: int, **kwargs: int) -> datetime:
        if isinstance(value, int) and not isinstance(value, bool):
            return datetime(value, *fields, tzinfo=zone, **kwargs)
        if fields or kwargs:
            raise TypeError(
                f"at_tz({tz!r}) takes extra fields only after an int year.\n"
                f"Got {type(value).__name__!r} {value!r} with extra fields "
                f"{fields or kwargs!r}\n"
                f"Hint: Put the time in the value itself, e.g. "
                f"at('2019-03-01T12:00')"
            )
        if isinstance(value, datetime):
            return from_datetime(value)
        if isinstance(value, date):
            return datetime.combine(value, time.min, tzinfo=zone)
        if isinstance(value, str):
            return from_datetime(isoparse(value))
        raise TypeError(
            f"at_tz({tz!r}) accepts int fields, an ISO string, a date or a datetime.\n"
            f"Got {type(value).__name__!r}: {value!r}\n"
            f"Examples:\n"
            f"  at(2019, 3, 1, 12, 30)\n"
            f"  at('2019-03-01T12:30:00')\n"
            f"  at(date(2019, 3, 1))"
        )

    return at


__all__ = [
    "at_tz",
    "ensure_aware",
    "epoch_micros",
    "relabel",
    "rezone",
    "zone_name",
]
