"""Tests for calendar-moment boundary helpers."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest
from dateutil.tz import gettz

from caldelta import at_tz, epoch_micros, relabel, rezone, zone_name
from caldelta.moment import ensure_aware
from caldelta.util import HOUR, SECOND


def test_at_tz_from_fields():
    moment = at_tz("Europe/Copenhagen")(2019, 3, 1, 12, 30)

    assert moment == datetime(2019, 3, 1, 12, 30, tzinfo=ZoneInfo("Europe/Copenhagen"))
    assert zone_name(moment) == "Europe/Copenhagen"


def test_at_tz_from_iso_strings():
    at = at_tz("Europe/Copenhagen")

    # Naive strings are read in the factory's zone
    assert at("2019-03-01T12:30:00") == at(2019, 3, 1, 12, 30)
    assert at("2019-03-01") == at(2019, 3, 1)

    # Strings with an offset are converted, keeping the instant
    converted = at("2019-03-01T11:30:00+00:00")
    assert converted == at(2019, 3, 1, 12, 30)
    assert converted.hour == 12
    assert zone_name(converted) == "Europe/Copenhagen"


def test_at_tz_from_date_and_datetime():
    at = at_tz("America/New_York")

    assert at(date(2019, 11, 3)) == at(2019, 11, 3)
    assert at(datetime(2019, 11, 3, 9)) == at(2019, 11, 3, 9)
    assert at(datetime(2019, 11, 3, 14, tzinfo=timezone.utc)).hour == 9


def test_at_tz_rejects_other_types():
    with pytest.raises(TypeError, match="accepts int fields"):
        at_tz("UTC")(3.5)


def test_at_tz_rejects_extra_fields_after_non_int_values():
    at = at_tz("UTC")

    with pytest.raises(TypeError, match="extra fields only after an int year"):
        at("2019-03-01", 12)

    with pytest.raises(TypeError, match="extra fields"):
        at(date(2019, 3, 1), hour=12)

    with pytest.raises(TypeError, match="extra fields"):
        at(datetime(2019, 3, 1), 12)


def test_zone_name_for_utc_flavors():
    """timezone.utc and ZoneInfo('UTC') share one identifier."""
    assert zone_name(datetime(2019, 1, 1, tzinfo=timezone.utc)) == "UTC"
    assert zone_name(datetime(2019, 1, 1, tzinfo=ZoneInfo("UTC"))) == "UTC"
    assert zone_name(at_tz()(2019, 1, 1)) == "UTC"


def test_zone_name_falls_back_to_tzname():
    fixed = timezone(timedelta(hours=2), "EET-ish")

    assert zone_name(datetime(2019, 1, 1, tzinfo=fixed)) == "EET-ish"


def test_zone_name_ignores_daylight_saving_abbreviations():
    """Non-ZoneInfo zones are identified by the zone, not its current tzname."""
    copenhagen = gettz("Europe/Copenhagen")
    winter = datetime(2019, 1, 1, tzinfo=copenhagen)
    summer = datetime(2019, 7, 1, tzinfo=copenhagen)
    paris = datetime(2019, 1, 1, tzinfo=gettz("Europe/Paris"))

    assert zone_name(winter) == zone_name(summer)
    assert zone_name(winter) != zone_name(paris)


def test_epoch_micros_is_exact_and_signed():
    assert epoch_micros(datetime(1970, 1, 1, tzinfo=timezone.utc)) == 0
    assert epoch_micros(at_tz("Europe/Copenhagen")(1970, 1, 1, 1)) == 0
    before_epoch = datetime(1969, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
    assert epoch_micros(before_epoch) == -SECOND
    assert (
        epoch_micros(datetime(2020, 1, 1, 12, 0, 0, 400000, tzinfo=timezone.utc))
        == 1577880000400000
    )


def test_rezone_keeps_the_instant():
    moment = at_tz("Europe/Copenhagen")(2019, 3, 1)
    moved = rezone(moment, "UTC")

    assert moved == moment
    assert (moved.day, moved.hour) == (28, 23)
    assert zone_name(moved) == "UTC"


def test_relabel_keeps_the_wall_clock():
    moment = at_tz("Europe/Copenhagen")(2019, 3, 1)
    relabeled = relabel(moment, "UTC")

    wall_clock = (relabeled.year, relabeled.month, relabeled.day, relabeled.hour)
    assert wall_clock == (2019, 3, 1, 0)
    assert epoch_micros(relabeled) - epoch_micros(moment) == HOUR
    assert zone_name(relabeled) == "UTC"


def test_rezone_and_relabel_accept_tzinfo_objects():
    moment = at_tz("UTC")(2019, 7, 1, 12)
    zone = ZoneInfo("Europe/Copenhagen")

    assert rezone(moment, zone).hour == 14
    assert relabel(moment, zone).hour == 12


def test_ensure_aware_rejects_naive_and_non_datetimes():
    with pytest.raises(TypeError, match="Got naive datetime"):
        ensure_aware(datetime(2019, 1, 1))

    with pytest.raises(TypeError, match="'date'"):
        ensure_aware(date(2019, 1, 1))  # type: ignore[arg-type]

    moment = datetime(2019, 1, 1, tzinfo=timezone.utc)
    assert ensure_aware(moment) is moment
