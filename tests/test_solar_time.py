"""Tests for sunrise/sunset estimation."""

import pytest
from datetime import date, datetime, timedelta, timezone

from hello.solar_time import (
    SolarEventKind,
    SolarEvents,
    compute_solar_event,
    compute_solar_events,
    day_of_year,
    format_solar_event,
)

EQUINOX = date(2024, 3, 20)
JUNE_SOLSTICE = date(2024, 6, 21)
DECEMBER_SOLSTICE = date(2024, 12, 21)


def hours_utc(instant: datetime) -> float:
    return instant.hour + instant.minute / 60 + instant.second / 3600


class TestDayOfYear:
    """Tests for day-of-year calculation."""

    def test_first_day(self):
        """Should number January 1st as day 1."""
        assert day_of_year(date(2025, 1, 1)) == 1

    def test_last_day_common_year(self):
        """Should number December 31st as day 365 in a common year."""
        assert day_of_year(date(2023, 12, 31)) == 365

    def test_last_day_leap_year(self):
        """Should number December 31st as day 366 in a leap year."""
        assert day_of_year(date(2024, 12, 31)) == 366

    def test_after_leap_day(self):
        """March 1st is day 61 in a leap year, 60 otherwise."""
        assert day_of_year(date(2024, 3, 1)) == 61
        assert day_of_year(date(2023, 3, 1)) == 60

    def test_ignores_time_of_day(self):
        """Should count a datetime as its calendar day."""
        assert day_of_year(datetime(2024, 2, 1, 23, 59)) == 32


class TestEquator:
    """Tests at latitude 0."""

    def test_equinox_at_greenwich(self):
        """Sunrise near 06:00 UTC and sunset near 18:00 UTC."""
        events = compute_solar_events(EQUINOX, 0.0, 0.0)

        assert events.sunrise is not None
        assert events.sunset is not None
        assert abs(hours_utc(events.sunrise) - 6.0) < 0.25
        assert abs(hours_utc(events.sunset) - 18.0) < 0.25

    def test_events_present_every_day_of_year(self):
        """Sun always rises and sets at the equator."""
        day = date(2024, 1, 1)
        while day.year == 2024:
            events = compute_solar_events(day, 0.0, 0.0)
            assert events.sunrise is not None, day
            assert events.sunset is not None, day
            day += timedelta(days=1)

    def test_day_length_close_to_twelve_hours(self):
        """Should give about 12 hours of daylight at the equinox."""
        events = compute_solar_events(EQUINOX, 0.0, 0.0)
        day_length = events.sunset - events.sunrise
        assert timedelta(hours=11, minutes=55) < day_length < timedelta(hours=12, minutes=20)


class TestPolarRegions:
    """Tests for polar day and polar night."""

    def test_arctic_midsummer_has_no_sunset(self):
        """78°N in June: sun never sets."""
        events = compute_solar_events(JUNE_SOLSTICE, 78.0, 15.6)
        assert events.sunset is None

    def test_arctic_midsummer_has_no_sunrise_either(self):
        """Sun never crosses the horizon, so sunrise is also absent."""
        events = compute_solar_events(JUNE_SOLSTICE, 78.0, 15.6)
        assert events.sunrise is None

    # Refraction and the solar disc (zenith 90.833°) push the polar circles
    # about 0.8° poleward, so 67° still sees the sun at the solstices.
    @pytest.mark.parametrize("latitude", [68.0, 70.0, 78.0, 85.0])
    def test_north_summer_solstice_polar_day(self, latitude):
        """Should have no sunset north of the Arctic Circle in June."""
        assert compute_solar_events(JUNE_SOLSTICE, latitude, 0.0).sunset is None

    @pytest.mark.parametrize("latitude", [68.0, 70.0, 78.0, 85.0])
    def test_north_winter_solstice_polar_night(self, latitude):
        """Should have no sunrise north of the Arctic Circle in December."""
        assert compute_solar_events(DECEMBER_SOLSTICE, latitude, 0.0).sunrise is None

    @pytest.mark.parametrize("latitude", [-68.0, -70.0, -78.0, -85.0])
    def test_south_summer_solstice_polar_day(self, latitude):
        """December is summer in the southern hemisphere."""
        assert compute_solar_events(DECEMBER_SOLSTICE, latitude, 0.0).sunset is None

    @pytest.mark.parametrize("latitude", [-68.0, -70.0, -78.0, -85.0])
    def test_south_winter_solstice_polar_night(self, latitude):
        """Should have no sunrise south of the Antarctic Circle in June."""
        assert compute_solar_events(JUNE_SOLSTICE, latitude, 0.0).sunrise is None

    @pytest.mark.parametrize("latitude", [90.0, -90.0])
    @pytest.mark.parametrize("day", [EQUINOX, JUNE_SOLSTICE, DECEMBER_SOLSTICE])
    def test_poles_never_raise(self, latitude, day):
        """Should return a result at the poles instead of raising."""
        events = compute_solar_events(day, latitude, 0.0)
        assert isinstance(events, SolarEvents)


class TestOrdering:
    """Tests for sunrise/sunset ordering near Greenwich."""

    @pytest.mark.parametrize("latitude", [-60.0, -30.0, 0.0, 30.0, 51.5, 60.0])
    @pytest.mark.parametrize("day", [date(2024, 2, 10), EQUINOX, JUNE_SOLSTICE, date(2024, 9, 22), DECEMBER_SOLSTICE])
    def test_sunrise_before_sunset(self, latitude, day):
        """Should put sunrise before sunset near Greenwich."""
        events = compute_solar_events(day, latitude, 0.0)
        assert events.sunrise is not None and events.sunset is not None
        assert events.sunrise < events.sunset

    def test_longer_days_in_local_summer(self):
        """Should give London longer days in June than in December."""
        summer = compute_solar_events(JUNE_SOLSTICE, 51.5, 0.0)
        winter = compute_solar_events(DECEMBER_SOLSTICE, 51.5, 0.0)
        assert (summer.sunset - summer.sunrise) > (winter.sunset - winter.sunrise)


class TestLongitude:
    """Tests for East-positive longitude handling."""

    def test_fifteen_degrees_east_is_one_hour_earlier(self):
        """Should shift both events one hour earlier at 15°E."""
        greenwich = compute_solar_events(EQUINOX, 0.0, 0.0)
        east = compute_solar_events(EQUINOX, 0.0, 15.0)

        sunrise_shift = (greenwich.sunrise - east.sunrise).total_seconds()
        sunset_shift = (greenwich.sunset - east.sunset).total_seconds()

        assert abs(sunrise_shift - 3600) < 120
        assert abs(sunset_shift - 3600) < 120

    def test_fifteen_degrees_west_is_one_hour_later(self):
        """Should shift sunrise one hour later at 15°W."""
        greenwich = compute_solar_events(EQUINOX, 0.0, 0.0)
        west = compute_solar_events(EQUINOX, 0.0, -15.0)

        assert abs((west.sunrise - greenwich.sunrise).total_seconds() - 3600) < 120

    def test_ut_hour_stamped_on_given_day(self):
        """
        Sydney sunrise is ~21:00 UTC on the previous UTC day.

        The UT hour is attached to the requested calendar day without
        shifting it, so sunset comes out before sunrise.
        """
        day = JUNE_SOLSTICE
        events = compute_solar_events(day, -33.87, 151.21)

        assert events.sunrise.date() == day
        assert events.sunset.date() == day
        assert abs(hours_utc(events.sunrise) - 21.0) < 0.25
        assert abs(hours_utc(events.sunset) - 6.9) < 0.25
        assert events.sunset < events.sunrise


class TestResultShape:
    """Tests for returned values."""

    def test_results_are_utc(self):
        """Should return timezone-aware UTC instants."""
        events = compute_solar_events(EQUINOX, 51.5, -0.13)
        assert events.sunrise.tzinfo == timezone.utc
        assert events.sunset.tzinfo == timezone.utc

    def test_deterministic(self):
        """Should give identical results for identical inputs."""
        first = compute_solar_events(date(2025, 8, 1), 48.8566, 2.3522)
        second = compute_solar_events(date(2025, 8, 1), 48.8566, 2.3522)
        assert first == second

    def test_single_event_matches_pair(self):
        """Should agree with compute_solar_events for each event."""
        events = compute_solar_events(EQUINOX, 40.0, -3.7)
        assert compute_solar_event(EQUINOX, 40.0, -3.7, SolarEventKind.SUNRISE) == events.sunrise
        assert compute_solar_event(EQUINOX, 40.0, -3.7, SolarEventKind.SUNSET) == events.sunset

    def test_to_dict_with_absent_events(self):
        """Should serialize absent events as null with placeholder text."""
        data = compute_solar_events(JUNE_SOLSTICE, 78.0, 15.6).to_dict()
        assert data["sunset"] is None
        assert data["sunset_text"] == "—"

    def test_to_dict_with_present_events(self):
        """Should serialize present events as ISO strings and HH:MM UTC text."""
        events = compute_solar_events(EQUINOX, 0.0, 0.0)
        data = events.to_dict()
        assert data["sunrise"] == events.sunrise.isoformat()
        assert data["sunrise_text"].endswith(" UTC")


class TestFormatSolarEvent:
    """Tests for display formatting."""

    def test_absent(self):
        """Should format a missing event as the placeholder."""
        assert format_solar_event(None) == "—"

    def test_present(self):
        """Should format an instant as HH:MM UTC."""
        instant = datetime(2024, 3, 20, 6, 4, 30, tzinfo=timezone.utc)
        assert format_solar_event(instant) == "06:04 UTC"


class TestAgainstAstral:
    """Cross-check the approximation against the Astral library."""

    @pytest.mark.parametrize("day", [EQUINOX, JUNE_SOLSTICE, date(2024, 9, 22), DECEMBER_SOLSTICE])
    def test_london_within_five_minutes(self, day):
        from astral import Observer
        from astral.sun import sunrise, sunset

        observer = Observer(latitude=51.5074, longitude=-0.1278)
        events = compute_solar_events(day, observer.latitude, observer.longitude)

        tolerance = timedelta(minutes=5)
        assert abs(events.sunrise - sunrise(observer, date=day, tzinfo=timezone.utc)) < tolerance
        assert abs(events.sunset - sunset(observer, date=day, tzinfo=timezone.utc)) < tolerance

    @pytest.mark.parametrize("day", [EQUINOX, JUNE_SOLSTICE, DECEMBER_SOLSTICE])
    def test_accra_within_five_minutes(self, day):
        from astral import Observer
        from astral.sun import sunrise, sunset

        observer = Observer(latitude=5.6037, longitude=-0.187)
        events = compute_solar_events(day, observer.latitude, observer.longitude)

        tolerance = timedelta(minutes=5)
        assert abs(events.sunrise - sunrise(observer, date=day, tzinfo=timezone.utc)) < tolerance
        assert abs(events.sunset - sunset(observer, date=day, tzinfo=timezone.utc)) < tolerance
