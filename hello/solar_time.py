"""
Astronomical sunrise/sunset estimation.

Implements the NOAA approximate solar calculator ("Almanac for Computers").
Pure functions: the caller supplies the calendar day and coordinates,
nothing here reads the wall clock.

Conventions:
- Latitude in degrees, North positive
- Longitude in degrees, East positive
- Results are UTC datetimes, or None when the event does not occur
  on that day (polar day / polar night)

The computed UT hour is stamped directly onto the given calendar day.
It is not shifted to the observer's time zone, so for locations far from
Greenwich the event may belong to the neighbouring local day. This is the
approximation the calculator is specified with and is kept as-is.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from hello.config import ABSENT, ZENITH


class SolarEventKind(str, Enum):
    """Which horizon crossing to compute."""
    SUNRISE = "sunrise"
    SUNSET = "sunset"


@dataclass(frozen=True)
class SolarEvents:
    """Sunrise and sunset for one day and location (either may be None)."""
    sunrise: Optional[datetime]
    sunset: Optional[datetime]

    def to_dict(self) -> dict:
        return {
            "sunrise": self.sunrise.isoformat() if self.sunrise else None,
            "sunset": self.sunset.isoformat() if self.sunset else None,
            "sunrise_text": format_solar_event(self.sunrise),
            "sunset_text": format_solar_event(self.sunset),
        }


def _sin(deg: float) -> float:
    return math.sin(math.radians(deg))


def _cos(deg: float) -> float:
    return math.cos(math.radians(deg))


def _tan(deg: float) -> float:
    return math.tan(math.radians(deg))


def _normalize(value: float, upper: float) -> float:
    """Wrap value into [0, upper)."""
    value = value % upper
    # -1e-17 % 360 == 360.0 in float arithmetic
    return 0.0 if value >= upper else value


def day_of_year(local_date: date) -> int:
    """Day number within the year, 1..366 (Gregorian)."""
    return local_date.timetuple().tm_yday


def compute_solar_event(
    local_date: date,
    latitude: float,
    longitude: float,
    event: SolarEventKind,
    zenith: float = ZENITH,
) -> Optional[datetime]:
    """
    Compute a single sunrise or sunset instant.

    Args:
        local_date: Observer's calendar day (time of day ignored)
        latitude: Degrees, -90..90, North positive
        longitude: Degrees, -180..180, East positive
        event: SolarEventKind.SUNRISE or SolarEventKind.SUNSET
        zenith: Sun zenith angle at the event (default 90.833°)

    Returns:
        UTC datetime on local_date, or None if the sun does not cross
        the horizon that day
    """
    rising = event == SolarEventKind.SUNRISE
    n = day_of_year(local_date)

    # Formulas below use West-positive longitude in hours
    hours_west = -longitude / 15

    t = n + ((6 if rising else 18) + hours_west) / 24

    # Sun's mean anomaly
    m = 0.9856 * t - 3.289

    # Sun's true longitude
    true_lng = _normalize(m + 1.916 * _sin(m) + 0.020 * _sin(2 * m) + 282.634, 360)

    # Right ascension, moved into the same quadrant as true_lng, in hours
    ra = _normalize(math.degrees(math.atan(0.91764 * _tan(true_lng))), 360)
    ra += (math.floor(true_lng / 90) - math.floor(ra / 90)) * 90
    ra /= 15

    # Declination
    sin_dec = 0.39782 * _sin(true_lng)
    cos_dec = math.cos(math.asin(sin_dec))

    # Local hour angle
    cos_h = (_cos(zenith) - sin_dec * _sin(latitude)) / (cos_dec * _cos(latitude))

    if cos_h > 1:
        # Sun stays below the horizon all day
        return None
    if cos_h < -1:
        # Sun stays above the horizon all day
        return None

    h = math.degrees(math.acos(cos_h))
    if rising:
        h = 360 - h
    h /= 15

    # Local mean time of the event
    local_mean = h + ra - 0.06571 * t - 6.622

    ut = _normalize(local_mean + hours_west, 24)

    midnight = datetime(local_date.year, local_date.month, local_date.day, tzinfo=timezone.utc)
    return midnight + timedelta(hours=ut)


def compute_solar_events(local_date: date, latitude: float, longitude: float) -> SolarEvents:
    """
    Compute sunrise and sunset for a calendar day and location.

    Both events are computed independently from the same inputs.
    Never raises for latitude in -90..90 and longitude in -180..180;
    polar day/night is reported as None, not as an error.

    Args:
        local_date: Observer's calendar day
        latitude: Degrees, North positive
        longitude: Degrees, East positive

    Returns:
        SolarEvents(sunrise, sunset)
    """
    return SolarEvents(
        sunrise=compute_solar_event(local_date, latitude, longitude, SolarEventKind.SUNRISE),
        sunset=compute_solar_event(local_date, latitude, longitude, SolarEventKind.SUNSET),
    )


def format_solar_event(instant: Optional[datetime]) -> str:
    """Display text for an event: "HH:MM UTC", or "—" when absent."""
    if instant is None:
        return ABSENT
    return instant.strftime("%H:%M UTC")
