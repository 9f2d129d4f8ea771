"""
View models for each screen.

Each builder takes the values it displays as arguments and returns a
JSON-ready dict. No builder reads global state.
"""

from datetime import datetime
from typing import Optional

from hello.clock import format_date_time, format_time
from hello.config import ABSENT, APP_AUTHOR, APP_BUILD, APP_NAME, APP_VERSION
from hello.location import LocationFix, format_coords, format_course, format_speed
from hello.network import ip_details_url
from hello.solar_time import SolarEvents

SPLASH_MESSAGE = f"made by {APP_AUTHOR}"
ABOUT_DESCRIPTION = (
    "A simple demo app. It shows a greeting, a clock, theme toggling, "
    "the public IP with local sunrise and sunset, and a splash screen."
)


def greeting_text(name: str) -> Optional[str]:
    """Greeting such as "Hello, Ada!", or None when no name is set."""
    if not name:
        return None
    return f"Hello, {name}!"


def appearance_toggle_label(dark_mode: bool) -> str:
    return "Switch to Light Mode" if dark_mode else "Switch to Dark Mode"


def version_text(version: str = APP_VERSION, build: str = APP_BUILD) -> str:
    return f"{version} ({build})"


def build_splash(started_at: datetime, now: datetime, duration: float) -> dict:
    """Splash screen is shown for `duration` seconds after startup."""
    elapsed = (now - started_at).total_seconds()
    remaining = max(0.0, duration - elapsed)
    return {
        "visible": remaining > 0,
        "message": SPLASH_MESSAGE,
        "remaining_seconds": round(remaining, 3),
    }


def build_root(dark_mode: bool) -> dict:
    return {
        "title": APP_NAME,
        "message": "Hello, world!",
        "appearance_toggle": appearance_toggle_label(dark_mode),
        "footer": f"v{APP_VERSION}",
    }


def build_home(name: str, current_time: datetime, selected_date: datetime, dark_mode: bool) -> dict:
    """
    Home screen: header, greeting, clock, date picker and quick actions.

    Args:
        name: Stored display name ("" hides the greeting)
        current_time: Latest clock tick
        selected_date: Date picker value
        dark_mode: Current appearance
    """
    return {
        "title": APP_NAME,
        "subtitle": "Welcome!",
        "name": name,
        "greeting": greeting_text(name),
        "time": format_time(current_time),
        "selected_date": selected_date.isoformat(),
        "selected_date_text": format_date_time(selected_date),
        "appearance_toggle": appearance_toggle_label(dark_mode),
    }


def build_time_alert(now: datetime) -> dict:
    return {"title": "Current Time", "message": format_time(now)}


def build_settings(dark_mode: bool) -> dict:
    return {
        "dark_mode": dark_mode,
        "appearance": "dark" if dark_mode else "light",
        "version": version_text(),
    }


def build_server(
    public_ip: Optional[str],
    location: dict,
    fix: Optional[LocationFix],
    solar_events: Optional[SolarEvents],
) -> dict:
    """
    Server screen: network group and location group.

    Args:
        public_ip: Last fetched IP, or None
        location: LocationProvider.snapshot()
        fix: Latest location fix, or None
        solar_events: Today's events at the fix, or None when no fix yet
    """
    status = location["authorization_status"]

    if location["authorized"]:
        message = None
    elif status in ("denied", "restricted"):
        message = "Location access denied. Enable it in Settings to see coordinates and motion."
    else:
        message = "Allow Location Access"

    return {
        "network": {
            "public_ip": public_ip or ABSENT,
            "details_url": ip_details_url(public_ip),
        },
        "location": {
            "authorization_status": status,
            "message": message,
            "coordinates": format_coords(fix),
            "speed": format_speed(fix.speed if fix else None),
            "direction": format_course(fix.course if fix else None),
        },
        "sun": solar_events.to_dict() if solar_events else None,
    }


def build_about() -> dict:
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "build": APP_BUILD,
        "version_text": f"Version {version_text()}",
        "description": ABOUT_DESCRIPTION,
        "credits": [f"Design & Development: {APP_AUTHOR}"],
    }
