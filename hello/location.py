"""
Device location tracking.

Features:
- Authorization status tracking (request / grant / deny)
- Coordinate, speed and course updates pushed by the client
- Thread-safe state
- Callback on every accepted update
"""

import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional

from hello.config import ABSENT
from hello.logger import logger


class AuthorizationStatus(str, Enum):
    """Location permission state."""
    NOT_DETERMINED = "not_determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"
    AUTHORIZED_ALWAYS = "authorized_always"

    @property
    def authorized(self) -> bool:
        return self in (AuthorizationStatus.AUTHORIZED_WHEN_IN_USE, AuthorizationStatus.AUTHORIZED_ALWAYS)


@dataclass(frozen=True)
class LocationFix:
    """A single location reading."""
    latitude: float
    longitude: float
    speed: Optional[float] = None  # m/s
    course: Optional[float] = None  # degrees
    timestamp: Optional[datetime] = None


class LocationProvider:
    """
    Holds the latest device location and its permission state.

    Updates are only accepted while authorized. Negative speed or course
    readings mean "unknown" and are stored as None.
    """

    def __init__(self, on_update: Optional[Callable[[LocationFix], None]] = None):
        """
        Initialize location provider.

        Args:
            on_update: Callback invoked with the new fix after each accepted update
        """
        self.on_update = on_update
        self.lock = threading.Lock()

        self.authorization_status = AuthorizationStatus.NOT_DETERMINED
        self.authorization_requested = False
        self.fix: Optional[LocationFix] = None

    def request(self) -> AuthorizationStatus:
        """
        Ask for location access.

        Status stays NOT_DETERMINED until set_authorization() reports the outcome.

        Returns:
            Current authorization status
        """
        with self.lock:
            self.authorization_requested = True
            status = self.authorization_status

        logger.info(f"Location access requested (status={status.value})")
        return status

    def set_authorization(self, status: AuthorizationStatus) -> None:
        """Record the outcome of an authorization request."""
        with self.lock:
            old_status = self.authorization_status
            self.authorization_status = status
            # Keep the last fix visible only while authorized
            if not status.authorized:
                self.fix = None

        if old_status != status:
            logger.info(f"Location authorization changed: {old_status.value} → {status.value}")

    def update(
        self,
        latitude: float,
        longitude: float,
        speed: Optional[float] = None,
        course: Optional[float] = None,
    ) -> LocationFix:
        """
        Accept a new location reading.

        Args:
            latitude: Degrees, North positive
            longitude: Degrees, East positive
            speed: Ground speed in m/s (negative = unknown)
            course: Direction of travel in degrees (negative = unknown)

        Returns:
            The stored LocationFix

        Raises:
            PermissionError: If location access is not authorized
        """
        fix = LocationFix(
            latitude=latitude,
            longitude=longitude,
            speed=speed if speed is not None and speed >= 0 else None,
            course=course if course is not None and course >= 0 else None,
            timestamp=datetime.now(),
        )

        with self.lock:
            if not self.authorization_status.authorized:
                raise PermissionError(
                    f"Location access not authorized (status={self.authorization_status.value})"
                )
            self.fix = fix

        logger.debug(f"Location updated: {format_coords(fix)}")

        if self.on_update:
            try:
                self.on_update(fix)
            except Exception as e:
                logger.error(f"Error in location update callback: {e}", exc_info=True)

        return fix

    def get_fix(self) -> Optional[LocationFix]:
        with self.lock:
            return self.fix

    def snapshot(self) -> dict:
        """
        Get thread-safe snapshot of location state.

        Returns:
            {
                "authorization_status": "authorized_when_in_use",
                "authorized": true,
                "requested": true,
                "latitude": 51.5074,
                "longitude": -0.1278,
                "speed": 1.4,
                "course": 90.0,
                "timestamp": "2026-10-19T15:30:00"
            }
        """
        with self.lock:
            fix = self.fix
            return {
                "authorization_status": self.authorization_status.value,
                "authorized": self.authorization_status.authorized,
                "requested": self.authorization_requested,
                "latitude": fix.latitude if fix else None,
                "longitude": fix.longitude if fix else None,
                "speed": fix.speed if fix else None,
                "course": fix.course if fix else None,
                "timestamp": fix.timestamp.isoformat() if fix and fix.timestamp else None,
            }


def format_coords(fix: Optional[LocationFix]) -> str:
    if fix is None:
        return ABSENT
    return f"{fix.latitude:.5f}, {fix.longitude:.5f}"


def format_speed(speed: Optional[float]) -> str:
    """Speed in m/s as km/h text."""
    if speed is None:
        return ABSENT
    return f"{speed * 3.6:.1f} km/h"


def format_course(course: Optional[float]) -> str:
    if course is None:
        return ABSENT
    return f"{course:.0f}°"
