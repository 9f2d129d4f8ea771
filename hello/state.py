"""
Session state shared between HTTP handlers and background threads.

One AppState is created per application instance and handed to the
handlers explicitly; nothing here is a module-level singleton.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
import threading


@dataclass
class AppState:
    """
    In-memory UI state. Nothing here is persisted.

    Thread-safe via internal lock. All updates should use the update() method.
    """

    # Appearance (light by default)
    dark_mode: bool = False

    # When the app started (splash screen is timed from here)
    started_at: datetime = field(default_factory=datetime.now)

    # Last tick of the clock ticker
    current_time: datetime = field(default_factory=datetime.now)

    # Value of the home view date picker
    selected_date: datetime = field(default_factory=datetime.now)

    # Public IP (None until a lookup succeeds)
    public_ip: Optional[str] = None

    # Timestamp of the most recent location fix
    last_location_update: Optional[datetime] = None

    # Last update timestamp
    last_updated: datetime = field(default_factory=datetime.now)

    # Thread-safe access lock
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def update(self, **kwargs) -> None:
        """
        Thread-safe state update.

        Args:
            **kwargs: State attributes to update

        Example:
            state.update(dark_mode=True, public_ip="203.0.113.7")
        """
        with self._lock:
            for key, value in kwargs.items():
                if hasattr(self, key) and not key.startswith('_'):
                    setattr(self, key, value)
            self.last_updated = datetime.now()

    def toggle_dark_mode(self) -> bool:
        """Flip appearance and return the new dark_mode value."""
        with self._lock:
            self.dark_mode = not self.dark_mode
            self.last_updated = datetime.now()
            return self.dark_mode

    def get_snapshot(self) -> dict[str, Any]:
        """
        Get thread-safe snapshot of current state.

        Returns:
            dict: Current state as dictionary
        """
        with self._lock:
            return {
                "dark_mode": self.dark_mode,
                "started_at": self.started_at.isoformat(),
                "current_time": self.current_time.isoformat(),
                "selected_date": self.selected_date.isoformat(),
                "public_ip": self.public_ip,
                "last_location_update": self.last_location_update.isoformat() if self.last_location_update else None,
                "last_updated": self.last_updated.isoformat(),
            }
