"""
User preference storage.

The display name is the only value that survives restarts. It is stored
as a small JSON file whose path is passed in by the caller.
"""

import json
from pathlib import Path
from typing import Union

from pydantic import BaseModel, Field, ValidationError

from hello.config import PREFERENCES_FILE
from hello.logger import logger

USERNAME_MAX_LENGTH = 100

PathLike = Union[str, Path]


class Preferences(BaseModel):
    """Persisted user preferences."""
    username: str = Field("", max_length=USERNAME_MAX_LENGTH, description="Display name for the greeting")


def get_preferences_path(path: PathLike = PREFERENCES_FILE) -> Path:
    """Resolve preferences file path, create directory if needed."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def load_preferences(path: PathLike = PREFERENCES_FILE) -> Preferences:
    """
    Load preferences from JSON file.

    Returns:
        Stored Preferences, or defaults if the file is missing or unreadable
    """
    path = get_preferences_path(path)

    if not path.exists():
        logger.debug(f"Preferences file not found, using defaults: {path}")
        return Preferences()

    try:
        with open(path, 'r') as f:
            data = json.load(f)
        return Preferences(**data)

    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in preferences file: {e}")
        return Preferences()
    except (ValidationError, TypeError) as e:
        logger.warning(f"Ignoring invalid preferences in {path}: {e}")
        return Preferences()


def save_preferences(preferences: Preferences, path: PathLike = PREFERENCES_FILE) -> None:
    """Write preferences to JSON file."""
    path = get_preferences_path(path)

    try:
        with open(path, 'w') as f:
            json.dump(preferences.model_dump(), f, indent=2)
    except OSError as e:
        logger.error(f"Failed to save preferences: {e}", exc_info=True)
        raise


def save_username(name: str, path: PathLike = PREFERENCES_FILE) -> Preferences:
    """
    Persist the display name.

    Args:
        name: Name as typed (empty string clears the greeting)
        path: Preferences file

    Returns:
        Updated Preferences

    Raises:
        ValueError: If name is longer than USERNAME_MAX_LENGTH
    """
    if len(name) > USERNAME_MAX_LENGTH:
        raise ValueError(f"Username must be at most {USERNAME_MAX_LENGTH} characters")

    preferences = load_preferences(path)
    preferences.username = name
    save_preferences(preferences, path)

    logger.info("Saved username preference")
    return preferences
