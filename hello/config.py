"""
Configuration management with environment variable support.

All settings can be overridden via environment variables.
Automatically loads .env file if present.
"""

import os
from pathlib import Path
from typing import Literal
from dotenv import load_dotenv

# Load .env file from project root (one level up from hello/)
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Logging configuration
LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = os.getenv("LOG_LEVEL", "INFO")

# App identity (shown on root, settings and about views)
APP_NAME: str = os.getenv("APP_NAME", "Hello App")
APP_VERSION: str = os.getenv("APP_VERSION", "1.0")
APP_BUILD: str = os.getenv("APP_BUILD", "1")
APP_AUTHOR: str = os.getenv("APP_AUTHOR", "Hello App contributors")

# Splash and clock timing
SPLASH_DURATION: float = float(os.getenv("SPLASH_DURATION", "3.0"))  # seconds
CLOCK_TICK_INTERVAL: float = float(os.getenv("CLOCK_TICK_INTERVAL", "1.0"))  # seconds

# Username preference storage
PREFERENCES_FILE: str = os.getenv(
    "PREFERENCES_FILE",
    str(Path.home() / ".hello" / "preferences.json")
)

# Public IP lookup
# Comma-separated, tried in order until one returns a non-empty body
IP_ENDPOINTS: str = os.getenv("IP_ENDPOINTS", "https://api.ipify.org,https://ifconfig.me/ip")
HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "5.0"))  # seconds
IP_DETAILS_BASE_URL: str = os.getenv("IP_DETAILS_BASE_URL", "https://whatismyipaddress.com/ip/")

# Placeholder text for values that are not available
ABSENT: str = "—"

# Sun's upper limb at the horizon, including atmospheric refraction
ZENITH: float = 90.833


def parse_ip_endpoints() -> list[str]:
    """
    Parse IP_ENDPOINTS environment variable into a list of URLs.

    Format: "url1,url2,..."

    Returns:
        List of endpoint URLs in lookup order
    """
    if not IP_ENDPOINTS:
        return []

    return [endpoint.strip() for endpoint in IP_ENDPOINTS.split(",") if endpoint.strip()]
