"""
HTTP API for Hello App.

Every screen of the app is served as a JSON view model:
- /splash, /, /home, /settings, /server, /about

GET /state exposes the raw session snapshot for debugging.

Session objects (AppState, LocationProvider, ClockTicker) are created in
the lifespan handler and stored on app.state; handlers receive them
through dependencies.
"""

from fastapi import FastAPI, HTTPException, APIRouter, Depends, Query, Request
from pydantic import BaseModel, Field
from typing import Optional
from contextlib import asynccontextmanager
from datetime import date, datetime

from hello.clock import ClockTicker, format_date_time
from hello.config import (
    ABSENT, APP_NAME, APP_VERSION, LOG_LEVEL, PREFERENCES_FILE,
    SPLASH_DURATION, CLOCK_TICK_INTERVAL, HTTP_TIMEOUT, parse_ip_endpoints
)
from hello.location import AuthorizationStatus, LocationFix, LocationProvider
from hello.logger import logger
from hello.network import fetch_public_ip, ip_details_url
from hello.preferences import USERNAME_MAX_LENGTH, load_preferences, save_username
from hello.solar_time import SolarEvents, compute_solar_events
from hello.state import AppState
from hello import views


# ============================================================================
# Lifespan
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    Creates session state and starts the clock ticker on startup.
    Stops the clock ticker on shutdown.
    """
    logger.info(f"{APP_NAME} {APP_VERSION} starting up")
    logger.info(f"Configuration: LOG_LEVEL={LOG_LEVEL}, PREFERENCES_FILE={PREFERENCES_FILE}")

    state = AppState()

    def location_changed_callback(fix: LocationFix):
        state.update(last_location_update=fix.timestamp)

    location = LocationProvider(on_update=location_changed_callback)
    clock = ClockTicker(
        on_tick=lambda now: state.update(current_time=now),
        interval=CLOCK_TICK_INTERVAL
    )

    app.state.session = state
    app.state.location = location
    app.state.clock = clock
    app.state.preferences_path = PREFERENCES_FILE

    clock.start()

    # App is running
    yield

    logger.info("Starting graceful shutdown...")
    clock.stop()
    logger.info("Shutdown complete")


# ============================================================================
# FastAPI App
# ============================================================================

app = FastAPI(
    title="Hello App API",
    lifespan=lifespan,
    redoc_url=None,
    docs_url="/docs"
)

home_router = APIRouter(prefix="/home", tags=["Home"])
settings_router = APIRouter(prefix="/settings", tags=["Settings"])
server_router = APIRouter(prefix="/server", tags=["Server"])


# ------------------------------------------------------------------
# Dependencies
# ------------------------------------------------------------------

def get_session(request: Request) -> AppState:
    return request.app.state.session


def get_location(request: Request) -> LocationProvider:
    return request.app.state.location


def get_preferences_file(request: Request) -> str:
    return request.app.state.preferences_path


# ------------------------------------------------------------------
# Request models
# ------------------------------------------------------------------

class NameRequest(BaseModel):
    name: str = Field(..., max_length=USERNAME_MAX_LENGTH, description="Display name (empty clears the greeting)")


class DateRequest(BaseModel):
    selected: datetime = Field(..., description="Date and time chosen in the date picker")


class AppearanceRequest(BaseModel):
    dark_mode: bool = Field(..., description="True for dark appearance")


class LocationUpdateRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False, description="Latitude (-90 to 90)")
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False, description="Longitude (-180 to 180)")
    speed: Optional[float] = Field(None, description="Speed in m/s (negative = unknown)")
    course: Optional[float] = Field(None, description="Course in degrees (negative = unknown)")


class AuthorizationRequest(BaseModel):
    status: AuthorizationStatus = Field(..., description="Outcome of the location permission request")


# ------------------------------------------------------------------
# Splash, root, about
# ------------------------------------------------------------------

@app.get("/splash")
async def get_splash(state: AppState = Depends(get_session)):
    """
    Splash screen state.

    Returns:
        {
            "visible": true,
            "message": "made by ...",
            "remaining_seconds": 2.4
        }
    """
    return views.build_splash(state.started_at, datetime.now(), SPLASH_DURATION)


@app.get("/")
async def get_root(state: AppState = Depends(get_session)):
    return views.build_root(state.dark_mode)


@app.get("/about")
async def get_about():
    return views.build_about()


@app.get("/state")
async def get_state(
    state: AppState = Depends(get_session),
    location: LocationProvider = Depends(get_location)
):
    """
    Debug view of the in-memory session.

    Returns:
        {
            "session": {"dark_mode": false, "public_ip": null, ..., "last_updated": "..."},
            "location": {"authorization_status": "not_determined", ...}
        }
    """
    return {
        "session": state.get_snapshot(),
        "location": location.snapshot()
    }


# ------------------------------------------------------------------
# Home
# ------------------------------------------------------------------

def _home_view(state: AppState, preferences_path: str) -> dict:
    preferences = load_preferences(preferences_path)
    return views.build_home(
        name=preferences.username,
        current_time=state.current_time,
        selected_date=state.selected_date,
        dark_mode=state.dark_mode
    )


@home_router.get("")
async def get_home(
    state: AppState = Depends(get_session),
    preferences_path: str = Depends(get_preferences_file)
):
    """
    Home screen.

    Returns:
        {
            "title": "Hello App",
            "subtitle": "Welcome!",
            "name": "Ada",
            "greeting": "Hello, Ada!",
            "time": "3:04:05 PM",
            "selected_date": "2026-10-19T15:04:00",
            "selected_date_text": "Oct 19, 2026 at 3:04 PM",
            "appearance_toggle": "Switch to Dark Mode"
        }
    """
    try:
        return _home_view(state, preferences_path)
    except Exception as e:
        logger.error("Failed to build home view", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@home_router.put("/name")
async def set_name(
    request: NameRequest,
    state: AppState = Depends(get_session),
    preferences_path: str = Depends(get_preferences_file)
):
    """Save the display name and return the updated home screen."""
    try:
        save_username(request.name, preferences_path)
        return _home_view(state, preferences_path)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Failed to save username", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@home_router.get("/time")
async def show_time():
    """
    "Show Time" alert.

    Returns:
        {"title": "Current Time", "message": "3:04:05 PM"}
    """
    return views.build_time_alert(datetime.now())


@home_router.put("/date")
async def set_selected_date(request: DateRequest, state: AppState = Depends(get_session)):
    """
    Set the date picker value.

    Returns:
        {
            "selected_date": "2026-10-19T15:04:00",
            "selected_date_text": "Oct 19, 2026 at 3:04 PM"
        }
    """
    state.update(selected_date=request.selected)
    return {
        "selected_date": request.selected.isoformat(),
        "selected_date_text": format_date_time(request.selected)
    }


# ------------------------------------------------------------------
# Settings
# ------------------------------------------------------------------

@settings_router.get("")
async def get_settings(state: AppState = Depends(get_session)):
    """
    Settings screen.

    Returns:
        {"dark_mode": false, "appearance": "light", "version": "1.0 (1)"}
    """
    return views.build_settings(state.dark_mode)


@settings_router.put("/appearance")
async def set_appearance(request: AppearanceRequest, state: AppState = Depends(get_session)):
    state.update(dark_mode=request.dark_mode)
    logger.info(f"Appearance set to {'dark' if request.dark_mode else 'light'}")
    return views.build_settings(request.dark_mode)


@settings_router.post("/appearance/toggle")
async def toggle_appearance(state: AppState = Depends(get_session)):
    """Flip light/dark appearance (home quick action and settings toggle)."""
    dark_mode = state.toggle_dark_mode()
    logger.info(f"Appearance toggled to {'dark' if dark_mode else 'light'}")
    return {
        **views.build_settings(dark_mode),
        "appearance_toggle": views.appearance_toggle_label(dark_mode)
    }


# ------------------------------------------------------------------
# Server
# ------------------------------------------------------------------

def _todays_solar_events(fix: Optional[LocationFix]) -> Optional[SolarEvents]:
    if fix is None:
        return None
    return compute_solar_events(date.today(), fix.latitude, fix.longitude)


@server_router.get("")
async def get_server(
    state: AppState = Depends(get_session),
    location: LocationProvider = Depends(get_location)
):
    """Server screen: public IP, location and today's sunrise/sunset."""
    try:
        fix = location.get_fix()
        return views.build_server(
            public_ip=state.public_ip,
            location=location.snapshot(),
            fix=fix,
            solar_events=_todays_solar_events(fix)
        )
    except Exception as e:
        logger.error("Failed to build server view", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@server_router.get("/ip")
async def get_public_ip(
    refresh: bool = Query(False, description="Look up again even if an IP is already known"),
    state: AppState = Depends(get_session)
):
    """
    Public IP of this host.

    Looked up on first access; later calls return the stored value
    unless refresh=true.

    Returns:
        {
            "public_ip": "203.0.113.7",
            "details_url": "https://whatismyipaddress.com/ip/203.0.113.7"
        }
    """
    if state.public_ip is None or refresh:
        ip = await fetch_public_ip(parse_ip_endpoints(), timeout=HTTP_TIMEOUT)
        if ip:
            state.update(public_ip=ip)

    return {
        "public_ip": state.public_ip or ABSENT,
        "details_url": ip_details_url(state.public_ip)
    }


@server_router.get("/location")
async def get_location_state(location: LocationProvider = Depends(get_location)):
    return location.snapshot()


@server_router.post("/location/request")
async def request_location(location: LocationProvider = Depends(get_location)):
    """Ask for location access. Outcome is reported via PUT /server/location/authorization."""
    status = location.request()
    return {"authorization_status": status.value}


@server_router.put("/location/authorization")
async def set_location_authorization(
    request: AuthorizationRequest,
    location: LocationProvider = Depends(get_location)
):
    location.set_authorization(request.status)
    return location.snapshot()


@server_router.post("/location")
async def update_location(
    request: LocationUpdateRequest,
    location: LocationProvider = Depends(get_location)
):
    """
    Push a location fix.

    Responds with today's sunrise/sunset for the new coordinates.

    Returns:
        {
            "location": {...},
            "sun": {"sunrise": "...", "sunset": "...", "sunrise_text": "05:43 UTC", ...}
        }
    """
    try:
        fix = location.update(request.latitude, request.longitude, request.speed, request.course)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    return {
        "location": location.snapshot(),
        "sun": _todays_solar_events(fix).to_dict()
    }


@server_router.get("/sun")
async def get_solar_events(
    on: Optional[date] = Query(None, alias="date", description="Calendar day (default: today)"),
    latitude: Optional[float] = Query(None, ge=-90, le=90, allow_inf_nan=False),
    longitude: Optional[float] = Query(None, ge=-180, le=180, allow_inf_nan=False),
    location: LocationProvider = Depends(get_location)
):
    """
    Sunrise and sunset for a day and location.

    Coordinates default to the current location fix. Absent events
    (polar day / polar night) are returned as null with "—" text.

    Returns:
        {
            "date": "2026-10-19",
            "latitude": 51.5074,
            "longitude": -0.1278,
            "sunrise": "2026-10-19T06:29:41+00:00",
            "sunset": "2026-10-19T16:49:02+00:00",
            "sunrise_text": "06:29 UTC",
            "sunset_text": "16:49 UTC"
        }
    """
    if latitude is None or longitude is None:
        if latitude is not None or longitude is not None:
            raise HTTPException(status_code=400, detail="Provide both latitude and longitude, or neither")

        fix = location.get_fix()
        if fix is None:
            raise HTTPException(status_code=409, detail="Location not available")
        latitude, longitude = fix.latitude, fix.longitude

    day = on or date.today()
    events = compute_solar_events(day, latitude, longitude)

    return {
        "date": day.isoformat(),
        "latitude": latitude,
        "longitude": longitude,
        **events.to_dict()
    }


# ============================================================================
# Register Routers
# ============================================================================

app.include_router(home_router)
app.include_router(settings_router)
app.include_router(server_router)
