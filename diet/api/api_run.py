from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse

from typing import Optional
import logging

from diet.infra.json_store import StorageError
from diet.logic.scheduling.slots import find_closest_slot_index, generate_slots
from diet.events.web_observers import start as start_event_observers, get_events as get_web_events

# Routers
from diet.api.routes import booking, diet_lists, owners

# Logging
logger = logging.getLogger("diet_app")

# Initialize FastAPI app
app = FastAPI(title="Dietitian Practice API")

# Include routers
app.include_router(diet_lists.router)
app.include_router(booking.router)
app.include_router(owners.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for booking notifications when the app starts."""
    start_event_observers()


@app.exception_handler(StorageError)
def _storage_error(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Storage is unavailable, please try again."})


# -------------------- API: Slots --------------------
@app.get("/api/slots")
def api_slots(
    start: str = Query(default="09:00", description="Hour (9) or HH:MM"),
    end: str = Query(default="17:00", description="Hour (17) or HH:MM"),
    duration: int = Query(default=45),
    near: Optional[str] = Query(default=None, description="Also report the slot closest to this HH:MM"),
):
    slots = generate_slots(start, end, duration)
    data = {"slots": slots, "count": len(slots)}
    if near is not None:
        data["closest_index"] = find_closest_slot_index(near, slots)
    return data


# -------------------- API: Booking notifications (polled by dashboard) --------------------
@app.get('/api/events')
def api_events(
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value"),
    owner_id: Optional[str] = Query(default=None),
):
    """
    Return recent booking events (new requests, conflicts, status changes).

    Client polling strategy:
        1. First call without 'since' to load the current backlog.
        2. Store 'next_cursor' from response.
        3. Subsequent polls: /api/events?since=<next_cursor>
    """
    return get_web_events(since, owner_id)
