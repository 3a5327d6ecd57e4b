"""
HTTP API for the public booking calendar.

Reservations:
- GET    /api/reservations
- POST   /api/reservations
- GET    /api/reservations/{id}
- DELETE /api/reservations/{id}

Schedule (read-only):
- GET /api/available-dates     dates with a free future slot (month grid)
- GET /api/available-slots     every free future slot datetime
- GET /api/day-slots?date=...  full day timeline

Plus GET /health.
"""

import json
from typing import Optional

from aiohttp import web
from aiohttp.web import Request, Response
from pydantic import ValidationError as PydanticValidationError

from config import settings
from db.reservation_ledger import ReservationLedger
from models.reservation import ReservationCreate
from services.scheduling import ScheduleService
from utils.datetime_utils import to_iso_utc, utc_now
from utils.logging_config import setup_logging
from utils.validation import is_date_key, sanitize_text

logger = setup_logging(
    name=__name__,
    log_level=settings.log_level,
    log_file="api.log",
    log_dir=settings.log_dir,
    console=False,
)

SCHEDULE_KEY = web.AppKey("schedule", ScheduleService)
LEDGER_KEY = web.AppKey("ledger", ReservationLedger)

MAX_REQUEST_BODY_SIZE = 64 * 1024  # Reservation bodies are tiny


def _error(message: str, status: int) -> Response:
    return web.json_response({"error": message}, status=status)


def _parse_id(request: Request) -> Optional[int]:
    try:
        return int(request.match_info["reservation_id"])
    except ValueError:
        return None


# ========== Middleware ==========


@web.middleware
async def cors_middleware(request: Request, handler):
    """
    Allow the browser calendar to call the API from another origin.

    Answers preflight OPTIONS requests directly.
    """
    if request.method == "OPTIONS":
        response = web.Response(status=204)
    else:
        response = await handler(request)

    origins = settings.allowed_origins()
    origin = request.headers.get("Origin")
    if "*" in origins:
        response.headers["Access-Control-Allow-Origin"] = "*"
    elif origin and origin in origins:
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Vary"] = "Origin"

    response.headers["Access-Control-Allow-Methods"] = "GET, POST, DELETE, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Expose-Headers"] = "X-Slots-Affected"
    return response


@web.middleware
async def error_middleware(request: Request, handler):
    """Turn unexpected exceptions into a JSON 500."""
    try:
        return await handler(request)
    except web.HTTPException as e:
        if e.status >= 400 and e.content_type != "application/json":
            return _error(e.reason, e.status)
        raise
    except Exception as e:
        logger.error(
            f"Unhandled error on {request.method} {request.path}: {e}", exc_info=True
        )
        return _error("internal server error", 500)


# ========== Reservations ==========


async def list_reservations(request: Request) -> Response:
    ledger = request.app[LEDGER_KEY]
    return web.json_response([r.to_json() for r in ledger.list()])


async def create_reservation(request: Request) -> Response:
    """
    Create a reservation.

    Body: {name, date, guests?, comment?}. Responds 201 even when no slot
    matches `date`; X-Slots-Affected tells the caller whether a slot was
    booked.
    """
    if request.content_length and request.content_length > MAX_REQUEST_BODY_SIZE:
        return _error("request body too large", 413)

    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error("request body must be JSON", 400)

    if not isinstance(payload, dict) or not payload.get("name") or not payload.get("date"):
        return _error("name and date are required", 400)

    try:
        body = ReservationCreate.model_validate(payload)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        logger.warning(f"Invalid reservation payload: {field}: {first['msg']}")
        return _error(f"invalid {field}: {first['msg']}", 400)

    ledger = request.app[LEDGER_KEY]
    try:
        reservation, affected = ledger.create_and_report(
            name=sanitize_text(body.name),
            date=body.date,
            guests=body.guests if body.guests is not None else 1,
            comment=sanitize_text(body.comment or ""),
        )
    except ValueError as e:
        return _error(str(e), 400)
    return web.json_response(
        reservation.to_json(),
        status=201,
        headers={"X-Slots-Affected": str(affected)},
    )


async def get_reservation(request: Request) -> Response:
    reservation_id = _parse_id(request)
    reservation = (
        request.app[LEDGER_KEY].get_by_id(reservation_id)
        if reservation_id is not None
        else None
    )
    if reservation is None:
        return _error("not found", 404)
    return web.json_response(reservation.to_json())


async def cancel_reservation(request: Request) -> Response:
    reservation_id = _parse_id(request)
    reservation = (
        request.app[LEDGER_KEY].cancel(reservation_id)
        if reservation_id is not None
        else None
    )
    if reservation is None:
        return _error("not found", 404)
    return web.json_response(reservation.to_json())


# ========== Schedule ==========


async def available_dates(request: Request) -> Response:
    schedule = request.app[SCHEDULE_KEY]
    return web.json_response({"dates": schedule.get_available_date_keys()})


async def available_slots(request: Request) -> Response:
    schedule = request.app[SCHEDULE_KEY]
    return web.json_response({"slots": schedule.get_available_slot_datetimes()})


async def day_slots(request: Request) -> Response:
    date_key = request.query.get("date")
    if not is_date_key(date_key):
        return _error("query parameter date is required (YYYY-MM-DD)", 400)

    schedule = request.app[SCHEDULE_KEY]
    slots = schedule.get_slots_for_date_full(date_key)
    return web.json_response(
        {"slots": [s.model_dump(mode="json", exclude_none=True) for s in slots]}
    )


async def health_check(request: Request) -> Response:
    return web.json_response({"status": "ok", "timestamp": to_iso_utc(utc_now())})


def create_app(schedule: ScheduleService, ledger: ReservationLedger) -> web.Application:
    """
    Create aiohttp application with middleware and routes.

    Args:
        schedule: Scheduling service shared with the bot
        ledger: Reservation ledger bound to the same store

    Returns:
        Configured web application
    """
    app = web.Application(
        middlewares=[cors_middleware, error_middleware],
        client_max_size=MAX_REQUEST_BODY_SIZE,
    )
    app[SCHEDULE_KEY] = schedule
    app[LEDGER_KEY] = ledger

    app.router.add_get("/api/reservations", list_reservations)
    app.router.add_post("/api/reservations", create_reservation)
    app.router.add_get("/api/reservations/{reservation_id}", get_reservation)
    app.router.add_delete("/api/reservations/{reservation_id}", cancel_reservation)
    app.router.add_get("/api/available-dates", available_dates)
    app.router.add_get("/api/available-slots", available_slots)
    app.router.add_get("/api/day-slots", day_slots)
    app.router.add_get("/health", health_check)

    return app
