from __future__ import annotations

import logging
import re

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from . import crud
from .database import get_session
from .exceptions import CrowdApiError, DestinationNotFoundError, InvalidRequestError, StoreError
from .schemas import DestinationSnapshotSchema, ErrorSchema, MetricPointSchema
from .scoring import has_capacity

logger = logging.getLogger(__name__)

MIN_WINDOW_HOURS = 1
MAX_WINDOW_HOURS = 24 * 365
MAX_DESTINATION_ID = 2**31 - 1

# At most nine digits are read; larger values clamp to the maximum window.
_LEADING_INT = re.compile(r"\s*([+-]?\d{1,9})")
_DESTINATION_ID = re.compile(r"[0-9]{1,10}")

app = FastAPI(title="Destination Crowd Busyness API")


@app.exception_handler(CrowdApiError)
async def crowd_api_error_handler(request: Request, exc: CrowdApiError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def parse_destination_id(raw: str) -> int:
    if not _DESTINATION_ID.fullmatch(raw):
        raise InvalidRequestError("Invalid destination id")
    destination_id = int(raw)
    if destination_id > MAX_DESTINATION_ID:
        raise InvalidRequestError("Invalid destination id")
    return destination_id


def parse_hours(raw: str | None) -> int:
    """Parse the ``hours`` query parameter into a lookback window.

    Missing, non-numeric and zero values fall back to the 24 hour default. A
    leading integer is accepted (``"12h"`` reads as 12) and the result is
    clamped to between one hour and one year.
    """

    if raw is None:
        return crud.DEFAULT_WINDOW_HOURS
    match = _LEADING_INT.match(raw)
    hours = int(match.group(1)) if match else 0
    if hours == 0:
        return crud.DEFAULT_WINDOW_HOURS
    return max(MIN_WINDOW_HOURS, min(hours, MAX_WINDOW_HOURS))


@app.get(
    "/destinations",
    response_model=list[DestinationSnapshotSchema],
    responses={500: {"model": ErrorSchema}},
)
def list_destinations(session=Depends(get_session)):
    try:
        return [DestinationSnapshotSchema(**row) for row in crud.list_destination_snapshots(session)]
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch destinations")
        raise StoreError("Failed to fetch destinations") from exc
    except Exception as exc:
        logger.exception("Unexpected error while building destination snapshots")
        raise StoreError("Failed to fetch destinations") from exc


@app.get(
    "/destinations/{destination_id}/metrics",
    response_model=list[MetricPointSchema],
    responses={400: {"model": ErrorSchema}, 404: {"model": ErrorSchema}, 500: {"model": ErrorSchema}},
)
def destination_metrics(destination_id: str, hours: str | None = None, session=Depends(get_session)):
    parsed_id = parse_destination_id(destination_id)
    window = parse_hours(hours)
    logger.debug("Metrics requested for destination %s over %s hours", parsed_id, window)

    try:
        destination = crud.get_destination(session, parsed_id)
        if destination is None or not has_capacity(destination.max_people):
            raise DestinationNotFoundError()
        points = crud.list_metrics(session, destination, hours=window)
        return [MetricPointSchema(**point) for point in points]
    except CrowdApiError:
        raise
    except SQLAlchemyError as exc:
        logger.exception("Failed to fetch metrics for destination %s", parsed_id)
        raise StoreError("Failed to fetch metrics") from exc
    except Exception as exc:
        logger.exception("Unexpected error while building metrics for destination %s", parsed_id)
        raise StoreError("Failed to fetch metrics") from exc
