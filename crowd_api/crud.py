from __future__ import annotations

import datetime as dt
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .models import CrowdMetric, Destination
from .scoring import busyness_score, has_capacity

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_HOURS = 24


def list_destination_snapshots(session: Session) -> list[dict[str, object]]:
    """Return every destination joined with its most recent crowd sample.

    Destinations without any sample are left out.
    """

    ranked = select(
        CrowdMetric.destination_id,
        CrowdMetric.raw_count,
        func.row_number()
        .over(
            partition_by=CrowdMetric.destination_id,
            order_by=(CrowdMetric.ts.desc(), CrowdMetric.id.desc()),
        )
        .label("position"),
    ).subquery()
    stmt = (
        select(Destination, ranked.c.raw_count)
        .join(ranked, ranked.c.destination_id == Destination.id)
        .where(ranked.c.position == 1)
        .order_by(Destination.id)
    )

    snapshots = []
    for destination, raw_count in session.execute(stmt):
        if has_capacity(destination.max_people):
            score = busyness_score(raw_count, destination.max_people)
        else:
            logger.warning("Destination %s has no capacity set; busyness score unavailable", destination.id)
            score = None
        snapshots.append(
            {
                "id": destination.id,
                "name": destination.name,
                "location": destination.location,
                "type": destination.type,
                "latitude": destination.latitude,
                "longitude": destination.longitude,
                "max_people": destination.max_people,
                "raw_count": raw_count,
                "busyness_score": score,
            }
        )
    return snapshots


def get_destination(session: Session, destination_id: int) -> Destination | None:
    return session.get(Destination, destination_id)


def list_metrics(
    session: Session,
    destination: Destination,
    *,
    hours: int = DEFAULT_WINDOW_HOURS,
    now: dt.datetime | None = None,
) -> list[dict[str, object]]:
    """Return the samples of ``destination`` recorded in the last ``hours`` hours.

    The destination must have a positive ``max_people``; every point is scored
    against that single capacity value.
    """

    max_people = destination.max_people
    if not has_capacity(max_people):
        raise ValueError(f"Destination {destination.id} has no capacity set")

    # Sample timestamps are stored in UTC, so the cutoff is compared as UTC wall time.
    now = (now or dt.datetime.now(dt.timezone.utc)).astimezone(dt.timezone.utc)
    cutoff = now - dt.timedelta(hours=hours)
    stmt = (
        select(CrowdMetric.ts, CrowdMetric.raw_count)
        .where(CrowdMetric.destination_id == destination.id, CrowdMetric.ts >= cutoff)
        .order_by(CrowdMetric.ts.asc(), CrowdMetric.id.asc())
    )
    logger.debug("Fetching metrics for destination %s since %s", destination.id, cutoff.isoformat())
    return [
        {
            "destination_id": destination.id,
            "name": destination.name,
            "ts": row.ts,
            "raw_count": row.raw_count,
            "busyness_score": busyness_score(row.raw_count, max_people),
        }
        for row in session.execute(stmt)
    ]
