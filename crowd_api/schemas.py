from __future__ import annotations

import datetime as dt

from pydantic import BaseModel


class DestinationSnapshotSchema(BaseModel):
    id: int
    name: str
    location: str | None = None
    type: str
    latitude: float
    longitude: float
    max_people: int | None
    raw_count: int
    busyness_score: float | None


class MetricPointSchema(BaseModel):
    destination_id: int
    name: str
    ts: dt.datetime
    raw_count: int
    busyness_score: float


class ErrorSchema(BaseModel):
    error: str
