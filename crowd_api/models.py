from __future__ import annotations

import datetime as dt

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class Destination(Base):
    __tablename__ = "destinations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    latitude: Mapped[float] = mapped_column(Numeric(9, 6, asdecimal=False), nullable=False)
    longitude: Mapped[float] = mapped_column(Numeric(9, 6, asdecimal=False), nullable=False)
    max_people: Mapped[int | None] = mapped_column(Integer, nullable=True)


class CrowdMetric(Base):
    __tablename__ = "crowd_metrics"
    __table_args__ = (Index("ix_crowd_metrics_destination_id_ts", "destination_id", "ts"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    destination_id: Mapped[int] = mapped_column(ForeignKey("destinations.id"), nullable=False)
    # Stored as UTC wall time; the metrics window compares against a UTC cutoff.
    ts: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    raw_count: Mapped[int] = mapped_column(Integer, nullable=False)
