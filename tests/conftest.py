import datetime as dt

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from crowd_api.database import Base, get_session
from crowd_api.main import app
from crowd_api.models import CrowdMetric, Destination


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

    def _get_session():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def now():
    return dt.datetime.now(dt.timezone.utc)


@pytest.fixture
def add_destination(session):
    def _add(*, samples=(), **attributes):
        values = {
            "name": "Lake Bled",
            "location": "Upper Carniola",
            "type": "natural",
            "latitude": 46.3625,
            "longitude": 14.0936,
            "max_people": 100,
        }
        values.update(attributes)
        destination = Destination(**values)
        session.add(destination)
        session.flush()
        for ts, raw_count in samples:
            session.add(CrowdMetric(destination_id=destination.id, ts=ts, raw_count=raw_count))
        session.commit()
        return destination

    return _add
