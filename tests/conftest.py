"""Shared fixtures: an in-memory database and an API client bound to it."""

from __future__ import annotations

from datetime import date
from typing import Iterator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from outreach import models  # noqa: F401 - register tables
from outreach.app import app
from outreach.core import get_session
from outreach.models import OutreachEvent, Student, StudentAttribute, YEARS_ON_TEAM_KEY


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session) -> Iterator[TestClient]:
    app.dependency_overrides[get_session] = lambda: session
    # Not used as a context manager so the lifespan never touches the real database.
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_student(session):
    def _make(
        first_name: str,
        last_name: str,
        years_on_team: Optional[int] = None,
        is_active: bool = True,
        graduation_year: Optional[int] = 2027,
    ) -> Student:
        student = Student(
            first_name=first_name,
            last_name=last_name,
            graduation_year=graduation_year,
            is_active=is_active,
        )
        session.add(student)
        session.flush()
        if years_on_team is not None:
            session.add(
                StudentAttribute(
                    student_id=student.id,
                    attribute_key=YEARS_ON_TEAM_KEY,
                    attribute_value=str(years_on_team),
                )
            )
        session.commit()
        session.refresh(student)
        return student

    return _make


@pytest.fixture
def make_event(session):
    def _make(
        hours_length: Optional[float] = 2.0,
        event_name: str = "Library STEM night",
        event_date: date = date(2025, 3, 14),
    ) -> OutreachEvent:
        event = OutreachEvent(
            event_name=event_name, event_date=event_date, hours_length=hours_length
        )
        session.add(event)
        session.commit()
        session.refresh(event)
        return event

    return _make
