"""Shared test configuration, pytest markers and fixtures."""

from datetime import datetime

import pytest

from models.schemas.jobs import Job, Worker
from services.job_store import JobStore


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "scenario: literal utterance -> query examples"
    )
    config.addinivalue_line(
        "markers", "api: exercises the FastAPI app through TestClient"
    )


def make_job(job_id: int, skill: str, location: str, **overrides) -> Job:
    fields = {
        "id": job_id,
        "title": f"{skill.title()} job {job_id}",
        "description": f"Work as {skill} in {location}",
        "skill": skill,
        "location": location,
        "wage": 500,
        "created_at": datetime(2025, 1, job_id),
    }
    fields.update(overrides)
    return Job(**fields)


@pytest.fixture
def jobs() -> list[Job]:
    return [
        make_job(1, "cook", "Delhi", contractor_ratings=[5, 5]),
        make_job(2, "gardening", "Mumbai"),
        make_job(3, "driving, delivery", "Pune"),
        make_job(4, "construction, helper", "Delhi"),
        make_job(5, "cook, chef", "Amritsar"),
        make_job(6, "plumber", "Hyderabad", wage=850.5),
    ]


@pytest.fixture
def workers() -> list[Worker]:
    return [
        Worker(id=1, name="Ramesh", skills="cooking, cleaning", experience=6,
               location="Delhi", applied_job_ids=[1]),
        Worker(id=2, name="Sunita", skills="gardening", experience=3, location="Mumbai"),
    ]


@pytest.fixture
def store(jobs, workers) -> JobStore:
    return JobStore(jobs, workers)
