"""Marketplace records consumed by job search and recommendations."""

from datetime import datetime

from pydantic import BaseModel


class Job(BaseModel):
    """A posted job. `skill` may list several skills separated by commas."""
    id: int
    title: str
    description: str = ""
    skill: str
    category: str = "General"
    wage: float = 0.0  # per day
    location: str
    duration: str = ""
    contractor_id: int = 0
    contractor_name: str = ""
    contractor_ratings: list[int] = []  # 1-5 scores
    created_at: datetime = datetime(1970, 1, 1)


class Worker(BaseModel):
    """A labourer profile used for personalised recommendations."""
    id: int
    name: str
    skills: str = ""  # comma-separated
    experience: float = 0.0  # years
    location: str = ""
    applied_job_ids: list[int] = []


class Pagination(BaseModel):
    page: int = 1
    limit: int = 10
    total: int = 0
    pages: int = 0


class JobPage(BaseModel):
    jobs: list[Job] = []
    pagination: Pagination = Pagination()


class ScoredJob(BaseModel):
    """A job ranked for a particular worker."""
    job: Job
    match_score: float = 0.0
    reason: str = ""


class ScoredWorker(BaseModel):
    """A worker ranked for a particular job."""
    worker: Worker
    match_score: float = 0.0
    reason: str = ""
