"""Pydantic contracts shared between the interpreter and its collaborators."""

from models.schemas.extracted_query import ExtractedQuery
from models.schemas.jobs import Job, JobPage, Pagination, ScoredJob, ScoredWorker, Worker

__all__ = [
    "ExtractedQuery",
    "Job",
    "JobPage",
    "Pagination",
    "ScoredJob",
    "ScoredWorker",
    "Worker",
]
