"""Shared dependencies for API routes."""

from functools import lru_cache

from config import settings
from services.job_store import JobStore


@lru_cache(maxsize=1)
def get_job_store() -> JobStore:
    return JobStore.from_file(settings.jobs_data_path)
