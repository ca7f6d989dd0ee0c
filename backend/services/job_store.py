"""In-memory job store: the find-jobs-by-filter collaborator.

Loaded once from a JSON document of the form
`{"jobs": [...], "workers": [...]}` and read-only afterwards, so it can be
shared by concurrent requests without locking.
"""

import json
import logging
import math
from pathlib import Path

from pydantic import ValidationError

from models.schemas.jobs import Job, JobPage, Pagination, Worker

logger = logging.getLogger(__name__)


def _split_terms(value: str) -> list[str]:
    return [t.strip().lower() for t in value.split(",") if t.strip()]


def skill_matches(job_skill: str, skill_filter: str) -> bool:
    """Case-insensitive contains match; comma-separated filters match on any term."""
    haystack = job_skill.lower()
    return any(term in haystack for term in _split_terms(skill_filter))


def location_matches(job_location: str, location_filter: str) -> bool:
    return location_filter.strip().lower() in job_location.lower()


class JobStore:
    """Read-only collection of jobs and worker profiles."""

    def __init__(self, jobs: list[Job] | None = None, workers: list[Worker] | None = None):
        # newest first, matching the listing order of the marketplace
        self._jobs: tuple[Job, ...] = tuple(
            sorted(jobs or [], key=lambda j: (j.created_at, j.id), reverse=True)
        )
        self._workers: dict[int, Worker] = {w.id: w for w in workers or []}

    @classmethod
    def from_file(cls, path: str | Path) -> "JobStore":
        """Load a store from JSON. Problems are logged and yield an empty store."""
        path = Path(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            jobs = [Job(**item) for item in raw.get("jobs", [])]
            workers = [Worker(**item) for item in raw.get("workers", [])]
        except FileNotFoundError:
            logger.warning("Job data file not found: %s - starting with an empty store", path)
            return cls()
        except (json.JSONDecodeError, ValidationError, AttributeError) as e:
            logger.error("Could not load job data from %s: %s", path, e)
            return cls()
        logger.info("Loaded %d jobs and %d workers from %s", len(jobs), len(workers), path)
        return cls(jobs, workers)

    def __len__(self) -> int:
        return len(self._jobs)

    def find_jobs(
        self,
        skill: str | None = None,
        location: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> JobPage:
        """Filter by skill and location (ANDed), then paginate."""
        page = max(1, page)
        limit = max(1, limit)

        matches = [
            job for job in self._jobs
            if (not skill or skill_matches(job.skill, skill))
            and (not location or location_matches(job.location, location))
        ]
        start = (page - 1) * limit
        return JobPage(
            jobs=matches[start:start + limit],
            pagination=Pagination(
                page=page,
                limit=limit,
                total=len(matches),
                pages=math.ceil(len(matches) / limit),
            ),
        )

    def get_job(self, job_id: int) -> Job | None:
        return next((job for job in self._jobs if job.id == job_id), None)

    def get_worker(self, worker_id: int) -> Worker | None:
        return self._workers.get(worker_id)

    def jobs_for_worker(self, worker: Worker) -> list[Job]:
        """Jobs the worker has not applied to yet."""
        applied = set(worker.applied_job_ids)
        return [job for job in self._jobs if job.id not in applied]

    def workers_for_job(self, job: Job) -> list[Worker]:
        """Workers who have not applied to the job yet."""
        return [w for w in self._workers.values() if job.id not in w.applied_job_ids]
