"""Recommendations as a weighted sum of simple profile signals.

Jobs are ranked for a worker (used by the assistant when a query yields
neither skills nor a location) and workers are ranked for a job.
"""

import logging

from models.schemas.jobs import Job, ScoredJob, ScoredWorker, Worker
from services.job_store import JobStore

logger = logging.getLogger(__name__)

# Jobs for a worker; weights sum to 1.0
W_SKILL = 0.4
W_EXPERIENCE = 0.2
W_LOCATION = 0.3
W_RATING = 0.1

# Workers for a job; contractor rating does not apply
W_WORKER_SKILL = 0.5
W_WORKER_EXPERIENCE = 0.3
W_WORKER_LOCATION = 0.2

MAX_RECOMMENDATIONS = 10


def compute_skill_match(worker_skills: str, job_skill: str) -> float:
    """Fraction of the job's skills found (either direction) in the worker's list."""
    worker_list = [s.strip() for s in worker_skills.lower().split(",") if s.strip()]
    job_list = [s.strip() for s in job_skill.lower().split(",") if s.strip()]
    if not worker_list or not job_list:
        return 0.0
    matches = sum(
        1 for skill in job_list
        if any(ws in skill or skill in ws for ws in worker_list)
    )
    return matches / len(job_list)


def compute_location_match(worker_location: str, job_location: str) -> float:
    worker_loc = worker_location.lower().strip()
    job_loc = job_location.lower().strip()
    if worker_loc == job_loc:
        return 1.0
    if worker_loc in job_loc or job_loc in worker_loc:
        return 0.8
    if any(word in job_loc for word in worker_loc.split()):
        return 0.6
    return 0.3


def _profile_score(
    job: Job, worker: Worker, w_skill: float, w_experience: float, w_location: float
) -> tuple[float, list[str]]:
    score = 0.0
    reasons: list[str] = []

    if worker.skills and job.skill:
        skill_match = compute_skill_match(worker.skills, job.skill)
        score += skill_match * w_skill
        reasons.append(f"Skill match: {round(skill_match * 100)}%")

    if worker.experience:
        score += min(worker.experience / 10, 1.0) * w_experience
        reasons.append(f"Experience: {worker.experience:g} years")

    if worker.location and job.location:
        location_match = compute_location_match(worker.location, job.location)
        score += location_match * w_location
        reasons.append(f"Location match: {round(location_match * 100)}%")

    return score, reasons


def score_job(job: Job, worker: Worker) -> ScoredJob:
    score, reasons = _profile_score(job, worker, W_SKILL, W_EXPERIENCE, W_LOCATION)

    if job.contractor_ratings:
        avg_rating = sum(job.contractor_ratings) / len(job.contractor_ratings)
        score += (avg_rating / 5) * W_RATING
        reasons.append(f"Contractor rating: {avg_rating:.1f}/5")

    return ScoredJob(job=job, match_score=round(score, 2), reason=", ".join(reasons))


def score_worker(job: Job, worker: Worker) -> ScoredWorker:
    score, reasons = _profile_score(
        job, worker, W_WORKER_SKILL, W_WORKER_EXPERIENCE, W_WORKER_LOCATION
    )
    return ScoredWorker(worker=worker, match_score=round(score, 2), reason=", ".join(reasons))


def recommend_jobs(store: JobStore, worker_id: int) -> list[ScoredJob] | None:
    """Rank open jobs for a worker. Returns None for an unknown worker."""
    worker = store.get_worker(worker_id)
    if worker is None:
        logger.info("No worker profile for id %s", worker_id)
        return None

    scored = [score_job(job, worker) for job in store.jobs_for_worker(worker)]
    scored.sort(key=lambda s: s.match_score, reverse=True)
    return scored[:MAX_RECOMMENDATIONS]


def recommend_workers(store: JobStore, job_id: int) -> list[ScoredWorker] | None:
    """Rank workers who have not applied yet for a job. Returns None for an unknown job."""
    job = store.get_job(job_id)
    if job is None:
        logger.info("No job with id %s", job_id)
        return None

    scored = [score_worker(job, worker) for worker in store.workers_for_job(job)]
    scored.sort(key=lambda s: s.match_score, reverse=True)
    return scored[:MAX_RECOMMENDATIONS]
