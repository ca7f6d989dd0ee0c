import pytest

from models.schemas.jobs import Job, Worker
from services.recommender import (
    compute_location_match,
    compute_skill_match,
    recommend_jobs,
    recommend_workers,
    score_job,
    score_worker,
)


def test_compute_skill_match():
    assert compute_skill_match("cooking, cleaning", "cook") == 1.0
    assert compute_skill_match("driving", "driving, delivery") == 0.5
    assert compute_skill_match("", "cook") == 0.0
    assert compute_skill_match("gardening", "welder") == 0.0


def test_compute_location_match():
    assert compute_location_match("Delhi", "delhi") == 1.0
    assert compute_location_match("Delhi", "New Delhi") == 0.8
    assert compute_location_match("Navi Mumbai", "Mumbai Central") == 0.6
    assert compute_location_match("Pune", "Chennai") == 0.3


def test_score_job_weighted_sum():
    job = Job(id=1, title="Cook", skill="cook", location="Delhi", contractor_ratings=[5, 5])
    worker = Worker(id=1, name="R", skills="cooking", experience=5, location="Delhi")
    scored = score_job(job, worker)
    # 0.4 skill + 0.1 experience + 0.3 location + 0.1 rating
    assert scored.match_score == pytest.approx(0.9)
    assert "Skill match: 100%" in scored.reason
    assert "Contractor rating: 5.0/5" in scored.reason


def test_recommend_jobs_excludes_applied_and_sorts(store):
    scored = recommend_jobs(store, 1)
    ids = [s.job.id for s in scored]
    assert 1 not in ids
    # same-city helper job (0.42) edges out the other cook job (0.41)
    assert ids[:2] == [4, 5]
    scores = [s.match_score for s in scored]
    assert scores == sorted(scores, reverse=True)


def test_recommend_jobs_unknown_worker(store):
    assert recommend_jobs(store, 404) is None


def test_score_worker_uses_worker_weights():
    job = Job(id=1, title="Cook", skill="cook", location="Delhi", contractor_ratings=[5, 5])
    worker = Worker(id=1, name="R", skills="cooking", experience=5, location="Delhi")
    scored = score_worker(job, worker)
    # 0.5 skill + 0.15 experience + 0.2 location, ratings ignored
    assert scored.match_score == pytest.approx(0.85)
    assert "Contractor rating" not in scored.reason


def test_recommend_workers_for_job(store):
    scored = recommend_workers(store, 2)
    assert [s.worker.id for s in scored] == [2, 1]
    assert scored[0].match_score == pytest.approx(0.79)
    assert scored[1].match_score == pytest.approx(0.24)


def test_recommend_workers_skips_applicants(store):
    assert [s.worker.id for s in recommend_workers(store, 1)] == [2]


def test_recommend_workers_unknown_job(store):
    assert recommend_workers(store, 404) is None
