import json

from services.job_store import JobStore, location_matches, skill_matches


def test_skill_matches_any_comma_term():
    assert skill_matches("construction, helper", "helper")
    assert skill_matches("Driving, Delivery", "gardening,delivery")
    assert not skill_matches("cook", "gardening,driving")


def test_location_matches_is_case_insensitive_contains():
    assert location_matches("New Delhi", "delhi")
    assert not location_matches("Mumbai", "delhi")


def test_find_jobs_unfiltered_newest_first(store):
    page = store.find_jobs()
    assert [j.id for j in page.jobs] == [6, 5, 4, 3, 2, 1]
    assert page.pagination.total == 6
    assert page.pagination.pages == 1


def test_find_jobs_filters_are_anded(store):
    page = store.find_jobs(skill="cook", location="delhi")
    assert [j.id for j in page.jobs] == [1]

    page = store.find_jobs(location="Delhi")
    assert {j.id for j in page.jobs} == {1, 4}


def test_find_jobs_semantic_skill_list(store):
    page = store.find_jobs(skill="driving,gardening,construction,delivery,outdoor")
    assert {j.id for j in page.jobs} == {2, 3, 4}


def test_find_jobs_no_match(store):
    page = store.find_jobs(skill="welder")
    assert page.jobs == []
    assert page.pagination.total == 0
    assert page.pagination.pages == 0


def test_find_jobs_pagination(store):
    page = store.find_jobs(page=2, limit=4)
    assert [j.id for j in page.jobs] == [2, 1]
    assert page.pagination.pages == 2

    clamped = store.find_jobs(page=0, limit=0)
    assert clamped.pagination.page == 1
    assert clamped.pagination.limit == 1
    assert len(clamped.jobs) == 1


def test_get_worker_and_open_jobs(store):
    worker = store.get_worker(1)
    assert worker.name == "Ramesh"
    assert 1 not in [j.id for j in store.jobs_for_worker(worker)]
    assert store.get_worker(99) is None


def test_from_file(tmp_path):
    path = tmp_path / "jobs.json"
    path.write_text(json.dumps({
        "jobs": [{"id": 1, "title": "Cook", "skill": "cook", "location": "Delhi"}],
        "workers": [{"id": 7, "name": "Asha"}],
    }))
    store = JobStore.from_file(path)
    assert len(store) == 1
    assert store.get_worker(7).name == "Asha"


def test_from_file_missing_gives_empty_store(tmp_path):
    store = JobStore.from_file(tmp_path / "missing.json")
    assert len(store) == 0


def test_from_file_invalid_gives_empty_store(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    assert len(JobStore.from_file(path)) == 0

    path.write_text(json.dumps({"jobs": [{"id": 1}]}))
    assert len(JobStore.from_file(path)) == 0


def test_get_job_and_open_workers(store):
    job = store.get_job(1)
    assert job.skill == "cook"
    # Ramesh already applied to job 1
    assert [w.id for w in store.workers_for_job(job)] == [2]
    assert store.get_job(99) is None
