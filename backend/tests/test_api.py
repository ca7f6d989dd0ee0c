import pytest
from fastapi.testclient import TestClient

from main import app

client = TestClient(app)

pytestmark = pytest.mark.api


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["jobs_loaded"] == 12


def test_interpret():
    response = client.post("/interpret", json={"text": "jobs of cooking in delhi"})
    assert response.status_code == 200
    assert response.json() == {"skills": ["cook"], "location": "delhi"}


def test_interpret_empty_text():
    response = client.post("/interpret", json={"text": ""})
    assert response.status_code == 200
    assert response.json() == {"skills": [], "location": None}


def test_interpret_rejects_oversized_text():
    response = client.post("/interpret", json={"text": "a" * 1001})
    assert response.status_code == 422


def test_assistant_chat_search():
    response = client.post("/assistant/chat", json={"text": "jobs of cooking in delhi"})
    assert response.status_code == 200
    data = response.json()
    assert data["fallback_used"] is False
    assert data["messages"] == [
        "🔍 Finding cook jobs in delhi...",
        "⭐ Restaurant Cook at Delhi (Wage: ₹700/day)\n"
        "Prepare North Indian dishes for lunch and dinner service.",
    ]


def test_assistant_chat_recommendations():
    response = client.post("/assistant/chat", json={"text": "hi", "worker_id": 1})
    assert response.status_code == 200
    data = response.json()
    assert data["fallback_used"] is True
    assert data["messages"][0] == "🔍 Searching best jobs for you..."
    assert data["messages"][-1] == 'Type "more" to see more jobs!'


def test_list_jobs_paginates_newest_first():
    response = client.get("/jobs", params={"page": 1, "limit": 5})
    assert response.status_code == 200
    data = response.json()
    assert [j["id"] for j in data["jobs"]] == [12, 11, 10, 9, 8]
    assert data["pagination"] == {"page": 1, "limit": 5, "total": 12, "pages": 3}


def test_list_jobs_filters():
    response = client.get("/jobs", params={"skill": "cook"})
    assert [j["id"] for j in response.json()["jobs"]] == [11, 1]

    response = client.get("/jobs", params={"location": "mumbai"})
    assert [j["id"] for j in response.json()["jobs"]] == [7, 2]


def test_list_jobs_rejects_bad_page():
    assert client.get("/jobs", params={"page": 0}).status_code == 422
    assert client.get("/jobs", params={"limit": 500}).status_code == 422


def test_search_jobs():
    response = client.get("/jobs/search", params={"q": "jobs of cooking in delhi"})
    assert response.status_code == 200
    data = response.json()
    assert data["query"] == {"skills": ["cook"], "location": "delhi"}
    assert [j["id"] for j in data["jobs"]] == [1]


def test_search_jobs_outdoor_theme():
    response = client.get("/jobs/search", params={"q": "outdoor work please"})
    data = response.json()
    # driving/delivery, construction and gardening jobs
    assert [j["id"] for j in data["jobs"]] == [4, 3, 2]


def test_recommendations():
    response = client.get("/recommendations/1")
    assert response.status_code == 200
    data = response.json()
    assert data["worker_id"] == 1
    assert data["total"] == 10
    ids = [r["job"]["id"] for r in data["recommendations"]]
    assert 1 not in ids
    scores = [r["match_score"] for r in data["recommendations"]]
    assert scores == sorted(scores, reverse=True)


def test_recommendations_unknown_worker():
    response = client.get("/recommendations/999")
    assert response.status_code == 404


def test_worker_recommendations_for_job():
    response = client.get("/jobs/2/recommendations")
    assert response.status_code == 200
    data = response.json()
    assert data["job_id"] == 2
    assert data["total"] == 3
    # Sunita: gardening in Mumbai
    assert data["recommendations"][0]["worker"]["id"] == 2


def test_worker_recommendations_unknown_job():
    response = client.get("/jobs/999/recommendations")
    assert response.status_code == 404
