import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_embedder, get_match_store, get_profile_store
from main import app
from services.match_store import InMemoryMatchStore
from services.profile_store import InMemoryProfileStore

from conftest import StubEmbedder, advisor_doc, investor_doc, startup_doc

client = TestClient(app)


@pytest.fixture(autouse=True)
def stores():
    profiles = InMemoryProfileStore()
    profiles.add_startup(startup_doc())
    profiles.add_investor(investor_doc("i1", bio="payments for SMBs"))
    profiles.add_investor(investor_doc("i2", preferred_stages=["Series A"]))
    profiles.add_advisor(advisor_doc("a1"))
    matches = InMemoryMatchStore()
    embedder = StubEmbedder()

    app.dependency_overrides[get_profile_store] = lambda: profiles
    app.dependency_overrides[get_match_store] = lambda: matches
    app.dependency_overrides[get_embedder] = lambda: embedder
    yield profiles, matches
    app.dependency_overrides.clear()


def _generate() -> dict:
    response = client.post("/matches/generate", json={"startup_id": "s1"})
    assert response.status_code == 200
    return response.json()


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["embedding_model"] == "stub-bow"


def test_generate_unknown_startup():
    response = client.post("/matches/generate", json={"startup_id": "missing"})
    assert response.status_code == 404


def test_generate_and_browse_matches():
    data = _generate()
    assert [m["candidate_id"] for m in data["investors"]] == ["i1", "i2"]
    assert [m["candidate_id"] for m in data["advisors"]] == ["a1"]
    assert data["total_matches"] == 3
    assert data["errors"] == {}
    assert data["investors"][0]["status"] == "Recommended"

    listing = client.get("/matches/s1", params={"type": "Investor"}).json()
    assert listing["count"] == 2
    assert listing["data"][0]["score"] >= listing["data"][1]["score"]

    stats = client.get("/matches/s1/stats").json()
    assert {s["type"]: s["total"] for s in stats} == {"Advisor": 1, "Investor": 2}

    for_investor = client.get("/matches/investor/i1").json()
    assert for_investor["count"] == 1
    assert client.get("/matches/advisor/a1").json()["count"] == 1


def test_list_matches_unknown_startup():
    assert client.get("/matches/missing").status_code == 404


def test_status_update_and_soft_delete():
    data = _generate()
    match_id = data["advisors"][0]["id"]

    response = client.put(f"/matches/{match_id}/status", json={"status": "Viewed", "notes": "looks promising"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["status"] == "Viewed"
    assert updated["viewed_at"] is not None
    assert updated["notes"] == "looks promising"

    assert client.delete(f"/matches/{match_id}").status_code == 200
    detail = client.get(f"/matches/detail/{match_id}").json()
    assert detail["is_active"] is False
    assert client.get("/matches/s1", params={"type": "Advisor"}).json()["count"] == 0


def test_status_update_rejects_unknown_status():
    response = client.put("/matches/whatever/status", json={"status": "Married"})
    assert response.status_code == 422


def test_missing_match():
    assert client.get("/matches/detail/nope").status_code == 404
