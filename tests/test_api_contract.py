from fastapi.testclient import TestClient

from bazaar_search.api import app
from bazaar_search.config import MAX_QUERY_CHARS
from bazaar_search.models import CatalogItem


client = TestClient(app)

SAMPLE = [
    {"title": "iPhone 12 Used", "price": 300, "condition": "Used"},
    {"title": "Laptop Dell New", "price": 600, "condition": "New"},
    {"title": "Laptop HP Used", "price": 450, "condition": "Used"},
]


def test_health_endpoint():
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data == {"status": "healthy"}


def test_search_inline_items():
    resp = client.post("/search", json={"query": "used laptop under 500", "items": SAMPLE})
    assert resp.status_code == 200
    data = resp.json()
    assert [i["title"] for i in data["items"]] == ["Laptop HP Used"]
    assert data["total"] == 1
    assert data["result_type"] == "results"
    assert data["scores"] is None


def test_search_without_catalog_is_unavailable(monkeypatch):
    monkeypatch.setattr("bazaar_search.api._catalog", None)
    resp = client.post("/search", json={"query": "laptop"})
    assert resp.status_code == 503


def test_search_uses_loaded_catalog_and_pages(monkeypatch):
    catalog = [CatalogItem(title=f"Laptop {i}", price=100 * i) for i in range(5)]
    monkeypatch.setattr("bazaar_search.api._catalog", catalog)

    resp = client.post(
        "/search", json={"query": "laptop", "offset": 2, "limit": 2, "include_scores": True}
    )
    assert resp.status_code == 200
    data = resp.json()
    assert [i["title"] for i in data["items"]] == ["Laptop 2", "Laptop 3"]
    assert data["total"] == 5
    assert data["has_more"] is True
    assert data["has_exact_matches"] is True
    assert data["scores"] == [1.0, 1.0]


def test_empty_query_returns_everything(monkeypatch):
    monkeypatch.setattr("bazaar_search.api._catalog", [CatalogItem(title="Chair")])
    data = client.post("/search", json={"query": "  "}).json()
    assert data["total"] == 1
    assert data["has_exact_matches"] is False


def test_no_results(monkeypatch):
    monkeypatch.setattr("bazaar_search.api._catalog", [CatalogItem(title="Chair")])
    data = client.post("/search", json={"query": "refrigerator"}).json()
    assert data["items"] == []
    assert data["result_type"] == "no_results"


def test_overlong_query_rejected():
    resp = client.post("/search", json={"query": "x" * (MAX_QUERY_CHARS + 1), "items": []})
    assert resp.status_code == 422


def test_exact_match_badge_ignores_condition_and_price_words():
    items = [{"title": "Laptop HP", "price": 450, "condition": "Used"}]
    data = client.post("/search", json={"query": "used laptop", "items": items}).json()
    assert data["total"] == 1
    assert data["has_exact_matches"] is True

    data = client.post("/search", json={"query": "used laptop under 500", "items": items}).json()
    assert data["has_exact_matches"] is True


def test_api_shares_the_default_matcher():
    from bazaar_search import api, matcher

    assert api.get_matcher() is matcher.get_matcher()
