import json

import pytest

from bazaar_search.config import (
    MATCHER_CONFIG_ENV,
    RELEVANCE_THRESHOLD_ENV,
    HealthResponse,
    MatcherConfig,
    load_matcher_config,
)
from bazaar_search.models import CatalogItem, Condition, SearchRequest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv(MATCHER_CONFIG_ENV, raising=False)
    monkeypatch.delenv(RELEVANCE_THRESHOLD_ENV, raising=False)


def test_matcher_config_defaults():
    cfg = MatcherConfig()
    assert cfg.relevance_threshold == 0.05
    assert cfg.variants["mobile"][0] == "moble"
    assert cfg.condition_keywords["like new"] == "Like New"
    assert "less than" in cfg.price_keywords


def test_with_overrides_returns_copy():
    cfg = MatcherConfig()
    tuned = cfg.with_overrides(relevance_threshold=0.5)
    assert tuned.relevance_threshold == 0.5
    assert cfg.relevance_threshold == 0.05


def test_load_matcher_config_from_file(tmp_path):
    path = tmp_path / "matcher.json"
    path.write_text(json.dumps({"tag_weight": 0.9, "corrections": {"bk": "book"}}), encoding="utf-8")
    cfg = load_matcher_config(path)
    assert cfg.tag_weight == 0.9
    assert cfg.corrections == {"bk": "book"}
    assert cfg.title_weight == 1.0


def test_load_matcher_config_from_env(tmp_path, monkeypatch):
    path = tmp_path / "matcher.json"
    path.write_text(json.dumps({"relevance_threshold": 0.2}), encoding="utf-8")
    monkeypatch.setenv(MATCHER_CONFIG_ENV, str(path))
    assert load_matcher_config().relevance_threshold == 0.2

    monkeypatch.setenv(RELEVANCE_THRESHOLD_ENV, "0.3")
    assert load_matcher_config().relevance_threshold == 0.3


def test_load_matcher_config_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_matcher_config(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_matcher_config(bad)

    wrong = tmp_path / "wrong.json"
    wrong.write_text(json.dumps({"title_weight": -1}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_matcher_config(wrong)


def test_catalog_item_coerces_fields():
    item = CatalogItem(title=None, price="abc", tags="books, notes ,", condition=Condition.USED)
    assert item.title == ""
    assert item.description == ""
    assert item.price == 0.0
    assert item.tags == ["books", "notes"]
    assert item.condition == "Used"

    assert CatalogItem(price="1,200").price == 1200.0
    assert CatalogItem(price=10**400).price == 0.0
    assert CatalogItem(id=7).id == "7"


def test_search_request_defaults():
    req = SearchRequest(query="laptop")
    assert req.offset == 0
    assert req.limit is None
    assert req.items is None


def test_health_response():
    health = HealthResponse(status="healthy")
    assert health.status == "healthy"
