from bazaar_search.models import CatalogItem, Condition
from bazaar_search.normalize import (
    field_text,
    item_condition,
    item_price,
    normalize_query,
)


def test_normalize_query_lowercases_and_collapses():
    assert normalize_query("  Used   LAPTOP\n ") == "used laptop"
    assert normalize_query(None) == ""
    assert normalize_query(500) == "500"


def test_field_text_handles_item_shapes():
    model = CatalogItem(title="Dell Laptop", tags=["Electronics", "Sale"])
    assert field_text(model, "title") == "dell laptop"
    assert field_text(model, "tags") == "electronics sale"

    assert field_text({"tags": "Books"}, "tags") == "books"
    assert field_text({"title": None}, "title") == ""
    assert field_text(object(), "description") == ""


def test_item_price_and_condition():
    assert item_price({"price": "450"}) == 450.0
    assert item_price({"price": "n/a"}) == 0.0
    assert item_price({}) == 0.0
    assert item_condition({"condition": Condition.LIKE_NEW}) == "Like New"


def test_normalize_query_keeps_long_queries_whole():
    q = normalize_query("a " * 250 + "Laptop")
    assert q.endswith(" laptop")
    assert len(q.split()) == 251
