import json
from datetime import timedelta

from catalog_search.models import utcnow
from catalog_search.repositories import InMemoryCatalogRepository, SearchHistoryStore
from factories import make_item


def test_history_falls_back_to_memory_without_redis():
    store = SearchHistoryStore(redis_url=None)
    assert store.backend == "memory"
    ev = store.record_search_event("u1", "  Dental MIRROR ")
    assert ev.query == "dental mirror"
    assert [e.query for e in store.list_search_events()] == ["dental mirror"]


def test_history_unreachable_redis_uses_memory():
    store = SearchHistoryStore(redis_url="redis://127.0.0.1:1/0")
    assert store.backend == "memory"
    store.record_search_event(None, "scaler")
    assert len(store.list_search_events()) == 1


def test_blank_queries_not_recorded():
    store = SearchHistoryStore(redis_url=None)
    assert store.record_search_event("u1", " ?! ") is None
    assert store.list_search_events() == []


def test_history_since():
    store = SearchHistoryStore(redis_url=None)
    store.record_search_event(None, "mirror")
    assert store.list_search_events(since=utcnow() + timedelta(hours=1)) == []
    assert len(store.list_search_events(since=utcnow() - timedelta(hours=1))) == 1


def test_catalog_lists_only_active_items():
    repo = InMemoryCatalogRepository([make_item("a", "A", 1), make_item("b", "B", 1, is_active=False)])
    assert [it.id for it in repo.list_active_items()] == ["a"]


def test_category_names_fall_back_to_items():
    repo = InMemoryCatalogRepository([
        make_item("a", "A", 1, category_name="Burs"),
        make_item("b", "B", 1, category_name="Burs"),
        make_item("c", "C", 1, category_name="Gloves"),
    ])
    assert repo.list_category_names() == ["Burs", "Gloves"]


def test_replace_swaps_snapshot():
    repo = InMemoryCatalogRepository([make_item("a", "A", 1)])
    repo.replace([make_item("b", "B", 1)], ["Gloves"])
    assert [it.id for it in repo.list_active_items()] == ["b"]
    assert repo.list_category_names() == ["Gloves"]


def test_load_from_jsonl(tmp_path):
    catalog = tmp_path / "catalog.jsonl"
    categories = tmp_path / "categories.jsonl"
    rows = [
        {"id": "p1", "name": "Dental Mirror", "price": "25.99", "stock": 3, "tags": ["mirror"]},
        {"id": "p2", "name": "Old Explorer", "price": "5", "is_active": False},
    ]
    catalog.write_text("\n".join(json.dumps(r) for r in rows) + "\n\n", encoding="utf-8")
    categories.write_text(json.dumps({"id": "c1", "name": "Mirrors"}) + "\n", encoding="utf-8")

    repo = InMemoryCatalogRepository.from_jsonl(str(catalog), str(categories))
    assert [it.name for it in repo.list_active_items()] == ["Dental Mirror"]
    assert repo.list_category_names() == ["Mirrors"]


def test_missing_snapshot_is_empty(tmp_path):
    repo = InMemoryCatalogRepository.from_jsonl(str(tmp_path / "nope.jsonl"))
    assert repo.list_active_items() == []
