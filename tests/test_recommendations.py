from catalog_search.recommendations import recommend
from factories import make_item


def test_related_by_category_or_vendor(dental_items):
    other = make_item("x1", "Nitrile Gloves", 9, category_id="c9", vendor_id="v9")
    out = recommend(dental_items + [other], ["p1"], 10)
    # p3 rates higher than p2
    assert [it.id for it in out] == ["p3", "p2"]


def test_vendor_only_overlap_counts():
    seen = make_item("a", "A", 1, category_id="c1", vendor_id="v1")
    same_vendor = make_item("b", "B", 1, category_id="c2", vendor_id="v1")
    unrelated = make_item("c", "C", 1, category_id="c3", vendor_id="v3")
    assert [it.id for it in recommend([seen, same_vendor, unrelated], ["a"], 5)] == ["b"]


def test_empty_cases(dental_items):
    assert recommend(dental_items, [], 5) == []
    assert recommend(dental_items, ["p1"], 0) == []
    assert recommend(dental_items, ["unknown"], 5) == []
