from catalog_search.matcher import RelevanceMatcher, RelevanceWeights
from catalog_search.normalizer import parse_query
from factories import make_item


def test_any_token_match_is_enough(dental_items):
    m = RelevanceMatcher()
    mirror, scaler, light = dental_items
    q = parse_query("mirror xyzzy")
    assert m.matches(q, mirror)
    assert not m.matches(q, scaler)
    assert not m.matches(q, light)


def test_matches_category_and_vendor_names():
    m = RelevanceMatcher()
    item = make_item("x", "Widget", 1, brand="", category_name="Orthodontics", vendor_name="Acme Supply")
    assert m.matches(parse_query("orthodontics"), item)
    assert m.matches(parse_query("acme"), item)
    assert not m.matches(parse_query("dental"), item)


def test_name_hit_outranks_description_hit():
    m = RelevanceMatcher()
    in_name = make_item("a", "Curing Lamp", 1, brand="", category_name="", vendor_name="")
    in_desc = make_item("b", "Blue Light", 1, brand="", category_name="", vendor_name="", description="lamp for curing")
    q = parse_query("lamp")
    assert m.score(q, in_name) > m.score(q, in_desc)


def test_full_phrase_scores_higher_than_partial():
    m = RelevanceMatcher()
    both = make_item("a", "Dental Mirror", 1, brand="", category_name="", vendor_name="")
    one = make_item("b", "Dental Light", 1, brand="", category_name="", vendor_name="")
    q = parse_query("dental mirror")
    assert m.score(q, both) > m.score(q, one)


def test_exact_name_bonus(dental_items):
    weights = RelevanceWeights(exact_name_bonus=1000)
    m = RelevanceMatcher(weights)
    q = parse_query("Dental Scaler Set")
    scores = {it.id: m.score(q, it) for it in dental_items}
    assert scores["p2"] >= 1000
    assert max(scores, key=scores.get) == "p2"


def test_weights_are_configurable():
    item = make_item("a", "Mirror", 1, brand="", category_name="", vendor_name="")
    q = parse_query("mirror")
    assert RelevanceMatcher(RelevanceWeights(name=2, exact_name_bonus=0)).score(q, item) == 2
    assert RelevanceMatcher(RelevanceWeights(name=7, exact_name_bonus=0)).score(q, item) == 7
