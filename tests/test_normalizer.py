import pytest

from catalog_search.errors import InvalidQuery
from catalog_search.normalizer import normalize_query, parse_query, tokenize


def test_normalize_strips_punctuation_and_collapses_whitespace():
    assert normalize_query("  Dental   MIRROR!!! ") == "dental mirror"
    assert normalize_query("LED-light,  pro") == "led light pro"


def test_tokens_are_lowercase_and_non_empty():
    assert tokenize("Scaler\tSet\n") == ["scaler", "set"]
    assert tokenize("") == []


@pytest.mark.parametrize("raw", ["", "   ", "?!.,", None])
def test_empty_query_rejected_when_required(raw):
    with pytest.raises(InvalidQuery):
        parse_query(raw)


def test_empty_query_allowed_when_optional():
    nq = parse_query("  ", required=False)
    assert nq.text == ""
    assert nq.tokens == []


def test_underscores_are_stripped_like_punctuation():
    assert normalize_query("Dental_Mirror") == "dental mirror"
    assert tokenize("mirror_") == ["mirror"]
    assert tokenize("__") == []
