import re
from typing import List, NamedTuple

from catalog_search.errors import InvalidQuery


class NormalizedQuery(NamedTuple):
    text: str
    tokens: List[str]


def normalize_query(q: str) -> str:
    """Lowercase, strip punctuation (keep spaces), collapse whitespace."""
    q = (q or "").lower()
    q = re.sub(r"[^\w\s]|_", " ", q)
    q = re.sub(r"\s+", " ", q).strip()
    return q


def tokenize(q: str) -> List[str]:
    return normalize_query(q).split()


def parse_query(raw: str, required: bool = True) -> NormalizedQuery:
    """Normalize raw user input; raise InvalidQuery if nothing is left and a query is required."""
    text = normalize_query(raw)
    if required and not text:
        raise InvalidQuery("search query is required")
    return NormalizedQuery(text=text, tokens=text.split())
