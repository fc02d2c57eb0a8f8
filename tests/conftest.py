from datetime import datetime, timezone

import pytest

from catalog_search.repositories import InMemoryCatalogRepository, SearchHistoryStore
from catalog_search.search_service import SearchService
from factories import make_item


@pytest.fixture
def dental_items():
    return [
        make_item(
            "p1", "Professional Dental Mirror", "25.99",
            description="High-quality dental mirror for professional use",
            stock=100, tags=["mirror", "professional", "dental"],
            search_keywords=["mirror", "dental", "professional"],
            average_rating=4.5, review_count=10, total_sold=30,
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ),
        make_item(
            "p2", "Dental Scaler Set", "45.99",
            description="Complete set of dental scalers for plaque removal",
            stock=50, tags=["scaler", "plaque", "dental"],
            search_keywords=["scaler", "dental", "plaque"],
            average_rating=4.0, review_count=20, total_sold=10,
            created_at=datetime(2024, 2, 1, tzinfo=timezone.utc),
        ),
        make_item(
            "p3", "LED Dental Light", "199.99",
            description="Bright LED light for dental procedures",
            stock=25, tags=["light", "LED", "dental"],
            search_keywords=["light", "LED", "dental"],
            average_rating=4.8, review_count=5, total_sold=10,
            created_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def catalog(dental_items):
    return InMemoryCatalogRepository(dental_items, category_names=["Dental Tools", "Lab Equipment"])


@pytest.fixture
def service(catalog):
    return SearchService(catalog=catalog, history=SearchHistoryStore(redis_url=None), popular_ttl=60)
