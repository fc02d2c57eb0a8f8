from datetime import datetime
from typing import Dict, Iterable, List, Optional

from catalog_search.models import PopularSearchEntry, SearchHistoryEvent
from catalog_search.normalizer import normalize_query


def popular_searches(
    events: Iterable[SearchHistoryEvent],
    limit: int,
    since: Optional[datetime] = None,
) -> List[PopularSearchEntry]:
    """
    Rank past queries by how often they were searched.

    Queries are grouped on their normalized form. Ties on count go to the most
    recently searched query, then alphabetical so the output is stable.
    """
    if limit <= 0:
        return []
    counts: Dict[str, int] = {}
    last_seen: Dict[str, datetime] = {}
    for ev in events:
        if since is not None and ev.timestamp.timestamp() < since.timestamp():
            continue
        q = normalize_query(ev.query)
        if not q:
            continue
        counts[q] = counts.get(q, 0) + 1
        if q not in last_seen or ev.timestamp.timestamp() > last_seen[q].timestamp():
            last_seen[q] = ev.timestamp

    ranked = sorted(counts, key=lambda q: (-counts[q], -last_seen[q].timestamp(), q))
    return [
        PopularSearchEntry(query=q, count=counts[q], last_searched=last_seen[q])
        for q in ranked[:limit]
    ]
