# scripts/benchmark.py
import time
from fastapi.testclient import TestClient
from catalog_search.main import app

payload = {"query": "dental mirror", "page": 1, "page_size": 20}


def main():
    with TestClient(app) as client:
        t0 = time.time()
        r1 = client.post("/search", json=payload).json()
        search_ms = (time.time() - t0) * 1000

        t1 = time.time()
        client.get("/search/suggestions", params={"q": "dent", "limit": 10}).json()
        suggest_ms = (time.time() - t1) * 1000

        t2 = time.time()
        popular = client.get("/search/popular", params={"limit": 10}).json()
        popular_ms = (time.time() - t2) * 1000

        print(f"Search:      {search_ms:.1f} ms  (total={r1['page']['total']})")
        print(f"Suggestions: {suggest_ms:.1f} ms")
        print(f"Popular:     {popular_ms:.1f} ms")
        print([x["name"] for x in r1["page"]["items"]])
        print([x["query"] for x in popular["popular_searches"]])


if __name__ == "__main__":
    main()
