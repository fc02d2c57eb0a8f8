import os

# Redis connection for the search-history log (empty = in-process only)
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")

# Key prefix for everything this service writes to redis
CACHE_NAMESPACE = os.getenv("CACHE_NAMESPACE", "catalog_search")

# Catalog snapshot supplied by the catalog store export (JSON lines)
CATALOG_PATH = os.getenv("CATALOG_PATH", "data/processed/catalog.jsonl")
CATEGORIES_PATH = os.getenv("CATEGORIES_PATH", "data/processed/categories.jsonl")

# Pagination
DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", "50"))

# Default list sizes for suggestions / popular searches
SUGGESTION_LIMIT = int(os.getenv("SUGGESTION_LIMIT", "10"))
POPULAR_LIMIT = int(os.getenv("POPULAR_LIMIT", "10"))

# How long a computed popularity ranking is reused (seconds, 0 = always recompute)
POPULAR_REFRESH_SECONDS = int(os.getenv("POPULAR_REFRESH_SECONDS", "60"))

# Parallel scan: only fan out when the snapshot is at least this large
SCAN_WORKERS = int(os.getenv("SCAN_WORKERS", "4"))
SCAN_PARALLEL_THRESHOLD = int(os.getenv("SCAN_PARALLEL_THRESHOLD", "5000"))

# Relevance weights (name > brand/tags/keywords > category/vendor > description)
WEIGHT_NAME = float(os.getenv("WEIGHT_NAME", "10"))
WEIGHT_BRAND = float(os.getenv("WEIGHT_BRAND", "6"))
WEIGHT_TAGS = float(os.getenv("WEIGHT_TAGS", "5"))
WEIGHT_KEYWORDS = float(os.getenv("WEIGHT_KEYWORDS", "5"))
WEIGHT_CATEGORY = float(os.getenv("WEIGHT_CATEGORY", "3"))
WEIGHT_VENDOR = float(os.getenv("WEIGHT_VENDOR", "3"))
WEIGHT_DESCRIPTION = float(os.getenv("WEIGHT_DESCRIPTION", "1"))
EXACT_NAME_BONUS = float(os.getenv("EXACT_NAME_BONUS", "100"))
