import json
import os

import pandas as pd
from tqdm import tqdm

RAW_DIR = "data/raw"
OUT_DIR = "data/processed"
PRODUCTS_FILE = os.path.join(RAW_DIR, "products.csv")
CATEGORIES_FILE = os.path.join(RAW_DIR, "categories.csv")
VENDORS_FILE = os.path.join(RAW_DIR, "vendors.csv")
OUT_CATALOG = os.path.join(OUT_DIR, "catalog.jsonl")
OUT_CATEGORIES = os.path.join(OUT_DIR, "categories.jsonl")

os.makedirs(OUT_DIR, exist_ok=True)

LIST_COLUMNS = ["tags", "search_keywords"]
BOOL_COLUMNS = ["is_active", "is_on_sale", "is_featured"]


def clean_text(s: str) -> str:
    """Make text tidy: remove newlines, extra spaces, leading/trailing blanks."""
    if not isinstance(s, str):
        return ""
    s = s.replace("\r", " ").replace("\n", " ").strip()
    s = " ".join(s.split())  # collapse multiple spaces
    return s


def split_list(s: str) -> list:
    """Store exports keep tags/keywords as 'a|b|c'."""
    if not isinstance(s, str):
        return []
    return [clean_text(x) for x in s.split("|") if clean_text(x)]


def load_names(path: str) -> pd.DataFrame:
    df = pd.read_csv(path, dtype=str, encoding="utf-8", on_bad_lines="skip")
    df["name"] = df["name"].fillna("").map(clean_text)
    return df[df["name"].str.len() > 0][["id", "name"]]


def ingest_catalog(products_path: str, categories_path: str, vendors_path: str) -> pd.DataFrame:
    # 1) Products: one row per item, ids kept as strings
    products = pd.read_csv(products_path, dtype={"id": str, "category_id": str, "vendor_id": str}, encoding="utf-8", on_bad_lines="skip")
    for col in ["name", "description", "short_description", "brand"]:
        if col in products.columns:
            products[col] = products[col].fillna("").map(clean_text)
    products = products[products["name"].str.len() > 0]
    for col in LIST_COLUMNS:
        if col in products.columns:
            products[col] = products[col].map(split_list)
    for col in BOOL_COLUMNS:
        if col in products.columns:
            products[col] = products[col].astype(str).str.lower().isin(["1", "true", "yes"])

    # 2) Denormalize category / vendor display names onto each item
    categories = load_names(categories_path).rename(columns={"id": "category_id", "name": "category_name"})
    vendors = load_names(vendors_path).rename(columns={"id": "vendor_id", "name": "vendor_name"})
    df = products.merge(categories, on="category_id", how="left").merge(vendors, on="vendor_id", how="left")

    return df.drop_duplicates(subset=["id"]).reset_index(drop=True)


def save_jsonl(df: pd.DataFrame, out_path: str):
    with open(out_path, "w", encoding="utf-8") as f:
        for _, row in tqdm(df.iterrows(), total=len(df), desc="Writing"):
            obj = {}
            for k in df.columns:
                v = row[k]
                if isinstance(v, list):
                    obj[k] = v
                elif pd.isna(v):
                    continue
                else:
                    obj[k] = v.item() if hasattr(v, "item") else v
            f.write(json.dumps(obj, ensure_ascii=False, default=str) + "\n")
    print(f"[OK] Saved {len(df)} rows → {out_path}")


if __name__ == "__main__":
    for path in (PRODUCTS_FILE, CATEGORIES_FILE, VENDORS_FILE):
        if not os.path.exists(path):
            raise SystemExit(f"Missing {path}. Place the catalog store export in {RAW_DIR}/")

    print("[*] Ingesting catalog export…")
    df = ingest_catalog(PRODUCTS_FILE, CATEGORIES_FILE, VENDORS_FILE)
    print(df.head(3).to_string(index=False))

    save_jsonl(df, OUT_CATALOG)
    save_jsonl(load_names(CATEGORIES_FILE), OUT_CATEGORIES)
