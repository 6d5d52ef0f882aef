from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from loguru import logger

from .config import CATALOG_PATH_ENV, DEFAULT_CATALOG_PATH
from .models import CatalogItem, Condition, coerce_price
from .normalize import collapse_whitespace


# ---------------------------
# Column detection / standardization
# ---------------------------

# Marketplace exports come from different tools, so we accept several spellings.
COLUMN_CANDIDATES: Dict[str, List[str]] = {
    "id": ["id", "item_id", "listing_id", "ID"],
    "title": ["title", "Title", "name", "Name", "item_name", "Item Name"],
    "description": ["description", "Description", "details", "Details", "desc"],
    "tags": ["tags", "Tags", "keywords", "Keywords", "labels"],
    "price": ["price", "Price", "amount", "Amount", "price_inr", "Price (INR)"],
    "condition": ["condition", "Condition", "item_condition", "Item Condition"],
}

OUTPUT_COLUMNS = ["id", "title", "description", "tags", "price", "condition"]

_CONDITION_ALIASES: Dict[str, str] = {
    "new": Condition.NEW.value,
    "brand new": Condition.NEW.value,
    "like new": Condition.LIKE_NEW.value,
    "likenew": Condition.LIKE_NEW.value,
    "used": Condition.USED.value,
    "second hand": Condition.USED.value,
    "secondhand": Condition.USED.value,
}

SUPPORTED_SUFFIXES = {".csv", ".json", ".jsonl", ".xlsx", ".xls", ".parquet"}


def _standardize_columns(df: pd.DataFrame) -> pd.DataFrame:
    rename: Dict[str, str] = {}
    for target, candidates in COLUMN_CANDIDATES.items():
        for cand in candidates:
            if cand in df.columns and cand not in rename:
                rename[cand] = target
                break
    df = df.rename(columns=rename)
    for col in OUTPUT_COLUMNS:
        if col not in df.columns:
            df[col] = None
    return df


def parse_tags_field(value) -> List[str]:
    """
    Tags arrive as a list, a comma/semicolon separated string, or a
    stringified list like "['books', 'notes']".
    """
    if value is None:
        return []
    if isinstance(value, float) and np.isnan(value):
        return []
    if isinstance(value, (list, tuple, np.ndarray)):
        return [str(t).strip() for t in value if str(t).strip()]
    cleaned = str(value).replace("[", "").replace("]", "").replace("'", "").replace('"', "")
    return [t.strip() for t in re.split(r"[,;]", cleaned) if t.strip()]


def canonicalize_condition(value) -> Optional[str]:
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return None
    raw = collapse_whitespace(str(value).replace("-", " ").replace("_", " "))
    if not raw:
        return None
    return _CONDITION_ALIASES.get(raw.lower(), raw)


def normalize_catalog_df(df_raw: pd.DataFrame) -> pd.DataFrame:
    """
    Map an arbitrary export onto the canonical columns
    id, title, description, tags, price, condition.
    """
    df = _standardize_columns(df_raw.copy())

    prices = df["price"].map(coerce_price).to_numpy(dtype=float)
    df["price"] = np.where(np.isfinite(prices), prices, 0.0)

    for col in ("title", "description"):
        df[col] = df[col].map(lambda v: "" if v is None or (isinstance(v, float) and np.isnan(v)) else str(v).strip())
    df["tags"] = df["tags"].map(parse_tags_field)
    df["condition"] = df["condition"].map(canonicalize_condition)
    df["id"] = [
        str(v) if v is not None and not (isinstance(v, float) and np.isnan(v)) else str(i)
        for i, v in enumerate(df["id"])
    ]
    return df[OUTPUT_COLUMNS].reset_index(drop=True)


def items_from_df(df: pd.DataFrame) -> List[CatalogItem]:
    return [CatalogItem(**row) for row in df.to_dict(orient="records")]


def read_catalog_file(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")
    ext = path.suffix.lower()
    if ext not in SUPPORTED_SUFFIXES:
        raise ValueError(
            f"Unsupported catalog format {ext!r}; expected one of {sorted(SUPPORTED_SUFFIXES)}"
        )
    if ext == ".csv":
        return pd.read_csv(path, encoding="utf-8")
    if ext == ".json":
        return pd.read_json(path)
    if ext == ".jsonl":
        return pd.read_json(path, lines=True)
    if ext in (".xlsx", ".xls"):
        return pd.read_excel(path)
    return pd.read_parquet(path)


def load_catalog(path: Optional[Path] = None) -> List[CatalogItem]:
    """
    Load a catalog export into CatalogItem objects.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the format is not supported
    """
    path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    df_raw = read_catalog_file(path)
    logger.info("Read {} raw catalog rows from {}", len(df_raw), path)
    items = items_from_df(normalize_catalog_df(df_raw))
    logger.info("Loaded {} catalog items", len(items))
    return items


def catalog_path_from_env() -> Optional[Path]:
    value = os.getenv(CATALOG_PATH_ENV)
    return Path(value) if value else None
