from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError


# ---------------------------
# Paths
# ---------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[1]

DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "catalog.csv"


# ---------------------------
# Environment toggles
# ---------------------------

MATCHER_CONFIG_ENV = "BAZAAR_MATCHER_CONFIG"
RELEVANCE_THRESHOLD_ENV = "BAZAAR_RELEVANCE_THRESHOLD"
CATALOG_PATH_ENV = "BAZAAR_CATALOG_PATH"
LOG_LEVEL_ENV = "BAZAAR_SEARCH_LOG_LEVEL"

DEFAULT_LOG_LEVEL = os.getenv(LOG_LEVEL_ENV, "INFO")


# ---------------------------
# Result size policy
# ---------------------------

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

MAX_QUERY_CHARS = 500  # input size cap


# ---------------------------
# Vocabulary
# ---------------------------

# canonical term -> known variants and typos
DEFAULT_VARIANTS: Dict[str, List[str]] = {
    "mobile": ["moble", "mobil", "mbl", "phone", "phon"],
    "laptop": ["lapto", "laptap", "lappy", "laptp", "lapop"],
    "computer": ["computr", "comp", "comptr", "cmptr"],
    "tablet": ["tab", "tablt", "tabet"],
    "electronics": ["electronic", "electrnc", "electro", "gadgets", "devices"],
    "textbook": ["textbk", "txtbook", "txbook"],
    "furniture": ["furntr", "furnit", "furn"],
    "chair": ["chr", "seat"],
    "table": ["tbl", "desk"],
}

# Checked before the variants dictionary.
DEFAULT_CORRECTIONS: Dict[str, str] = {
    "moble": "mobile",
    "mobil": "mobile",
    "laptp": "laptop",
    "lapto": "laptop",
    "leptop": "laptop",
    "fone": "phone",
    "phne": "phone",
}

DEFAULT_CONDITION_KEYWORDS: Dict[str, str] = {
    "new": "New",
    "like new": "Like New",
    "used": "Used",
}

DEFAULT_MAX_PRICE_KEYWORDS: List[str] = ["under", "below", "less than"]
DEFAULT_MIN_PRICE_KEYWORDS: List[str] = ["above", "over", "more than"]

DEFAULT_RELEVANCE_THRESHOLD = 0.05


# ---------------------------
# Pydantic models shared around the app
# ---------------------------

class MatcherConfig(BaseModel):
    """
    Everything the fuzzy matcher can be tuned with.

    Dictionaries and keyword lists are data, so new typos or conditions can be
    added without touching the matcher. Numeric fields mirror the scoring rules
    in scoring.py and typos.py.
    """

    variants: Dict[str, List[str]] = Field(default_factory=lambda: dict(DEFAULT_VARIANTS))
    corrections: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_CORRECTIONS))
    condition_keywords: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CONDITION_KEYWORDS)
    )
    max_price_keywords: List[str] = Field(
        default_factory=lambda: list(DEFAULT_MAX_PRICE_KEYWORDS)
    )
    min_price_keywords: List[str] = Field(
        default_factory=lambda: list(DEFAULT_MIN_PRICE_KEYWORDS)
    )

    # field weights
    title_weight: float = Field(1.0, ge=0)
    description_weight: float = Field(0.7, ge=0)
    tag_weight: float = Field(0.8, ge=0)

    # partial matching
    partial_credit: float = Field(0.7, ge=0)
    partial_prefix_score: float = Field(0.5, ge=0)
    partial_reverse_score: float = Field(0.3, ge=0)
    partial_prefix_len: int = Field(3, ge=1)
    partial_min_query_len: int = Field(4, ge=1)
    partial_min_field_word_len: int = Field(3, ge=1)

    # typo correction
    min_correctable_len: int = Field(3, ge=1)
    canonical_min_len: int = Field(4, ge=1)
    canonical_max_distance: int = Field(2, ge=0)
    variant_max_distance: int = Field(1, ge=0)

    relevance_threshold: float = DEFAULT_RELEVANCE_THRESHOLD

    @property
    def price_keywords(self) -> List[str]:
        return [*self.max_price_keywords, *self.min_price_keywords]

    def with_overrides(self, **fields) -> "MatcherConfig":
        """Return a validated copy with the given fields replaced."""
        data = self.model_dump()
        data.update(fields)
        return MatcherConfig(**data)


def load_matcher_config(path: Optional[Path] = None) -> MatcherConfig:
    """
    Load matcher overrides from a JSON file on top of the defaults.

    Falls back to $BAZAAR_MATCHER_CONFIG when no path is given, and to pure
    defaults when neither is set. $BAZAAR_RELEVANCE_THRESHOLD wins over both.

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the file is not valid JSON or fails validation
    """
    if path is None:
        env_path = os.getenv(MATCHER_CONFIG_ENV)
        path = Path(env_path) if env_path else None

    overrides: Dict[str, object] = {}
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Matcher config not found: {path}")
        with open(path, "r", encoding="utf-8") as f:
            try:
                overrides = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in matcher config {path}: {e}") from e
        if not isinstance(overrides, dict):
            raise ValueError(f"Matcher config {path} must hold a JSON object")

    threshold = os.getenv(RELEVANCE_THRESHOLD_ENV)
    if threshold:
        try:
            overrides["relevance_threshold"] = float(threshold)
        except ValueError as e:
            raise ValueError(f"{RELEVANCE_THRESHOLD_ENV} must be a float, got {threshold!r}") from e

    try:
        return MatcherConfig(**overrides)
    except ValidationError as e:
        raise ValueError(f"Invalid matcher config: {e}") from e


class HealthResponse(BaseModel):
    """
    Response body for GET /health.
    """

    status: str
