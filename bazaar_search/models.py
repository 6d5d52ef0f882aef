"""Item and response schemas for marketplace search."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


class Condition(str, Enum):
    NEW = "New"
    LIKE_NEW = "Like New"
    USED = "Used"


def coerce_price(value: Any) -> float:
    """Best-effort float conversion; anything unparseable is 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        price = float(str(value).strip().replace(",", "")) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if math.isnan(price) or math.isinf(price):
        return 0.0
    return price


class CatalogItem(BaseModel):
    """
    A single marketplace listing as the search layer sees it.

    Only the fields used for matching are modelled; the rest of a listing
    row stays with the caller.
    """

    id: Optional[str] = None
    title: str = ""
    description: str = ""
    tags: List[str] = Field(default_factory=list)
    price: float = 0.0
    condition: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v)

    @field_validator("title", "description", mode="before")
    @classmethod
    def _text_or_empty(cls, v: Any) -> str:
        if v is None or (isinstance(v, float) and math.isnan(v)):
            return ""
        return str(v)

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, v: Any) -> List[str]:
        if v is None or (isinstance(v, float) and math.isnan(v)):
            return []
        if isinstance(v, str):
            return [t.strip() for t in v.split(",") if t.strip()]
        return [str(t) for t in v if t is not None]

    @field_validator("price", mode="before")
    @classmethod
    def _price_or_zero(cls, v: Any) -> float:
        return coerce_price(v)

    @field_validator("condition", mode="before")
    @classmethod
    def _condition_text(cls, v: Any) -> Optional[str]:
        if v is None or (isinstance(v, float) and math.isnan(v)):
            return None
        if isinstance(v, Condition):
            return v.value
        return str(v)


@dataclass
class ScoredItem:
    """Per-query score breakdown for one item."""

    item: Any
    score: float
    title_score: float = 0.0
    description_score: float = 0.0
    tag_score: float = 0.0


@dataclass
class QueryInterpretation:
    """What the matcher read out of a raw query string."""

    search_text: str = ""
    corrected_terms: List[str] = field(default_factory=list)
    condition_filter: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    is_price_query: bool = False


class SearchRequest(BaseModel):
    """
    Request body for POST /search.
    """

    query: str = ""
    items: Optional[List[CatalogItem]] = None
    offset: int = Field(0, ge=0)
    limit: Optional[int] = Field(None, ge=1)
    include_scores: bool = False


class SearchResponse(BaseModel):
    """
    Response body for POST /search.
    """

    items: List[CatalogItem]
    total: int
    offset: int
    limit: int
    has_more: bool
    has_exact_matches: bool
    result_type: str  # "results" / "no_results"
    scores: Optional[List[float]] = None
