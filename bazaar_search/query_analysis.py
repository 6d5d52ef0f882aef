"""Query parsing helpers for condition keywords and price constraints."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .config import MatcherConfig
from .normalize import collapse_whitespace

_NUMBER = r"(\d+(?:\.\d+)?)"


def _phrase_rx(phrases: Sequence[str]) -> str:
    # longest first so "like new" is tried before "new"
    ordered = sorted(phrases, key=len, reverse=True)
    return "|".join(r"\s+".join(re.escape(w) for w in p.split()) for p in ordered)


# ---------------------------------------------------------------------------
# Condition keywords
# ---------------------------------------------------------------------------


def extract_condition(query: str, config: MatcherConfig) -> Tuple[Optional[str], str]:
    """
    Find a condition keyword in a normalized query.

    Returns (condition, remaining_text). The keyword is matched on word
    boundaries and its first occurrence is removed from the text.
    """
    if not query or not config.condition_keywords:
        return None, query
    keywords = {k.lower(): v for k, v in config.condition_keywords.items()}
    rx = re.compile(rf"\b(?:{_phrase_rx(list(keywords))})\b")
    m = rx.search(query)
    if not m:
        return None, query
    condition = keywords[collapse_whitespace(m.group(0))]
    remaining = collapse_whitespace(query[: m.start()] + " " + query[m.end():])
    return condition, remaining


# ---------------------------------------------------------------------------
# Price constraints
# ---------------------------------------------------------------------------


def has_price_intent(text: str, config: MatcherConfig) -> bool:
    if not text or not config.price_keywords:
        return False
    return re.search(rf"\b(?:{_phrase_rx(config.price_keywords)})\b", text) is not None


@dataclass
class PriceQuery:
    product_text: str = ""
    min_price: Optional[float] = None
    max_price: Optional[float] = None

    @property
    def has_bound(self) -> bool:
        return self.min_price is not None or self.max_price is not None


def _match_pattern(text: str, config: MatcherConfig) -> Optional[PriceQuery]:
    """'<product> under 500' / '<product> above 500' style queries."""
    result: Optional[PriceQuery] = None
    if config.max_price_keywords:
        m = re.search(
            rf"(.+?)\s+(?:{_phrase_rx(config.max_price_keywords)})\s+{_NUMBER}", text
        )
        if m:
            result = PriceQuery(product_text=m.group(1).strip(), max_price=float(m.group(2)))
    if config.min_price_keywords:
        m = re.search(
            rf"(.+?)\s+(?:{_phrase_rx(config.min_price_keywords)})\s+{_NUMBER}", text
        )
        if m:
            # both bounds present: keep the product text in front of the first comparator
            if result is not None and len(result.product_text) <= len(m.group(1).strip()):
                result.min_price = float(m.group(2))
            else:
                max_price = result.max_price if result is not None else None
                result = PriceQuery(
                    product_text=m.group(1).strip(),
                    min_price=float(m.group(2)),
                    max_price=max_price,
                )
    return result


def _find_phrase(words: List[str], phrases: Sequence[str]) -> Tuple[int, int]:
    """Index and token length of the first comparator phrase in `words`."""
    split = sorted((p.split() for p in phrases), key=len, reverse=True)
    for i in range(len(words)):
        for tokens in split:
            if words[i : i + len(tokens)] == tokens:
                return i, len(tokens)
    return -1, 0


def _match_tokens(text: str, config: MatcherConfig) -> Optional[PriceQuery]:
    """Token fallback for bounds written like 'laptop under rs500'."""
    words = text.split()
    idx, width = _find_phrase(words, config.price_keywords)
    if idx <= 0 or idx + width >= len(words):
        return None
    digits = re.sub(r"[^\d]", "", words[idx + width])
    if not digits:
        return None
    phrase = " ".join(words[idx : idx + width])
    product = " ".join(words[:idx])
    if phrase in config.max_price_keywords:
        return PriceQuery(product_text=product, max_price=float(digits))
    return PriceQuery(product_text=product, min_price=float(digits))


def strip_price_phrases(text: str, config: MatcherConfig) -> str:
    if not config.price_keywords:
        return collapse_whitespace(text)
    stripped = re.sub(
        rf"\b(?:{_phrase_rx(config.price_keywords)})\b(?:\s+\S*\d+(?:\.\d+)?)?", " ", text
    )
    return collapse_whitespace(stripped)


def parse_price_query(text: str, config: MatcherConfig) -> PriceQuery:
    """
    Split a price query into product text and an inclusive bound.

    Tried in order: regex pattern, comparator token position, and finally
    stripping price phrases with no bound at all.
    """
    parsed = _match_pattern(text, config)
    if parsed is not None and parsed.product_text and parsed.has_bound:
        return parsed
    parsed = _match_tokens(text, config)
    if parsed is not None and parsed.product_text and parsed.has_bound:
        return parsed
    return PriceQuery(product_text=strip_price_phrases(text, config))
