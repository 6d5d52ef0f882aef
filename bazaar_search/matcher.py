"""Fuzzy marketplace search: query interpretation, scoring and ranking."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, List, Optional, Sequence

from loguru import logger

from .config import MatcherConfig, load_matcher_config
from .models import QueryInterpretation, ScoredItem
from .normalize import field_text, item_condition, item_price, normalize_query
from .query_analysis import extract_condition, has_price_intent, parse_price_query
from .scoring import score_item
from .typos import TypoCorrector


class FuzzyMatcher:
    """
    Filters and ranks catalog items for a free-text query.

    `logger` may be any object with loguru-style `debug` / `info` methods
    (brace formatting). It only receives tracing output; results never
    depend on it.
    """

    def __init__(self, config: Optional[MatcherConfig] = None, logger=None):
        self.config = config or MatcherConfig()
        self._log = logger or _default_logger()
        self._corrector = TypoCorrector(self.config, log=self._log)

    # -----------------------
    # Query interpretation
    # -----------------------

    def interpret(self, query: str) -> QueryInterpretation:
        normalized = normalize_query(query)
        condition, remaining = extract_condition(normalized, self.config)
        if condition:
            self._log.debug("Detected condition {!r} in query {!r}", condition, normalized)

        if has_price_intent(remaining, self.config):
            parsed = parse_price_query(remaining, self.config)
            terms = self._corrector.correct_words(parsed.product_text.split())
            return QueryInterpretation(
                search_text=parsed.product_text,
                corrected_terms=terms,
                condition_filter=condition,
                min_price=parsed.min_price,
                max_price=parsed.max_price,
                is_price_query=True,
            )

        terms = self._corrector.correct_words(remaining.split())
        return QueryInterpretation(
            search_text=remaining,
            corrected_terms=terms,
            condition_filter=condition,
        )

    # -----------------------
    # Search
    # -----------------------

    def search(self, items: Sequence[Any], query: str) -> Sequence[Any]:
        if not normalize_query(query):
            return items
        interp = self.interpret(query)
        if interp.is_price_query:
            return self._price_search(items, interp)
        return [s.item for s in self._rank(items, interp)]

    def rank(self, items: Sequence[Any], query: str) -> List[ScoredItem]:
        """
        Like `search`, but keeps the score breakdown.

        Identity and price queries carry no relevance ordering; their items
        are reported with score 1.0.
        """
        if not normalize_query(query):
            return [ScoredItem(item=it, score=1.0) for it in items]
        interp = self.interpret(query)
        if interp.is_price_query:
            return [ScoredItem(item=it, score=1.0) for it in self._price_search(items, interp)]
        return self._rank(items, interp)

    def _passes_condition(self, item: Any, condition: Optional[str]) -> bool:
        return condition is None or item_condition(item) == condition

    def _rank(self, items: Sequence[Any], interp: QueryInterpretation) -> List[ScoredItem]:
        words = interp.corrected_terms
        self._log.debug("Search words after correction: {}", ", ".join(words))

        candidates = [it for it in items if self._passes_condition(it, interp.condition_filter)]
        if not words:
            # only a condition keyword was given
            return [ScoredItem(item=it, score=1.0) for it in candidates]

        threshold = self.config.relevance_threshold
        scored = [score_item(it, words, self.config) for it in candidates]
        kept = [s for s in scored if s.score > threshold]
        # sorted() is stable, so equal scores keep input order
        kept = sorted(kept, key=lambda s: s.score, reverse=True)

        self._log.info("Found {} matching items for {!r}", len(kept), " ".join(words))
        for rank, s in enumerate(kept[:3], start=1):
            self._log.debug(
                "  {}. {!r} score={:.2f} (title={:.2f}, desc={:.2f}, tags={:.2f})",
                rank,
                field_text(s.item, "title"),
                s.score,
                s.title_score,
                s.description_score,
                s.tag_score,
            )
        return kept

    def _price_search(self, items: Sequence[Any], interp: QueryInterpretation) -> List[Any]:
        lo, hi = interp.min_price, interp.max_price
        words = interp.corrected_terms
        self._log.debug(
            "Price query: product={!r} min={} max={} condition={}",
            " ".join(words),
            lo,
            hi,
            interp.condition_filter,
        )

        out: List[Any] = []
        for item in items:
            price = item_price(item)
            if hi is not None and price > hi:
                continue
            if lo is not None and price < lo:
                continue
            if not self._passes_condition(item, interp.condition_filter):
                continue
            if words:
                title = field_text(item, "title")
                description = field_text(item, "description")
                if not all(w in title or w in description for w in words):
                    continue
            out.append(item)

        self._log.info("Price query matched {} items", len(out))
        return out


def _default_logger():
    return logger.bind(component="fuzzy_matcher")


@lru_cache(maxsize=1)
def get_matcher() -> FuzzyMatcher:
    # built once from $BAZAAR_MATCHER_CONFIG / $BAZAAR_RELEVANCE_THRESHOLD
    return FuzzyMatcher(load_matcher_config())


def search(
    items: Sequence[Any], query: str, config: Optional[MatcherConfig] = None
) -> Sequence[Any]:
    """Search `items` for `query` with the default or a custom config."""
    matcher = FuzzyMatcher(config) if config is not None else get_matcher()
    return matcher.search(items, query)
