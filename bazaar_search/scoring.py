from __future__ import annotations

"""
Field-level relevance scoring.

A field (title, description or joined tags) is scored against the corrected
query words:

* 1.0 when the whole query appears in the field verbatim;
* otherwise the mean over query words of 1.0 for a contained word, or
  partial_credit x the partial-match heuristic for a missing one.

Partial matches are additive across field words, so a word can earn more
than 1.0 on long fields. This is kept as-is: relevance is a ranking signal,
not a probability.
"""

from typing import Any, List, Sequence

from .config import MatcherConfig
from .models import ScoredItem
from .normalize import field_text


def partial_match_score(text: str, word: str, config: MatcherConfig) -> float:
    if len(word) < config.partial_min_query_len:
        return 0.0
    n = config.partial_prefix_len
    query_prefix = word[:n]
    score = 0.0
    for text_word in text.split():
        if len(text_word) < config.partial_min_field_word_len:
            continue
        if query_prefix in text_word:
            score += config.partial_prefix_score
        elif text_word[:n] in word:
            score += config.partial_reverse_score
    return score


def field_score(text: str, words: Sequence[str], config: MatcherConfig) -> float:
    if not text or not words:
        return 0.0
    if " ".join(words) in text:
        return 1.0
    matched = 0.0
    for word in words:
        if word in text:
            matched += 1.0
        else:
            matched += config.partial_credit * partial_match_score(text, word, config)
    return matched / len(words)


def score_item(item: Any, words: List[str], config: MatcherConfig) -> ScoredItem:
    title_score = field_score(field_text(item, "title"), words, config) * config.title_weight
    description_score = (
        field_score(field_text(item, "description"), words, config) * config.description_weight
    )
    tag_score = field_score(field_text(item, "tags"), words, config) * config.tag_weight
    return ScoredItem(
        item=item,
        score=max(title_score, description_score, tag_score),
        title_score=title_score,
        description_score=description_score,
        tag_score=tag_score,
    )
