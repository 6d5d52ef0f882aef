"""Dictionary and edit-distance based typo correction for query words"""

from __future__ import annotations

from typing import Dict, List, Optional

from loguru import logger
from rapidfuzz.distance import Levenshtein

from .config import MatcherConfig


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance (insert / delete / substitute, all cost 1)."""
    return Levenshtein.distance(a, b)


def _within(a: str, b: str, max_distance: int) -> bool:
    return Levenshtein.distance(a, b, score_cutoff=max_distance) <= max_distance


class TypoCorrector:
    """
    Map a query word onto a canonical catalog term.

    Correction order:
      1. direct corrections map
      2. listed variant (exact)
      3. edit distance to a canonical term (longer words only)
      4. edit distance to a listed variant
    Short words pass through untouched.
    """

    def __init__(self, config: Optional[MatcherConfig] = None, log=None):
        self.config = config or MatcherConfig()
        self._log = log or logger
        self._variant_to_canonical: Dict[str, str] = {}
        for canonical, variants in self.config.variants.items():
            for v in variants:
                # first entry wins when two canonicals list the same variant
                self._variant_to_canonical.setdefault(v.lower(), canonical)

    def correct_word(self, word: str) -> str:
        cfg = self.config
        if len(word) < cfg.min_correctable_len:
            return word

        direct = cfg.corrections.get(word)
        if direct:
            self._log.debug("Direct typo correction: {} -> {}", word, direct)
            return direct

        canonical = self._variant_to_canonical.get(word)
        if canonical:
            self._log.debug("Variation correction: {} -> {}", word, canonical)
            return canonical

        if len(word) >= cfg.canonical_min_len:
            for canonical in cfg.variants:
                if _within(word, canonical, cfg.canonical_max_distance):
                    self._log.debug("Edit-distance correction (canonical): {} -> {}", word, canonical)
                    return canonical

        for variant, canonical in self._variant_to_canonical.items():
            if _within(word, variant, cfg.variant_max_distance):
                self._log.debug("Edit-distance correction (variant): {} -> {}", word, canonical)
                return canonical

        return word

    def correct_words(self, words: List[str]) -> List[str]:
        return [self.correct_word(w) for w in words]

    def correct_text(self, text: str) -> str:
        return " ".join(self.correct_words(text.split()))

