from __future__ import annotations

from subcracker.core.ngrams import NgramScorer, load_package_table

# ----------------------------
# Quadgram scorer (cached)
# ----------------------------

_QUAD_SCORER: NgramScorer | None = None


def get_quadgram_scorer() -> NgramScorer:
    """Load cached log-probability quadgram scorer from subcracker.data/english_quadgrams.txt."""
    global _QUAD_SCORER
    if _QUAD_SCORER is not None:
        return _QUAD_SCORER

    _QUAD_SCORER = NgramScorer.log_probability(load_package_table("english_quadgrams.txt"), 4)
    return _QUAD_SCORER


def quadgram_score(text: str) -> float:
    """Raw quadgram log score of already-normalized text. Higher is better (less negative)."""
    return get_quadgram_scorer()(text)
