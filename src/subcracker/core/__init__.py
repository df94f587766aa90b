from .results import TrialResult
from .ngrams import NgramScorer, count_ngrams, load_ngram_table, write_ngram_table
from .scoring import get_quadgram_scorer
from .utils import EnglishNormalizer

__all__ = [
    "TrialResult",
    "NgramScorer",
    "count_ngrams",
    "load_ngram_table",
    "write_ngram_table",
    "get_quadgram_scorer",
    "EnglishNormalizer",
]
