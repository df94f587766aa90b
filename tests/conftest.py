from __future__ import annotations

from pathlib import Path

import pytest

from subcracker.core.ngrams import NgramScorer, count_ngrams, load_package_table

DATA = Path(__file__).parent / "data"

# The key that produced cipher.txt from plain.txt: plaintext a -> q, b -> w, ...
ENCRYPTION_KEY = "qwertyuiopasdfghjklzxcvbnm"


@pytest.fixture(scope="session")
def plain_text() -> str:
    return (DATA / "plain.txt").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def cipher_text() -> str:
    return (DATA / "cipher.txt").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def bigram_scorer(plain_text: str) -> NgramScorer:
    """Cheap raw-count scorer for tests that only exercise the search mechanics."""
    return NgramScorer(count_ngrams(plain_text, 2), 2)


@pytest.fixture(scope="session")
def quadgram_scorer() -> NgramScorer:
    """Packaged English quadgram counts as log probabilities."""
    return NgramScorer.log_probability(load_package_table(), 4)
