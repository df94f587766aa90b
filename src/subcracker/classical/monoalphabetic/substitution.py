from __future__ import annotations

from typing import Callable, Optional

from subcracker.classical.common import ALPHABET, check_key, invert_key, transform, validate_alphabet
from subcracker.classical.monoalphabetic.hillclimb import (
    AUTO_THREADS,
    BACKENDS,
    resolve_workers,
    search,
)
from subcracker.core.results import TrialResult
from subcracker.core.utils import log

Normalizer = Callable[[str], str]
Scorer = Callable[[str], float]


class SubstitutionTransformer:
    """
    Recovers a monoalphabetic substitution key from ciphertext alone.

    fit() normalizes the ciphertext once, runs the parallel hill climb and
    stores the best key as the decryption key; the encryption key is always
    its inverse permutation. Before the first fit both keys are the identity,
    so transform() and inverse_transform() return their input unchanged.

    The result of fit() is reproducible for a fixed seed, alphabet, budgets,
    scorer, normalizer and worker count. Changing the worker count changes
    the per-worker seeds and the tie-break order, and so may change the key.
    """

    def __init__(
        self,
        normalizer: Normalizer,
        scorer: Scorer,
        alphabet: str = ALPHABET,
        nthread: Optional[int] = AUTO_THREADS,
        *,
        backend: str = "thread",
        verbose: bool = False,
    ) -> None:
        if not callable(normalizer):
            raise ValueError("Normalizer must be callable: text -> text.")
        if not callable(scorer):
            raise ValueError("Scorer must be callable: text -> score.")
        if backend not in BACKENDS:
            raise ValueError(f"Unknown backend {backend!r}. Available: {', '.join(BACKENDS)}")

        self._alphabet = validate_alphabet(alphabet)
        self._normalizer = normalizer
        self._scorer = scorer
        self._nthread = resolve_workers(nthread)
        self._backend = backend
        self._verbose = verbose

        self._decryption_key = self._alphabet
        self._encryption_key = self._alphabet
        self._last_result: TrialResult | None = None

    @property
    def alphabet(self) -> str:
        return self._alphabet

    @property
    def decryption_key(self) -> str:
        return self._decryption_key

    @property
    def encryption_key(self) -> str:
        return self._encryption_key

    @property
    def nthread(self) -> int:
        return self._nthread

    @property
    def backend(self) -> str:
        return self._backend

    @property
    def normalizer(self) -> Normalizer:
        return self._normalizer

    @property
    def scorer(self) -> Scorer:
        return self._scorer

    @property
    def last_result(self) -> TrialResult | None:
        return self._last_result

    def fit(self, text: str, seed: int = 0, num_trials: int = 20, num_swaps: int = 2000) -> None:
        if num_trials < 0 or num_swaps < 0:
            raise ValueError(f"Search budgets must be >= 0, got trials={num_trials} swaps={num_swaps}.")
        if seed < 0:
            raise ValueError(f"Seed must be >= 0, got {seed}.")
        if num_trials == 0 or num_swaps == 0:
            log("[fit] empty search budget; keeping current key", verbose=self._verbose)
            return

        preprocessed = self._normalizer(text)
        best = search(
            preprocessed,
            self._alphabet,
            self._scorer,
            seed=seed,
            num_trials=num_trials,
            num_swaps=num_swaps,
            workers=self._nthread,
            backend=self._backend,
            verbose=self._verbose,
        )

        if not best.improved:
            log("[fit] no trial produced a score; keeping current key", verbose=self._verbose)
            return

        self._set_key(best.key)
        self._last_result = best

    def transform(self, text: str) -> str:
        return transform(text, self._alphabet, self._decryption_key)

    def inverse_transform(self, text: str) -> str:
        return transform(text, self._alphabet, self._encryption_key)

    def _set_key(self, key: str) -> None:
        # Validate and invert before assigning so a bad key leaves both untouched.
        decryption = check_key(key, self._alphabet)
        encryption = invert_key(decryption, self._alphabet)
        self._decryption_key = decryption
        self._encryption_key = encryption

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(alphabet={self._alphabet!r}, nthread={self._nthread}, "
            f"backend={self._backend!r}, decryption_key={self._decryption_key!r})"
        )
