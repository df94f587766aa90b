from __future__ import annotations

import re
import sys

_NON_AZ_RE = re.compile(r"[^A-Za-z]+")


def normalize_az(s: str) -> str:
    """Keep only a-z, lowercase. Non-ASCII letters are dropped."""
    if s is None:
        return ""
    return _NON_AZ_RE.sub("", s).lower()


class EnglishNormalizer:
    """
    Strips everything but ASCII letters and lowercases the rest:

        >>> EnglishNormalizer()("Winter is CoMinG!")
        'winteriscoming'

    Idempotent, stateless and picklable, so it can be shared by workers.
    """

    def __call__(self, text: str) -> str:
        return normalize_az(text)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, EnglishNormalizer)

    def __hash__(self) -> int:
        return hash(EnglishNormalizer)

    def __repr__(self) -> str:
        return "EnglishNormalizer()"


def log(msg: str, *, verbose: bool) -> None:
    """Diagnostics go to stderr, and only when asked for."""
    if verbose:
        print(msg, file=sys.stderr)
