from __future__ import annotations

from .common import ALPHABET, invert_key, parse_substitution_key, transform
from .monoalphabetic.substitution import SubstitutionTransformer

__all__ = [
    "ALPHABET",
    "SubstitutionTransformer",
    "invert_key",
    "parse_substitution_key",
    "transform",
]
