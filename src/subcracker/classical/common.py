from __future__ import annotations

import random
import string
from typing import Sequence

ALPHABET = string.ascii_lowercase


def validate_alphabet(alphabet: str) -> str:
    """
    Check that the alphabet is usable as a substitution domain.
    Returns the alphabet unchanged; raises ValueError otherwise.
    """
    if not isinstance(alphabet, str):
        raise ValueError(f"Alphabet must be a string, got {type(alphabet).__name__}.")
    if not alphabet:
        raise ValueError("Alphabet must not be empty.")
    if len(alphabet) < 2:
        raise ValueError("Alphabet needs at least 2 symbols; a single symbol admits no swap.")

    seen: set[str] = set()
    dupes: list[str] = []
    for ch in alphabet:
        if ch in seen and ch not in dupes:
            dupes.append(ch)
        seen.add(ch)
    if dupes:
        raise ValueError(f"Alphabet has repeated symbols: {''.join(dupes)!r}.")

    # Transform folds case before lookup, so the alphabet must be lowercase letters.
    bad = [ch for ch in alphabet if not (ch.isalpha() and ch.islower())]
    if bad:
        raise ValueError(f"Alphabet symbols must be lowercase letters, got {''.join(bad)!r}.")
    return alphabet


def transform(text: str, alphabet: str, key: str) -> str:
    """
    Substitute alphabet[i] -> key[i]; preserves non-letters; preserves case.
    Uppercase letters are folded, mapped, and uppercased again.
    """
    table: dict[int, str] = {}
    for src, dst in zip(alphabet, key):
        table[ord(src)] = dst
        up = src.upper()
        if len(up) == 1 and up != src:
            table[ord(up)] = dst.upper()
    return text.translate(table)


def is_permutation(key: Sequence[str], alphabet: str) -> bool:
    return len(key) == len(alphabet) and sorted(key) == sorted(alphabet)


def check_key(key: Sequence[str], alphabet: str) -> str:
    """Return key as a string; raise ValueError if it is not a permutation of alphabet."""
    k = "".join(key)
    if not is_permutation(k, alphabet):
        raise ValueError(f"Key {k!r} is not a permutation of alphabet {alphabet!r}.")
    return k


def invert_key(key: str, alphabet: str) -> str:
    """
    Inverse permutation: if key maps alphabet[i] -> key[i], the result maps
    key[i] -> alphabet[i] (expressed positionally over the same alphabet).
    """
    key = check_key(key, alphabet)
    inverse = [""] * len(alphabet)
    for i, target in enumerate(key):
        inverse[alphabet.index(target)] = alphabet[i]
    return "".join(inverse)


def random_key(rng: random.Random, alphabet: str) -> str:
    letters = list(alphabet)
    rng.shuffle(letters)
    return "".join(letters)


def swap_positions(rng: random.Random, key: str) -> str:
    """Swap two distinct, uniformly chosen positions of key."""
    i, j = rng.sample(range(len(key)), 2)
    letters = list(key)
    letters[i], letters[j] = letters[j], letters[i]
    return "".join(letters)


def parse_substitution_key(key: str, alphabet: str = ALPHABET) -> str:
    """
    Accept either:
      1) a full key string, meaning: alphabet[0] -> key[0], alphabet[1] -> key[1], ...
      2) pair mapping like: "a:e,b:t,c:a" (from:to pairs covering the whole alphabet)
    Returns the key as a lowercase string positional over alphabet.
    """
    k = key.strip().lower()

    # Case 1: full key
    only_symbols = "".join(ch for ch in k if ch in alphabet)
    if len(only_symbols) == len(alphabet) and ":" not in k:
        if not is_permutation(only_symbols, alphabet):
            raise ValueError(f"{len(alphabet)}-letter key must be a permutation with no repeats.")
        return only_symbols

    # Case 2: pairs
    mapping: dict[str, str] = {}
    items = [x.strip() for x in k.split(",") if x.strip()]
    for item in items:
        if ":" not in item:
            raise ValueError("Pair mapping must look like 'a:e,b:t,...'")
        src, dst = [p.strip() for p in item.split(":", 1)]
        if len(src) != 1 or len(dst) != 1 or src not in alphabet or dst not in alphabet:
            raise ValueError(f"Bad pair '{item}'. Use single letters like 'a:e'.")
        mapping[src] = dst

    if not mapping:
        raise ValueError("Empty substitution key.")
    if len(mapping) != len(alphabet):
        raise ValueError(f"Substitution key expects a full {len(alphabet)}-letter mapping.")
    return check_key([mapping[c] for c in alphabet], alphabet)
