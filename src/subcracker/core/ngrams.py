from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Mapping

from subcracker.core.utils import normalize_az


def parse_ngram_lines(text: str, *, source: str = "<string>") -> dict[str, float]:
    """
    Parse a frequency table made of "<ngram> <whitespace> <weight>" lines.
    The n-gram token is normalized (letters only, lowercase); blank lines are skipped.
    """
    table: dict[str, float] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        parts = line.split()
        if len(parts) < 2:
            raise ValueError(f"{source}:{lineno}: expected '<ngram> <weight>', got {raw!r}.")

        gram = normalize_az(parts[0])
        if not gram:
            raise ValueError(f"{source}:{lineno}: n-gram {parts[0]!r} has no letters.")

        try:
            table[gram] = float(parts[1])
        except ValueError:
            raise ValueError(f"{source}:{lineno}: weight {parts[1]!r} is not a number.") from None

    return table


def load_ngram_table(path: str | Path) -> dict[str, float]:
    p = Path(path)
    return parse_ngram_lines(p.read_text(encoding="utf-8"), source=str(p))


def load_package_table(filename: str = "english_quadgrams.txt") -> dict[str, float]:
    text = resources.files("subcracker.data").joinpath(filename).read_text(encoding="utf-8")
    return parse_ngram_lines(text, source=filename)


def count_ngrams(text: str, n: int) -> dict[str, float]:
    """Count overlapping n-grams of the normalized text."""
    if n < 1:
        raise ValueError(f"n-gram length must be >= 1, got {n}.")
    s = normalize_az(text)
    counts = Counter(s[i:i + n] for i in range(len(s) - n + 1))
    return {g: float(c) for g, c in counts.items()}


def write_ngram_table(table: Mapping[str, float], path: str | Path) -> None:
    """Write table in the same line format, most frequent first."""
    rows = sorted(table.items(), key=lambda kv: (-kv[1], kv[0]))
    lines = [f"{g} {v:g}" for g, v in rows]
    Path(path).write_text("\n".join(lines) + "\n", encoding="utf-8")


def _log_probabilities(table: Mapping[str, float]) -> tuple[dict[str, float], float]:
    values = list(table.values())

    # Infer what kind of numbers these are.
    # - if any value > 1.5 -> treat as counts
    # - else if all values between 0..1 -> treat as probabilities
    # - else if many negative -> treat as log10 probabilities
    any_big = any(v > 1.5 for v in values)
    all_prob = all(0.0 <= v <= 1.0 for v in values)
    many_negative = sum(1 for v in values if v < 0.0) > (0.5 * len(values))

    if many_negative and not any_big and not all_prob:
        logp = {g: float(v) for g, v in table.items()}
        return logp, min(logp.values()) - 1.0

    total = sum(v for v in values if v > 0)
    if total <= 0:
        raise ValueError("N-gram weights sum to <= 0.")

    logp = {g: math.log10(v / total) for g, v in table.items() if v > 0}
    if all_prob and not any_big:
        floor = math.log10((min(v for v in values if v > 0) / total) * 0.01)
    else:
        floor = math.log10(0.01 / total)
    return logp, floor


@dataclass(frozen=True)
class NgramScorer:
    """
    Scores a text as the sum, over every overlapping n-gram, of that n-gram's
    weight in the table. N-grams missing from the table weigh `floor`.

    With raw counts and floor=0 this favours texts made of frequent n-grams;
    NgramScorer.log_probability() gives the usual log-likelihood scorer.
    Immutable, so one instance can be shared by all search workers.
    """

    table: Mapping[str, float]
    n: int
    floor: float = 0.0

    def __post_init__(self) -> None:
        if self.n < 1:
            raise ValueError(f"n-gram length must be >= 1, got {self.n}.")
        if not self.table:
            raise ValueError("N-gram table is empty.")
        bad = [g for g in self.table if len(g) != self.n]
        if bad:
            raise ValueError(f"Table has n-grams of the wrong length for n={self.n}: {bad[:5]}.")

    @classmethod
    def log_probability(cls, table: Mapping[str, float], n: int) -> "NgramScorer":
        if not table:
            raise ValueError("N-gram table is empty.")
        logp, floor = _log_probabilities(table)
        return cls(table=logp, n=n, floor=floor)

    @classmethod
    def from_file(cls, path: str | Path, n: int = 4, *, log: bool = True) -> "NgramScorer":
        table = load_ngram_table(path)
        return cls.log_probability(table, n) if log else cls(table=table, n=n)

    def __call__(self, text: str) -> float:
        n = self.n
        get = self.table.get
        floor = self.floor
        # Summing per occurrence is the same as count * weight per distinct n-gram.
        return sum((get(text[i:i + n], floor) for i in range(len(text) - n + 1)), 0.0)
