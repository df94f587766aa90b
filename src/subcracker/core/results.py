from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

NO_SCORE = float("-inf")


@dataclass(frozen=True, order=True)
class TrialResult:
    # sort_index comes first so dataclass ordering uses it automatically
    sort_index: tuple[float, int, int] = field(init=False, repr=False)

    # Higher is better
    score: float
    key: str

    # Where the result was found; earlier wins on equal score
    worker: int = 0
    trial: int = 0

    def __post_init__(self) -> None:
        # max() should pick the highest score, then the lowest worker, then the
        # lowest trial, so the positions are negated.
        object.__setattr__(self, "sort_index", (self.score, -self.worker, -self.trial))

    @property
    def improved(self) -> bool:
        return self.score != NO_SCORE

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "key": self.key,
            "worker": self.worker,
            "trial": self.trial,
        }


def no_result(key: str, worker: int = 0) -> TrialResult:
    """Placeholder for a worker that ran no trials; loses to any real result."""
    return TrialResult(score=NO_SCORE, key=key, worker=worker, trial=0)
