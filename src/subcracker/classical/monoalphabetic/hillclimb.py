from __future__ import annotations

import math
import os
import random
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Callable, Optional

from subcracker.classical.common import random_key, swap_positions, transform
from subcracker.core.results import NO_SCORE, TrialResult, no_result
from subcracker.core.utils import log

# ============================================================
# Parallel random-restart hill climbing over alphabet permutations
#   1) every worker owns random.Random(seed + worker_index)
#   2) every worker runs ceil(trials / workers) trials in sequence
#   3) a trial shuffles the alphabet, then proposes num_swaps swaps of
#      the current key, keeping a swap only if it strictly improves
#   4) the coordinator joins all workers and keeps the best result;
#      ties go to the lowest worker index, then the earliest trial
# ============================================================

AUTO_THREADS = -1
BACKENDS = ("thread", "process")

Scorer = Callable[[str], float]


def hardware_threads() -> int:
    """CPUs this process may run on; affinity and cpusets count where the OS reports them."""
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0)) or 1
    return os.cpu_count() or 1


def resolve_workers(nthread: Optional[int]) -> int:
    """
    Map a requested thread count to a worker count in 1..hardware_threads().
    AUTO_THREADS (or None) means all available hardware parallelism;
    zero and other negative values fall back to a single worker.
    """
    maxthread = hardware_threads()
    if nthread is None or nthread == AUTO_THREADS:
        return maxthread
    if nthread < 1:
        return 1
    return min(nthread, maxthread)


def trials_per_worker(num_trials: int, workers: int) -> int:
    """Round up, so the workers together may run a few more trials than asked."""
    if num_trials <= 0:
        return 0
    return math.ceil(num_trials / workers)


def run_trial(
    text: str,
    alphabet: str,
    scorer: Scorer,
    rng: random.Random,
    num_swaps: int,
    *,
    history: Optional[list[float]] = None,
) -> tuple[float, str]:
    """
    One random restart followed by num_swaps greedy swap proposals.
    Returns (best score, key). With num_swaps == 0 the score stays -inf.
    If history is given, the best score after each proposal is appended to it.
    """
    key = random_key(rng, alphabet)
    best_score = NO_SCORE

    for _ in range(num_swaps):
        candidate = swap_positions(rng, key)
        score = scorer(transform(text, alphabet, candidate))
        if score > best_score:
            key = candidate
            best_score = score
        if history is not None:
            history.append(best_score)

    return best_score, key


def run_worker(
    worker: int,
    text: str,
    alphabet: str,
    scorer: Scorer,
    seed: int,
    num_trials: int,
    num_swaps: int,
) -> TrialResult:
    """Run num_trials trials in sequence and keep the first best one."""
    rng = random.Random(seed + worker)
    best = no_result(alphabet, worker)

    for trial in range(num_trials):
        score, key = run_trial(text, alphabet, scorer, rng, num_swaps)
        if score > best.score:
            best = TrialResult(score=score, key=key, worker=worker, trial=trial)

    return best


def _make_executor(backend: str, workers: int) -> Executor:
    if backend == "thread":
        return ThreadPoolExecutor(max_workers=workers)
    if backend == "process":
        return ProcessPoolExecutor(max_workers=workers)
    raise ValueError(f"Unknown backend {backend!r}. Available: {', '.join(BACKENDS)}")


def search(
    text: str,
    alphabet: str,
    scorer: Scorer,
    *,
    seed: int = 0,
    num_trials: int = 20,
    num_swaps: int = 2000,
    workers: int = 1,
    backend: str = "thread",
    verbose: bool = False,
) -> TrialResult:
    """
    Run the whole parallel search on already-normalized text and return the
    global best. The result depends on (seed, workers) as well as on the
    budgets: worker count changes both the seeds in use and the tie-break order.
    """
    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend {backend!r}. Available: {', '.join(BACKENDS)}")
    if workers < 1:
        raise ValueError(f"Worker count must be >= 1, got {workers}.")
    if seed < 0:
        # random.Random seeds from abs(seed), so seed + worker could repeat a stream.
        raise ValueError(f"Seed must be >= 0, got {seed}.")

    per_worker = trials_per_worker(num_trials, workers)
    log(
        f"[search] workers={workers} backend={backend} trials/worker={per_worker} "
        f"swaps/trial={num_swaps} letters={len(text)}",
        verbose=verbose,
    )

    if workers == 1:
        results = [run_worker(0, text, alphabet, scorer, seed, per_worker, num_swaps)]
    else:
        with _make_executor(backend, workers) as pool:
            futures = [
                pool.submit(run_worker, w, text, alphabet, scorer, seed, per_worker, num_swaps)
                for w in range(workers)
            ]
            # Collected in worker order; result() re-raises anything a worker raised.
            results = [f.result() for f in futures]

    for r in results:
        log(f"[search] worker {r.worker}: best={r.score:.2f} trial={r.trial}", verbose=verbose)

    best = max(results)
    log(f"[search] selected worker {best.worker} trial {best.trial} score={best.score:.2f}", verbose=verbose)
    return best
