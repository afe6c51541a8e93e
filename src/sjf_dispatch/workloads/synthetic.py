from __future__ import annotations

from dataclasses import dataclass
from typing import List
import numpy as np

from sjf_dispatch.sim.task import Task


@dataclass
class WorkloadConfig:
    n_jobs: int = 800
    arrival_rate: float = 0.5
    duration_mean: float = 4.0
    duration_sigma: float = 0.8

    # Fraction of tasks with instantaneous service
    zero_duration_frac: float = 0.0

    seed: int = 7


def generate_synthetic(cfg: WorkloadConfig) -> List[Task]:
    """
    Integer-timed tasks with Poisson-ish arrivals and lognormal durations.

    Times are floored/rounded to integers so that equal arrivals and equal
    durations actually occur. The returned list is shuffled: input order is
    deliberately unrelated to arrival order.
    """
    rng = np.random.default_rng(cfg.seed)

    inter_arrivals = rng.exponential(1.0 / cfg.arrival_rate, size=cfg.n_jobs)
    arrivals = np.floor(np.cumsum(inter_arrivals)).astype(int)

    mu = np.log(max(cfg.duration_mean, 1e-6))
    durations = np.rint(rng.lognormal(mean=mu, sigma=cfg.duration_sigma, size=cfg.n_jobs))
    durations = np.maximum(durations, 1).astype(int)
    durations[rng.random(cfg.n_jobs) < cfg.zero_duration_frac] = 0

    tasks: List[Task] = [
        Task(id=i, queued_at=int(arrivals[i]), execution_duration=int(durations[i]))
        for i in range(cfg.n_jobs)
    ]
    perm = rng.permutation(cfg.n_jobs)
    return [tasks[int(i)] for i in perm]
