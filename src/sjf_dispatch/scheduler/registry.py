"""
Strategy registry and the library entry point.

Callers depend on ``SchedulerBase`` only; the concrete strategy is picked by
name so both can be swapped or compared without touching calling code.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Type

from sjf_dispatch.scheduler.base import SchedulerBase
from sjf_dispatch.scheduler.baseline import BaselineScheduler
from sjf_dispatch.scheduler.optimized import OptimizedScheduler
from sjf_dispatch.sim.task import Task

SCHEDULER_MAP: Dict[str, Type[SchedulerBase]] = {
    "baseline":  BaselineScheduler,
    "optimized": OptimizedScheduler,
}

DEFAULT_STRATEGY = "optimized"


def make_scheduler(strategy: str, tasks: Iterable[Task]) -> SchedulerBase:
    cls = SCHEDULER_MAP.get(strategy)
    if cls is None:
        raise ValueError(
            f"Unknown strategy '{strategy}'. "
            f"Valid options: {list(SCHEDULER_MAP.keys())}"
        )
    return cls(tasks)


def execution_order(tasks: Iterable[Task], strategy: str = DEFAULT_STRATEGY) -> List[int]:
    """Return task ids in the order a single SPT server dispatches them."""
    return make_scheduler(strategy, tasks).execution_order()
