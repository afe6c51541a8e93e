"""sjf_dispatch - single-server shortest-job-first dispatch order v0.1.0"""
from __future__ import annotations

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Task", "Dispatch",
    "DispatchEngine", "SchedulingInvariantError",
    "TaskOrdering", "SHORTEST_FIRST", "EARLIEST_FIRST",
    "SchedulerBase", "BaselineScheduler", "OptimizedScheduler",
    "SCHEDULER_MAP", "make_scheduler", "execution_order",
    "MetricsCollector",
    "WorkloadConfig", "generate_synthetic",
]

from sjf_dispatch.sim.task import Task, Dispatch
from sjf_dispatch.sim.engine import DispatchEngine, SchedulingInvariantError
from sjf_dispatch.scheduler.ordering import TaskOrdering, SHORTEST_FIRST, EARLIEST_FIRST
from sjf_dispatch.scheduler.base import SchedulerBase
from sjf_dispatch.scheduler.baseline import BaselineScheduler
from sjf_dispatch.scheduler.optimized import OptimizedScheduler
from sjf_dispatch.scheduler.registry import SCHEDULER_MAP, make_scheduler, execution_order
from sjf_dispatch.metrics.collector import MetricsCollector
from sjf_dispatch.workloads.synthetic import WorkloadConfig, generate_synthetic
