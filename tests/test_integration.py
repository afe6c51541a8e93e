"""
End-to-end properties over generated workloads.

The baseline and optimized strategies share no data-structure code, so their
agreement on every workload is the main regression check for both.
"""
from __future__ import annotations

import pytest

from sjf_dispatch import execution_order
from sjf_dispatch.scheduler.registry import make_scheduler
from sjf_dispatch.sim.task import Task
from sjf_dispatch.workloads.synthetic import WorkloadConfig, generate_synthetic

WORKLOADS = [
    WorkloadConfig(n_jobs=1, seed=1),
    WorkloadConfig(n_jobs=50, arrival_rate=0.05, seed=2),    # mostly idle
    WorkloadConfig(n_jobs=200, arrival_rate=0.5, seed=3),
    WorkloadConfig(n_jobs=300, arrival_rate=5.0, seed=4),    # heavy contention, many ties
    WorkloadConfig(n_jobs=200, arrival_rate=1.0, zero_duration_frac=0.3, seed=5),
]


@pytest.mark.parametrize("cfg", WORKLOADS, ids=lambda c: f"n{c.n_jobs}-r{c.arrival_rate}-s{c.seed}")
def test_strategies_agree(cfg):
    tasks = generate_synthetic(cfg)
    assert execution_order(tasks, "baseline") == execution_order(tasks, "optimized")


@pytest.mark.parametrize("cfg", WORKLOADS, ids=lambda c: f"n{c.n_jobs}-r{c.arrival_rate}-s{c.seed}")
def test_output_is_permutation_of_input(cfg, strategy):
    tasks = generate_synthetic(cfg)
    order = execution_order(tasks, strategy)
    assert len(order) == len(tasks)
    assert sorted(order) == sorted(t.id for t in tasks)


def test_deterministic_across_instances(strategy):
    tasks = generate_synthetic(WorkloadConfig(n_jobs=200, arrival_rate=2.0, seed=11))
    assert execution_order(tasks, strategy) == execution_order(list(tasks), strategy)


def test_ready_task_is_always_shortest(strategy):
    """Whenever a task starts, no shorter task was already waiting."""
    tasks = generate_synthetic(WorkloadConfig(n_jobs=150, arrival_rate=1.5, seed=6))
    by_id = {t.id: t for t in tasks}
    timeline = make_scheduler(strategy, tasks).dispatch_log()
    started: set[int] = set()
    for d in timeline:
        task = by_id[d.task_id]
        waiting = [
            t for t in tasks
            if t.id not in started and t.id != task.id and t.queued_at <= d.start_time
        ]
        assert all(t.execution_duration >= task.execution_duration for t in waiting)
        started.add(task.id)


def test_all_zero_arrivals_match_sorted_durations(strategy):
    tasks = [Task(t.id, 0, t.execution_duration)
             for t in generate_synthetic(WorkloadConfig(n_jobs=100, seed=8))]
    expected = [t.id for t in sorted(tasks, key=lambda t: (t.execution_duration, t.id))]
    assert execution_order(tasks, strategy) == expected
