"""Tests for the baseline (linear-scan) arrival index and ready set."""
from __future__ import annotations

from sjf_dispatch.scheduler.baseline import BaselineScheduler, LinearArrivalIndex, LinearReadySet
from sjf_dispatch.sim.task import Task


def make_task(task_id, arrival=0, duration=5):
    return Task(id=task_id, queued_at=arrival, execution_duration=duration)


def test_release_due_returns_only_arrived():
    tasks = [make_task(1, arrival=5), make_task(2, arrival=0), make_task(3, arrival=2)]
    idx = LinearArrivalIndex(tasks)
    assert sorted(idx.release_due(2)) == [1, 2]
    assert len(idx) == 1


def test_release_due_is_inclusive():
    tasks = [make_task(1, arrival=4)]
    idx = LinearArrivalIndex(tasks)
    assert idx.release_due(3) == []
    assert idx.release_due(4) == [0]
    assert idx.is_empty()


def test_release_due_on_empty_index():
    idx = LinearArrivalIndex([])
    assert idx.release_due(100) == []
    assert idx.pop_earliest() is None


def test_pop_earliest_breaks_arrival_ties_by_duration():
    tasks = [make_task(1, arrival=10, duration=5), make_task(2, arrival=10, duration=1)]
    idx = LinearArrivalIndex(tasks)
    assert idx.pop_earliest() == 1
    assert idx.pop_earliest() == 0
    assert idx.pop_earliest() is None


def test_ready_set_extracts_shortest_first():
    tasks = [make_task(1, duration=10), make_task(2, duration=2), make_task(3, duration=5)]
    ready = LinearReadySet(tasks)
    for pos in range(3):
        ready.insert(pos)
    assert [ready.extract_min() for _ in range(3)] == [1, 2, 0]
    assert ready.extract_min() is None


def test_ready_set_ties_go_to_earliest_arrival_then_lowest_id():
    tasks = [
        make_task(9, arrival=2, duration=3),
        make_task(5, arrival=1, duration=3),
        make_task(4, arrival=1, duration=3),
    ]
    ready = LinearReadySet(tasks)
    for pos in range(3):
        ready.insert(pos)
    assert [tasks[ready.extract_min()].id for _ in range(3)] == [4, 5, 9]


def test_scheduler_name():
    assert BaselineScheduler([]).name == "baseline"
