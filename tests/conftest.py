"""Shared pytest fixtures for sjf_dispatch tests."""
from __future__ import annotations

import pytest

from sjf_dispatch.scheduler.registry import SCHEDULER_MAP
from sjf_dispatch.sim.task import Task


def make_task(task_id: int, arrival: int = 0, duration: int = 5) -> Task:
    """Factory helper used across all test modules."""
    return Task(id=task_id, queued_at=arrival, execution_duration=duration)


@pytest.fixture(params=list(SCHEDULER_MAP.keys()))
def strategy(request) -> str:
    """Every test taking this fixture runs once per strategy."""
    return request.param


@pytest.fixture
def overlapping_tasks() -> list[Task]:
    """42 runs 0..3; by then 43 and 44 have both arrived and 44 is shorter."""
    return [
        make_task(42, arrival=0, duration=3),
        make_task(43, arrival=1, duration=3),
        make_task(44, arrival=2, duration=2),
    ]
