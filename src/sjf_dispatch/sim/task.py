from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Task:
    id: int
    queued_at: int
    execution_duration: int


@dataclass(frozen=True)
class Dispatch:
    """One entry of the dispatch timeline: when a task held the server."""

    task_id: int
    start_time: int
    finish_time: int
