from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from sjf_dispatch.sim.task import Task


@dataclass(frozen=True)
class TaskOrdering:
    """
    Ordering policy over tasks, expressed as a value rather than a Task subtype.

    ``key(task, position)`` yields the named field values followed by the
    task's position in the input, so two distinct tasks never compare equal.
    """

    name: str
    fields: Tuple[str, ...]

    def key(self, task: Task, position: int) -> tuple:
        return tuple(getattr(task, f) for f in self.fields) + (position,)


# Ready set: shortest duration, then earliest arrival, then lowest id.
SHORTEST_FIRST = TaskOrdering("shortest_first", ("execution_duration", "queued_at", "id"))

# Arrival index: arrival ties fall back to the ready-set rule so the idle
# fast-forward picks the same task the ready set would.
EARLIEST_FIRST = TaskOrdering("earliest_first", ("queued_at", "execution_duration", "id"))
