from __future__ import annotations

from typing import List, Optional, Sequence

from sjf_dispatch.scheduler.base import ArrivalIndexBase, ReadySetBase, SchedulerBase
from sjf_dispatch.scheduler.ordering import EARLIEST_FIRST, SHORTEST_FIRST, TaskOrdering
from sjf_dispatch.sim.task import Task


class LinearArrivalIndex(ArrivalIndexBase):
    """Unsorted pending list; every query scans what is left."""

    def __init__(self, tasks: Sequence[Task], ordering: TaskOrdering = EARLIEST_FIRST):
        super().__init__(tasks, ordering)
        self._pending: List[int] = list(range(len(tasks)))

    def release_due(self, time) -> List[int]:
        due: List[int] = []
        keep: List[int] = []
        for pos in self._pending:
            if self.tasks[pos].queued_at <= time:
                due.append(pos)
            else:
                keep.append(pos)
        self._pending = keep
        return due

    def pop_earliest(self) -> Optional[int]:
        if not self._pending:
            return None
        i = min(
            range(len(self._pending)),
            key=lambda i: self.ordering.key(self.tasks[self._pending[i]], self._pending[i]),
        )
        return self._pending.pop(i)

    def __len__(self) -> int:
        return len(self._pending)


class LinearReadySet(ReadySetBase):
    """Plain list; extract_min scans for the smallest key."""

    def __init__(self, tasks: Sequence[Task], ordering: TaskOrdering = SHORTEST_FIRST):
        super().__init__(tasks, ordering)
        self._items: List[int] = []

    def insert(self, position: int) -> None:
        self._items.append(position)

    def extract_min(self) -> Optional[int]:
        if not self._items:
            return None
        best = 0
        best_key = self.ordering.key(self.tasks[self._items[0]], self._items[0])
        for i in range(1, len(self._items)):
            k = self.ordering.key(self.tasks[self._items[i]], self._items[i])
            if k < best_key:
                best, best_key = i, k
        return self._items.pop(best)

    def __len__(self) -> int:
        return len(self._items)


class BaselineScheduler(SchedulerBase):
    """
    Straightforward O(n^2) strategy: linear scans for both admission and
    selection. Kept as the reference the optimized strategy is checked against.
    """

    def make_arrival_index(self, tasks: Sequence[Task]) -> ArrivalIndexBase:
        return LinearArrivalIndex(tasks)

    def make_ready_set(self, tasks: Sequence[Task]) -> ReadySetBase:
        return LinearReadySet(tasks)

    @property
    def name(self) -> str:
        return "baseline"
