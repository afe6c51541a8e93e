from __future__ import annotations

import heapq
from bisect import bisect_right
from typing import List, Optional, Sequence, Tuple

from sjf_dispatch.scheduler.base import ArrivalIndexBase, ReadySetBase, SchedulerBase
from sjf_dispatch.scheduler.ordering import EARLIEST_FIRST, SHORTEST_FIRST, TaskOrdering
from sjf_dispatch.sim.task import Task


class SortedArrivalIndex(ArrivalIndexBase):
    """
    Positions sorted once by arrival; the not-yet-admitted tasks are always the
    suffix starting at ``_head``.

    ``release_due`` bisects the parallel list of arrival times to find the due
    prefix and moves the head past it; ``pop_earliest`` moves the head by one.
    """

    def __init__(self, tasks: Sequence[Task], ordering: TaskOrdering = EARLIEST_FIRST):
        super().__init__(tasks, ordering)
        self._order: List[int] = sorted(
            range(len(tasks)), key=lambda pos: ordering.key(tasks[pos], pos)
        )
        self._arrivals: List = [tasks[pos].queued_at for pos in self._order]
        self._head = 0

    def release_due(self, time) -> List[int]:
        end = bisect_right(self._arrivals, time, lo=self._head)
        due = self._order[self._head:end]
        self._head = end
        return due

    def pop_earliest(self) -> Optional[int]:
        if self._head >= len(self._order):
            return None
        pos = self._order[self._head]
        self._head += 1
        return pos

    def __len__(self) -> int:
        return len(self._order) - self._head


class HeapReadySet(ReadySetBase):
    """Min-heap keyed by the ordering policy; O(log k) insert and extract."""

    def __init__(self, tasks: Sequence[Task], ordering: TaskOrdering = SHORTEST_FIRST):
        super().__init__(tasks, ordering)
        self._heap: List[Tuple[tuple, int]] = []

    def insert(self, position: int) -> None:
        heapq.heappush(self._heap, (self.ordering.key(self.tasks[position], position), position))

    def extract_min(self) -> Optional[int]:
        if not self._heap:
            return None
        _, pos = heapq.heappop(self._heap)
        return pos

    def __len__(self) -> int:
        return len(self._heap)


class OptimizedScheduler(SchedulerBase):
    """O(n log n) strategy: sorted arrivals plus a heap-backed ready set."""

    def make_arrival_index(self, tasks: Sequence[Task]) -> ArrivalIndexBase:
        return SortedArrivalIndex(tasks)

    def make_ready_set(self, tasks: Sequence[Task]) -> ReadySetBase:
        return HeapReadySet(tasks)

    @property
    def name(self) -> str:
        return "optimized"
