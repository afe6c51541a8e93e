from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Tuple

from sjf_dispatch.scheduler.ordering import EARLIEST_FIRST, SHORTEST_FIRST, TaskOrdering
from sjf_dispatch.sim.engine import DispatchEngine
from sjf_dispatch.sim.task import Dispatch, Task


class ArrivalIndexBase(ABC):
    """Tasks not yet admitted, held as positions into ``tasks``."""

    def __init__(self, tasks: Sequence[Task], ordering: TaskOrdering = EARLIEST_FIRST):
        self.tasks = tasks
        self.ordering = ordering

    @abstractmethod
    def release_due(self, time) -> List[int]:
        """Remove and return every held position whose task has ``queued_at <= time``."""
        ...

    @abstractmethod
    def pop_earliest(self) -> Optional[int]:
        """Remove and return the earliest-arriving position, or None if empty."""
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...

    def is_empty(self) -> bool:
        return len(self) == 0


class ReadySetBase(ABC):
    """Admitted, not yet dispatched tasks, held as positions into ``tasks``."""

    def __init__(self, tasks: Sequence[Task], ordering: TaskOrdering = SHORTEST_FIRST):
        self.tasks = tasks
        self.ordering = ordering

    @abstractmethod
    def insert(self, position: int) -> None:
        ...

    @abstractmethod
    def extract_min(self) -> Optional[int]:
        """Remove and return the position that sorts first, or None if empty."""
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...

    def is_empty(self) -> bool:
        return len(self) == 0


class SchedulerBase(ABC):
    """
    Computes the SPT dispatch order of one task collection.

    Subclasses only choose the arrival index and ready set; the dispatch
    decisions all live in ``DispatchEngine``. Every call starts from a fresh
    engine, so repeated calls on one instance return identical results.
    """

    def __init__(self, tasks: Iterable[Task]):
        self._tasks: Tuple[Task, ...] = tuple(tasks)

    @abstractmethod
    def make_arrival_index(self, tasks: Sequence[Task]) -> ArrivalIndexBase:
        ...

    @abstractmethod
    def make_ready_set(self, tasks: Sequence[Task]) -> ReadySetBase:
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    def tasks(self) -> Tuple[Task, ...]:
        return self._tasks

    def dispatch_log(self, metrics=None) -> List[Dispatch]:
        """Run the dispatch loop and return the full timeline."""
        engine = DispatchEngine()
        return engine.run(
            self._tasks,
            arrivals=self.make_arrival_index(self._tasks),
            ready=self.make_ready_set(self._tasks),
            metrics=metrics,
        )

    def execution_order(self) -> List[int]:
        return [d.task_id for d in self.dispatch_log()]
