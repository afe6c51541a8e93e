from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from sjf_dispatch.sim.task import Dispatch, Task

logger = logging.getLogger(__name__)


class SchedulingInvariantError(RuntimeError):
    """Arrival index / ready set bookkeeping disagrees with the dispatch loop."""


class DispatchEngine:
    """
    Single-server, non-preemptive dispatch loop.

    Each step first admits every task that has arrived by the current time,
    then dispatches the shortest ready task. When nothing is ready the server
    is idle: the earliest pending task is dispatched directly and the clock
    jumps past the gap.

    The engine only decides *what happens next*; ``arrivals`` and ``ready``
    hold positions into ``tasks`` and decide how cheaply that is answered.
    """

    def __init__(self):
        self.time = 0
        self.log: List[Dispatch] = []

    def run(
        self,
        tasks: Sequence[Task],
        arrivals,
        ready,
        metrics=None,
    ) -> List[Dispatch]:
        while not (arrivals.is_empty() and ready.is_empty()):
            # Admit before selecting: a task arriving exactly when the
            # previous one finished competes on duration, not on the idle path.
            for pos in arrivals.release_due(self.time):
                ready.insert(pos)

            if not ready.is_empty():
                pos = ready.extract_min()
                if pos is None:
                    raise SchedulingInvariantError(
                        f"Ready set reported {len(ready)} task(s) but yielded none"
                    )
            else:
                pos = arrivals.pop_earliest()
                if pos is None:
                    raise SchedulingInvariantError(
                        f"Arrival index reported {len(arrivals)} task(s) but yielded none"
                    )
                logger.debug("t=%s idle, fast-forwarding to task %s", self.time, tasks[pos].id)

            self._dispatch(tasks[pos], metrics)
            logger.debug("ready=%d pending=%d", len(ready), len(arrivals))

        if len(self.log) != len(tasks):
            raise SchedulingInvariantError(
                f"Dispatched {len(self.log)} task(s) out of {len(tasks)}"
            )

        if metrics is not None:
            metrics.finalize(now=self.time)

        logger.info("Dispatched %d task(s), makespan=%s", len(self.log), self.time)
        return self.log

    def _dispatch(self, task: Task, metrics: Optional[object]) -> None:
        # A task never starts before it has arrived.
        start = max(self.time, task.queued_at)
        self.time = start + task.execution_duration
        self.log.append(Dispatch(task_id=task.id, start_time=start, finish_time=self.time))
        logger.debug("t=%s dispatched task %s until t=%s", start, task.id, self.time)
        if metrics is not None:
            metrics.on_task_dispatch(task, start=start, finish=self.time)
