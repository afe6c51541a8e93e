from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class MetricsCollector:
    dispatches: int = 0

    # time accounting for utilization
    last_time: float = 0.0
    busy_time: float = 0.0
    idle_time: float = 0.0

    # task-level stats
    wait_times: List[float] = field(default_factory=list)
    turnaround_times: List[float] = field(default_factory=list)

    def on_task_dispatch(self, task, start: float, finish: float) -> None:
        gap = start - self.last_time
        if gap < 0:
            raise ValueError("Time went backwards")
        self.dispatches += 1
        self.idle_time += gap
        self.busy_time += finish - start
        self.last_time = finish

        self.wait_times.append(start - task.queued_at)
        self.turnaround_times.append(finish - task.queued_at)

    def finalize(self, now: float) -> None:
        if now < self.last_time:
            raise ValueError("Time went backwards")
        self.idle_time += now - self.last_time
        self.last_time = now

    @property
    def makespan(self) -> float:
        return self.last_time

    def utilization(self) -> float:
        """Fraction of [0, makespan] the server spent busy."""
        if self.last_time <= 0:
            return 0.0
        return self.busy_time / self.last_time

    def avg_wait(self) -> Optional[float]:
        if not self.wait_times:
            return None
        return sum(self.wait_times) / len(self.wait_times)

    def avg_turnaround(self) -> Optional[float]:
        if not self.turnaround_times:
            return None
        return sum(self.turnaround_times) / len(self.turnaround_times)
