from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int


@dataclass(frozen=True)
class CompletedProcess:
    """
    A process that has run to completion. ``completion_time`` is assigned
    exactly once, when the scheduler finishes the process.
    """

    pid: str
    arrival_time: int
    burst_time: int
    completion_time: int

    @classmethod
    def finish(cls, process: Process, completion_time: int) -> "CompletedProcess":
        return cls(
            pid=process.pid,
            arrival_time=process.arrival_time,
            burst_time=process.burst_time,
            completion_time=completion_time,
        )


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: str
    start_time: int
    end_time: int


@dataclass
class ProcessMetrics:
    pid: str
    arrival_time: int
    burst_time: int
    completion_time: int
    turnaround_time: int
    waiting_time: int


@dataclass
class MetricsReport:
    processes: List[ProcessMetrics] = field(default_factory=list)
    avg_waiting: float = 0.0
    avg_turnaround: float = 0.0


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[CompletedProcess] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
