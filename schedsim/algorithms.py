from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Deque, Dict, Iterable, List, Optional, Union

from .errors import InvalidInputError
from .models import CompletedProcess, Process, ScheduleResult, ScheduledSlice
from .validation import validate_processes, validate_quantum

logger = logging.getLogger(__name__)


class Algorithm(str, Enum):
    FCFS = "fcfs"
    SJF = "sjf"
    RR = "rr"

    @classmethod
    def parse(cls, name: Union[str, "Algorithm"]) -> "Algorithm":
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(a.value for a in cls)
            raise InvalidInputError(f"Unknown algorithm '{name}' (choose from {choices})") from None

    @property
    def uses_quantum(self) -> bool:
        return self is Algorithm.RR


_ALIASES = {
    "round-robin": "rr",
    "roundrobin": "rr",
    "round_robin": "rr",
}


def schedule_fcfs(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes run in arrival order; ties keep their input order.
    """
    pending = validate_processes(processes)
    processes_sorted = sorted(pending, key=lambda p: p.arrival_time)

    time = 0
    timeline: List[ScheduledSlice] = []
    completed: List[CompletedProcess] = []

    for p in processes_sorted:
        if time < p.arrival_time:
            time = p.arrival_time

        start_time = time
        time = start_time + p.burst_time

        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=time))
        completed.append(CompletedProcess.finish(p, time))

    logger.debug("FCFS finished %d processes at t=%d", len(completed), time)
    return ScheduleResult(algorithm="FCFS", quantum=None, processes=completed, timeline=timeline)


def schedule_sjf(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. Equal bursts are
    resolved by input order.
    """
    # Working copy; the caller's list stays reusable.
    pending: List[Process] = validate_processes(processes)

    time = 0
    timeline: List[ScheduledSlice] = []
    completed: List[CompletedProcess] = []

    while pending:
        ready = [i for i, p in enumerate(pending) if p.arrival_time <= time]

        if not ready:
            # CPU idle: jump straight to the next arrival.
            time = min(p.arrival_time for p in pending)
            continue

        # min() keeps the first of equal keys, i.e. input order.
        idx = min(ready, key=lambda i: pending[i].burst_time)
        p = pending.pop(idx)

        start_time = time
        time = start_time + p.burst_time

        timeline.append(ScheduledSlice(pid=p.pid, start_time=start_time, end_time=time))
        completed.append(CompletedProcess.finish(p, time))

    logger.debug("SJF finished %d processes at t=%d", len(completed), time)
    return ScheduleResult(algorithm="SJF (non-preemptive)", quantum=None, processes=completed, timeline=timeline)


@dataclass
class _RunningProcess:
    process: Process
    remaining: int


def schedule_rr(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice runs are queued ahead of the process
    that just used up its slice.
    """
    pending_list = validate_processes(processes)
    quantum = validate_quantum(quantum)

    pending: Deque[Process] = deque(sorted(pending_list, key=lambda p: p.arrival_time))
    ready: Deque[_RunningProcess] = deque()

    time = 0
    timeline: List[ScheduledSlice] = []
    completed: List[CompletedProcess] = []

    def enqueue_new_arrivals(current_time: int) -> None:
        while pending and pending[0].arrival_time <= current_time:
            p = pending.popleft()
            ready.append(_RunningProcess(process=p, remaining=p.burst_time))

    while pending or ready:
        enqueue_new_arrivals(time)

        if not ready:
            # Jump to next arrival if CPU is idle
            time = pending[0].arrival_time
            continue

        job = ready.popleft()
        run_time = min(quantum, job.remaining)

        timeline.append(ScheduledSlice(pid=job.process.pid, start_time=time, end_time=time + run_time))
        job.remaining -= run_time
        time += run_time

        # New arrivals go in before the preempted process is re-queued.
        enqueue_new_arrivals(time)

        if job.remaining > 0:
            ready.append(job)
        else:
            completed.append(CompletedProcess.finish(job.process, time))

    logger.debug(
        "RR (q=%d) finished %d processes at t=%d in %d slices",
        quantum,
        len(completed),
        time,
        len(timeline),
    )
    return ScheduleResult(algorithm="Round Robin", quantum=quantum, processes=completed, timeline=timeline)


ALGORITHMS: Dict[Algorithm, Callable[..., ScheduleResult]] = {
    Algorithm.FCFS: schedule_fcfs,
    Algorithm.SJF: schedule_sjf,
    Algorithm.RR: schedule_rr,
}


def run_algorithm(
    algorithm: Union[str, Algorithm],
    processes: Iterable[Process],
    quantum: Optional[int] = None,
) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. The quantum is only passed on to
    Round Robin; FCFS and SJF ignore it.
    """
    algorithm = Algorithm.parse(algorithm)
    processes = validate_processes(processes)

    func = ALGORITHMS[algorithm]
    logger.debug("Running %s on %d processes", algorithm.name, len(processes))
    if algorithm.uses_quantum:
        return func(processes, quantum=quantum)
    return func(processes)
