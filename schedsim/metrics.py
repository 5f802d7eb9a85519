from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from .errors import EmptyProcessSetError, ScheduleIntegrityError
from .models import CompletedProcess, MetricsReport, ProcessMetrics, ScheduleResult, SystemMetrics

logger = logging.getLogger(__name__)

# Averages are reported to two decimal places, exact halves rounded up.
DISPLAY_PRECISION = Decimal("0.01")


def _round_half_up(value: float) -> float:
    # Rounds the exact binary value of the float, halves up.
    return float(Decimal(value).quantize(DISPLAY_PRECISION, rounding=ROUND_HALF_UP))


def compute_metrics(completed: Iterable[CompletedProcess]) -> MetricsReport:
    """
    Per-process turnaround and waiting times plus their averages.

    turnaround = completion - arrival, waiting = turnaround - burst. An empty
    schedule has no meaningful average and raises EmptyProcessSetError.
    """
    completed = list(completed)
    if not completed:
        raise EmptyProcessSetError("Cannot compute metrics for an empty schedule")

    rows = []
    for p in completed:
        turnaround_time = p.completion_time - p.arrival_time
        waiting_time = turnaround_time - p.burst_time
        if waiting_time < 0:
            logger.error("Negative waiting time for %s: %r", p.pid, p)
            raise ScheduleIntegrityError(
                f"Process {p.pid} completed at {p.completion_time}, before arrival + burst "
                f"({p.arrival_time} + {p.burst_time})"
            )
        rows.append(
            ProcessMetrics(
                pid=p.pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                completion_time=p.completion_time,
                turnaround_time=turnaround_time,
                waiting_time=waiting_time,
            )
        )

    n = len(rows)
    return MetricsReport(
        processes=rows,
        avg_waiting=_round_half_up(sum(r.waiting_time for r in rows) / n),
        avg_turnaround=_round_half_up(sum(r.turnaround_time for r in rows) / n),
    )


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given a completed schedule and its
    timeline slices.
    """
    if not result.processes:
        raise EmptyProcessSetError("Cannot compute system metrics for an empty schedule")

    makespan = max(p.completion_time for p in result.processes)
    cpu_busy_time = sum(slice_.end_time - slice_.start_time for slice_ in result.timeline)

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=len(result.processes) / makespan,
        cpu_utilization=cpu_busy_time / makespan,
    )
