"""
CPU scheduling simulator.

Runs First-Come First-Serve, non-preemptive Shortest Job First and Round
Robin over a set of processes and computes completion, turnaround and
waiting times with their averages.
"""

from .algorithms import Algorithm, run_algorithm, schedule_fcfs, schedule_rr, schedule_sjf
from .errors import (
    EmptyProcessSetError,
    InvalidInputError,
    InvalidQuantumError,
    ScheduleIntegrityError,
    SchedulerError,
)
from .metrics import compute_metrics
from .models import CompletedProcess, Process

__all__ = [
    "Algorithm",
    "CompletedProcess",
    "EmptyProcessSetError",
    "InvalidInputError",
    "InvalidQuantumError",
    "Process",
    "ScheduleIntegrityError",
    "SchedulerError",
    "compute_metrics",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_rr",
    "schedule_sjf",
]
