from __future__ import annotations

import logging
from typing import Any, Iterable, List

from .errors import EmptyProcessSetError, InvalidInputError, InvalidQuantumError
from .models import Process

logger = logging.getLogger(__name__)


def _to_int(value: Any) -> int:
    """
    Coerce a raw form/file value to an int. Raises ValueError for anything
    that is not a whole number (bools included).
    """
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected an integer, got {value!r}")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise ValueError(f"expected an integer, got {value!r}")


def make_process(pid: Any, arrival: Any, burst: Any) -> Process:
    """
    Build a validated Process from raw values, coercing arrival/burst to ints.
    """
    pid_str = "" if pid is None else str(pid).strip()
    if not pid_str:
        raise InvalidInputError("Process id is required")

    try:
        arrival_time = _to_int(arrival)
        burst_time = _to_int(burst)
    except ValueError as exc:
        raise InvalidInputError(f"Process {pid_str}: arrival and burst must be integers ({exc})") from exc

    process = Process(pid=pid_str, arrival_time=arrival_time, burst_time=burst_time)
    _check_process(process)
    return process


def _check_process(p: Process) -> None:
    if not isinstance(p.pid, str) or not p.pid:
        raise InvalidInputError(f"Process id is required (got {p.pid!r})")
    for name, value in (("arrival_time", p.arrival_time), ("burst_time", p.burst_time)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInputError(f"Process {p.pid}: {name} must be an integer, got {value!r}")
    if p.arrival_time < 0:
        raise InvalidInputError(f"Process {p.pid}: arrival_time must be >= 0, got {p.arrival_time}")
    if p.burst_time <= 0:
        raise InvalidInputError(f"Process {p.pid}: burst_time must be > 0, got {p.burst_time}")


def validate_processes(processes: Iterable[Process]) -> List[Process]:
    """
    Check a process set before simulation and return it as a new list.

    Duplicate pids are allowed; they are treated as distinct entries.
    """
    checked = list(processes)
    if not checked:
        raise EmptyProcessSetError("No processes added")
    for p in checked:
        try:
            _check_process(p)
        except InvalidInputError:
            logger.warning("Rejected process entry %r", p)
            raise
    return checked


def validate_quantum(quantum: Any) -> int:
    """
    Return the quantum as a positive int. Never falls back to a default.
    """
    if quantum is None:
        raise InvalidQuantumError("Round Robin requires a time quantum (use --quantum)")
    try:
        value = _to_int(quantum)
    except ValueError as exc:
        raise InvalidQuantumError(f"Time quantum must be an integer, got {quantum!r}") from exc
    if value <= 0:
        logger.warning("Rejected non-positive quantum %d", value)
        raise InvalidQuantumError(f"Time quantum must be positive, got {value}")
    return value
