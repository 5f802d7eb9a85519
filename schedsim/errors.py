"""
Exceptions raised by the scheduling core.

Input problems (bad process entries, bad quantum, nothing to schedule) are
``ValueError`` subclasses so callers can re-prompt. A schedule that violates
its own invariants is a ``RuntimeError``.
"""


class SchedulerError(Exception):
    """Base class for every error raised by schedsim."""


class InvalidInputError(SchedulerError, ValueError):
    """A process entry is missing an id or has a bad arrival/burst time."""


class InvalidQuantumError(SchedulerError, ValueError):
    """Round Robin was requested without a positive integer quantum."""


class EmptyProcessSetError(SchedulerError, ValueError):
    """A simulation or metrics computation was requested with no processes."""


class ScheduleIntegrityError(SchedulerError, RuntimeError):
    """A completed schedule breaks a timing invariant (e.g. negative waiting time)."""
