"""Exceptions raised by the outcome engine."""

from __future__ import annotations

from .data import MAX_DETERMINISTIC_STATE_VISITS

_STACK_EXHAUSTION_MARKERS = (
    "maximum recursion depth",
    "maximum call stack",
    "call stack size exceeded",
    "stack overflow",
)


class OutcomeEngineError(Exception):
    """Base class for engine errors."""


class SimulationCapacityError(OutcomeEngineError):
    """An exact computation would exceed its configured capacity."""


class DeterministicOverflowError(SimulationCapacityError):
    """The exact state-space solver grew past its state budget."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or f"Combat simulation exceeded {MAX_DETERMINISTIC_STATE_VISITS} states."
        )


def is_stack_exhaustion(error: BaseException) -> bool:
    """Return True when ``error`` looks like a runtime stack-depth failure."""

    if isinstance(error, RecursionError):
        return True
    message = str(error).lower()
    return any(marker in message for marker in _STACK_EXHAUSTION_MARKERS)


def is_capacity_failure(error: BaseException) -> bool:
    """Return True for failures that should downgrade to sampling."""

    return isinstance(error, SimulationCapacityError) or is_stack_exhaustion(error)
