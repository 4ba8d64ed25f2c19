# geo_sinks/domain/state.py
from enum import Enum

from geo_sinks.errors import SinkStateError

SENTINEL = -1.0


class SinkState(Enum):
    UNINITIALIZED = "uninitialized"
    STARTED = "started"  # geometry begun, no figure yet
    SCANNING = "scanning"  # figure open, consuming segments
    ACCUMULATING = "scanning"
    FOUND = "found"
    EXHAUSTED = "exhausted"  # figure closed without a result
    UNRESOLVED = "exhausted"
    CLOSED = "closed"


class ResultSlot:
    """Pre-allocated numeric cell: holds SENTINEL until written, and can be written once."""

    __slots__ = ("_value", "_written")

    def __init__(self):
        self._value = SENTINEL
        self._written = False

    @property
    def value(self) -> float:
        return self._value

    @property
    def is_set(self) -> bool:
        return self._written

    def set(self, value: float) -> None:
        if self._written:
            raise SinkStateError(f"result slot already holds {self._value}")
        self._value, self._written = float(value), True

    def __repr__(self) -> str:
        return f"ResultSlot({self._value})"
