"""Engine configuration values and the engine run states."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import IntEnum

_U16_MAX = 0xFFFF


class EngineState(IntEnum):
    """Lifecycle state of the engine."""

    NOT_RUNNING = 0
    FATAL = 1
    STARTUP = 2
    SHUTDOWN = 3
    IDLE = 4
    FRAME_EXECUTE = 5


@dataclass(frozen=True)
class EngineConfig:
    """Sizes and limits the engine is built with.

    Every numeric field is held to the unsigned 16-bit range.
    """

    memory_minimum_gb: int = 2
    memory_commit_count_max: int = 128
    global_stack_kb: int = 64
    arena_minimum_kb: int = 4
    arena_count_max: int = 64
    tag_c_str_length: int = 32
    tag_count_max: int = 1024
    window_title: str = "It Flies By"

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "window_title":
                if not isinstance(value, str):
                    raise TypeError("window_title must be a string")
                continue
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{f.name} must be an integer, got {value!r}")
            if not 0 <= value <= _U16_MAX:
                raise ValueError(f"{f.name} must fit in 16 bits, got {value}")

    @property
    def memory_reservation_size(self) -> int:
        """Minimum reservation in bytes."""
        return self.memory_minimum_gb * 1024 * 1024 * 1024

    @property
    def global_stack_size(self) -> int:
        """Global stack size in bytes."""
        return self.global_stack_kb * 1024