"""Allocators that hand out memory from a dedicated arena."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .core import commit_arena

if TYPE_CHECKING:
    from .context import EngineContext

_LINEAR_ALLOCATOR_RECORD = (32, 8)


@dataclass
class LinearAllocator:
    """A bump allocator over one arena."""

    handle: int
    arena_id: int
    start: int
    size: int
    position: int = 0
    save_point: int = 0

    @classmethod
    def commit(cls, context: EngineContext, tag: str, size_minimum: int) -> LinearAllocator:
        """Place the allocator record on the global stack and commit its arena."""
        handle = context.memory.global_push_aligned(*_LINEAR_ALLOCATOR_RECORD)
        arena = commit_arena(context, tag, size_minimum)
        return cls(handle=handle, arena_id=arena.id, start=arena.start, size=arena.size)

    def reserve(self, size: int) -> int:
        """Advance by ``size`` bytes and return the address just past them.

        Raises MemoryError when the arena cannot hold the reservation.
        """
        if size < 0:
            raise ValueError(f"size must not be negative, got {size}")
        new_position = self.position + size
        if new_position > self.size:
            raise MemoryError(
                f"linear allocator overflow: {new_position} bytes needed, {self.size} available"
            )
        self.position = new_position
        return self.start + new_position

    def current_offset(self) -> int:
        """Address of the next free byte."""
        return self.start + self.position