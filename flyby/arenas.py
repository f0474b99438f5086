"""Arenas: named, page-aligned commits tracked by slot index."""

from __future__ import annotations

from .memory import EngineMemory, align

COMMIT_ID_RECORD_SIZE = 4
TAG_ID_RECORD_SIZE = 4
ADDRESS_RECORD_SIZE = 8
SIZE_RECORD_SIZE = 4


class ArenaManager:
    """Commits arenas from engine memory and remembers their commit, tag, start and size."""

    def __init__(self, memory: EngineMemory, arena_minimum_size: int, arena_count_max: int) -> None:
        if arena_count_max <= 0:
            raise ValueError(f"arena count must be positive, got {arena_count_max}")
        self.memory = memory
        self.arena_minimum_size = memory.align_to_page(arena_minimum_size)
        self.arena_minimum_pages = memory.page_count(self.arena_minimum_size)
        self.arena_count_max = arena_count_max

        table_size = arena_count_max * (
            COMMIT_ID_RECORD_SIZE + TAG_ID_RECORD_SIZE + ADDRESS_RECORD_SIZE + SIZE_RECORD_SIZE
        )
        self.memory_commit_id = memory.commit(table_size)

        self._commit_ids: list[int] = []
        self._tag_ids: list[int] = []
        self._starts: list[int] = []
        self._sizes: list[int] = []

    @property
    def arena_count_committed(self) -> int:
        return len(self._commit_ids)

    def _check(self, arena_id: int) -> None:
        if not 0 <= arena_id < self.arena_count_committed:
            raise IndexError(f"unknown arena id {arena_id}")

    def commit_arena(self, tag_id: int, size_minimum: int) -> int:
        """Commit a new arena of at least ``size_minimum`` bytes; return its id."""
        if self.arena_count_committed == self.arena_count_max:
            raise RuntimeError(f"arena limit reached ({self.arena_count_max} arenas)")
        commit_id = self.memory.commit(size_minimum)
        self._commit_ids.append(commit_id)
        self._tag_ids.append(tag_id)
        self._starts.append(self.memory.commit_address(commit_id))
        self._sizes.append(self.memory.commit_size(commit_id))
        return len(self._commit_ids) - 1

    def align_size_to_arena(self, size: int) -> int:
        """Round ``size`` up to a multiple of the minimum arena size."""
        return align(size, self.arena_minimum_size)

    def commit_id(self, arena_id: int) -> int:
        self._check(arena_id)
        return self._commit_ids[arena_id]

    def tag_id(self, arena_id: int) -> int:
        self._check(arena_id)
        return self._tag_ids[arena_id]

    def size(self, arena_id: int) -> int:
        self._check(arena_id)
        return self._sizes[arena_id]

    def start(self, arena_id: int) -> int:
        """Address of the arena's first byte."""
        self._check(arena_id)
        return self._starts[arena_id]

    def view(self, arena_id: int, offset: int = 0) -> memoryview:
        """Bytes of the arena from ``offset`` to its end."""
        return self.memory.commit_view(self.commit_id(arena_id), offset)