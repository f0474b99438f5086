"""Reserved, page-committed engine memory and the fixed-size global stack."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field

from .platform import PlatformApi

GLOBAL_STACK_SIZE = 64 * 1024
COMMIT_RECORD_SIZE = 8


def align(size: int, alignment: int) -> int:
    """Round ``size`` up to the next multiple of ``alignment``."""
    if alignment <= 0:
        raise ValueError(f"alignment must be positive, got {alignment}")
    if size < 0:
        raise ValueError(f"size must not be negative, got {size}")
    return -(-size // alignment) * alignment


@dataclass(frozen=True)
class SystemInfo:
    """Page size and allocation granularity reported by the platform."""

    page_size: int = 0
    allocation_granularity: int = 0


@dataclass(frozen=True)
class Commit:
    """A run of committed pages inside the reservation."""

    page_start: int
    page_count: int


@dataclass
class GlobalStack:
    """A bump allocator over a fixed block of bytes."""

    size: int = GLOBAL_STACK_SIZE
    position: int = 0
    memory: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.memory = bytearray(self.size)

    def push(self, size: int) -> int:
        """Reserve ``size`` bytes and return their offset in the stack."""
        if size < 0:
            raise ValueError(f"size must not be negative, got {size}")
        new_position = self.position + size
        if new_position > self.size:
            raise MemoryError(
                f"global stack overflow: {new_position} bytes needed, {self.size} available"
            )
        offset = self.position
        self.position = new_position
        return offset

    def push_aligned(self, size: int, alignment: int) -> int:
        """Push ``size`` rounded up to ``alignment``; return the offset."""
        return self.push(align(size, alignment))


class EngineMemory:
    """One large reservation from which page-aligned commits are carved in order."""

    def __init__(self, platform: PlatformApi) -> None:
        self.platform = platform
        self.global_stack = GlobalStack()
        self.system_info = SystemInfo()
        self.start = 0
        self.page_count_total = 0
        self.page_count_committed = 0
        self.commit_count_max = 0
        self.commit_array_handle: int | None = None
        self._commits: list[Commit] = []
        self._buffers: list[bytearray] = []
        self._offsets: list[int] = []

    @property
    def commits(self) -> tuple[Commit, ...]:
        return tuple(self._commits)

    @property
    def commit_count_current(self) -> int:
        return len(self._commits)

    def reserve(self, reservation_size_minimum: int, commit_count_max: int) -> None:
        """Query the system, reserve address space and set up the commit table."""
        if self.start:
            raise RuntimeError("memory is already reserved")
        page_size = self.platform.system_page_size()
        granularity = self.platform.system_allocation_granularity()
        if not page_size or not granularity:
            raise ValueError("platform reported a zero page size or allocation granularity")
        self.system_info = SystemInfo(page_size=page_size, allocation_granularity=granularity)

        reservation_size = self.align_to_granularity(reservation_size_minimum)
        self.page_count_total = reservation_size // page_size

        start = self.platform.memory_reserve(reservation_size)
        if not start:
            raise RuntimeError("platform failed to reserve memory")
        self.start = start
        self.commit_count_max = commit_count_max

        self.commit_array_handle = self.global_push(COMMIT_RECORD_SIZE * commit_count_max)

    def commit(self, commit_size_minimum: int) -> int:
        """Commit the next page-aligned block and return its commit id."""
        if self.commit_count_current == self.commit_count_max:
            raise RuntimeError(
                f"commit limit reached ({self.commit_count_max} commits)"
            )
        page_size = self.system_info.page_size
        commit_size = align(commit_size_minimum, page_size)
        commit_page_count = commit_size // page_size

        commit_id = self.commit_count_current
        commit_offset = self.size_committed()
        commit_address = self.start + commit_offset

        result = self.platform.memory_commit(commit_address, commit_size)
        if result != commit_address:
            raise RuntimeError(
                f"platform committed at {result!r}, expected {commit_address:#x}"
            )

        self._commits.append(Commit(page_start=commit_offset // page_size, page_count=commit_page_count))
        self._buffers.append(bytearray(commit_size))
        self._offsets.append(commit_offset)
        self.page_count_committed += commit_page_count
        return commit_id

    def page_count(self, size: int) -> int:
        """Number of pages needed to hold ``size`` bytes."""
        return self.align_to_page(size) // self.system_info.page_size

    def _commit(self, commit_id: int) -> Commit:
        if not 0 <= commit_id < len(self._commits):
            raise IndexError(f"unknown commit id {commit_id}")
        return self._commits[commit_id]

    def commit_page_number(self, commit_id: int) -> int:
        return self._commit(commit_id).page_start

    def commit_page_count(self, commit_id: int) -> int:
        return self._commit(commit_id).page_count

    def commit_size(self, commit_id: int) -> int:
        return self.commit_page_count(commit_id) * self.system_info.page_size

    def commit_offset(self, commit_id: int) -> int:
        return self.commit_page_number(commit_id) * self.system_info.page_size

    def commit_address(self, commit_id: int) -> int:
        return self.start + self.commit_offset(commit_id)

    def commit_view(self, commit_id: int, offset: int = 0) -> memoryview:
        """Bytes of a commit from ``offset`` to its end."""
        size = self.commit_size(commit_id)
        if not 0 <= offset < size:
            raise ValueError(f"offset {offset} is outside commit {commit_id} of size {size}")
        return memoryview(self._buffers[commit_id])[offset:]

    def align_to_page(self, size: int) -> int:
        return align(size, self.system_info.page_size)

    def align_to_granularity(self, size: int) -> int:
        return align(size, self.system_info.allocation_granularity)

    def handle_offset(self, commit_id: int, commit_offset: int) -> int:
        """Offset from the reservation start of a position inside a commit."""
        return self.commit_offset(commit_id) + commit_offset

    def view(self, offset: int, size: int) -> memoryview:
        """Bytes at ``offset`` from the reservation start; must lie in one commit."""
        if offset < 0 or size < 0:
            raise IndexError(f"invalid range at {offset} of size {size}")
        index = bisect_right(self._offsets, offset) - 1
        if index < 0:
            raise IndexError(f"offset {offset} is not committed")
        local = offset - self._offsets[index]
        buffer = self._buffers[index]
        if local + size > len(buffer):
            raise IndexError(f"range at {offset} of size {size} is not inside one commit")
        return memoryview(buffer)[local:local + size]

    def size_committed(self) -> int:
        return self.page_count_committed * self.system_info.page_size

    def global_push(self, size: int) -> int:
        return self.global_stack.push(size)

    def global_push_aligned(self, size: int, alignment: int) -> int:
        return self.global_stack.push_aligned(size, alignment)