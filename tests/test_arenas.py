import pytest

from flyby.arenas import ArenaManager
from flyby.memory import EngineMemory
from flyby.platform import PlatformApi

PAGE = 4096
BASE = 0x10000000


def _platform() -> PlatformApi:
    return PlatformApi(
        system_page_size=lambda: PAGE,
        system_allocation_granularity=lambda: 65536,
        memory_reserve=lambda size: BASE,
        memory_commit=lambda address, size: address,
    )


@pytest.fixture
def memory() -> EngineMemory:
    mem = EngineMemory(_platform())
    mem.reserve(1 << 20, 16)
    return mem


@pytest.fixture
def manager(memory) -> ArenaManager:
    return ArenaManager(memory, 100, 3)


def test_minimum_size_is_page_aligned(manager):
    assert manager.arena_minimum_size == PAGE
    assert manager.arena_minimum_pages == 1


def test_arena_ids_are_sequential(manager):
    first = manager.commit_arena(7, 10)
    second = manager.commit_arena(8, 10)
    assert (first, second) == (0, 1)
    assert manager.arena_count_committed == 2


def test_arena_records_commit(manager, memory):
    arena_id = manager.commit_arena(5, PAGE + 1)
    commit_id = manager.commit_id(arena_id)
    assert commit_id == manager.memory_commit_id + 1
    assert manager.size(arena_id) == memory.commit_size(commit_id)
    assert manager.size(arena_id) >= PAGE + 1
    assert manager.size(arena_id) % PAGE == 0
    assert manager.start(arena_id) == memory.commit_address(commit_id)
    assert manager.tag_id(arena_id) == 5


def test_arenas_do_not_overlap(manager):
    a = manager.commit_arena(0, PAGE * 2)
    b = manager.commit_arena(1, PAGE)
    assert manager.start(b) >= manager.start(a) + manager.size(a)


def test_limit_is_enforced(manager):
    for tag in range(3):
        manager.commit_arena(tag, PAGE)
    with pytest.raises(RuntimeError):
        manager.commit_arena(9, PAGE)


def test_align_size_to_arena(manager):
    assert manager.align_size_to_arena(1) == manager.arena_minimum_size
    assert manager.align_size_to_arena(PAGE + 1) == 2 * manager.arena_minimum_size
    assert manager.align_size_to_arena(0) == 0


def test_view_is_backed_by_commit(manager, memory):
    arena_id = manager.commit_arena(2, PAGE)
    view = manager.view(arena_id, 10)
    assert len(view) == manager.size(arena_id) - 10
    view[0:3] = b"abc"
    assert bytes(memory.commit_view(manager.commit_id(arena_id), 10)[:3]) == b"abc"


def test_view_offset_outside_arena(manager):
    arena_id = manager.commit_arena(2, PAGE)
    with pytest.raises(ValueError):
        manager.view(arena_id, manager.size(arena_id))


def test_unknown_arena_id(manager):
    with pytest.raises(IndexError):
        manager.size(0)
    with pytest.raises(IndexError):
        manager.tag_id(-1)


def test_invalid_count(memory):
    with pytest.raises(ValueError):
        ArenaManager(memory, PAGE, 0)