"""Arena operations that tie the tag and arena managers of a context together."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import EngineContext


@dataclass(frozen=True)
class Arena:
    """What is known about one committed arena."""

    id: int
    size: int
    start: int
    tag: str


def commit_arena(context: EngineContext, tag: str, size_minimum: int) -> Arena:
    """Reserve ``tag`` and commit an arena of at least ``size_minimum`` bytes."""
    if size_minimum <= 0:
        raise ValueError(f"arena size must be positive, got {size_minimum}")
    tag_id = context.tag_manager.reserve(tag)
    arena_id = context.arena_manager.commit_arena(tag_id, size_minimum)
    arena = Arena(
        id=arena_id,
        size=context.arena_manager.size(arena_id),
        start=context.arena_manager.start(arena_id),
        tag=context.tag_manager.tag(tag_id),
    )
    if arena.size <= 0 or arena.start <= 0:
        raise RuntimeError(f"arena {arena_id} was committed with no memory")
    return arena


def arena_info(context: EngineContext, arena_id: int) -> Arena:
    """Read back the size, start and tag of an existing arena."""
    arenas = context.arena_manager
    tag_id = arenas.tag_id(arena_id)
    return Arena(
        id=arena_id,
        size=arenas.size(arena_id),
        start=arenas.start(arena_id),
        tag=context.tag_manager.tag(tag_id),
    )


def arena_page_start(context: EngineContext, arena_id: int) -> int:
    """Start address of the arena."""
    return context.arena_manager.start(arena_id)


def arena_tag(context: EngineContext, arena_id: int) -> str:
    """The tag the arena was committed under."""
    tag_id = context.arena_manager.tag_id(arena_id)
    return context.tag_manager.tag(tag_id)


def arena_view(context: EngineContext, arena_id: int, offset: int = 0) -> memoryview:
    """Bytes of the arena from ``offset`` to its end."""
    return context.arena_manager.view(arena_id, offset)