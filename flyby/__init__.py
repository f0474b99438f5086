"""Core of a small game engine: platform hooks, reserved memory, tags, arenas, graphics, a context, a linear allocator, physics tables and packed asset files."""

__version__ = "0.1.0"

__all__ = [
    "allocators",
    "arenas",
    "assets",
    "config",
    "context",
    "core",
    "graphics",
    "memory",
    "physics",
    "platform",
    "tags",
]