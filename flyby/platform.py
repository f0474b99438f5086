"""The set of services the host platform hands to the engine."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, fields
from typing import Any, Optional

_Fn = Optional[Callable[..., Any]]


@dataclass
class PlatformApi:
    """Callables supplied by the host for system, window, monitor and memory work.

    ``memory_reserve(size)`` returns the start address of a reservation and
    ``memory_commit(address, size)`` returns the address it committed.
    """

    system_page_size: _Fn = None
    system_allocation_granularity: _Fn = None
    system_time_ms: _Fn = None
    system_sleep: _Fn = None

    window_create: _Fn = None
    window_destroy: _Fn = None
    window_frame_start: _Fn = None
    window_frame_render: _Fn = None
    window_show: _Fn = None
    window_opengl_init: _Fn = None
    window_imgui_init: _Fn = None

    monitor_count: _Fn = None
    monitor_info: _Fn = None

    memory_reserve: _Fn = None
    memory_release: _Fn = None
    memory_commit: _Fn = None

    def validate(self) -> PlatformApi:
        """Return this api, or raise ValueError naming every missing callable."""
        missing = [f.name for f in fields(self) if not callable(getattr(self, f.name))]
        if missing:
            raise ValueError("platform api is missing: " + ", ".join(missing))
        return self