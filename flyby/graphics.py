"""Monitors, the main window and per-frame calls into the platform."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag

from .memory import EngineMemory, align

MONITOR_RECORD_SIZE = 32
WINDOW_RECORD_SIZE = 48


class WindowFlags(IntFlag):
    NONE = 0
    VISIBLE = 1
    IMGUI = 2
    OPENGL = 4


@dataclass(frozen=True)
class Monitor:
    """A display reported by the platform."""

    id: int
    width: int
    height: int
    x: int = 0
    y: int = 0
    refresh_hz: int = 60
    primary: bool = False


@dataclass
class Window:
    """The engine's main window."""

    flags: WindowFlags
    monitor_id: int
    width: int
    height: int
    x: int
    y: int


class GraphicsManager:
    """Knows the platform's monitors and drives the main window.

    The platform's ``monitor_info(count)`` returns a sequence of ``Monitor``.
    """

    def __init__(self, memory: EngineMemory) -> None:
        self.platform = memory.platform
        count = self.platform.monitor_count()
        if count <= 0:
            raise ValueError("platform reported no monitors")
        commit_size = count * MONITOR_RECORD_SIZE + align(WINDOW_RECORD_SIZE, 8)
        self.commit_id = memory.commit(commit_size)
        monitors = tuple(self.platform.monitor_info(count))
        if len(monitors) != count:
            raise ValueError(f"platform described {len(monitors)} monitors, expected {count}")
        self.monitors = monitors
        self.monitor_primary_index = 0
        self.window: Window | None = None

    @property
    def monitor_count(self) -> int:
        return len(self.monitors)

    def monitor(self, index: int) -> Monitor:
        if not 0 <= index < self.monitor_count:
            raise IndexError(f"monitor index {index} out of range")
        return self.monitors[index]

    def _primary_monitor(self) -> Monitor:
        for index, monitor in enumerate(self.monitors):
            if monitor.primary:
                self.monitor_primary_index = index
                return monitor
        raise ValueError("no primary monitor")

    def create_window(self, title: str, flags: WindowFlags) -> Window:
        """Create a half-size window centred on the primary monitor."""
        primary = self._primary_monitor()
        width = primary.width // 2
        height = primary.height // 2
        window = Window(
            flags=WindowFlags(flags),
            monitor_id=primary.id,
            width=width,
            height=height,
            x=primary.x + (primary.width - width) // 2,
            y=primary.y + (primary.height - height) // 2,
        )
        self.window = window

        ok = bool(self.platform.window_create(title, width, height, window.x, window.y))
        if WindowFlags.OPENGL in window.flags:
            ok = bool(self.platform.window_opengl_init()) and ok
        if WindowFlags.IMGUI in window.flags:
            ok = bool(self.platform.window_imgui_init()) and ok
        if WindowFlags.VISIBLE in window.flags:
            ok = bool(self.platform.window_show()) and ok
        if not ok:
            raise RuntimeError("platform failed to initialize the window")
        return window

    def frame_start(self) -> None:
        if not self.platform.window_frame_start():
            raise RuntimeError("platform failed to start a frame")

    def frame_render(self) -> None:
        if not self.platform.window_frame_render():
            raise RuntimeError("platform failed to render a frame")