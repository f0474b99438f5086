"""The engine context: memory, configuration, managers and the frame loop."""

from __future__ import annotations

from dataclasses import dataclass

from .arenas import ArenaManager
from .config import EngineConfig, EngineState
from .graphics import GraphicsManager, WindowFlags
from .memory import EngineMemory
from .platform import PlatformApi
from .tags import TagManager

_HANDLE_SIZE = 4
_MANAGERS_RECORD = (3 * _HANDLE_SIZE, 4)
_CORE_RECORD = (24, 8)
_USER_INPUT_RECORD = (64, 8)
_TAG_MANAGER_RECORD = (32, 8)
_ARENA_MANAGER_RECORD = (40, 8)
_GRAPHICS_MANAGER_RECORD = (32, 8)


@dataclass
class EngineCore:
    """Run state and timing of the engine."""

    state: EngineState = EngineState.NOT_RUNNING
    time_initialized: int = 0
    frames_per_second_target: int = 0


class EngineContext:
    """Everything the engine owns, built from a platform api and a configuration."""

    def __init__(self, platform: PlatformApi, config: EngineConfig | None = None) -> None:
        self.platform = platform.validate()
        self.config = config if config is not None else EngineConfig()

        self.memory = EngineMemory(self.platform)
        self.memory.reserve(self.config.memory_reservation_size, self.config.memory_commit_count_max)

        self.handles = {
            "managers": self.memory.global_push_aligned(*_MANAGERS_RECORD),
            "core": self.memory.global_push_aligned(*_CORE_RECORD),
            "user_input": self.memory.global_push_aligned(*_USER_INPUT_RECORD),
        }
        self.manager_handles = {
            "tag_manager": self.memory.global_push_aligned(*_TAG_MANAGER_RECORD),
            "arena_manager": self.memory.global_push_aligned(*_ARENA_MANAGER_RECORD),
            "graphics_manager": self.memory.global_push_aligned(*_GRAPHICS_MANAGER_RECORD),
        }

        self.tag_manager = TagManager(
            self.memory, self.config.tag_c_str_length, self.config.tag_count_max
        )
        self.arena_manager = ArenaManager(
            self.memory, self.config.arena_minimum_kb * 1024, self.config.arena_count_max
        )
        self.graphics_manager = GraphicsManager(self.memory)

        self.core = EngineCore(time_initialized=self.platform.system_time_ms())
        self._destroyed = False

    def _check_alive(self) -> None:
        if self._destroyed:
            raise RuntimeError("engine context has been destroyed")

    def startup(self) -> None:
        """Create the visible OpenGL/ImGui window on the primary monitor."""
        self._check_alive()
        self.core.state = EngineState.STARTUP
        flags = WindowFlags.VISIBLE | WindowFlags.IMGUI | WindowFlags.OPENGL
        try:
            self.graphics_manager.create_window(self.config.window_title, flags)
        except Exception:
            self.core.state = EngineState.FATAL
            raise
        self.core.state = EngineState.IDLE

    def update_and_render(self) -> None:
        """Start and render one frame."""
        self._check_alive()
        self.core.state = EngineState.FRAME_EXECUTE
        try:
            self.graphics_manager.frame_start()
            self.graphics_manager.frame_render()
        except Exception:
            self.core.state = EngineState.FATAL
            raise
        self.core.state = EngineState.IDLE

    def destroy(self) -> None:
        """Hand the reservation back to the platform; the context is unusable after."""
        self._check_alive()
        self.core.state = EngineState.SHUTDOWN
        reservation_size = self.memory.page_count_total * self.memory.system_info.page_size
        self.platform.memory_release(self.memory.start, reservation_size)
        self._destroyed = True
        self.core.state = EngineState.NOT_RUNNING