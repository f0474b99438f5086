import pytest

from flyby.graphics import GraphicsManager, Monitor, WindowFlags
from flyby.memory import EngineMemory
from flyby.platform import PlatformApi

PAGE = 4096


class FakeHost:
    def __init__(self, monitors, create_ok=True, frame_ok=True):
        self.monitors = list(monitors)
        self.calls = []
        self.create_ok = create_ok
        self.frame_ok = frame_ok

    def _record(self, name, result=True):
        def fn(*args):
            self.calls.append((name, args))
            return result
        return fn

    def api(self):
        return PlatformApi(
            system_page_size=lambda: PAGE,
            system_allocation_granularity=lambda: PAGE * 16,
            memory_reserve=lambda size: 0x200000,
            memory_commit=lambda address, size: address,
            monitor_count=lambda: len(self.monitors),
            monitor_info=lambda count: self.monitors[:count],
            window_create=self._record("create", self.create_ok),
            window_opengl_init=self._record("opengl"),
            window_imgui_init=self._record("imgui"),
            window_show=self._record("show"),
            window_frame_start=self._record("frame_start", self.frame_ok),
            window_frame_render=self._record("frame_render", self.frame_ok),
        )


def _manager(host):
    memory = EngineMemory(host.api())
    memory.reserve(1 << 22, 8)
    return GraphicsManager(memory), memory


MONITORS = [
    Monitor(id=7, width=1280, height=1024, x=0, y=0),
    Monitor(id=9, width=1920, height=1080, x=1280, y=0, primary=True),
]


def test_monitors_are_read_from_platform():
    manager, memory = _manager(FakeHost(MONITORS))
    assert manager.monitor_count == 2
    assert manager.monitor(1) == MONITORS[1]
    assert memory.commit_count_current == 1


def test_monitor_index_out_of_range():
    manager, _ = _manager(FakeHost(MONITORS))
    with pytest.raises(IndexError):
        manager.monitor(2)


def test_no_monitors_is_an_error():
    with pytest.raises(ValueError):
        _manager(FakeHost([]))


def test_window_is_centred_on_primary_with_same_aspect():
    manager, _ = _manager(FakeHost(MONITORS))
    window = manager.create_window("title", WindowFlags.VISIBLE)
    primary = MONITORS[1]
    assert window.monitor_id == primary.id
    assert manager.monitor_primary_index == 1
    assert window.width * primary.height == window.height * primary.width
    assert 2 * window.x + window.width == 2 * primary.x + primary.width
    assert 2 * window.y + window.height == 2 * primary.y + primary.height
    assert manager.window is window


def test_flags_select_platform_calls():
    host = FakeHost(MONITORS)
    manager, _ = _manager(host)
    manager.create_window("title", WindowFlags.OPENGL)
    names = [name for name, _ in host.calls]
    assert names == ["create", "opengl"]


def test_all_flags_call_everything_in_order():
    host = FakeHost(MONITORS)
    manager, _ = _manager(host)
    window = manager.create_window(
        "title", WindowFlags.VISIBLE | WindowFlags.IMGUI | WindowFlags.OPENGL
    )
    assert [name for name, _ in host.calls] == ["create", "opengl", "imgui", "show"]
    assert host.calls[0][1] == ("title", window.width, window.height, window.x, window.y)


def test_failed_window_create_raises_after_all_steps():
    host = FakeHost(MONITORS, create_ok=False)
    manager, _ = _manager(host)
    with pytest.raises(RuntimeError):
        manager.create_window("title", WindowFlags.VISIBLE)
    assert [name for name, _ in host.calls] == ["create", "show"]


def test_missing_primary_monitor_raises():
    manager, _ = _manager(FakeHost([Monitor(id=1, width=800, height=600)]))
    with pytest.raises(ValueError):
        manager.create_window("title", WindowFlags.NONE)


def test_frame_calls_reach_platform():
    host = FakeHost(MONITORS)
    manager, _ = _manager(host)
    manager.frame_start()
    manager.frame_render()
    assert [name for name, _ in host.calls] == ["frame_start", "frame_render"]


def test_frame_failure_raises():
    manager, _ = _manager(FakeHost(MONITORS, frame_ok=False))
    with pytest.raises(RuntimeError):
        manager.frame_start()
    with pytest.raises(RuntimeError):
        manager.frame_render()