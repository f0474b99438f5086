# flyby

The core of a small 2D game engine. It uses only the standard library.

The engine does not talk to an operating system itself. The host passes in a
`PlatformApi` that holds plain callables for page size, time, windows, monitors
and memory. The engine works through those callables.

## Modules

- `flyby.platform`
  - `PlatformApi` is a dataclass of sixteen optional callables:
    - `system_page_size`, `system_allocation_granularity`, `system_time_ms`, `system_sleep`
    - `window_create`, `window_destroy`, `window_frame_start`, `window_frame_render`, `window_show`, `window_opengl_init`, `window_imgui_init`
    - `monitor_count`, `monitor_info`
    - `memory_reserve`, `memory_release`, `memory_commit`
  - `validate()` returns the api. If any callable is missing, it raises `ValueError` and names every missing one.
- `flyby.memory`
  - `align(size, alignment)` rounds a size up to a multiple of `alignment`.
  - `GlobalStack` is a 64 KiB bump stack. It has `push` and `push_aligned`, and raises `MemoryError` when it overflows.
  - `EngineMemory.reserve()` asks the platform for the page size and granularity, then reserves address space.
  - `EngineMemory.commit()` hands out page-aligned commits in order. Each commit is backed by a `bytearray`.
  - `EngineMemory` also has these accessors:
    - `commit_size`, `commit_offset`, `commit_address`, `commit_view`
    - `view(offset, size)`
    - `page_count`, `size_committed`
    - `global_push`, `global_push_aligned`
  - Going past `commit_count_max` raises `RuntimeError`.
- `flyby.config`
  - `EngineConfig` is a frozen dataclass of engine limits. The defaults are:
    - 2 GiB reservation
    - 128 commits
    - 64 KiB global stack
    - 4 KiB minimum arena and 64 arenas
    - 32-character tags and 1024 tags
    - window title `"It Flies By"`
  - Every number must fit in 16 bits.
  - `EngineState` is an `IntEnum` with `NOT_RUNNING`, `FATAL`, `STARTUP`, `SHUTDOWN`, `IDLE` and `FRAME_EXECUTE`.
- `flyby.tags`
  - `TagManager` stores up to `tag_count_max` tags. Each tag is cut to `tag_c_str_length` characters and stored in the first free slot.
  - A slot with hash `0` is free.
  - It has `reserve`, `release`, `tag` and `hash`.
  - `hash_tag(text, length)` is a BLAKE2b-based 64-bit hash that never returns `0`.
- `flyby.arenas`
  - `ArenaManager` commits arenas from an `EngineMemory`.
  - For each arena it records the commit id, tag id, start address and size.
  - It has `commit_arena`, `align_size_to_arena`, `commit_id`, `tag_id`, `size`, `start` and `view`.
- `flyby.graphics`
  - `GraphicsManager` reads `Monitor` records from the platform.
  - `create_window(title, flags)` creates a `Window` on the primary monitor. The window is half the monitor's size and centred on it.
  - `create_window` calls the OpenGL, ImGui and show hooks for the given `WindowFlags`.
  - `frame_start()` and `frame_render()` call the matching platform hooks. They raise `RuntimeError` when a hook fails.
- `flyby.context`
  - `EngineContext(platform, config=None)` validates the platform and reserves memory. It then pushes its records onto the global stack and builds the tag, arena and graphics managers.
  - `startup()` opens the visible OpenGL/ImGui window.
  - `update_and_render()` runs one frame.
  - `destroy()` releases the reservation through the platform.
  - `EngineCore` holds the `EngineState` and the time the context was created. The state becomes `FATAL` when a step fails.
- `flyby.core`
  - `commit_arena(context, tag, size_minimum)`, `arena_info`, `arena_page_start`, `arena_tag` and `arena_view` work on arenas through a context.
  - `commit_arena` and `arena_info` return frozen `Arena` records with `id`, `size`, `start` and `tag`.
- `flyby.allocators`
  - `LinearAllocator.commit(context, tag, size_minimum)` builds a bump allocator over a new arena.
  - `reserve(size)` moves the position forward and returns the address just past the reserved bytes. It raises `MemoryError` when the arena is full.
  - `current_offset()` gives the address of the next free byte.
- `flyby.physics`
  - `Physics` keeps position, scale, rotation and velocity tables for up to 128 objects (`OBJECTS_MAX`).
  - `create_transform` claims a slot.
  - `update_position`, `update_scale`, `update_rotation_degrees`, `update_rotation_radians`, `update_id` and `update_velocity` set values.
  - `apply_dynamics()` adds each velocity to its position, then clears all velocities.
  - `transforms(ids)` returns 3×3 translation·rotation·scale matrices.
  - `update()` applies dynamics and returns the transform of every slot.
  - `translation`, `scaling` and `rotation` build the single matrices. `Vec2` is the vector type.
- `flyby.assets`
  - `AssetStore.open(directory)` opens `ItFliesBy.Assets.Shaders.ifb` and `ItFliesBy.Assets.Images.ifb`. It checks their `IFB` header and loads their index tables.
  - It provides `shader_allocation_size`, `load_shaders`, `image_allocation_size` and `load_image`.
  - It is also a context manager.
  - `read_index_count` and `read_indexes` read a single file.
  - `AssetFileIndex` packs and unpacks the 44-byte index records.
  - `ShaderAsset` and `ImageAsset` name the entries in each file. `ImageData` holds a loaded image.

## Examples

### Physics

```python
from flyby.physics import Physics, Vec2

physics = Physics()
pid = physics.create_transform(Vec2(0.0, 0.0), Vec2(0.5, 0.5), 0.0)
physics.update_velocity(pid, Vec2(1.0, 0.0))
transforms = physics.update()
print(physics.position(pid))   # Vec2(x=1.0, y=0.0)
```

### An engine context with a stand-in platform

```python
from flyby.allocators import LinearAllocator
from flyby.context import EngineContext
from flyby.core import commit_arena
from flyby.graphics import Monitor
from flyby.platform import PlatformApi

platform = PlatformApi(
    system_page_size=lambda: 4096,
    system_allocation_granularity=lambda: 65536,
    system_time_ms=lambda: 0,
    system_sleep=lambda ms: None,
    window_create=lambda title, width, height, x, y: True,
    window_destroy=lambda: True,
    window_frame_start=lambda: True,
    window_frame_render=lambda: True,
    window_show=lambda: True,
    window_opengl_init=lambda: True,
    window_imgui_init=lambda: True,
    monitor_count=lambda: 1,
    monitor_info=lambda count: [Monitor(id=0, width=1920, height=1080, primary=True)],
    memory_reserve=lambda size: 0x10000000,
    memory_release=lambda address, size: True,
    memory_commit=lambda address, size: address,
)

context = EngineContext(platform)
context.startup()
context.update_and_render()

arena = commit_arena(context, "scratch", 10_000)
print(arena.size)              # 12288: rounded up to whole pages

allocator = LinearAllocator.commit(context, "frame", 4096)
end = allocator.reserve(64)    # address just past the 64 reserved bytes

context.destroy()
```

### Assets

```python
from flyby.assets import AssetStore, ImageAsset

with AssetStore.open("assets") as store:
    image = store.load_image(ImageAsset.CALIBRATION_CONNOR)
    print(image.width_pixels, image.height_pixels)
```

## What it does not do

- There is no command-line program and no game loop. You call the pieces from your own code.
- Nothing is drawn. Windows, frames and memory reservation all go through the callables in `PlatformApi`, which the host must supply.
- `LinearAllocator` only moves forward. It has no release, no save points and no reset.
- There is no tag lookup by name, and there is no sprite, scene or renderer layer.

## Tests

```
pip install -e .[test]
pytest
```