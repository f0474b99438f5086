"""Position, scale, rotation and velocity tables for a fixed set of physics objects."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

OBJECTS_MAX = 128

Mat3 = tuple[tuple[float, float, float], tuple[float, float, float], tuple[float, float, float]]

IDENTITY: Mat3 = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))


@dataclass(frozen=True)
class Vec2:
    """A two-component vector used for positions, scales and velocities."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)


CENTER = Vec2(0.0, 0.0)


def translation(x: float, y: float) -> Mat3:
    """Matrix that moves a point by (x, y)."""
    return ((1.0, 0.0, float(x)), (0.0, 1.0, float(y)), (0.0, 0.0, 1.0))


def scaling(x: float, y: float) -> Mat3:
    """Matrix that scales by x and y."""
    return ((float(x), 0.0, 0.0), (0.0, float(y), 0.0), (0.0, 0.0, 1.0))


def rotation(radians: float) -> Mat3:
    """Matrix that rotates counter-clockwise by ``radians``."""
    c = math.cos(radians)
    s = math.sin(radians)
    return ((c, -s, 0.0), (s, c, 0.0), (0.0, 0.0, 1.0))


def _multiply(a: Mat3, b: Mat3) -> Mat3:
    columns = tuple(zip(*b))
    return tuple(
        tuple(sum(x * y for x, y in zip(row, column)) for column in columns) for row in a
    )  # type: ignore[return-value]


def _trs(t: Mat3, r: Mat3, s: Mat3) -> Mat3:
    return _multiply(_multiply(t, r), s)


class Physics:
    """Struct-of-arrays store for up to ``OBJECTS_MAX`` objects."""

    def __init__(self) -> None:
        self._used = [False] * OBJECTS_MAX
        self._position_x = [0.0] * OBJECTS_MAX
        self._position_y = [0.0] * OBJECTS_MAX
        self._scale_x = [0.0] * OBJECTS_MAX
        self._scale_y = [0.0] * OBJECTS_MAX
        self._radians = [0.0] * OBJECTS_MAX
        self._velocity_x = [0.0] * OBJECTS_MAX
        self._velocity_y = [0.0] * OBJECTS_MAX

    def _check(self, physics_id: int) -> None:
        if not 0 <= physics_id < OBJECTS_MAX:
            raise IndexError(f"physics id {physics_id} out of range")

    def next_id(self) -> int:
        """Mark the first free slot as used and return its id."""
        try:
            physics_id = self._used.index(False)
        except ValueError:
            raise RuntimeError(f"no free physics slot ({OBJECTS_MAX} in use)") from None
        self._used[physics_id] = True
        return physics_id

    def create_transform(self, position: Vec2, scale: Vec2, rotation_degrees: float) -> int:
        """Claim a slot and set its position, scale and rotation."""
        physics_id = self.next_id()
        self.update_id(physics_id, position, scale, math.radians(rotation_degrees))
        return physics_id

    def update_position(self, physics_id: int, position: Vec2) -> None:
        self._check(physics_id)
        self._position_x[physics_id] = position.x
        self._position_y[physics_id] = position.y

    def update_scale(self, physics_id: int, scale: Vec2) -> None:
        self._check(physics_id)
        self._scale_x[physics_id] = scale.x
        self._scale_y[physics_id] = scale.y

    def update_rotation_degrees(self, physics_id: int, rotation_degrees: float) -> None:
        self.update_rotation_radians(physics_id, math.radians(rotation_degrees))

    def update_rotation_radians(self, physics_id: int, rotation_radians: float) -> None:
        self._check(physics_id)
        self._radians[physics_id] = rotation_radians

    def update_id(
        self, physics_id: int, position: Vec2, scale: Vec2, rotation_radians: float
    ) -> None:
        """Set position, scale and rotation at once."""
        self.update_position(physics_id, position)
        self.update_scale(physics_id, scale)
        self.update_rotation_radians(physics_id, rotation_radians)

    def update_velocity(self, physics_id: int, velocity: Vec2) -> None:
        self._check(physics_id)
        self._velocity_x[physics_id] = velocity.x
        self._velocity_y[physics_id] = velocity.y

    def position(self, physics_id: int) -> Vec2:
        self._check(physics_id)
        return Vec2(self._position_x[physics_id], self._position_y[physics_id])

    def scale(self, physics_id: int) -> Vec2:
        self._check(physics_id)
        return Vec2(self._scale_x[physics_id], self._scale_y[physics_id])

    def rotation_radians(self, physics_id: int) -> float:
        self._check(physics_id)
        return self._radians[physics_id]

    def velocity(self, physics_id: int) -> Vec2:
        self._check(physics_id)
        return Vec2(self._velocity_x[physics_id], self._velocity_y[physics_id])

    def apply_dynamics(self) -> None:
        """Move every object by its velocity, then clear all velocities."""
        self._position_x = [p + v for p, v in zip(self._position_x, self._velocity_x)]
        self._position_y = [p + v for p, v in zip(self._position_y, self._velocity_y)]
        self._velocity_x = [0.0] * OBJECTS_MAX
        self._velocity_y = [0.0] * OBJECTS_MAX

    def _transform(self, physics_id: int) -> Mat3:
        self._check(physics_id)
        return _trs(
            translation(self._position_x[physics_id], self._position_y[physics_id]),
            rotation(self._radians[physics_id]),
            scaling(self._scale_x[physics_id], self._scale_y[physics_id]),
        )

    def transforms(self, physics_ids: Iterable[int]) -> list[Mat3]:
        """Translation-rotation-scale matrices for the given ids, in order."""
        return [self._transform(physics_id) for physics_id in physics_ids]

    def update(self) -> list[Mat3]:
        """Apply dynamics and return the transform of every slot."""
        self.apply_dynamics()
        return self.transforms(range(OBJECTS_MAX))