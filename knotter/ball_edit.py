"""Geometry of placing a ball: the speed marker, its impulse, bounces and delete mode."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from knotter.camera import AppState

Vector = tuple[float, float, float]
Quaternion = tuple[float, float, float, float]

SPEED_MARKER_MAX_LENGTH = 0.5
CAPSULE_RADIUS = 0.05
MARKER_LIFT = 0.1
MIN_MOVING_DEPTH = 0.05
IMPULSE_SCALE = 0.0006

_UP: Vector = (0.0, 1.0, 0.0)
_ONE_MINUS_EPS = 1.0 - 2.0 * 1.1920929e-07


def _length(v: Sequence[float]) -> float:
    return math.sqrt(sum(c * c for c in v))


def _normalized(v: Sequence[float], what: str) -> Vector:
    length = _length(v)
    if length == 0.0 or not math.isfinite(length):
        raise ValueError(f"{what} has no direction")
    return (v[0] / length, v[1] / length, v[2] / length)


def _add(a: Sequence[float], b: Sequence[float]) -> Vector:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _sub(a: Sequence[float], b: Sequence[float]) -> Vector:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _scale(v: Sequence[float], k: float) -> Vector:
    return (v[0] * k, v[1] * k, v[2] * k)


def _cross(a: Sequence[float], b: Sequence[float]) -> Vector:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _rotation_arc_from_up(to: Vector) -> Quaternion:
    """The shortest rotation (x, y, z, w) taking the +Y axis onto unit vector ``to``."""
    dot = _dot(_UP, to)
    if dot > _ONE_MINUS_EPS:
        return (0.0, 0.0, 0.0, 1.0)
    if dot < -_ONE_MINUS_EPS:
        # Half turn about an axis orthogonal to +Y.
        return (0.0, 0.0, -1.0, 0.0)
    c = _cross(_UP, to)
    q = (c[0], c[1], c[2], 1.0 + dot)
    n = _length(q)
    return (q[0] / n, q[1] / n, q[2] / n, q[3] / n)


def _rotate(q: Quaternion, v: Sequence[float]) -> Vector:
    qv = (q[0], q[1], q[2])
    w = q[3]
    t = _scale(_cross(qv, v), 2.0)
    return _add(_add(v, _scale(t, w)), _cross(qv, t))


@dataclass(frozen=True)
class SpeedMarker:
    """The capsule drawn while the user drags out a ball's speed and direction."""

    depth: float
    radius: float
    translation: Vector
    rotation: Quaternion

    @property
    def direction(self) -> Vector:
        """The unit vector the marker points along."""
        return _normalized(_rotate(self.rotation, _UP), "marker rotation")


def speed_marker(start: Sequence[float], end: Sequence[float]) -> SpeedMarker:
    """The marker from a placed ball at ``start`` towards the pointer at ``end``.

    The marker is at most ``SPEED_MARKER_MAX_LENGTH`` long and is lifted a
    little above the globe surface.
    """
    normal_start = _normalized(start, "start point")
    normal_end = _normalized(end, "end point")
    average_normal = _normalized(_add(normal_start, normal_end), "average normal")

    offset = _sub(end, start)
    length = _length(offset)
    orientation = _normalized(offset, "marker")
    if length > SPEED_MARKER_MAX_LENGTH:
        end = _add(start, _scale(orientation, SPEED_MARKER_MAX_LENGTH))
        length = SPEED_MARKER_MAX_LENGTH

    middle = _scale(_add(start, end), 0.5)
    shifted_middle = _add(middle, _scale(average_normal, MARKER_LIFT))

    return SpeedMarker(
        depth=length - CAPSULE_RADIUS * 2.0,
        radius=CAPSULE_RADIUS,
        translation=shifted_middle,
        rotation=_rotation_arc_from_up(orientation),
    )


def impulse_from_marker(marker: SpeedMarker) -> Vector | None:
    """The impulse a released marker gives its ball, or None if the ball stays fixed."""
    if not marker.depth > MIN_MOVING_DEPTH:
        return None
    return _scale(marker.direction, marker.depth * IMPULSE_SCALE)


def restore_speed(velocity: Sequence[float], speed: float) -> Vector:
    """``velocity`` rescaled to ``speed``, keeping its direction after a bounce."""
    return _scale(_normalized(velocity, "velocity"), speed)


def next_delete_state(delete_requested: bool, current_state: AppState) -> AppState | None:
    """The state to switch to when delete mode is asked for or released, or None to stay."""
    if delete_requested:
        return AppState.EDIT_DELETE if current_state is AppState.EDIT_UPSERT else None
    return AppState.EDIT_UPSERT if current_state is AppState.EDIT_DELETE else None