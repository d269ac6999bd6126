"""State changes and camera arithmetic for orbiting and zooming around the globe."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

Vector = tuple[float, float, float]


class AppState(Enum):
    """What the pointer currently does in the client."""

    EDIT_UPSERT = "EditUpsert"
    EDIT_UPSERT_SET_SPEED = "EditUpsertSetSpeed"
    EDIT_DELETE = "EditDelete"
    ORBITING = "Orbiting"
    ZOOMING = "Zooming"

    @classmethod
    def default(cls) -> AppState:
        return cls.EDIT_UPSERT


@dataclass(frozen=True)
class TouchCameraConfig:
    """Speeds and limits of the orbit camera."""

    orbit_speed: float = 2.0
    pitch_speed: float = 1.0
    zoom_speed: float = 0.2
    max_pitch: float = 20.0 * math.pi / 180.0
    min_pitch: float = -20.0 * math.pi / 180.0
    max_zoom: float = 10.0
    min_zoom: float = 2.0
    drag_sensitivity: float = 0.005


def next_orbit_state(
    touch_count: int, current_state: AppState, touch_hits_globe: bool
) -> AppState | None:
    """The state to switch to given the touches on screen, or None to stay.

    Two touches mean zooming. One touch orbits unless it lands on the globe.
    Any other count returns to editing.
    """
    if touch_count == 2:
        return None if current_state is AppState.ZOOMING else AppState.ZOOMING
    if touch_count == 1:
        if current_state is AppState.ORBITING or touch_hits_globe:
            return None
        return AppState.ORBITING
    return None if current_state is AppState.EDIT_UPSERT else AppState.EDIT_UPSERT


def clamp_keyboard_pitch_change(
    current_pitch: float, pitch_change: float, config: TouchCameraConfig
) -> float:
    """Shrink a pitch change so the resulting pitch stays within the limits."""
    proposed = current_pitch + pitch_change
    if proposed < config.min_pitch:
        pitch_change += config.min_pitch - proposed
    elif proposed > config.max_pitch:
        pitch_change += config.max_pitch - proposed
    return pitch_change


def clamp_touch_pitch_change(
    current_pitch: float, pitch_change: float, config: TouchCameraConfig
) -> float:
    """Replace an out-of-range pitch change by the step that reaches the limit."""
    proposed = current_pitch + pitch_change
    if proposed < config.min_pitch:
        return config.min_pitch - current_pitch
    if proposed > config.max_pitch:
        return config.max_pitch - current_pitch
    return pitch_change


def _length(v: Vector) -> float:
    return math.sqrt(sum(c * c for c in v))


def _scaled_to(v: Vector, length: float) -> Vector:
    current = _length(v)
    if current == 0.0:
        raise ValueError("cannot rescale a zero vector")
    factor = length / current
    return (v[0] * factor, v[1] * factor, v[2] * factor)


def keyboard_zoom(translation: Vector, zoom_in: bool, config: TouchCameraConfig) -> Vector:
    """Move the camera one zoom step along its radius if it stays within range."""
    step = config.zoom_speed if zoom_in else -config.zoom_speed
    new_zoom = _length(translation) + step
    if config.min_zoom <= new_zoom <= config.max_zoom:
        return _scaled_to(translation, new_zoom)
    return translation


def pinch_zoom(
    translation: Vector,
    forward: Vector,
    current_distance: float,
    previous_distance: float,
    config: TouchCameraConfig,
) -> Vector:
    """Move the camera along ``forward`` by the change in pinch distance, clamped."""
    zoom_amount = (current_distance - previous_distance) * config.zoom_speed
    moved = tuple(t + f * zoom_amount for t, f in zip(translation, forward))
    distance = _length(moved)  # type: ignore[arg-type]
    if distance == 0.0:
        raise ValueError("camera ended at the globe centre")
    if distance < config.min_zoom:
        return _scaled_to(moved, config.min_zoom)  # type: ignore[arg-type]
    if distance > config.max_zoom:
        return _scaled_to(moved, config.max_zoom)  # type: ignore[arg-type]
    return moved  # type: ignore[return-value]