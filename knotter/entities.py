"""Ball records as stored in the server's transaction log."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID

NIL_UUID = UUID(int=0)

Vector = tuple[float, float, float]


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _required(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None


def _as_float(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field `{key}` must be a number")
    return float(value)


def _as_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"field `{key}` must be a boolean")
    return value


def _xyz(data: Any) -> Vector:
    data = _require_mapping(data)
    return (
        _as_float(_required(data, "x"), "x"),
        _as_float(_required(data, "y"), "y"),
        _as_float(_required(data, "z"), "z"),
    )


@dataclass
class PositionEntity:
    """A ball position relative to the globe centre."""

    x: float
    y: float
    z: float

    def distance_squared(self, other: PositionEntity) -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return dx * dx + dy * dy + dz * dz

    def to_vector(self) -> Vector:
        return (self.x, self.y, self.z)


@dataclass
class ImpulseEntity:
    """An impulse given to a moving ball."""

    x: float
    y: float
    z: float

    def to_vector(self) -> Vector:
        return (self.x, self.y, self.z)


@dataclass
class BallEntity:
    """One insert or delete entry of the log."""

    is_fixed: bool = False
    is_insert: bool = False
    uuid: UUID = NIL_UUID
    color: str | None = None
    position: PositionEntity | None = None
    impulse: ImpulseEntity | None = None

    @classmethod
    def new(cls, uuid: UUID, is_insert: bool) -> BallEntity:
        """A bare entry for the given ball, as used for deletions."""
        return cls(is_fixed=False, is_insert=is_insert, uuid=uuid)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_fixed": self.is_fixed,
            "is_insert": self.is_insert,
            "uuid": str(self.uuid),
            "color": self.color,
            "position": None
            if self.position is None
            else {"x": float(self.position.x), "y": float(self.position.y), "z": float(self.position.z)},
            "impulse": None
            if self.impulse is None
            else {"x": float(self.impulse.x), "y": float(self.impulse.y), "z": float(self.impulse.z)},
        }

    @classmethod
    def from_dict(cls, data: Any) -> BallEntity:
        data = _require_mapping(data)
        raw_uuid = _required(data, "uuid")
        if not isinstance(raw_uuid, str):
            raise ValueError("field `uuid` must be a string")
        try:
            ball_uuid = UUID(raw_uuid)
        except ValueError:
            raise ValueError(f"field `uuid` is not a valid UUID: {raw_uuid!r}") from None
        color = data.get("color")
        if color is not None and not isinstance(color, str):
            raise ValueError("field `color` must be a string")
        position = data.get("position")
        impulse = data.get("impulse")
        return cls(
            is_fixed=_as_bool(_required(data, "is_fixed"), "is_fixed"),
            is_insert=_as_bool(_required(data, "is_insert"), "is_insert"),
            uuid=ball_uuid,
            color=color,
            position=None if position is None else PositionEntity(*_xyz(position)),
            impulse=None if impulse is None else ImpulseEntity(*_xyz(impulse)),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> BallEntity:
        return cls.from_dict(json.loads(text))