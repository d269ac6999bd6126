"""Data transfer objects exchanged between the globe client and the API server."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

NIL_UUID = UUID(int=0)

_COMPACT = (",", ":")


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _required(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None


def _as_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"field `{key}` must be a boolean")
    return value


def _as_float(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field `{key}` must be a number")
    return float(value)


def _as_str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _as_uuid(value: Any, key: str) -> UUID:
    text = _as_str(value, key)
    try:
        return UUID(text)
    except ValueError:
        raise ValueError(f"field `{key}` is not a valid UUID: {text!r}") from None


def _vector_to_dict(vector: PositionDto | ImpulseDto) -> dict[str, float]:
    return {"x": float(vector.x), "y": float(vector.y), "z": float(vector.z)}


def _vector_fields(data: Any) -> tuple[float, float, float]:
    data = _require_mapping(data)
    return tuple(_as_float(_required(data, axis), axis) for axis in ("x", "y", "z"))  # type: ignore[return-value]


@dataclass
class PositionDto:
    """A point in globe space."""

    x: float
    y: float
    z: float

    def to_dict(self) -> dict[str, float]:
        return _vector_to_dict(self)

    @classmethod
    def from_dict(cls, data: Any) -> PositionDto:
        return cls(*_vector_fields(data))


@dataclass
class ImpulseDto:
    """An impulse vector applied to a moving ball."""

    x: float
    y: float
    z: float

    def to_dict(self) -> dict[str, float]:
        return _vector_to_dict(self)

    @classmethod
    def from_dict(cls, data: Any) -> ImpulseDto:
        return cls(*_vector_fields(data))


@dataclass
class BallDto:
    """A ball insert or delete as sent over the wire."""

    is_fixed: bool = False
    is_insert: bool = False
    uuid: UUID = NIL_UUID
    color: str | None = None
    position: PositionDto | None = None
    impulse: ImpulseDto | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_fixed": self.is_fixed,
            "is_insert": self.is_insert,
            "uuid": str(self.uuid),
            "color": self.color,
            "position": None if self.position is None else self.position.to_dict(),
            "impulse": None if self.impulse is None else self.impulse.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Any) -> BallDto:
        data = _require_mapping(data)
        color = data.get("color")
        position = data.get("position")
        impulse = data.get("impulse")
        return cls(
            is_fixed=_as_bool(_required(data, "is_fixed"), "is_fixed"),
            is_insert=_as_bool(_required(data, "is_insert"), "is_insert"),
            uuid=_as_uuid(_required(data, "uuid"), "uuid"),
            color=None if color is None else _as_str(color, "color"),
            position=None if position is None else PositionDto.from_dict(position),
            impulse=None if impulse is None else ImpulseDto.from_dict(impulse),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=_COMPACT)

    @classmethod
    def from_json(cls, text: str) -> BallDto:
        return cls.from_dict(json.loads(text))


InsertBallDto = BallDto


@dataclass
class BallTransactionDto:
    """One logged ball change with the id of its transaction."""

    transaction_id: str
    ball_dto: BallDto

    def to_dict(self) -> dict[str, Any]:
        return {"transaction_id": self.transaction_id, "ball_dto": self.ball_dto.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> BallTransactionDto:
        data = _require_mapping(data)
        return cls(
            transaction_id=_as_str(_required(data, "transaction_id"), "transaction_id"),
            ball_dto=BallDto.from_dict(_required(data, "ball_dto")),
        )


@dataclass
class GetBallTransactionsByGlobeIdResponseDto:
    """The batch of transactions returned for a globe."""

    ball_transactions: list[BallTransactionDto] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"ball_transactions": [t.to_dict() for t in self.ball_transactions]}

    @classmethod
    def from_dict(cls, data: Any) -> GetBallTransactionsByGlobeIdResponseDto:
        data = _require_mapping(data)
        items = _required(data, "ball_transactions")
        if not isinstance(items, list):
            raise ValueError("field `ball_transactions` must be a list")
        return cls([BallTransactionDto.from_dict(item) for item in items])


@dataclass
class GetNewGlobeIdResponse:
    """A freshly allocated globe id."""

    new_globe_id: str

    def to_dict(self) -> dict[str, str]:
        return {"new_globe_id": self.new_globe_id}

    @classmethod
    def from_dict(cls, data: Any) -> GetNewGlobeIdResponse:
        data = _require_mapping(data)
        return cls(_as_str(_required(data, "new_globe_id"), "new_globe_id"))


@dataclass
class HealthResponse:
    """Body of the health check reply."""

    message: str

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message}


@dataclass
class InsertBallResponseDto:
    """Reply to a successful ball insert."""

    message: str
    globe_id: str
    transaction_id: str

    def to_dict(self) -> dict[str, str]:
        return {
            "message": self.message,
            "globe_id": self.globe_id,
            "transaction_id": self.transaction_id,
        }

    @classmethod
    def from_dict(cls, data: Any) -> InsertBallResponseDto:
        data = _require_mapping(data)
        return cls(
            message=_as_str(_required(data, "message"), "message"),
            globe_id=_as_str(_required(data, "globe_id"), "globe_id"),
            transaction_id=_as_str(_required(data, "transaction_id"), "transaction_id"),
        )