"""Turning received ball transactions into balls to place on the globe."""

from __future__ import annotations

import logging
import math
import random
import string
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from uuid import UUID

from knotter.dtos import BallDto, BallTransactionDto, ImpulseDto, PositionDto

log = logging.getLogger(__name__)

Vector = tuple[float, float, float]
Rgba = tuple[float, float, float, float]

WHITE: Rgba = (1.0, 1.0, 1.0, 1.0)
MIN_DISTANCE = 0.1


@dataclass(frozen=True)
class PlacedBall:
    """A ball ready to be spawned: fixed when it has no impulse."""

    uuid: UUID
    position: Vector
    rgba: Rgba
    impulse: Vector | None = None

    @property
    def is_fixed(self) -> bool:
        return self.impulse is None


def _to_u8(component: float) -> int:
    # Truncating, saturating conversion of a 0..1 channel to a byte.
    value = component * 255.0
    if math.isnan(value) or value <= 0.0:
        return 0
    if value >= 255.0:
        return 255
    return int(value)


def color_to_hex(rgba: Sequence[float]) -> str:
    """An ``#RRGGBBAA`` string for a colour with channels in the range 0..1."""
    r, g, b, a = (_to_u8(c) for c in rgba)
    return f"#{r:02X}{g:02X}{b:02X}{a:02X}"


def hex_to_rgba(hex_color: str) -> Rgba:
    """Parse ``RGB``, ``RGBA``, ``RRGGBB`` or ``RRGGBBAA`` hex, with optional '#'."""
    digits = hex_color[1:] if hex_color.startswith("#") else hex_color
    if not digits or any(ch not in string.hexdigits for ch in digits):
        raise ValueError(f"invalid hex colour: {hex_color!r}")
    if len(digits) in (3, 4):
        channels = [int(ch * 2, 16) for ch in digits]
    elif len(digits) in (6, 8):
        channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
    else:
        raise ValueError(f"invalid hex colour length: {hex_color!r}")
    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = (c / 255.0 for c in channels)
    return (r, g, b, a)


def partition_transactions(
    transactions: Iterable[BallTransactionDto],
) -> tuple[list[UUID], list[UUID]]:
    """Split a batch into the uuids to insert and the uuids to delete.

    A ball deleted later in the batch is dropped from the inserts. Both lists
    keep the order in which the uuids first appear.
    """
    to_insert: dict[UUID, None] = {}
    to_delete: dict[UUID, None] = {}
    for transaction in transactions:
        ball_uuid = transaction.ball_dto.uuid
        if transaction.ball_dto.is_insert:
            to_insert[ball_uuid] = None
        else:
            to_insert.pop(ball_uuid, None)
            to_delete[ball_uuid] = None
    return list(to_insert), list(to_delete)


def _too_close(point: Vector, occupied: Iterable[Vector], min_distance: float) -> bool:
    return any(math.dist(point, other) < min_distance for other in occupied)


def generate_valid_position(
    occupied: Sequence[Vector],
    min_distance: float = MIN_DISTANCE,
    rng: random.Random | None = None,
) -> Vector:
    """A random point on the unit sphere at least ``min_distance`` from all occupied points."""
    source = rng if rng is not None else random.Random()
    while True:
        x, y, z = (source.uniform(-1.0, 1.0) for _ in range(3))
        length = math.sqrt(x * x + y * y + z * z)
        if length == 0.0:
            continue
        candidate = (x / length, y / length, z / length)
        if not _too_close(candidate, occupied, min_distance):
            return candidate


def plan_insertions(
    transactions: Sequence[BallTransactionDto],
    existing: Mapping[UUID, Vector],
    min_distance: float = MIN_DISTANCE,
    rng: random.Random | None = None,
) -> list[PlacedBall]:
    """The balls of a batch that should be spawned, in insertion order.

    Balls already present are skipped. A moving ball that would overlap an
    existing ball or one placed earlier in the batch is moved to a free random
    spot. Transactions without a position, and moving balls without an
    impulse, are skipped with an error logged.
    """
    to_insert, _ = partition_transactions(transactions)
    placed: list[PlacedBall] = []
    inserted_positions: list[Vector] = []
    for ball_uuid in to_insert:
        if ball_uuid in existing:
            continue
        transaction = next(t for t in transactions if t.ball_dto.uuid == ball_uuid)
        dto = transaction.ball_dto
        if dto.position is None:
            log.error("Received ball transaction without position. UUID: %s", ball_uuid)
            continue
        position: Vector = (dto.position.x, dto.position.y, dto.position.z)
        if not dto.is_fixed:
            occupied = [*existing.values(), *inserted_positions]
            if _too_close(position, occupied, min_distance):
                position = generate_valid_position(occupied, min_distance, rng)

        rgba = WHITE if dto.color is None else hex_to_rgba(dto.color)
        if dto.is_fixed:
            placed.append(PlacedBall(ball_uuid, position, rgba))
        elif dto.impulse is None:
            log.error("Missing impulse! Not good on a moving ball.")
        else:
            impulse = (dto.impulse.x, dto.impulse.y, dto.impulse.z)
            placed.append(PlacedBall(ball_uuid, position, rgba, impulse))
        inserted_positions.append(position)
    return placed


def build_insert_ball_dto(
    ball_uuid: UUID,
    position: Vector,
    impulse: Vector | None,
    rgba: Sequence[float],
) -> BallDto:
    """The insert message for a ball the user placed; fixed when there is no impulse."""
    return BallDto(
        is_fixed=impulse is None,
        is_insert=True,
        uuid=ball_uuid,
        color=color_to_hex(rgba),
        position=PositionDto(*position),
        impulse=None if impulse is None else ImpulseDto(*impulse),
    )