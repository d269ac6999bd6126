"""Conversion between wire DTOs and stored ball entities."""

from __future__ import annotations

from knotter.dtos import BallDto, ImpulseDto, PositionDto
from knotter.entities import BallEntity, ImpulseEntity, PositionEntity


def dto_to_entity(dto: BallDto) -> BallEntity:
    return BallEntity(
        is_fixed=dto.is_fixed,
        is_insert=dto.is_insert,
        uuid=dto.uuid,
        color=dto.color,
        position=None
        if dto.position is None
        else PositionEntity(dto.position.x, dto.position.y, dto.position.z),
        impulse=None
        if dto.impulse is None
        else ImpulseEntity(dto.impulse.x, dto.impulse.y, dto.impulse.z),
    )


def entity_to_dto(entity: BallEntity) -> BallDto:
    return BallDto(
        is_fixed=entity.is_fixed,
        is_insert=entity.is_insert,
        uuid=entity.uuid,
        color=entity.color,
        position=None
        if entity.position is None
        else PositionDto(entity.position.x, entity.position.y, entity.position.z),
        impulse=None
        if entity.impulse is None
        else ImpulseDto(entity.impulse.x, entity.impulse.y, entity.impulse.z),
    )