"""
Timestamp helpers for inserted and updated entities.

All timestamps are timezone-aware UTC datetimes.
"""

from datetime import datetime, timezone

from entity_dao.domain import Entity, EntityProperties


def stamp_for_insert(properties: EntityProperties, entity: Entity) -> None:
    if properties.timestamp:
        entity.date_created = datetime.now(timezone.utc)


def stamp_for_update(properties: EntityProperties, entity: Entity) -> None:
    if properties.timestamp:
        entity.last_update = datetime.now(timezone.utc)
