"""
Identifier helpers.
"""

import logging
import uuid
from typing import Any

from entity_dao.domain import Entity, EntityProperties

logger = logging.getLogger(__name__)


def is_blank(value: Any) -> bool:
    """True for None and for strings made only of whitespace."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def is_valid_id(value: Any) -> bool:
    return isinstance(value, str) and not is_blank(value)


def generate_identifier() -> str:
    return uuid.uuid4().hex


def assign_identifier(properties: EntityProperties, entity: Entity) -> None:
    """Give the entity a fresh uuid4 id when the DAO generates ids."""
    if not properties.identifier_generated:
        return
    entity.id = generate_identifier()
    logger.debug(
        "Generated entity identifier",
        extra={
            "entity_type": type(entity).__name__,
            "entity_id": entity.id,
        },
    )
