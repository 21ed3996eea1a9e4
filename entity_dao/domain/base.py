"""
Base domain models shared by every persisted entity.

Every entity stored through a data access object carries the same three
bookkeeping fields: the identifier and the two timestamps. The value types
used across the persistence layer (validation problems, attribute filters
and the per-collection entity properties) live here as well so that domain
code never has to import from the persistence package.

All domain models use Pydantic BaseModel for validation, serialization,
and type safety.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class Entity(BaseModel):
    """Base class of every entity handled by a data access object.

    The identifier is ``None`` until the entity has been inserted. The
    timestamps are only filled in when the owning DAO has timestamping
    enabled in its EntityProperties.
    """

    id: Optional[str] = Field(
        default=None, description="Unique identifier of the record"
    )
    date_created: Optional[datetime] = Field(
        default=None, description="Moment the record was inserted"
    )
    last_update: Optional[datetime] = Field(
        default=None, description="Moment the record was last updated"
    )


class EntityProperties(BaseModel):
    """Per-collection behaviour switches for a data access object."""

    identifier_generated: bool = Field(
        default=True,
        description="When true the DAO assigns a uuid4 identifier on insert "
        "and rejects entities that already carry one. When false the "
        "caller must provide the identifier.",
    )
    timestamp: bool = Field(
        default=True,
        description="When true the DAO sets date_created on insert and "
        "last_update on update",
    )


class FieldError(BaseModel):
    """A single validation problem found on an entity."""

    attribute: str
    message: str
    value: Any = ""


class AttributeFilter(BaseModel):
    """An attribute/value equality filter used to compose queries."""

    attribute_name: str
    value: Any = None
