"""
Generic data access object.

AbstractDataAccessObject is the base class of every entity DAO. It owns the
engine independent half of persistence and delegates storage to a DbEngine:

1. Encapsulates all database operations of one collection.

2. Provides simple validation hooks. Validating content is not the DAO's
   job, but the DAO defines how and when validation happens:
   ``validate_entity`` for field checks that need no database and
   ``validate_before_insert`` / ``validate_before_update`` for checks
   against the collection, such as duplicated records.

3. Assigns identifiers and timestamps according to its EntityProperties.

4. Converts between domain entities and stored documents through
   ``convert_before_save`` and ``convert_after_db_operation``.

Document databases do not enforce relational integrity, so no DAO validates
its content against another DAO's collection. Business rules spanning more
than one collection belong to a service.

Validation failures raise EntityValidationError and identifier problems
raise IdentifierError. Errors beyond the DAO (driver or database errors)
propagate unchanged.
"""

import logging
from typing import Any, ClassVar, Generic, List, Optional, Type, TypeVar

from entity_dao.domain import (
    AttributeFilter,
    Entity,
    EntityProperties,
    FieldError,
)

from .engine import DbEngine, Document
from .errors import EntityValidationError, IdentifierError
from .ids import assign_identifier, is_blank
from .query import Query
from .timestamps import stamp_for_insert, stamp_for_update

T = TypeVar("T", bound=Entity)

# Bookkeeping attributes copied back after custom conversions
EXTRA_VALUE_ATTRIBUTES = ("id", "date_created", "last_update")


class AbstractDataAccessObject(Generic[T]):
    """
    Base class of a DAO per entity.

    Subclasses set ``entity_class`` and override the validation hooks they
    need. Everything else works out of the box on any DbEngine.
    """

    entity_class: ClassVar[Type[Entity]] = Entity

    def __init__(
        self,
        engine: DbEngine,
        entity_properties: Optional[EntityProperties] = None,
    ) -> None:
        """Initialize the DAO.

        Args:
            engine: DbEngine protocol implementation for the collection
            entity_properties: Identifier and timestamp behaviour. Defaults
                to generated identifiers with timestamps.
        """
        self.engine = engine
        self.entity_properties = entity_properties or EntityProperties()
        self.logger = logging.getLogger(type(self).__name__)

    async def insert(self, entity: T) -> T:
        """Insert an entity.

        Performs the following steps:

        1. Checks the id: it must be empty when the DAO generates ids and
           present when it does not.
        2. Validates the entity with ``validate_entity``.
        3. Validates the entity against the collection with
           ``validate_before_insert``.
        4. Assigns a uuid4 id when the DAO generates ids.
        5. Sets ``date_created`` when timestamping.
        6. Stores ``convert_before_save(entity)`` through the engine.
        7. Returns the stored document converted back into an entity.

        Steps 4 and 5 work on a copy, so the given entity is left untouched
        and can be inserted again if the engine write fails.

        Raises:
            IdentifierError: If the id is present or missing when it
                should not be
            EntityValidationError: If any validation fails
        """
        self.logger.debug(
            "Call to insert",
            extra={"entity_type": type(entity).__name__},
        )
        self._check_identifier_for_insert(entity)
        self._raise_on_errors(entity, self.validate_entity(entity))
        self._raise_on_errors(
            entity, await self.validate_before_insert(entity)
        )

        entity = entity.model_copy(deep=True)
        assign_identifier(self.entity_properties, entity)
        stamp_for_insert(self.entity_properties, entity)
        stored = await self.engine.insert(self._to_document(entity))
        return self._to_entity(stored)

    async def insert_many(self, entities: List[T]) -> List[T]:
        """Insert several entities with a single engine call.

        Every entity is checked before anything is written; one bad entity
        rejects the whole batch. This method does NOT run
        ``validate_before_insert``: the data must already be consistent
        with the collection.
        """
        self.logger.debug(
            "Call to insert_many",
            extra={"entity_count": len(entities)},
        )
        for entity in entities:
            self._check_identifier_for_insert(entity)
        for entity in entities:
            self._raise_on_errors(entity, self.validate_entity(entity))

        documents = []
        for entity in entities:
            entity = entity.model_copy(deep=True)
            assign_identifier(self.entity_properties, entity)
            stamp_for_insert(self.entity_properties, entity)
            documents.append(self._to_document(entity))

        stored = await self.engine.insert_many(documents)
        return [self._to_entity(document) for document in stored]

    async def update(self, entity: T) -> T:
        """Update an entity.

        Performs the following steps:

        1. Checks the entity has an id.
        2. Validates the entity with ``validate_entity``.
        3. Validates the entity against the collection with
           ``validate_before_update``.
        4. Sets ``last_update`` when timestamping.
        5. Replaces the stored document through the engine.
        6. Returns the stored document converted back into an entity.

        Raises:
            IdentifierError: If the entity has no id
            EntityValidationError: If any validation fails
            RecordNotFoundError: If no record has the entity's id
        """
        self.logger.debug(
            "Call to update",
            extra={
                "entity_type": type(entity).__name__,
                "entity_id": entity.id,
            },
        )
        if is_blank(entity.id):
            self.logger.error(
                "Entity to update does not have an id",
                extra={"entity_type": type(entity).__name__},
            )
            raise IdentifierError("Object does not have an id")

        self._raise_on_errors(entity, self.validate_entity(entity))
        self._raise_on_errors(
            entity, await self.validate_before_update(entity)
        )

        stamp_for_update(self.entity_properties, entity)
        stored = await self.engine.update(self._to_document(entity))
        return self._to_entity(stored)

    async def update_or_insert(self, entity: T) -> T:
        """Update the entity when it has an id, insert it otherwise."""
        self.logger.debug(
            "Call to update_or_insert",
            extra={"entity_id": entity.id},
        )
        if is_blank(entity.id):
            return await self.insert(entity)
        return await self.update(entity)

    async def find_one_by_id(self, entity_id: str) -> Optional[T]:
        """Return the entity with that id, or None."""
        document = await self.engine.find_one_by_id(entity_id)
        return None if document is None else self._to_entity(document)

    async def find_all_by_ids(self, entity_ids: List[str]) -> List[T]:
        """Return every entity whose id is in the list."""
        return self._to_entities(await self.engine.find_all_by_ids(entity_ids))

    async def find_all(self) -> List[T]:
        return self._to_entities(await self.engine.find_all())

    async def find_one_by_attribute(
        self, attribute_name: str, value: Any
    ) -> Optional[T]:
        """Return the only entity whose attribute equals the value.

        Raises:
            MultipleRecordsError: If more than one entity matches
        """
        document = await self.engine.find_one_by_attribute(
            attribute_name, value
        )
        return None if document is None else self._to_entity(document)

    async def find_all_by_attribute(
        self, attribute_name: str, value: Any
    ) -> List[T]:
        return self._to_entities(
            await self.engine.find_all_by_attribute(attribute_name, value)
        )

    async def find_all_by_attribute_name_in(
        self, attribute_name: str, values: List[Any]
    ) -> List[T]:
        return self._to_entities(
            await self.engine.find_all_by_attribute_name_in(
                attribute_name, values
            )
        )

    async def find_all_by_attributes_and_operator(
        self, filters: List[AttributeFilter]
    ) -> List[T]:
        return self._to_entities(
            await self.engine.find_all_by_attributes_and_operator(filters)
        )

    async def find_all_by_attributes_or_operator(
        self, filters: List[AttributeFilter]
    ) -> List[T]:
        return self._to_entities(
            await self.engine.find_all_by_attributes_or_operator(filters)
        )

    async def find_all_by_query(self, query: Query) -> List[T]:
        """Return every entity matching a mongo-like query."""
        return self._to_entities(await self.engine.find_all_by_query(query))

    async def remove(self, entity: T) -> None:
        """Delete the entity.

        WARNING: No relational integrity rule protects this operation.
        """
        self.logger.debug("Call to remove", extra={"entity_id": entity.id})
        if is_blank(entity.id):
            raise IdentifierError("Object does not have an id")
        await self.engine.remove(self._to_document(entity))

    async def remove_by_id(self, entity_id: str) -> None:
        self.logger.debug(
            "Call to remove_by_id", extra={"entity_id": entity_id}
        )
        await self.engine.remove_by_id(entity_id)

    async def count(self) -> int:
        return await self.engine.count()

    async def delete_all(self) -> None:
        """Delete every entity of the collection.

        WARNING: No relational integrity rule protects this operation.
        """
        self.logger.debug("Call to delete_all")
        await self.engine.delete_all()

    async def delete_all_by_ids(self, entity_ids: List[str]) -> None:
        self.logger.debug(
            "Call to delete_all_by_ids",
            extra={"entity_count": len(entity_ids)},
        )
        await self.engine.delete_all_by_ids(entity_ids)

    def validate_entity(self, entity: T) -> List[FieldError]:
        """Field validations that need no database, such as blank values.

        Returns:
            The validation errors, an empty list when there are none
        """
        return []

    async def validate_before_insert(self, entity: T) -> List[FieldError]:
        """Validations against the collection before an insert, such as
        duplicated records."""
        return []

    async def validate_before_update(self, entity: T) -> List[FieldError]:
        """Validations against the collection before an update."""
        return []

    def convert_before_save(self, entity: T) -> Document:
        """Transform the entity into the document to store."""
        return entity.model_dump()

    def convert_after_db_operation(self, document: Document) -> T:
        """Transform a stored document into the entity of this DAO."""
        entity = self.entity_class.model_validate(document)
        return entity  # type: ignore[return-value]

    def _check_identifier_for_insert(self, entity: T) -> None:
        if self.entity_properties.identifier_generated:
            if entity.id is not None:
                self.logger.error(
                    "Entity to insert already has an id",
                    extra={"entity_id": entity.id},
                )
                raise IdentifierError("Object has a defined id")
        elif is_blank(entity.id):
            self.logger.error(
                "Entity to insert does not have an id and ids are not "
                "generated",
                extra={"entity_type": type(entity).__name__},
            )
            raise IdentifierError(
                "Object does not have an id and the dao does not generate ids"
            )

    def _raise_on_errors(self, entity: T, errors: List[FieldError]) -> None:
        if not errors:
            return
        self.logger.warning(
            "Entity has validation errors",
            extra={
                "entity_type": type(entity).__name__,
                "entity_id": entity.id,
                "errors": [error.model_dump() for error in errors],
            },
        )
        raise EntityValidationError(errors)

    def _to_document(self, entity: T) -> Document:
        document = self.convert_before_save(entity)
        for attribute in EXTRA_VALUE_ATTRIBUTES:
            value = getattr(entity, attribute)
            if value is not None:
                document[attribute] = value
        return document

    def _to_entity(self, document: Document) -> T:
        entity = self.convert_after_db_operation(document)
        for attribute in EXTRA_VALUE_ATTRIBUTES:
            value = document.get(attribute)
            if value is not None:
                setattr(entity, attribute, value)
        return entity

    def _to_entities(self, documents: List[Document]) -> List[T]:
        return [self._to_entity(document) for document in documents]
