"""
Database engine protocol for the data access objects.

A DbEngine is the swappable, per-engine half of a data access object: it
knows how to store, query and delete plain documents (dictionaries) in one
collection of one database engine. The DAO on top of it owns everything
that is engine independent (validation, timestamps, identifiers and the
conversion between documents and domain entities).

All engine operations follow the same principles:

- **Plain documents**: Methods accept and return dictionaries keyed by
  ``"id"``, never driver specific types. Engines that store the identifier
  under another key translate it in both directions.

- **Copies**: Returned documents are copies. Mutating them never changes
  what is stored.

- **Graceful misses**: Single-result lookups return None when nothing
  matches, list lookups return an empty list and deletes of unknown ids
  are no-ops. Updating an unknown id raises RecordNotFoundError.

- **Mongo-like queries**: Queries use the MongoDB query language subset
  documented in ``entity_dao.persistence.query``.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from entity_dao.domain import AttributeFilter

from .errors import MultipleRecordsError
from .query import Query, and_query, or_query

Document = Dict[str, Any]

logger = logging.getLogger(__name__)


@runtime_checkable
class DbEngine(Protocol):
    """Document storage operations on a single collection."""

    async def find_one_by_id(self, entity_id: str) -> Optional[Document]:
        """Retrieve the document whose id matches.

        Args:
            entity_id: Identifier to look for

        Returns:
            The document if found, None otherwise
        """
        ...

    async def find_all_by_ids(self, entity_ids: List[str]) -> List[Document]:
        """Retrieve every document whose id is in the list."""
        ...

    async def find_all(self) -> List[Document]:
        """Retrieve every document of the collection."""
        ...

    async def find_one_by_attribute(
        self, attribute_name: str, value: Any
    ) -> Optional[Document]:
        """Retrieve the only document whose attribute equals the value.

        Raises:
            MultipleRecordsError: If more than one document matches
        """
        ...

    async def find_all_by_attribute(
        self, attribute_name: str, value: Any
    ) -> List[Document]:
        """Retrieve every document whose attribute equals the value."""
        ...

    async def find_all_by_attribute_name_in(
        self, attribute_name: str, values: List[Any]
    ) -> List[Document]:
        """Retrieve every document whose attribute equals any of the
        values."""
        ...

    async def find_all_by_attributes_and_operator(
        self, filters: List[AttributeFilter]
    ) -> List[Document]:
        """Retrieve every document matching all the filters."""
        ...

    async def find_all_by_attributes_or_operator(
        self, filters: List[AttributeFilter]
    ) -> List[Document]:
        """Retrieve every document matching at least one filter."""
        ...

    async def find_all_by_query(self, query: Query) -> List[Document]:
        """Retrieve every document matching a mongo-like query."""
        ...

    async def insert(self, document: Document) -> Document:
        """Store a new document. The document must carry its id.

        Returns:
            The stored document

        Raises:
            DuplicateRecordError: If the id is already stored (memory
                engine; the MongoDB driver raises DuplicateKeyError)
        """
        ...

    async def insert_many(self, documents: List[Document]) -> List[Document]:
        """Store several new documents at once."""
        ...

    async def update(self, document: Document) -> Document:
        """Replace the stored document that has the same id.

        Raises:
            RecordNotFoundError: If no document has that id
        """
        ...

    async def remove(self, document: Document) -> None:
        """Delete the stored document that has the same id."""
        ...

    async def remove_by_id(self, entity_id: str) -> None:
        """Delete the document whose id matches."""
        ...

    async def count(self) -> int:
        """Return the amount of documents in the collection."""
        ...

    async def delete_all(self) -> None:
        """Delete every document of the collection."""
        ...

    async def delete_all_by_ids(self, entity_ids: List[str]) -> None:
        """Delete every document whose id is in the list."""
        ...


class DbEngineQueryMixin(ABC):
    """
    Query operations shared by the engine implementations.

    Every lookup that can be expressed as a mongo-like query is derived
    from ``find_all_by_query``, so an engine only has to implement the
    primitive operations.
    """

    collection_name: str

    @abstractmethod
    async def find_all_by_query(self, query: Query) -> List[Document]:
        """Return copies of the documents matching the query."""

    @abstractmethod
    async def remove_by_id(self, entity_id: str) -> None:
        """Delete the document with this id, if any."""

    async def find_all_by_ids(self, entity_ids: List[str]) -> List[Document]:
        if not entity_ids:
            return []
        return await self.find_all_by_query({"id": {"$in": list(entity_ids)}})

    async def find_all(self) -> List[Document]:
        return await self.find_all_by_query({})

    async def find_one_by_attribute(
        self, attribute_name: str, value: Any
    ) -> Optional[Document]:
        documents = await self.find_all_by_attribute(attribute_name, value)
        if len(documents) > 1:
            logger.error(
                "Single-result query matched several documents",
                extra={
                    "collection": self.collection_name,
                    "attribute_name": attribute_name,
                    "match_count": len(documents),
                },
            )
            raise MultipleRecordsError(
                f"{len(documents)} records of {self.collection_name} have "
                f"{attribute_name} = {value!r}"
            )
        return documents[0] if documents else None

    async def find_all_by_attribute(
        self, attribute_name: str, value: Any
    ) -> List[Document]:
        return await self.find_all_by_query({attribute_name: {"$eq": value}})

    async def find_all_by_attribute_name_in(
        self, attribute_name: str, values: List[Any]
    ) -> List[Document]:
        if not values:
            return []
        return await self.find_all_by_query(
            {attribute_name: {"$in": list(values)}}
        )

    async def find_all_by_attributes_and_operator(
        self, filters: List[AttributeFilter]
    ) -> List[Document]:
        return await self.find_all_by_query(and_query(filters))

    async def find_all_by_attributes_or_operator(
        self, filters: List[AttributeFilter]
    ) -> List[Document]:
        if not filters:
            return []
        return await self.find_all_by_query(or_query(filters))

    async def remove(self, document: Document) -> None:
        await self.remove_by_id(document["id"])
