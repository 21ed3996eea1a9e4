"""
Memory implementation of DbEngine.

This module provides an in-memory implementation of the DbEngine protocol.
Documents are kept in a Python dictionary keyed by id, in insertion order,
and queries are evaluated with ``entity_dao.persistence.query.matches``.

It is ideal for testing scenarios where an external database should be
avoided. All operations are still async to maintain interface
compatibility with the MongoDB engine.
"""

import copy
import logging
from typing import Dict, List, Optional

from entity_dao.persistence.engine import DbEngineQueryMixin, Document
from entity_dao.persistence.errors import (
    DuplicateRecordError,
    RecordNotFoundError,
)
from entity_dao.persistence.query import Query, matches

logger = logging.getLogger(__name__)


class MemoryDbEngine(DbEngineQueryMixin):
    """
    Memory implementation of DbEngine using a Python dictionary.

    Stored and returned documents are deep copies, so callers can never
    reach into the storage by mutating a result.
    """

    def __init__(self, collection_name: str) -> None:
        """Initialize engine with empty in-memory storage.

        Args:
            collection_name: Name of the emulated collection, used in logs
        """
        logger.debug(
            "Initializing MemoryDbEngine",
            extra={"collection": collection_name},
        )
        self.collection_name = collection_name

        # Storage dictionary
        self._documents: Dict[str, Document] = {}

    async def find_one_by_id(self, entity_id: str) -> Optional[Document]:
        document = self._documents.get(entity_id)
        if document is None:
            logger.debug(
                "MemoryDbEngine: Document not found",
                extra={
                    "collection": self.collection_name,
                    "entity_id": entity_id,
                },
            )
            return None
        return copy.deepcopy(document)

    async def find_all_by_query(self, query: Query) -> List[Document]:
        results = [
            copy.deepcopy(document)
            for document in self._documents.values()
            if matches(document, query)
        ]
        logger.debug(
            "MemoryDbEngine: Query executed",
            extra={
                "collection": self.collection_name,
                "query": query,
                "result_count": len(results),
            },
        )
        return results

    async def insert(self, document: Document) -> Document:
        entity_id = document.get("id")
        if entity_id is None:
            raise ValueError("Document to insert does not have an id")
        if entity_id in self._documents:
            raise DuplicateRecordError(
                f"A record with id {entity_id} already exists in "
                f"{self.collection_name}"
            )
        self._documents[entity_id] = copy.deepcopy(document)

        logger.info(
            "MemoryDbEngine: Document inserted",
            extra={
                "collection": self.collection_name,
                "entity_id": entity_id,
            },
        )
        return copy.deepcopy(document)

    async def insert_many(self, documents: List[Document]) -> List[Document]:
        # Check the whole batch before storing anything
        seen = set()
        for document in documents:
            entity_id = document.get("id")
            if entity_id is None:
                raise ValueError("Document to insert does not have an id")
            if entity_id in self._documents or entity_id in seen:
                raise DuplicateRecordError(
                    f"A record with id {entity_id} already exists in "
                    f"{self.collection_name}"
                )
            seen.add(entity_id)

        for document in documents:
            self._documents[document["id"]] = copy.deepcopy(document)

        logger.info(
            "MemoryDbEngine: Documents inserted",
            extra={
                "collection": self.collection_name,
                "document_count": len(documents),
            },
        )
        return [copy.deepcopy(document) for document in documents]

    async def update(self, document: Document) -> Document:
        entity_id = document.get("id")
        if entity_id not in self._documents:
            raise RecordNotFoundError(
                f"No record with id {entity_id} in {self.collection_name}"
            )
        self._documents[entity_id] = copy.deepcopy(document)

        logger.info(
            "MemoryDbEngine: Document updated",
            extra={
                "collection": self.collection_name,
                "entity_id": entity_id,
            },
        )
        return copy.deepcopy(document)

    async def remove_by_id(self, entity_id: str) -> None:
        removed = self._documents.pop(entity_id, None)
        logger.debug(
            "MemoryDbEngine: Remove by id",
            extra={
                "collection": self.collection_name,
                "entity_id": entity_id,
                "removed": removed is not None,
            },
        )

    async def count(self) -> int:
        return len(self._documents)

    async def delete_all(self) -> None:
        logger.info(
            "MemoryDbEngine: Deleting all documents",
            extra={
                "collection": self.collection_name,
                "document_count": len(self._documents),
            },
        )
        self._documents.clear()

    async def delete_all_by_ids(self, entity_ids: List[str]) -> None:
        for entity_id in entity_ids:
            self._documents.pop(entity_id, None)
