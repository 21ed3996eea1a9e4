"""
MongoDB implementation of DbEngine.

The engine wraps one motor ``AsyncIOMotorCollection``. The entity id is
stored as the document ``_id`` so MongoDB enforces its uniqueness; the
engine translates ``"id"`` to ``"_id"`` in every outgoing query and back in
every returned document, so DAOs only ever see ``"id"``.
"""

import logging
from typing import (
    Any,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    runtime_checkable,
)

from entity_dao.persistence.engine import DbEngineQueryMixin, Document
from entity_dao.persistence.errors import RecordNotFoundError
from entity_dao.persistence.query import Query

logger = logging.getLogger(__name__)

MONGO_ID = "_id"


@runtime_checkable
class MotorCollection(Protocol):
    """
    Protocol capturing the collection methods the engine uses.

    Both motor.motor_asyncio.AsyncIOMotorCollection and the fake collection
    used by the tests implement it.
    """

    name: str

    async def find_one(
        self, filter: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        ...

    def find(self, filter: Mapping[str, Any]) -> Any:
        """Return a cursor whose ``to_list(length=None)`` is awaitable."""
        ...

    async def insert_one(self, document: Dict[str, Any]) -> Any:
        ...

    async def insert_many(self, documents: List[Dict[str, Any]]) -> Any:
        ...

    async def replace_one(
        self, filter: Mapping[str, Any], replacement: Mapping[str, Any]
    ) -> Any:
        ...

    async def delete_one(self, filter: Mapping[str, Any]) -> Any:
        ...

    async def delete_many(self, filter: Mapping[str, Any]) -> Any:
        ...

    async def count_documents(self, filter: Mapping[str, Any]) -> int:
        ...


def translate_query(query: Any) -> Any:
    """Rename every ``id`` key of a query to ``_id``."""
    if isinstance(query, dict):
        return {
            (MONGO_ID if key == "id" else key): translate_query(value)
            for key, value in query.items()
        }
    if isinstance(query, list):
        return [translate_query(item) for item in query]
    return query


def to_mongo_document(document: Document) -> Dict[str, Any]:
    mongo_document = {
        key: value for key, value in document.items() if key != "id"
    }
    mongo_document[MONGO_ID] = document["id"]
    return mongo_document


def from_mongo_document(mongo_document: Dict[str, Any]) -> Document:
    document = {
        key: value for key, value in mongo_document.items() if key != MONGO_ID
    }
    document["id"] = (
        str(mongo_document[MONGO_ID]) if MONGO_ID in mongo_document else None
    )
    return document


class MongoDbEngine(DbEngineQueryMixin):
    """
    MongoDB implementation of DbEngine using a motor collection.
    """

    def __init__(self, collection: MotorCollection) -> None:
        """Initialize engine with a collection.

        Args:
            collection: MotorCollection protocol implementation (real or fake)
        """
        self.collection = collection
        self.collection_name = collection.name
        logger.debug(
            "Initialized MongoDbEngine",
            extra={"collection": self.collection_name},
        )

    async def find_one_by_id(self, entity_id: str) -> Optional[Document]:
        logger.debug(
            "MongoDbEngine: Call to find_one_by_id",
            extra={
                "collection": self.collection_name,
                "entity_id": entity_id,
            },
        )
        mongo_document = await self.collection.find_one({MONGO_ID: entity_id})
        if mongo_document is None:
            return None
        return from_mongo_document(mongo_document)

    async def find_all_by_query(self, query: Query) -> List[Document]:
        mongo_query = translate_query(query)
        cursor = self.collection.find(mongo_query)
        mongo_documents = await cursor.to_list(length=None)

        logger.debug(
            "MongoDbEngine: Query executed",
            extra={
                "collection": self.collection_name,
                "query": mongo_query,
                "result_count": len(mongo_documents),
            },
        )
        return [from_mongo_document(item) for item in mongo_documents]

    async def insert(self, document: Document) -> Document:
        await self.collection.insert_one(to_mongo_document(document))
        logger.info(
            "MongoDbEngine: Document inserted",
            extra={
                "collection": self.collection_name,
                "entity_id": document["id"],
            },
        )
        return dict(document)

    async def insert_many(self, documents: List[Document]) -> List[Document]:
        if not documents:
            return []
        await self.collection.insert_many(
            [to_mongo_document(document) for document in documents]
        )
        logger.info(
            "MongoDbEngine: Documents inserted",
            extra={
                "collection": self.collection_name,
                "document_count": len(documents),
            },
        )
        return [dict(document) for document in documents]

    async def update(self, document: Document) -> Document:
        entity_id = document["id"]
        result = await self.collection.replace_one(
            {MONGO_ID: entity_id}, to_mongo_document(document)
        )
        if result.matched_count == 0:
            logger.warning(
                "MongoDbEngine: Document to update not found",
                extra={
                    "collection": self.collection_name,
                    "entity_id": entity_id,
                },
            )
            raise RecordNotFoundError(
                f"No record with id {entity_id} in {self.collection_name}"
            )

        logger.info(
            "MongoDbEngine: Document updated",
            extra={
                "collection": self.collection_name,
                "entity_id": entity_id,
            },
        )
        return dict(document)

    async def remove_by_id(self, entity_id: str) -> None:
        result = await self.collection.delete_one({MONGO_ID: entity_id})
        logger.debug(
            "MongoDbEngine: Remove by id",
            extra={
                "collection": self.collection_name,
                "entity_id": entity_id,
                "deleted_count": result.deleted_count,
            },
        )

    async def count(self) -> int:
        return await self.collection.count_documents({})

    async def delete_all(self) -> None:
        result = await self.collection.delete_many({})
        logger.info(
            "MongoDbEngine: Deleted all documents",
            extra={
                "collection": self.collection_name,
                "deleted_count": result.deleted_count,
            },
        )

    async def delete_all_by_ids(self, entity_ids: List[str]) -> None:
        if not entity_ids:
            return
        await self.collection.delete_many(
            {MONGO_ID: {"$in": list(entity_ids)}}
        )
