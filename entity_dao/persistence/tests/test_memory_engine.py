"""
Tests for MemoryDbEngine.
"""

import pytest

from entity_dao.domain import AttributeFilter
from entity_dao.persistence import (
    DbEngine,
    DbEngineQueryMixin,
    DuplicateRecordError,
    MultipleRecordsError,
    RecordNotFoundError,
)
from entity_dao.persistence.engines import MemoryDbEngine


@pytest.fixture
def engine() -> MemoryDbEngine:
    """Create a fresh memory engine for each test."""
    return MemoryDbEngine("country")


async def seed(engine: MemoryDbEngine) -> None:
    await engine.insert_many(
        [
            {"id": "1", "iso_code": "US", "name": "United States"},
            {"id": "2", "iso_code": "CA", "name": "Canada"},
            {"id": "3", "iso_code": "MX", "name": "Mexico", "enabled": False},
        ]
    )


def test_implements_db_engine_protocol(engine: MemoryDbEngine) -> None:
    assert isinstance(engine, DbEngine)


def test_query_mixin_needs_the_primitive_operations() -> None:
    class IncompleteEngine(DbEngineQueryMixin):
        collection_name = "country"

    with pytest.raises(TypeError):
        IncompleteEngine()


class TestInsertAndFind:
    @pytest.mark.asyncio
    async def test_insert_then_find_one_by_id(
        self, engine: MemoryDbEngine
    ) -> None:
        stored = await engine.insert({"id": "1", "iso_code": "US"})

        assert stored == {"id": "1", "iso_code": "US"}
        assert await engine.find_one_by_id("1") == stored

    @pytest.mark.asyncio
    async def test_find_one_by_id_missing(
        self, engine: MemoryDbEngine
    ) -> None:
        assert await engine.find_one_by_id("nope") is None

    @pytest.mark.asyncio
    async def test_insert_without_id(self, engine: MemoryDbEngine) -> None:
        with pytest.raises(ValueError):
            await engine.insert({"iso_code": "US"})

    @pytest.mark.asyncio
    async def test_insert_duplicated_id(self, engine: MemoryDbEngine) -> None:
        await engine.insert({"id": "1"})

        with pytest.raises(DuplicateRecordError):
            await engine.insert({"id": "1"})

    @pytest.mark.asyncio
    async def test_insert_many_rejects_the_whole_batch(
        self, engine: MemoryDbEngine
    ) -> None:
        await engine.insert({"id": "1"})

        with pytest.raises(DuplicateRecordError):
            await engine.insert_many([{"id": "2"}, {"id": "1"}])

        assert await engine.count() == 1

    @pytest.mark.asyncio
    async def test_insert_many_rejects_repeated_ids_in_batch(
        self, engine: MemoryDbEngine
    ) -> None:
        with pytest.raises(DuplicateRecordError):
            await engine.insert_many([{"id": "2"}, {"id": "2"}])

        assert await engine.count() == 0

    @pytest.mark.asyncio
    async def test_returned_documents_are_copies(
        self, engine: MemoryDbEngine
    ) -> None:
        document = {"id": "1", "tags": ["a"]}
        await engine.insert(document)
        document["tags"].append("b")

        found = await engine.find_one_by_id("1")
        found["tags"].append("c")

        assert (await engine.find_one_by_id("1"))["tags"] == ["a"]

    @pytest.mark.asyncio
    async def test_find_all_keeps_insertion_order(
        self, engine: MemoryDbEngine
    ) -> None:
        await seed(engine)

        documents = await engine.find_all()

        assert [document["id"] for document in documents] == ["1", "2", "3"]

    @pytest.mark.asyncio
    async def test_find_all_by_ids(self, engine: MemoryDbEngine) -> None:
        await seed(engine)

        documents = await engine.find_all_by_ids(["3", "1", "9"])

        assert {document["id"] for document in documents} == {"1", "3"}
        assert await engine.find_all_by_ids([]) == []


class TestAttributeQueries:
    @pytest.mark.asyncio
    async def test_find_one_by_attribute(self, engine: MemoryDbEngine) -> None:
        await seed(engine)

        found = await engine.find_one_by_attribute("iso_code", "CA")

        assert found["name"] == "Canada"
        assert await engine.find_one_by_attribute("iso_code", "BR") is None

    @pytest.mark.asyncio
    async def test_find_one_by_attribute_with_several_matches(
        self, engine: MemoryDbEngine
    ) -> None:
        await seed(engine)

        with pytest.raises(MultipleRecordsError):
            await engine.find_one_by_attribute("enabled", None)

    @pytest.mark.asyncio
    async def test_find_all_by_attribute_name_in(
        self, engine: MemoryDbEngine
    ) -> None:
        await seed(engine)

        documents = await engine.find_all_by_attribute_name_in(
            "iso_code", ["US", "MX"]
        )

        assert [document["id"] for document in documents] == ["1", "3"]
        assert await engine.find_all_by_attribute_name_in("iso_code", []) == []

    @pytest.mark.asyncio
    async def test_and_operator(self, engine: MemoryDbEngine) -> None:
        await seed(engine)

        documents = await engine.find_all_by_attributes_and_operator(
            [
                AttributeFilter(attribute_name="iso_code", value="MX"),
                AttributeFilter(attribute_name="enabled", value=False),
            ]
        )

        assert [document["id"] for document in documents] == ["3"]

    @pytest.mark.asyncio
    async def test_and_operator_without_filters_returns_everything(
        self, engine: MemoryDbEngine
    ) -> None:
        await seed(engine)

        documents = await engine.find_all_by_attributes_and_operator([])

        assert len(documents) == 3

    @pytest.mark.asyncio
    async def test_or_operator(self, engine: MemoryDbEngine) -> None:
        await seed(engine)

        documents = await engine.find_all_by_attributes_or_operator(
            [
                AttributeFilter(attribute_name="iso_code", value="US"),
                AttributeFilter(attribute_name="name", value="Canada"),
            ]
        )

        assert [document["id"] for document in documents] == ["1", "2"]
        assert await engine.find_all_by_attributes_or_operator([]) == []


class TestUpdateAndDelete:
    @pytest.mark.asyncio
    async def test_update_replaces_the_document(
        self, engine: MemoryDbEngine
    ) -> None:
        await seed(engine)

        await engine.update({"id": "2", "iso_code": "CA"})

        assert await engine.find_one_by_id("2") == {
            "id": "2",
            "iso_code": "CA",
        }

    @pytest.mark.asyncio
    async def test_update_missing_document(
        self, engine: MemoryDbEngine
    ) -> None:
        with pytest.raises(RecordNotFoundError):
            await engine.update({"id": "404"})

    @pytest.mark.asyncio
    async def test_remove_and_remove_by_id(
        self, engine: MemoryDbEngine
    ) -> None:
        await seed(engine)

        await engine.remove({"id": "1"})
        await engine.remove_by_id("2")
        await engine.remove_by_id("unknown")

        assert [d["id"] for d in await engine.find_all()] == ["3"]

    @pytest.mark.asyncio
    async def test_delete_all_by_ids(self, engine: MemoryDbEngine) -> None:
        await seed(engine)

        await engine.delete_all_by_ids(["1", "3", "unknown"])

        assert await engine.count() == 1

    @pytest.mark.asyncio
    async def test_delete_all(self, engine: MemoryDbEngine) -> None:
        await seed(engine)

        await engine.delete_all()

        assert await engine.count() == 0
        assert await engine.find_all() == []
