"""
Tests for SeedReferenceDataUseCase.

These tests load the bundled YAML fixture into memory-backed DAOs, so the
real fixture content is validated along with the use case.
"""

from pathlib import Path

import pytest
import yaml

from entity_dao.bootstrap import Persistence, build_memory_persistence
from entity_dao.domain import CountryEntity
from entity_dao.persistence import EntityValidationError
from entity_dao.use_cases import SeedReferenceDataUseCase
from entity_dao.use_cases.seed_reference_data import DEFAULT_FIXTURE_PATH


@pytest.fixture
def persistence() -> Persistence:
    """Create fresh memory-backed DAOs for each test."""
    return build_memory_persistence()


@pytest.fixture
def use_case(persistence: Persistence) -> SeedReferenceDataUseCase:
    return SeedReferenceDataUseCase(
        persistence.country_dao, persistence.state_province_dao
    )


@pytest.fixture
def fixture_countries() -> list[dict]:
    """Load the countries of the bundled fixture file."""
    assert DEFAULT_FIXTURE_PATH.exists()

    with open(DEFAULT_FIXTURE_PATH, "r", encoding="utf-8") as f:
        fixture_data = yaml.safe_load(f)

    assert isinstance(fixture_data["countries"], list)
    return fixture_data["countries"]


def write_fixture(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "reference_data.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestSeedReferenceDataUseCase:
    @pytest.mark.asyncio
    async def test_execute_creates_fixture_records(
        self,
        use_case: SeedReferenceDataUseCase,
        persistence: Persistence,
        fixture_countries: list[dict],
    ) -> None:
        expected_states = sum(
            len(country.get("states") or []) for country in fixture_countries
        )

        counts = await use_case.execute()

        assert counts == {
            "countries_created": len(fixture_countries),
            "countries_skipped": 0,
            "states_created": expected_states,
            "states_skipped": 0,
        }
        assert await persistence.country_dao.count() == len(fixture_countries)
        assert await persistence.state_province_dao.count() == expected_states

        first = fixture_countries[0]
        country = await persistence.country_dao.find_one_by_iso_code(
            first["iso_code"]
        )
        assert country is not None
        assert country.name == first["name"]
        states = await persistence.state_province_dao.find_all_by_id_country(
            first["iso_code"]
        )
        assert [state.code for state in states] == [
            state["code"] for state in first["states"]
        ]
        assert [state.sort_order for state in states] == list(
            range(1, len(states) + 1)
        )

    @pytest.mark.asyncio
    async def test_execute_is_idempotent(
        self,
        use_case: SeedReferenceDataUseCase,
        persistence: Persistence,
        fixture_countries: list[dict],
    ) -> None:
        await use_case.execute()
        states_before = await persistence.state_province_dao.count()

        counts = await use_case.execute()

        assert counts["countries_created"] == 0
        assert counts["states_created"] == 0
        assert counts["countries_skipped"] == len(fixture_countries)
        assert counts["states_skipped"] == states_before
        assert await persistence.state_province_dao.count() == states_before

    @pytest.mark.asyncio
    async def test_existing_country_is_not_modified(
        self, use_case: SeedReferenceDataUseCase, persistence: Persistence
    ) -> None:
        await persistence.country_dao.insert(
            CountryEntity(iso_code="US", name="USA", sort_order=99)
        )

        counts = await use_case.execute()

        us = await persistence.country_dao.find_one_by_iso_code("US")
        assert us.name == "USA"
        assert us.sort_order == 99
        assert counts["countries_skipped"] == 1
        # States of an existing country are still completed
        states = await persistence.state_province_dao.find_all_by_id_country(
            "US"
        )
        assert len(states) > 0

    @pytest.mark.asyncio
    async def test_missing_fixture_file(
        self, persistence: Persistence, tmp_path: Path
    ) -> None:
        use_case = SeedReferenceDataUseCase(
            persistence.country_dao,
            persistence.state_province_dao,
            fixture_path=tmp_path / "missing.yaml",
        )

        with pytest.raises(FileNotFoundError):
            await use_case.execute()

    @pytest.mark.asyncio
    async def test_fixture_without_countries_key(
        self, persistence: Persistence, tmp_path: Path
    ) -> None:
        use_case = SeedReferenceDataUseCase(
            persistence.country_dao,
            persistence.state_province_dao,
            fixture_path=write_fixture(tmp_path, "regions: []\n"),
        )

        with pytest.raises(KeyError, match="countries"):
            await use_case.execute()

    @pytest.mark.asyncio
    async def test_invalid_record_stops_the_seeding(
        self, persistence: Persistence, tmp_path: Path
    ) -> None:
        fixture_path = write_fixture(
            tmp_path,
            "countries:\n"
            "  - iso_code: AR\n"
            "    name: Argentina\n"
            "    states:\n"
            "      - code: BA\n"
            "        name: ''\n",
        )
        use_case = SeedReferenceDataUseCase(
            persistence.country_dao,
            persistence.state_province_dao,
            fixture_path=fixture_path,
        )

        with pytest.raises(EntityValidationError):
            await use_case.execute()

        assert await persistence.country_dao.count() == 1
        assert await persistence.state_province_dao.count() == 0
