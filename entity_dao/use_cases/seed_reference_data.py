"""
Seed Reference Data Use Case.

Loads countries and their state/provinces from a YAML fixture and inserts
the ones that do not exist yet. Existing records are never modified, so the
use case is safe to run on every startup.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from entity_dao.daos import CountryDao, StateProvinceDao
from entity_dao.domain import CountryEntity, StateProvinceEntity

logger = logging.getLogger(__name__)

DEFAULT_FIXTURE_PATH = (
    Path(__file__).parent / "fixtures" / "reference_data.yaml"
)


class SeedReferenceDataUseCase:
    """
    Use case for seeding geographic reference data.

    All operations are idempotent - running this multiple times will not
    create duplicate countries or state/provinces.
    """

    def __init__(
        self,
        country_dao: CountryDao,
        state_province_dao: StateProvinceDao,
        fixture_path: Optional[Path] = None,
    ) -> None:
        """Initialize the use case with the DAOs it writes to.

        Args:
            country_dao: DAO for countries
            state_province_dao: DAO for state/provinces
            fixture_path: YAML fixture to load, the bundled one by default
        """
        self.country_dao = country_dao
        self.state_province_dao = state_province_dao
        self.fixture_path = fixture_path or DEFAULT_FIXTURE_PATH
        self.logger = logging.getLogger("SeedReferenceDataUseCase")

    async def execute(self) -> Dict[str, int]:
        """
        Execute the seeding.

        Returns:
            Counts of created and skipped countries and state/provinces

        Raises:
            FileNotFoundError: If the fixture file doesn't exist
            yaml.YAMLError: If the fixture file is invalid YAML
            KeyError: If required keys are missing from the fixture
            EntityValidationError: If a fixture record is not valid
        """
        self.logger.info(
            "Starting reference data seeding",
            extra={"fixture_path": str(self.fixture_path)},
        )
        counts = {
            "countries_created": 0,
            "countries_skipped": 0,
            "states_created": 0,
            "states_skipped": 0,
        }

        try:
            for country_data in self._load_fixture_countries():
                await self._ensure_country_exists(country_data, counts)
                await self._ensure_states_exist(country_data, counts)
        except Exception as e:
            self.logger.error(
                "Failed to seed reference data",
                exc_info=True,
                extra={
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            raise

        self.logger.info("Reference data seeding completed", extra=counts)
        return counts

    async def _ensure_country_exists(
        self, country_data: Dict[str, Any], counts: Dict[str, int]
    ) -> None:
        iso_code = country_data["iso_code"]
        if await self.country_dao.find_one_by_iso_code(iso_code):
            self.logger.debug(
                "Country already exists, skipping",
                extra={"iso_code": iso_code},
            )
            counts["countries_skipped"] += 1
            return

        await self.country_dao.insert(
            CountryEntity(
                iso_code=iso_code,
                name=country_data["name"],
                phone_code=country_data.get("phone_code"),
                sort_order=country_data.get("sort_order", 0),
                enabled=country_data.get("enabled", True),
            )
        )
        self.logger.info("Country created", extra={"iso_code": iso_code})
        counts["countries_created"] += 1

    async def _ensure_states_exist(
        self, country_data: Dict[str, Any], counts: Dict[str, int]
    ) -> None:
        iso_code = country_data["iso_code"]
        existing = await self.state_province_dao.find_all_by_id_country(
            iso_code
        )
        existing_codes = {state.code for state in existing}

        for sort_order, state_data in enumerate(
            country_data.get("states") or [], start=1
        ):
            code = state_data["code"]
            if code in existing_codes:
                counts["states_skipped"] += 1
                continue

            await self.state_province_dao.insert(
                StateProvinceEntity(
                    code=code,
                    name=state_data["name"],
                    country_iso_code=iso_code,
                    sort_order=state_data.get("sort_order", sort_order),
                )
            )
            existing_codes.add(code)
            counts["states_created"] += 1

    def _load_fixture_countries(self) -> List[Dict[str, Any]]:
        """Load the country list from the YAML fixture file."""
        self.logger.debug(
            "Loading fixture file",
            extra={"fixture_path": str(self.fixture_path)},
        )

        if not self.fixture_path.exists():
            raise FileNotFoundError(
                f"Reference data fixture file not found: {self.fixture_path}"
            )

        with open(self.fixture_path, "r", encoding="utf-8") as f:
            fixture_data = yaml.safe_load(f)

        if not fixture_data or "countries" not in fixture_data:
            raise KeyError("Fixture file must contain 'countries' key")

        countries = fixture_data["countries"]
        if not isinstance(countries, list):
            raise ValueError("'countries' must be a list")

        return countries
