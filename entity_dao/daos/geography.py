"""
DAOs for the geographic reference data: countries, state/provinces and
cities.
"""

from typing import List, Optional

from entity_dao.domain import (
    AttributeFilter,
    CityEntity,
    CountryEntity,
    FieldError,
    StateProvinceEntity,
)
from entity_dao.persistence import AbstractDataAccessObject
from entity_dao.validators import (
    validate_city,
    validate_country,
    validate_state_province,
)

from .uniqueness import duplicate_error, same_values

ISO_CODE_IN_USE = "There is another country with the same ISO code"
STATE_CODE_IN_USE = (
    "There is another state province with the same code and the same country"
)
CITY_NAME_IN_USE = (
    "There is another city with the same name and the same state province"
)


class CountryDao(AbstractDataAccessObject[CountryEntity]):
    """Countries. The ISO code is unique."""

    entity_class = CountryEntity

    async def find_one_by_iso_code(
        self, iso_code: str
    ) -> Optional[CountryEntity]:
        return await self.find_one_by_attribute("iso_code", iso_code)

    async def find_all_enabled(self) -> List[CountryEntity]:
        return await self.find_all_by_attribute("enabled", True)

    def validate_entity(self, country: CountryEntity) -> List[FieldError]:
        return validate_country(country)

    async def validate_before_insert(
        self, country: CountryEntity
    ) -> List[FieldError]:
        results = await self.find_all_by_query(
            same_values({"iso_code": country.iso_code})
        )
        return duplicate_error(
            results, "iso_code", ISO_CODE_IN_USE, country.iso_code
        )

    async def validate_before_update(
        self, country: CountryEntity
    ) -> List[FieldError]:
        results = await self.find_all_by_query(
            same_values({"iso_code": country.iso_code}, exclude_id=country.id)
        )
        return duplicate_error(
            results, "iso_code", ISO_CODE_IN_USE, country.iso_code
        )


class StateProvinceDao(AbstractDataAccessObject[StateProvinceEntity]):
    """State/provinces. The code is unique inside a country."""

    entity_class = StateProvinceEntity

    async def find_all_by_id_country(
        self, country_iso_code: str
    ) -> List[StateProvinceEntity]:
        return await self.find_all_by_attribute(
            "country_iso_code", country_iso_code
        )

    def validate_entity(
        self, state_province: StateProvinceEntity
    ) -> List[FieldError]:
        return validate_state_province(state_province)

    async def validate_before_insert(
        self, state_province: StateProvinceEntity
    ) -> List[FieldError]:
        results = await self.find_all_by_attributes_and_operator(
            [
                AttributeFilter(
                    attribute_name="country_iso_code",
                    value=state_province.country_iso_code,
                ),
                AttributeFilter(
                    attribute_name="code", value=state_province.code
                ),
            ]
        )
        return duplicate_error(
            results, "code", STATE_CODE_IN_USE, state_province.code
        )

    async def validate_before_update(
        self, state_province: StateProvinceEntity
    ) -> List[FieldError]:
        results = await self.find_all_by_query(
            same_values(
                {
                    "country_iso_code": state_province.country_iso_code,
                    "code": state_province.code,
                },
                exclude_id=state_province.id,
            )
        )
        return duplicate_error(
            results, "code", STATE_CODE_IN_USE, state_province.code
        )


class CityDao(AbstractDataAccessObject[CityEntity]):
    """Cities. The name is unique inside a state/province."""

    entity_class = CityEntity

    async def find_all_by_id_state_province(
        self, state_province_id: str
    ) -> List[CityEntity]:
        return await self.find_all_by_attribute(
            "id_state_province", state_province_id
        )

    def validate_entity(self, city: CityEntity) -> List[FieldError]:
        return validate_city(city)

    async def validate_before_insert(
        self, city: CityEntity
    ) -> List[FieldError]:
        results = await self.find_all_by_query(
            same_values(
                {
                    "id_state_province": city.id_state_province,
                    "name": city.name,
                }
            )
        )
        return duplicate_error(results, "name", CITY_NAME_IN_USE, city.name)

    async def validate_before_update(
        self, city: CityEntity
    ) -> List[FieldError]:
        results = await self.find_all_by_query(
            same_values(
                {
                    "id_state_province": city.id_state_province,
                    "name": city.name,
                },
                exclude_id=city.id,
            )
        )
        return duplicate_error(results, "name", CITY_NAME_IN_USE, city.name)
