"""
Field validations for display names and geographic reference data.
"""

from typing import List

from entity_dao.domain import (
    CityEntity,
    CountryEntity,
    DisplayNameEntity,
    FieldError,
    StateProvinceEntity,
)

from .common import require_not_blank

DISPLAY_NAME = "display_name"
ISO_CODE = "iso_code"
NAME = "name"
CODE = "code"
COUNTRY_ISO_CODE = "country_iso_code"
ID_STATE_PROVINCE = "id_state_province"

DISPLAY_NAME_EMPTY = "Display name is empty"
ISO_CODE_EMPTY = "ISO code is empty"
NAME_EMPTY = "Name is empty"
CODE_EMPTY = "Code is empty"
COUNTRY_EMPTY = "Country ISO code is empty"
STATE_PROVINCE_EMPTY = "State/province id is empty"


def validate_display_name(display_name: DisplayNameEntity) -> List[FieldError]:
    errors: List[FieldError] = []
    require_not_blank(
        errors, DISPLAY_NAME, DISPLAY_NAME_EMPTY, display_name.display_name
    )
    return errors


def validate_country(country: CountryEntity) -> List[FieldError]:
    errors: List[FieldError] = []
    require_not_blank(errors, ISO_CODE, ISO_CODE_EMPTY, country.iso_code)
    require_not_blank(errors, NAME, NAME_EMPTY, country.name)
    return errors


def validate_state_province(
    state_province: StateProvinceEntity,
) -> List[FieldError]:
    errors: List[FieldError] = []
    require_not_blank(errors, CODE, CODE_EMPTY, state_province.code)
    require_not_blank(errors, NAME, NAME_EMPTY, state_province.name)
    require_not_blank(
        errors,
        COUNTRY_ISO_CODE,
        COUNTRY_EMPTY,
        state_province.country_iso_code,
    )
    return errors


def validate_city(city: CityEntity) -> List[FieldError]:
    errors: List[FieldError] = []
    require_not_blank(errors, NAME, NAME_EMPTY, city.name)
    require_not_blank(
        errors, ID_STATE_PROVINCE, STATE_PROVINCE_EMPTY, city.id_state_province
    )
    return errors
