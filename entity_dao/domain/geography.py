"""
Geographic reference data: countries, state/provinces and cities.
"""

from typing import Optional

from .base import Entity


class CountryEntity(Entity):
    """Country identified by its ISO 3166 alpha-2 code."""

    iso_code: Optional[str] = None
    name: Optional[str] = None
    phone_code: Optional[str] = None
    sort_order: int = 0
    enabled: bool = True


class StateProvinceEntity(Entity):
    """State or province. The code is unique inside its country."""

    code: Optional[str] = None
    name: Optional[str] = None
    country_iso_code: Optional[str] = None
    sort_order: int = 0


class CityEntity(Entity):
    """City. The name is unique inside its state/province."""

    name: Optional[str] = None
    id_state_province: Optional[str] = None
    sort_order: int = 0
