"""
Display name DAO.
"""

from typing import List, Optional

from entity_dao.domain import DisplayNameEntity, FieldError
from entity_dao.persistence import AbstractDataAccessObject
from entity_dao.validators import validate_display_name

from .uniqueness import duplicate_error, same_values

DISPLAY_NAME_IN_USE = "There is another record with the same display name"


class DisplayNameDao(AbstractDataAccessObject[DisplayNameEntity]):
    entity_class = DisplayNameEntity

    async def find_one_by_display_name(
        self, display_name: str
    ) -> Optional[DisplayNameEntity]:
        return await self.find_one_by_attribute("display_name", display_name)

    def validate_entity(
        self, display_name: DisplayNameEntity
    ) -> List[FieldError]:
        return validate_display_name(display_name)

    async def validate_before_insert(
        self, display_name: DisplayNameEntity
    ) -> List[FieldError]:
        results = await self.find_all_by_query(
            same_values({"display_name": display_name.display_name})
        )
        return duplicate_error(
            results,
            "display_name",
            DISPLAY_NAME_IN_USE,
            display_name.display_name,
        )

    async def validate_before_update(
        self, display_name: DisplayNameEntity
    ) -> List[FieldError]:
        results = await self.find_all_by_query(
            same_values(
                {"display_name": display_name.display_name},
                exclude_id=display_name.id,
            )
        )
        return duplicate_error(
            results,
            "display_name",
            DISPLAY_NAME_IN_USE,
            display_name.display_name,
        )
