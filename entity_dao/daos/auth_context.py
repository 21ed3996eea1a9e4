"""
Authorization context DAO.
"""

from typing import List, Optional

from entity_dao.domain import AuthContextEntity, FieldError
from entity_dao.persistence import AbstractDataAccessObject
from entity_dao.validators import validate_auth_context

from .uniqueness import duplicate_error, same_values

NAME_IN_USE = "There is another record with the same name"


class AuthContextDao(AbstractDataAccessObject[AuthContextEntity]):
    """Authorization contexts. The name is unique."""

    entity_class = AuthContextEntity

    async def find_one_by_name(self, name: str) -> Optional[AuthContextEntity]:
        return await self.find_one_by_attribute("name", name)

    def validate_entity(
        self, auth_context: AuthContextEntity
    ) -> List[FieldError]:
        return validate_auth_context(auth_context)

    async def validate_before_insert(
        self, auth_context: AuthContextEntity
    ) -> List[FieldError]:
        results = await self.find_all_by_query(
            same_values({"name": auth_context.name})
        )
        return duplicate_error(results, "name", NAME_IN_USE, auth_context.name)

    async def validate_before_update(
        self, auth_context: AuthContextEntity
    ) -> List[FieldError]:
        results = await self.find_all_by_query(
            same_values(
                {"name": auth_context.name}, exclude_id=auth_context.id
            )
        )
        return duplicate_error(results, "name", NAME_IN_USE, auth_context.name)
