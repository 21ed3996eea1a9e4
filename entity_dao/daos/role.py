"""
Role DAO.
"""

from typing import List, Optional

from entity_dao.domain import FieldError, RoleEntity
from entity_dao.persistence import AbstractDataAccessObject
from entity_dao.persistence.ids import is_blank
from entity_dao.validators import validate_role

from .uniqueness import duplicate_error, same_values

ID_PARENT_ROLE = "id_parent_role"
NAME_IN_USE = "There is another role with the same name"
PARENT_ROLE_NOT_FOUND = "The parent role does not exist"
PARENT_ROLE_IS_SELF = "A role can not be its own parent"


class RoleDao(AbstractDataAccessObject[RoleEntity]):
    """Roles. The name is unique and the parent role, when set, must be
    another existing role."""

    entity_class = RoleEntity

    async def find_one_by_name(self, name: str) -> Optional[RoleEntity]:
        return await self.find_one_by_attribute("name", name)

    async def find_all_by_parent_id(self, parent_id: str) -> List[RoleEntity]:
        return await self.find_all_by_attribute(ID_PARENT_ROLE, parent_id)

    def validate_entity(self, role: RoleEntity) -> List[FieldError]:
        return validate_role(role)

    async def validate_before_insert(
        self, role: RoleEntity
    ) -> List[FieldError]:
        results = await self.find_all_by_query(
            same_values({"name": role.name})
        )
        errors = duplicate_error(results, "name", NAME_IN_USE, role.name)
        if errors:
            return errors
        return await self.validate_parent_role(role)

    async def validate_before_update(
        self, role: RoleEntity
    ) -> List[FieldError]:
        results = await self.find_all_by_query(
            same_values({"name": role.name}, exclude_id=role.id)
        )
        errors = duplicate_error(results, "name", NAME_IN_USE, role.name)
        if errors:
            return errors
        return await self.validate_parent_role(role)

    async def validate_parent_role(self, role: RoleEntity) -> List[FieldError]:
        if is_blank(role.id_parent_role):
            return []
        if role.id_parent_role == role.id:
            return [
                FieldError(
                    attribute=ID_PARENT_ROLE,
                    message=PARENT_ROLE_IS_SELF,
                    value=role.id_parent_role,
                )
            ]
        parent = await self.find_one_by_id(role.id_parent_role)
        if parent is None:
            return [
                FieldError(
                    attribute=ID_PARENT_ROLE,
                    message=PARENT_ROLE_NOT_FOUND,
                    value=role.id_parent_role,
                )
            ]
        return []
