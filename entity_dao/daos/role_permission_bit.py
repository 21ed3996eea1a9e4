"""
Role-permission bit link DAO.

Emulates the join table between roles and permission bits.
"""

from typing import List

from entity_dao.domain import FieldError, RolePermissionBitEntity
from entity_dao.persistence import AbstractDataAccessObject
from entity_dao.validators import validate_role_permission_bit


class RolePermissionBitDao(AbstractDataAccessObject[RolePermissionBitEntity]):
    entity_class = RolePermissionBitEntity

    async def find_all_by_role_id(
        self, role_id: str
    ) -> List[RolePermissionBitEntity]:
        return await self.find_all_by_attribute("id_role", role_id)

    async def find_all_by_role_ids_in(
        self, role_ids: List[str]
    ) -> List[RolePermissionBitEntity]:
        return await self.find_all_by_attribute_name_in("id_role", role_ids)

    async def find_all_by_permission_bit_id(
        self, permission_bit_id: str
    ) -> List[RolePermissionBitEntity]:
        return await self.find_all_by_attribute(
            "id_permission_bit", permission_bit_id
        )

    async def delete_all_by_id_role(self, role_id: str) -> None:
        links = await self.find_all_by_role_id(role_id)
        await self.delete_all_by_ids([link.id for link in links])

    def validate_entity(
        self, role_permission_bit: RolePermissionBitEntity
    ) -> List[FieldError]:
        return validate_role_permission_bit(role_permission_bit)
