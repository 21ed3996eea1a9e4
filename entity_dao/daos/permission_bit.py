"""
Permission bit DAO.
"""

from typing import List, Optional

from entity_dao.domain import FieldError, PermissionBitEntity
from entity_dao.persistence import AbstractDataAccessObject, Query
from entity_dao.validators import validate_permission_bit

NAME_IN_USE = (
    "There is another permission bit with the same name in the same "
    "authorization context"
)
POSITION_IN_USE = (
    "There is another permission bit with the same position in the same "
    "authorization context"
)


class PermissionBitDao(AbstractDataAccessObject[PermissionBitEntity]):
    """Permission bits. Name and position are unique inside an
    authorization context."""

    entity_class = PermissionBitEntity

    async def find_all_by_id_auth_context(
        self, auth_context_id: str
    ) -> List[PermissionBitEntity]:
        return await self.find_all_by_attribute(
            "id_auth_context", auth_context_id
        )

    async def find_one_by_name(
        self, name: str
    ) -> Optional[PermissionBitEntity]:
        return await self.find_one_by_attribute("name", name)

    def validate_entity(
        self, permission_bit: PermissionBitEntity
    ) -> List[FieldError]:
        return validate_permission_bit(permission_bit)

    async def validate_before_insert(
        self, permission_bit: PermissionBitEntity
    ) -> List[FieldError]:
        return await self._validate_collisions(
            permission_bit, self._collision_query(permission_bit)
        )

    async def validate_before_update(
        self, permission_bit: PermissionBitEntity
    ) -> List[FieldError]:
        query = {
            "$and": [
                self._collision_query(permission_bit),
                {"id": {"$ne": permission_bit.id}},
            ]
        }
        return await self._validate_collisions(permission_bit, query)

    def _collision_query(self, permission_bit: PermissionBitEntity) -> Query:
        return {
            "$and": [
                {"id_auth_context": {"$eq": permission_bit.id_auth_context}},
                {
                    "$or": [
                        {"name": {"$eq": permission_bit.name}},
                        {"position": {"$eq": permission_bit.position}},
                    ]
                },
            ]
        }

    async def _validate_collisions(
        self, permission_bit: PermissionBitEntity, query: Query
    ) -> List[FieldError]:
        errors: List[FieldError] = []
        results = await self.find_all_by_query(query)
        if any(bit.name == permission_bit.name for bit in results):
            errors.append(
                FieldError(
                    attribute="name",
                    message=NAME_IN_USE,
                    value=permission_bit.name,
                )
            )
        if any(bit.position == permission_bit.position for bit in results):
            errors.append(
                FieldError(
                    attribute="position",
                    message=POSITION_IN_USE,
                    value=permission_bit.position,
                )
            )
        return errors
