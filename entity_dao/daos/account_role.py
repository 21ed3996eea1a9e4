"""
Account-role link DAO.

Emulates the join table between accounts and roles.
"""

from typing import List

from entity_dao.domain import AccountRoleEntity, FieldError
from entity_dao.persistence import AbstractDataAccessObject
from entity_dao.validators import validate_account_role


class AccountRoleDao(AbstractDataAccessObject[AccountRoleEntity]):
    entity_class = AccountRoleEntity

    async def find_all_by_account_id(
        self, account_id: str
    ) -> List[AccountRoleEntity]:
        return await self.find_all_by_attribute("id_account", account_id)

    async def find_all_by_role_id(
        self, role_id: str
    ) -> List[AccountRoleEntity]:
        return await self.find_all_by_attribute("id_role", role_id)

    async def find_all_by_account_ids_in(
        self, account_ids: List[str]
    ) -> List[AccountRoleEntity]:
        return await self.find_all_by_attribute_name_in(
            "id_account", account_ids
        )

    async def delete_all_by_id_account(self, account_id: str) -> None:
        links = await self.find_all_by_account_id(account_id)
        await self.delete_all_by_ids([link.id for link in links])

    def validate_entity(
        self, account_role: AccountRoleEntity
    ) -> List[FieldError]:
        return validate_account_role(account_role)
