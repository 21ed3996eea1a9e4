"""
Account DAO.
"""

from typing import List, Optional

from entity_dao.domain import AccountEntity, FieldError
from entity_dao.persistence import AbstractDataAccessObject
from entity_dao.validators import (
    validate_account,
    validate_result_query_before_db_operation,
)

from .uniqueness import same_values


class AccountDao(AbstractDataAccessObject[AccountEntity]):
    """Accounts. The username is unique."""

    entity_class = AccountEntity

    async def find_one_by_username(
        self, username: str
    ) -> Optional[AccountEntity]:
        return await self.find_one_by_attribute("username", username)

    async def find_all_by_contact_id(
        self, contact_id: str
    ) -> List[AccountEntity]:
        return await self.find_all_by_attribute("contact_id", contact_id)

    def validate_entity(self, account: AccountEntity) -> List[FieldError]:
        return validate_account(account)

    async def validate_before_insert(
        self, account: AccountEntity
    ) -> List[FieldError]:
        results = await self.find_all_by_query(
            same_values({"username": account.username})
        )
        return validate_result_query_before_db_operation(results, account)

    async def validate_before_update(
        self, account: AccountEntity
    ) -> List[FieldError]:
        results = await self.find_all_by_query(
            same_values({"username": account.username}, exclude_id=account.id)
        )
        return validate_result_query_before_db_operation(results, account)
