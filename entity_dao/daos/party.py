"""
Party DAO.

Persons and organizations share one collection. Documents are turned back
into PersonEntity or OrganizationEntity according to their type.
"""

from typing import List, Optional

from entity_dao.domain import PARTY_CLASSES, FieldError, PartyEntity
from entity_dao.persistence import AbstractDataAccessObject, Document
from entity_dao.persistence.ids import is_blank
from entity_dao.validators import validate_party

from .uniqueness import duplicate_error, same_values

ACCOUNT_IN_USE = "There is another party linked to the same account"


class PartyDao(AbstractDataAccessObject[PartyEntity]):
    """Parties. An account is linked to at most one party."""

    entity_class = PartyEntity

    async def find_all_by_type(self, party_type: str) -> List[PartyEntity]:
        return await self.find_all_by_attribute("type", party_type)

    async def find_one_by_id_account(
        self, account_id: str
    ) -> Optional[PartyEntity]:
        return await self.find_one_by_attribute("id_account", account_id)

    async def find_all_by_email(self, address: str) -> List[PartyEntity]:
        return await self.find_all_by_attribute("emails.address", address)

    def validate_entity(self, party: PartyEntity) -> List[FieldError]:
        return validate_party(party)

    async def validate_before_insert(
        self, party: PartyEntity
    ) -> List[FieldError]:
        if is_blank(party.id_account):
            return []
        results = await self.find_all_by_query(
            same_values({"id_account": party.id_account})
        )
        return duplicate_error(
            results, "id_account", ACCOUNT_IN_USE, party.id_account
        )

    async def validate_before_update(
        self, party: PartyEntity
    ) -> List[FieldError]:
        if is_blank(party.id_account):
            return []
        results = await self.find_all_by_query(
            same_values({"id_account": party.id_account}, exclude_id=party.id)
        )
        return duplicate_error(
            results, "id_account", ACCOUNT_IN_USE, party.id_account
        )

    def convert_after_db_operation(self, document: Document) -> PartyEntity:
        party_class = PARTY_CLASSES.get(document.get("type"), PartyEntity)
        return party_class.model_validate(document)
