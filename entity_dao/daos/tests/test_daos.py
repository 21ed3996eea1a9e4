"""
Tests for the entity DAOs on the memory engine.

Each DAO is checked for its uniqueness rules on insert and update and for
its entity specific finders.
"""

import pytest

from entity_dao.bootstrap import Persistence, build_memory_persistence
from entity_dao.daos import party, permission_bit, role
from entity_dao.daos.geography import (
    CITY_NAME_IN_USE,
    ISO_CODE_IN_USE,
    STATE_CODE_IN_USE,
)
from entity_dao.domain import (
    AccountRoleEntity,
    OrganizationEntity,
    PartyEntity,
    PersonEntity,
)
from entity_dao.domain.tests.factories import (
    AccountFactory,
    AuthContextFactory,
    CityFactory,
    CountryFactory,
    DisplayNameFactory,
    EmailAddressFactory,
    OrganizationFactory,
    PermissionBitFactory,
    PersonFactory,
    RoleFactory,
    RolePermissionBitFactory,
    StateProvinceFactory,
)
from entity_dao.persistence import EntityValidationError
from entity_dao.validators.account import ANOTHER_USER
from entity_dao.validators.party import TYPE_MISMATCH


@pytest.fixture
def persistence() -> Persistence:
    """Create fresh memory-backed DAOs for each test."""
    return build_memory_persistence()


def error_messages(exc_info):
    return [error.message for error in exc_info.value.errors]


class TestAccountDao:
    @pytest.mark.asyncio
    async def test_username_is_unique(self, persistence: Persistence) -> None:
        dao = persistence.account_dao
        await dao.insert(AccountFactory(username="alice"))

        with pytest.raises(EntityValidationError) as exc_info:
            await dao.insert(AccountFactory(username="alice"))

        assert error_messages(exc_info) == [ANOTHER_USER]

    @pytest.mark.asyncio
    async def test_update_does_not_collide_with_itself(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.account_dao
        alice = await dao.insert(AccountFactory(username="alice"))
        bob = await dao.insert(AccountFactory(username="bob"))

        alice.locked = True
        assert (await dao.update(alice)).locked is True

        bob.username = "alice"
        with pytest.raises(EntityValidationError):
            await dao.update(bob)

    @pytest.mark.asyncio
    async def test_finders(self, persistence: Persistence) -> None:
        dao = persistence.account_dao
        alice = await dao.insert(
            AccountFactory(username="alice", contact_id="c1")
        )

        assert await dao.find_one_by_username("alice") == alice
        assert await dao.find_one_by_username("nobody") is None
        assert await dao.find_all_by_contact_id("c1") == [alice]


class TestAccountRoleDao:
    @pytest.mark.asyncio
    async def test_links_by_account_and_role(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.account_role_dao
        first = await dao.insert(
            AccountRoleEntity(id_account="a1", id_role="r1")
        )
        second = await dao.insert(
            AccountRoleEntity(id_account="a1", id_role="r2")
        )
        third = await dao.insert(
            AccountRoleEntity(id_account="a2", id_role="r1")
        )

        assert await dao.find_all_by_account_id("a1") == [first, second]
        assert await dao.find_all_by_role_id("r1") == [first, third]
        assert await dao.find_all_by_account_ids_in(["a2"]) == [third]

        await dao.delete_all_by_id_account("a1")

        assert await dao.find_all() == [third]

    @pytest.mark.asyncio
    async def test_link_needs_both_ids(self, persistence: Persistence) -> None:
        with pytest.raises(EntityValidationError):
            await persistence.account_role_dao.insert(
                AccountRoleEntity(id_account="a1")
            )


class TestAuthContextDao:
    @pytest.mark.asyncio
    async def test_name_is_unique(self, persistence: Persistence) -> None:
        dao = persistence.auth_context_dao
        person = await dao.insert(AuthContextFactory(name="PERSON"))

        with pytest.raises(EntityValidationError):
            await dao.insert(AuthContextFactory(name="PERSON"))

        assert await dao.find_one_by_name("PERSON") == person


class TestPermissionBitDao:
    @pytest.mark.asyncio
    async def test_name_and_position_are_unique_per_context(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.permission_bit_dao
        await dao.insert(
            PermissionBitFactory(name="READ", position=0, id_auth_context="c1")
        )

        with pytest.raises(EntityValidationError) as exc_info:
            await dao.insert(
                PermissionBitFactory(
                    name="READ", position=0, id_auth_context="c1"
                )
            )

        assert error_messages(exc_info) == [
            permission_bit.NAME_IN_USE,
            permission_bit.POSITION_IN_USE,
        ]

    @pytest.mark.asyncio
    async def test_only_the_colliding_attribute_is_reported(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.permission_bit_dao
        await dao.insert(
            PermissionBitFactory(name="READ", position=0, id_auth_context="c1")
        )

        with pytest.raises(EntityValidationError) as exc_info:
            await dao.insert(
                PermissionBitFactory(
                    name="WRITE", position=0, id_auth_context="c1"
                )
            )

        assert error_messages(exc_info) == [permission_bit.POSITION_IN_USE]

    @pytest.mark.asyncio
    async def test_other_context_does_not_collide(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.permission_bit_dao
        await dao.insert(
            PermissionBitFactory(name="READ", position=0, id_auth_context="c1")
        )

        await dao.insert(
            PermissionBitFactory(name="READ", position=0, id_auth_context="c2")
        )

        assert len(await dao.find_all_by_id_auth_context("c2")) == 1

    @pytest.mark.asyncio
    async def test_update_keeps_its_own_name_and_position(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.permission_bit_dao
        read = await dao.insert(
            PermissionBitFactory(name="READ", position=0, id_auth_context="c1")
        )
        write = await dao.insert(
            PermissionBitFactory(
                name="WRITE", position=1, id_auth_context="c1"
            )
        )

        read.description = "Read records"
        assert (await dao.update(read)).description == "Read records"

        write.name = "READ"
        with pytest.raises(EntityValidationError) as exc_info:
            await dao.update(write)

        assert error_messages(exc_info) == [permission_bit.NAME_IN_USE]


class TestRoleDao:
    @pytest.mark.asyncio
    async def test_name_is_unique(self, persistence: Persistence) -> None:
        dao = persistence.role_dao
        await dao.insert(RoleFactory(name="admin"))

        with pytest.raises(EntityValidationError) as exc_info:
            await dao.insert(RoleFactory(name="admin"))

        assert error_messages(exc_info) == [role.NAME_IN_USE]

    @pytest.mark.asyncio
    async def test_parent_role_must_exist(
        self, persistence: Persistence
    ) -> None:
        with pytest.raises(EntityValidationError) as exc_info:
            await persistence.role_dao.insert(
                RoleFactory(id_parent_role="missing")
            )

        assert error_messages(exc_info) == [role.PARENT_ROLE_NOT_FOUND]

    @pytest.mark.asyncio
    async def test_role_can_not_be_its_own_parent(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.role_dao
        admin = await dao.insert(RoleFactory(name="admin"))

        admin.id_parent_role = admin.id
        with pytest.raises(EntityValidationError) as exc_info:
            await dao.update(admin)

        assert error_messages(exc_info) == [role.PARENT_ROLE_IS_SELF]

    @pytest.mark.asyncio
    async def test_children_of_a_role(self, persistence: Persistence) -> None:
        dao = persistence.role_dao
        admin = await dao.insert(RoleFactory(name="admin"))
        editor = await dao.insert(
            RoleFactory(name="editor", id_parent_role=admin.id)
        )

        assert await dao.find_all_by_parent_id(admin.id) == [editor]
        assert await dao.find_one_by_name("editor") == editor


class TestRolePermissionBitDao:
    @pytest.mark.asyncio
    async def test_links(self, persistence: Persistence) -> None:
        dao = persistence.role_permission_bit_dao
        first = await dao.insert(
            RolePermissionBitFactory(id_role="r1", id_permission_bit="b1")
        )
        second = await dao.insert(
            RolePermissionBitFactory(id_role="r2", id_permission_bit="b1")
        )

        assert await dao.find_all_by_role_id("r1") == [first]
        assert await dao.find_all_by_role_ids_in(["r1", "r2"]) == [
            first,
            second,
        ]
        assert await dao.find_all_by_permission_bit_id("b1") == [
            first,
            second,
        ]

        await dao.delete_all_by_id_role("r2")

        assert await dao.find_all() == [first]


class TestDisplayNameDao:
    @pytest.mark.asyncio
    async def test_display_name_is_unique(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.display_name_dao
        inserted = await dao.insert(DisplayNameFactory(display_name="ada"))

        with pytest.raises(EntityValidationError):
            await dao.insert(DisplayNameFactory(display_name="ada"))

        assert inserted.date_created is None
        assert await dao.find_one_by_display_name("ada") == inserted


class TestGeographyDaos:
    @pytest.mark.asyncio
    async def test_country_iso_code_is_unique(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.country_dao
        await dao.insert(CountryFactory(iso_code="US"))
        await dao.insert(CountryFactory(iso_code="BR", enabled=False))

        with pytest.raises(EntityValidationError) as exc_info:
            await dao.insert(CountryFactory(iso_code="US"))

        assert error_messages(exc_info) == [ISO_CODE_IN_USE]
        assert (await dao.find_one_by_iso_code("US")).iso_code == "US"
        assert [c.iso_code for c in await dao.find_all_enabled()] == ["US"]

    @pytest.mark.asyncio
    async def test_state_code_is_unique_per_country(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.state_province_dao
        await dao.insert(
            StateProvinceFactory(code="CA", country_iso_code="US")
        )
        await dao.insert(
            StateProvinceFactory(code="CA", country_iso_code="MX")
        )

        with pytest.raises(EntityValidationError) as exc_info:
            await dao.insert(
                StateProvinceFactory(code="CA", country_iso_code="US")
            )

        assert error_messages(exc_info) == [STATE_CODE_IN_USE]
        assert len(await dao.find_all_by_id_country("US")) == 1

    @pytest.mark.asyncio
    async def test_state_update_does_not_collide_with_itself(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.state_province_dao
        state = await dao.insert(
            StateProvinceFactory(code="ON", country_iso_code="CA")
        )

        state.name = "Ontario"

        assert (await dao.update(state)).name == "Ontario"

    @pytest.mark.asyncio
    async def test_city_name_is_unique_per_state(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.city_dao
        springfield = await dao.insert(
            CityFactory(name="Springfield", id_state_province="s1")
        )
        await dao.insert(
            CityFactory(name="Springfield", id_state_province="s2")
        )

        with pytest.raises(EntityValidationError) as exc_info:
            await dao.insert(
                CityFactory(name="Springfield", id_state_province="s1")
            )

        assert error_messages(exc_info) == [CITY_NAME_IN_USE]
        assert await dao.find_all_by_id_state_province("s1") == [springfield]


class TestPartyDao:
    @pytest.mark.asyncio
    async def test_documents_come_back_as_their_type(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.party_dao
        person = await dao.insert(PersonFactory())
        organization = await dao.insert(OrganizationFactory(name="Acme"))

        found = await dao.find_all()

        assert isinstance(person, PersonEntity)
        assert isinstance(organization, OrganizationEntity)
        assert [type(party) for party in found] == [
            PersonEntity,
            OrganizationEntity,
        ]
        assert found[1].name == "Acme"

    @pytest.mark.asyncio
    async def test_invalid_party_is_rejected(
        self, persistence: Persistence
    ) -> None:
        with pytest.raises(EntityValidationError):
            await persistence.party_dao.insert(PartyEntity(type="robot"))

    @pytest.mark.asyncio
    async def test_party_not_matching_its_type_is_not_stored(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.party_dao
        await dao.insert(OrganizationFactory(name="Acme"))

        with pytest.raises(EntityValidationError) as exc_info:
            await dao.insert(PersonFactory(type="organization"))
        with pytest.raises(EntityValidationError):
            await dao.insert(
                PartyEntity(type="person", emails=[EmailAddressFactory()])
            )

        assert error_messages(exc_info) == [TYPE_MISMATCH]
        assert await dao.count() == 1
        assert [party.name for party in await dao.find_all()] == ["Acme"]

    @pytest.mark.asyncio
    async def test_account_links_to_one_party(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.party_dao
        person = await dao.insert(PersonFactory(id_account="a1"))

        with pytest.raises(EntityValidationError) as exc_info:
            await dao.insert(OrganizationFactory(id_account="a1"))

        assert error_messages(exc_info) == [party.ACCOUNT_IN_USE]

        person.display_name = "Ada"
        assert (await dao.update(person)).display_name == "Ada"

    @pytest.mark.asyncio
    async def test_parties_without_account_do_not_collide(
        self, persistence: Persistence
    ) -> None:
        dao = persistence.party_dao
        await dao.insert(PersonFactory())
        await dao.insert(PersonFactory())

        assert await dao.count() == 2

    @pytest.mark.asyncio
    async def test_finders(self, persistence: Persistence) -> None:
        dao = persistence.party_dao
        person = await dao.insert(
            PersonFactory(
                id_account="a1",
                emails=[
                    EmailAddressFactory(address="ada@example.com"),
                    EmailAddressFactory(
                        address="ada@work.example.com", primary=False
                    ),
                ],
            )
        )
        await dao.insert(OrganizationFactory())

        assert await dao.find_all_by_type("person") == [person]
        assert await dao.find_one_by_id_account("a1") == person
        assert await dao.find_all_by_email("ada@work.example.com") == [person]
