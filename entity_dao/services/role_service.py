"""
Role service.

Roles and their permission bits live in different collections and the
document database enforces no relation between them, so this service keeps
the role-permission bit links consistent with the role it is given:

- On insert, one link is created per distinct permission bit id.
- On update, links no longer wanted are deleted and missing links are
  created (set difference against the stored links).
- On remove, a role still linked to accounts is refused unless forced.

Roles are returned as dictionaries: the role fields plus a
``permission_bits`` list, each bit carrying its ``auth_context``.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from entity_dao.bootstrap import Persistence
from entity_dao.domain import (
    AuthContextEntity,
    FieldError,
    PermissionBitEntity,
    RoleEntity,
    RolePermissionBitEntity,
)
from entity_dao.persistence import EntityValidationError, IdentifierError
from entity_dao.persistence.ids import is_valid_id
from entity_dao.validators import validate_role

ROLE_PERMISSION_BIT = "role.permission_bit"
PERMISSION_BIT_NOT_IN_DATABASE = (
    "Some permission bit ids does not exist in the database"
)
ROLE_PERMISSION_BITS_EMPTY = "permission_bits is not a list or is empty"
PERMISSION_BITS_INVALID = (
    "The parameters does not have a valid permission bits data"
)
ACCOUNT = "account"
ROLE_ASSOCIATED_WITH_ACCOUNT = (
    "This role is associated with one or more account"
)

ROLE_FIELDS = ("name", "description", "enabled", "is_root", "id_parent_role")


class RoleService:
    """Role operations that keep the role-permission bit links in sync."""

    def __init__(self, persistence: Persistence) -> None:
        """Initialize the service.

        Args:
            persistence: The DAOs to work with
        """
        self.role_dao = persistence.role_dao
        self.role_permission_bit_dao = persistence.role_permission_bit_dao
        self.permission_bit_dao = persistence.permission_bit_dao
        self.auth_context_dao = persistence.auth_context_dao
        self.account_role_dao = persistence.account_role_dao
        self.logger = logging.getLogger("RoleService")

    async def insert(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Insert a role and link its permission bits.

        Args:
            payload: Role fields plus ``permission_bits``, a list of
                objects with an ``id``

        Raises:
            EntityValidationError: If the role or its permission bits are
                not valid
        """
        self.logger.debug(
            "Call to insert", extra={"role_name": payload.get("name")}
        )
        permission_bit_ids = await self._validate(payload)

        role = await self.role_dao.insert(self._role_from_payload(payload))
        await self.role_permission_bit_dao.insert_many(
            [
                RolePermissionBitEntity(
                    id_role=role.id, id_permission_bit=permission_bit_id
                )
                for permission_bit_id in permission_bit_ids
            ]
        )

        self.logger.info(
            "Role inserted",
            extra={
                "role_id": role.id,
                "permission_bit_count": len(permission_bit_ids),
            },
        )
        return await self._prepare_one_record(role)

    async def update(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Update a role and bring its permission bit links in line.

        Raises:
            IdentifierError: If the payload has no id
            EntityValidationError: If the role or its permission bits are
                not valid
            RecordNotFoundError: If the role does not exist
        """
        self.logger.debug(
            "Call to update", extra={"role_id": payload.get("id")}
        )
        if not is_valid_id(payload.get("id")):
            raise IdentifierError("Object does not have an id")
        permission_bit_ids = await self._validate(payload)

        role = await self.role_dao.update(
            self._role_from_payload(payload, include_identity=True)
        )

        current_links = await self.role_permission_bit_dao.find_all_by_role_id(
            role.id
        )
        wanted = set(permission_bit_ids)
        current = {link.id_permission_bit for link in current_links}
        stale_link_ids = [
            link.id
            for link in current_links
            if link.id_permission_bit not in wanted
        ]
        new_links = [
            RolePermissionBitEntity(
                id_role=role.id, id_permission_bit=permission_bit_id
            )
            for permission_bit_id in permission_bit_ids
            if permission_bit_id not in current
        ]
        await self.role_permission_bit_dao.delete_all_by_ids(stale_link_ids)
        await self.role_permission_bit_dao.insert_many(new_links)

        self.logger.info(
            "Role updated",
            extra={
                "role_id": role.id,
                "links_removed": len(stale_link_ids),
                "links_added": len(new_links),
            },
        )
        return await self._prepare_one_record(role)

    async def find_one_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        self.logger.debug(
            "Call to find_one_by_name", extra={"role_name": name}
        )
        role = await self.role_dao.find_one_by_name(name)
        return None if role is None else await self._prepare_one_record(role)

    async def find_one_by_id(self, role_id: str) -> Optional[Dict[str, Any]]:
        self.logger.debug("Call to find_one_by_id", extra={"role_id": role_id})
        role = await self.role_dao.find_one_by_id(role_id)
        return None if role is None else await self._prepare_one_record(role)

    async def find_all(self) -> List[Dict[str, Any]]:
        self.logger.debug("Call to find_all")
        return await self._prepare_several_records(
            await self.role_dao.find_all()
        )

    async def find_all_by_ids(
        self, role_ids: List[str]
    ) -> List[Dict[str, Any]]:
        self.logger.debug(
            "Call to find_all_by_ids", extra={"role_ids": role_ids}
        )
        return await self._prepare_several_records(
            await self.role_dao.find_all_by_ids(role_ids)
        )

    async def remove(self, role_id: str, force: bool = False) -> None:
        """Delete a role, its permission bit links and, when forced, its
        account links.

        Raises:
            EntityValidationError: If the role is linked to accounts and
                force is False
        """
        self.logger.debug(
            "Call to remove", extra={"role_id": role_id, "force": force}
        )
        account_links = await self.account_role_dao.find_all_by_role_id(
            role_id
        )
        if account_links and not force:
            self.logger.warning(
                "Refusing to remove a role linked to accounts",
                extra={
                    "role_id": role_id,
                    "account_link_count": len(account_links),
                },
            )
            raise EntityValidationError(
                [
                    FieldError(
                        attribute=ACCOUNT,
                        message=ROLE_ASSOCIATED_WITH_ACCOUNT,
                    )
                ]
            )

        await self.account_role_dao.delete_all_by_ids(
            [link.id for link in account_links]
        )
        await self.role_permission_bit_dao.delete_all_by_id_role(role_id)
        await self.role_dao.remove_by_id(role_id)

        self.logger.info("Role removed", extra={"role_id": role_id})

    def _role_from_payload(
        self, payload: Mapping[str, Any], include_identity: bool = False
    ) -> RoleEntity:
        fields = {key: payload[key] for key in ROLE_FIELDS if key in payload}
        if include_identity:
            fields["id"] = payload.get("id")
            fields["date_created"] = payload.get("date_created")
        try:
            return RoleEntity.model_validate(fields)
        except ValidationError as e:
            self.logger.warning(
                "Role payload does not fit the role model",
                extra={"validation_errors": e.errors()},
            )
            raise EntityValidationError(
                [
                    FieldError(
                        attribute=".".join(str(part) for part in error["loc"]),
                        message=error["msg"],
                        value=error.get("input", ""),
                    )
                    for error in e.errors()
                ]
            ) from e

    async def _validate(self, payload: Mapping[str, Any]) -> List[str]:
        """Validate the role fields and the permission bits.

        Returns:
            The distinct permission bit ids, in payload order
        """
        errors = validate_role(self._role_from_payload(payload))

        permission_bits = payload.get("permission_bits")
        if not isinstance(permission_bits, list) or not permission_bits:
            # Rejecting early, nothing else can be checked
            raise EntityValidationError(
                [
                    FieldError(
                        attribute=ROLE_PERMISSION_BIT,
                        message=ROLE_PERMISSION_BITS_EMPTY,
                    )
                ]
            )

        ids = [_permission_bit_id(bit) for bit in permission_bits]
        if not all(is_valid_id(value) for value in ids):
            errors.append(
                FieldError(
                    attribute=ROLE_PERMISSION_BIT,
                    message=PERMISSION_BITS_INVALID,
                )
            )
        if errors:
            raise EntityValidationError(errors)

        distinct_ids = list(dict.fromkeys(ids))
        await self._validate_permission_bit_ids(distinct_ids)
        return distinct_ids

    async def _validate_permission_bit_ids(self, ids: List[str]) -> None:
        found = await self.permission_bit_dao.find_all_by_ids(ids)
        if len(found) != len(ids):
            self.logger.warning(
                "Someone was trying to link a role with an invalid "
                "permission bit id",
                extra={
                    "requested_count": len(ids),
                    "found_count": len(found),
                },
            )
            raise EntityValidationError(
                [
                    FieldError(
                        attribute=ROLE_PERMISSION_BIT,
                        message=PERMISSION_BIT_NOT_IN_DATABASE,
                    )
                ]
            )

    async def _prepare_one_record(self, role: RoleEntity) -> Dict[str, Any]:
        return (await self._prepare_several_records([role]))[0]

    async def _prepare_several_records(
        self, roles: Sequence[RoleEntity]
    ) -> List[Dict[str, Any]]:
        links = await self.role_permission_bit_dao.find_all_by_role_ids_in(
            [role.id for role in roles]
        )
        permission_bits = await self.permission_bit_dao.find_all_by_ids(
            list(dict.fromkeys(link.id_permission_bit for link in links))
        )
        auth_contexts = await self.auth_context_dao.find_all_by_ids(
            list(
                dict.fromkeys(bit.id_auth_context for bit in permission_bits)
            )
        )
        bits_by_id = {bit.id: bit for bit in permission_bits}
        contexts_by_id = {context.id: context for context in auth_contexts}

        records = []
        for role in roles:
            record = role.model_dump()
            record["permission_bits"] = [
                _bit_record(
                    bits_by_id[link.id_permission_bit], contexts_by_id
                )
                for link in links
                if link.id_role == role.id
                and link.id_permission_bit in bits_by_id
            ]
            records.append(record)
        return records


def _permission_bit_id(bit: Any) -> Any:
    if isinstance(bit, Mapping):
        return bit.get("id")
    return getattr(bit, "id", None)


def _bit_record(
    bit: PermissionBitEntity, contexts_by_id: Dict[str, AuthContextEntity]
) -> Dict[str, Any]:
    record = bit.model_dump()
    context = contexts_by_id.get(bit.id_auth_context or "")
    record["auth_context"] = None if context is None else context.model_dump()
    return record
