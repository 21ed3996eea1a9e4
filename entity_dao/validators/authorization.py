"""
Field validations for authorization contexts, permission bits, roles and
role-permission links.
"""

from typing import List

from entity_dao.domain import (
    AuthContextEntity,
    FieldError,
    PermissionBitEntity,
    RoleEntity,
    RolePermissionBitEntity,
)

from .common import require_not_blank

NAME = "name"
DESCRIPTION = "description"
POSITION = "position"
ID_AUTH_CONTEXT = "id_auth_context"
ID_ROLE = "id_role"
ID_PERMISSION_BIT = "id_permission_bit"

NAME_EMPTY = "Name is empty"
DESCRIPTION_EMPTY = "Description is empty"
POSITION_INVALID = "Position must be an integer equal or greater than zero"
ID_AUTH_CONTEXT_EMPTY = "Authorization context id is empty"
ID_ROLE_EMPTY = "Role id is empty"
ID_PERMISSION_BIT_EMPTY = "Permission bit id is empty"


def validate_auth_context(auth_context: AuthContextEntity) -> List[FieldError]:
    errors: List[FieldError] = []
    require_not_blank(errors, NAME, NAME_EMPTY, auth_context.name)
    require_not_blank(
        errors, DESCRIPTION, DESCRIPTION_EMPTY, auth_context.description
    )
    return errors


def validate_permission_bit(
    permission_bit: PermissionBitEntity,
) -> List[FieldError]:
    errors: List[FieldError] = []
    require_not_blank(errors, NAME, NAME_EMPTY, permission_bit.name)
    require_not_blank(
        errors, DESCRIPTION, DESCRIPTION_EMPTY, permission_bit.description
    )
    position = permission_bit.position
    # bool is an int subclass
    if (
        not isinstance(position, int)
        or isinstance(position, bool)
        or position < 0
    ):
        errors.append(
            FieldError(
                attribute=POSITION,
                message=POSITION_INVALID,
                value="" if position is None else position,
            )
        )
    require_not_blank(
        errors,
        ID_AUTH_CONTEXT,
        ID_AUTH_CONTEXT_EMPTY,
        permission_bit.id_auth_context,
    )
    return errors


def validate_role(role: RoleEntity) -> List[FieldError]:
    errors: List[FieldError] = []
    require_not_blank(errors, NAME, NAME_EMPTY, role.name)
    require_not_blank(errors, DESCRIPTION, DESCRIPTION_EMPTY, role.description)
    return errors


def validate_role_permission_bit(
    role_permission_bit: RolePermissionBitEntity,
) -> List[FieldError]:
    errors: List[FieldError] = []
    require_not_blank(
        errors, ID_ROLE, ID_ROLE_EMPTY, role_permission_bit.id_role
    )
    require_not_blank(
        errors,
        ID_PERMISSION_BIT,
        ID_PERMISSION_BIT_EMPTY,
        role_permission_bit.id_permission_bit,
    )
    return errors
