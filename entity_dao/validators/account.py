"""
Field validations for accounts and account-role links.
"""

from typing import List, Sequence

from entity_dao.domain import AccountEntity, AccountRoleEntity, FieldError

from .common import require_not_blank

USERNAME = "username"
PASSWORD = "password"
USERNAME_EMPTY = "Username is empty"
PASSWORD_EMPTY = "Password is empty"
ANOTHER_USER = "There is another account with the same username"

ID_ACCOUNT = "id_account"
ID_ROLE = "id_role"
ID_ACCOUNT_EMPTY = "Account id is empty"
ID_ROLE_EMPTY = "Role id is empty"


def validate_account(account: AccountEntity) -> List[FieldError]:
    errors: List[FieldError] = []
    require_not_blank(errors, USERNAME, USERNAME_EMPTY, account.username)
    require_not_blank(errors, PASSWORD, PASSWORD_EMPTY, account.password)
    return errors


def validate_result_query_before_db_operation(
    results: Sequence[AccountEntity], account: AccountEntity
) -> List[FieldError]:
    """Turn the result of a same-username query into validation errors."""
    if not results:
        return []
    return [
        FieldError(
            attribute=USERNAME, message=ANOTHER_USER, value=account.username
        )
    ]


def validate_account_role(account_role: AccountRoleEntity) -> List[FieldError]:
    errors: List[FieldError] = []
    require_not_blank(
        errors, ID_ACCOUNT, ID_ACCOUNT_EMPTY, account_role.id_account
    )
    require_not_blank(errors, ID_ROLE, ID_ROLE_EMPTY, account_role.id_role)
    return errors
