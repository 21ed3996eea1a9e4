"""
Entity field validators.

Validators never raise: each returns the list of FieldError found, empty
when the entity is valid. The DAOs call them from ``validate_entity``.
"""

from .account import (
    validate_account,
    validate_account_role,
    validate_result_query_before_db_operation,
)
from .authorization import (
    validate_auth_context,
    validate_permission_bit,
    validate_role,
    validate_role_permission_bit,
)
from .geography import (
    validate_city,
    validate_country,
    validate_display_name,
    validate_state_province,
)
from .party import validate_party

__all__ = [
    "validate_account",
    "validate_account_role",
    "validate_auth_context",
    "validate_city",
    "validate_country",
    "validate_display_name",
    "validate_party",
    "validate_permission_bit",
    "validate_result_query_before_db_operation",
    "validate_role",
    "validate_role_permission_bit",
    "validate_state_province",
]
