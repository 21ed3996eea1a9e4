"""
Helpers shared by the entity validators.
"""

from typing import Any, List

from entity_dao.domain import FieldError
from entity_dao.persistence.ids import is_blank


def require_not_blank(
    errors: List[FieldError], attribute: str, message: str, value: Any
) -> None:
    """Append an error when the value is None or a blank string."""
    if is_blank(value):
        errors.append(
            FieldError(
                attribute=attribute,
                message=message,
                value="" if value is None else value,
            )
        )
