"""
Query helpers for the uniqueness checks of the entity DAOs.
"""

from typing import Any, Dict, List, Optional

from entity_dao.domain import FieldError
from entity_dao.persistence import Query


def same_values(
    values: Dict[str, Any], exclude_id: Optional[str] = None
) -> Query:
    """Query for records whose attributes equal ``values``.

    When ``exclude_id`` is given the record with that id is left out, which
    is what an update needs to not collide with itself.
    """
    conditions: List[Query] = [
        {attribute: {"$eq": value}} for attribute, value in values.items()
    ]
    if exclude_id is not None:
        conditions.append({"id": {"$ne": exclude_id}})
    return {"$and": conditions}


def duplicate_error(
    results: List[Any], attribute: str, message: str, value: Any
) -> List[FieldError]:
    """One FieldError when the uniqueness query found anything."""
    if not results:
        return []
    return [FieldError(attribute=attribute, message=message, value=value)]
