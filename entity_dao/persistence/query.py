"""
Mongo-like query documents.

Queries are plain dictionaries in the MongoDB query language. The DAOs build
them through ``and_query`` / ``or_query`` or write them by hand for their
uniqueness checks; the MongoDB engine hands them to the driver unchanged and
the memory engine evaluates them with ``matches``.

Supported by ``matches``:

- field equality, with dotted paths into nested documents and lists
  (a list matches when any of its elements matches)
- ``$eq``, ``$ne``, ``$in``, ``$nin``, ``$gt``, ``$gte``, ``$lt``, ``$lte``,
  ``$exists``
- ``$and`` and ``$or`` at any level
"""

import operator
from typing import Any, Callable, Dict, List, Sequence

from entity_dao.domain import AttributeFilter

Query = Dict[str, Any]

_COMPARISONS: Dict[str, Callable[[Any, Any], bool]] = {
    "$gt": operator.gt,
    "$gte": operator.ge,
    "$lt": operator.lt,
    "$lte": operator.le,
}


def and_query(filters: Sequence[AttributeFilter]) -> Query:
    """Build a query matching documents that satisfy every filter.

    An empty filter list matches every document.
    """
    if not filters:
        return {}
    return {
        "$and": [
            {item.attribute_name: {"$eq": item.value}} for item in filters
        ]
    }


def or_query(filters: Sequence[AttributeFilter]) -> Query:
    """Build a query matching documents that satisfy at least one filter.

    The caller must not pass an empty list: MongoDB rejects an empty $or.
    """
    return {
        "$or": [
            {item.attribute_name: {"$eq": item.value}} for item in filters
        ]
    }


def matches(document: Dict[str, Any], query: Query) -> bool:
    """Return True when the document satisfies the query."""
    for key, condition in query.items():
        if key == "$and":
            if not all(matches(document, part) for part in condition):
                return False
        elif key == "$or":
            if not any(matches(document, part) for part in condition):
                return False
        elif key.startswith("$"):
            raise ValueError(f"Unsupported query operator: {key}")
        elif not _matches_condition(
            _values_at(document, key.split(".")), condition
        ):
            return False
    return True


def _values_at(value: Any, path: List[str]) -> List[Any]:
    # Missing paths resolve to no candidates at all
    if not path:
        return [value]
    if isinstance(value, list):
        return [
            found for item in value for found in _values_at(item, path)
        ]
    if isinstance(value, dict) and path[0] in value:
        return _values_at(value[path[0]], path[1:])
    return []


def _is_operator_document(condition: Any) -> bool:
    return (
        isinstance(condition, dict)
        and len(condition) > 0
        and all(key.startswith("$") for key in condition)
    )


def _matches_condition(candidates: List[Any], condition: Any) -> bool:
    if not _is_operator_document(condition):
        return _equals_any(candidates, condition)
    return all(
        _apply_operator(name, candidates, operand)
        for name, operand in condition.items()
    )


def _expand(candidates: List[Any]) -> List[Any]:
    expanded = []
    for candidate in candidates:
        expanded.append(candidate)
        if isinstance(candidate, list):
            expanded.extend(candidate)
    return expanded


def _equals_any(candidates: List[Any], operand: Any) -> bool:
    if operand is None and not candidates:
        return True
    return any(candidate == operand for candidate in _expand(candidates))


def _compare_any(
    candidates: List[Any], operand: Any, compare: Callable[[Any, Any], bool]
) -> bool:
    for candidate in _expand(candidates):
        if candidate is None or isinstance(candidate, list):
            continue
        try:
            if compare(candidate, operand):
                return True
        except TypeError:
            continue
    return False


def _apply_operator(name: str, candidates: List[Any], operand: Any) -> bool:
    if name == "$eq":
        return _equals_any(candidates, operand)
    if name == "$ne":
        return not _equals_any(candidates, operand)
    if name == "$in":
        return any(_equals_any(candidates, value) for value in operand)
    if name == "$nin":
        return not any(_equals_any(candidates, value) for value in operand)
    if name == "$exists":
        return bool(candidates) == bool(operand)
    if name in _COMPARISONS:
        return _compare_any(candidates, operand, _COMPARISONS[name])
    raise ValueError(f"Unsupported query operator: {name}")
