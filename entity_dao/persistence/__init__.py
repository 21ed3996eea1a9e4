"""
Persistence layer: the generic DAO, the engine protocol and its errors.

Engine implementations live in ``entity_dao.persistence.engines``.
"""

from .dao import AbstractDataAccessObject
from .engine import DbEngine, DbEngineQueryMixin, Document
from .errors import (
    ConfigurationError,
    DuplicateRecordError,
    EntityValidationError,
    IdentifierError,
    MultipleRecordsError,
    PersistenceError,
    RecordNotFoundError,
)
from .query import Query, and_query, matches, or_query

__all__ = [
    "AbstractDataAccessObject",
    "ConfigurationError",
    "DbEngine",
    "DbEngineQueryMixin",
    "Document",
    "DuplicateRecordError",
    "EntityValidationError",
    "IdentifierError",
    "MultipleRecordsError",
    "PersistenceError",
    "Query",
    "RecordNotFoundError",
    "and_query",
    "matches",
    "or_query",
]
