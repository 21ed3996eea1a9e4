"""
Exceptions raised by the persistence layer.

Errors coming from the database driver itself (pymongo, motor) are not
wrapped and propagate unchanged.
"""

from typing import List

from entity_dao.domain import FieldError


class PersistenceError(Exception):
    """Base class of every error raised by the persistence layer"""

    pass


class IdentifierError(PersistenceError):
    """Raised when an entity has an id where none is allowed, or the
    other way around"""

    pass


class EntityValidationError(PersistenceError):
    """Raised when an entity fails field or database validation.

    The individual problems are available in ``errors``.
    """

    def __init__(self, errors: List[FieldError]) -> None:
        self.errors = list(errors)
        summary = "; ".join(
            f"{error.attribute}: {error.message}" for error in self.errors
        )
        super().__init__(f"Entity validation failed: {summary}")


class RecordNotFoundError(PersistenceError):
    """Raised when updating a record that does not exist"""

    pass


class DuplicateRecordError(PersistenceError):
    """Raised when inserting a record whose id is already stored"""

    pass


class MultipleRecordsError(PersistenceError):
    """Raised when a single-result query matches more than one record"""

    pass


class ConfigurationError(PersistenceError):
    """Raised when the persistence layer is configured with unknown values"""

    pass
