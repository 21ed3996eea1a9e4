"""
Domain layer for entity_dao.

This package contains the entities handled by the data access objects and
the small value types shared with the persistence layer. All domain
concerns are framework-independent: entities are plain Pydantic models
and know nothing about the database engine that stores them.
"""

from .account import AccountEntity, AccountRoleEntity
from .authorization import (
    AuthContextEntity,
    PermissionBitEntity,
    RoleEntity,
    RolePermissionBitEntity,
)
from .base import AttributeFilter, Entity, EntityProperties, FieldError
from .display_name import DisplayNameEntity
from .geography import CityEntity, CountryEntity, StateProvinceEntity
from .party import (
    PARTY_CLASSES,
    PARTY_TYPE_ORGANIZATION,
    PARTY_TYPE_PERSON,
    ContactMethod,
    EmailAddress,
    OrganizationEntity,
    PartyEntity,
    PersonEntity,
    PersonName,
    PhoneNumber,
    PostalAddress,
)

__all__ = [
    "AccountEntity",
    "AccountRoleEntity",
    "AttributeFilter",
    "AuthContextEntity",
    "CityEntity",
    "ContactMethod",
    "CountryEntity",
    "DisplayNameEntity",
    "EmailAddress",
    "Entity",
    "EntityProperties",
    "FieldError",
    "OrganizationEntity",
    "PARTY_CLASSES",
    "PARTY_TYPE_ORGANIZATION",
    "PARTY_TYPE_PERSON",
    "PartyEntity",
    "PermissionBitEntity",
    "PersonEntity",
    "PersonName",
    "PhoneNumber",
    "PostalAddress",
    "RoleEntity",
    "RolePermissionBitEntity",
    "StateProvinceEntity",
]
