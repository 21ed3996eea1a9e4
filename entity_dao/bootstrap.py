"""
Wiring of the DAOs.

``Persistence`` holds one instance of every DAO. ``build_persistence``
creates them from an engine factory (collection name -> DbEngine) and
``create_persistence`` picks the factory from DatabaseSettings.
"""

import logging
from typing import Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from entity_dao.config import ENGINE_MEMORY, ENGINE_MONGODB, DatabaseSettings
from entity_dao.daos import (
    AccountDao,
    AccountRoleDao,
    AuthContextDao,
    CityDao,
    CountryDao,
    DisplayNameDao,
    PartyDao,
    PermissionBitDao,
    RoleDao,
    RolePermissionBitDao,
    StateProvinceDao,
)
from entity_dao.domain import EntityProperties
from entity_dao.persistence import ConfigurationError, DbEngine
from entity_dao.persistence.engines import MemoryDbEngine, MongoDbEngine

logger = logging.getLogger(__name__)

EngineFactory = Callable[[str], DbEngine]

TIMESTAMPED = EntityProperties(identifier_generated=True, timestamp=True)
NOT_TIMESTAMPED = EntityProperties(identifier_generated=True, timestamp=False)


class Persistence:
    """One DAO per collection, all backed by the same kind of engine."""

    def __init__(self, engine_factory: EngineFactory) -> None:
        self.account_dao = AccountDao(engine_factory("account"), TIMESTAMPED)
        self.account_role_dao = AccountRoleDao(
            engine_factory("account_role"), TIMESTAMPED
        )
        self.auth_context_dao = AuthContextDao(
            engine_factory("auth_context"), TIMESTAMPED
        )
        self.permission_bit_dao = PermissionBitDao(
            engine_factory("permission_bit"), TIMESTAMPED
        )
        self.role_dao = RoleDao(engine_factory("role"), TIMESTAMPED)
        self.role_permission_bit_dao = RolePermissionBitDao(
            engine_factory("role_permission_bit"), TIMESTAMPED
        )
        self.display_name_dao = DisplayNameDao(
            engine_factory("display_name"), NOT_TIMESTAMPED
        )
        self.country_dao = CountryDao(
            engine_factory("country"), NOT_TIMESTAMPED
        )
        self.state_province_dao = StateProvinceDao(
            engine_factory("state_province"), NOT_TIMESTAMPED
        )
        self.city_dao = CityDao(engine_factory("city"), NOT_TIMESTAMPED)
        self.party_dao = PartyDao(engine_factory("party"), NOT_TIMESTAMPED)


def build_persistence(engine_factory: EngineFactory) -> Persistence:
    logger.debug("Building persistence")
    return Persistence(engine_factory)


def build_memory_persistence() -> Persistence:
    return build_persistence(MemoryDbEngine)


def build_mongodb_persistence(database: AsyncIOMotorDatabase) -> Persistence:
    """Build the DAOs on top of a motor database."""

    def engine_factory(collection_name: str) -> DbEngine:
        return MongoDbEngine(database[collection_name])

    return build_persistence(engine_factory)


def create_persistence(
    settings: Optional[DatabaseSettings] = None,
) -> Persistence:
    """Build the DAOs for the configured engine.

    Raises:
        ConfigurationError: If the engine name is unknown
    """
    settings = settings or DatabaseSettings.from_environ()
    logger.info(
        "Creating persistence",
        extra={"engine": settings.engine},
    )

    if settings.engine == ENGINE_MEMORY:
        return build_memory_persistence()

    if settings.engine == ENGINE_MONGODB:
        client = AsyncIOMotorClient(settings.mongodb_uri, tz_aware=True)
        return build_mongodb_persistence(client[settings.mongodb_database])

    logger.error(
        "Unknown persistence engine",
        extra={"engine": settings.engine},
    )
    raise ConfigurationError(f"Unknown persistence engine: {settings.engine}")
