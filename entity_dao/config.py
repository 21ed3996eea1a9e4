"""
Runtime configuration for entity_dao.

Settings come from environment variables:

- ``ENTITY_DAO_ENGINE``: ``memory`` (default) or ``mongodb``
- ``MONGODB_URI``: connection string, default ``mongodb://localhost:27017``
- ``MONGODB_DATABASE``: database name, default ``entity_dao``
- ``LOG_LEVEL``: logging level name, default ``INFO``
- ``LOG_FORMAT``: logging format string
"""

import logging
import os

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

ENGINE_MEMORY = "memory"
ENGINE_MONGODB = "mongodb"

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging() -> None:
    """Configure logging based on environment variables"""
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    # Validate log level
    numeric_level = getattr(logging, log_level, None)
    if not isinstance(numeric_level, int):
        print(f"Invalid log level: {log_level}, defaulting to INFO")
        numeric_level = logging.INFO

    log_format = os.environ.get("LOG_FORMAT", DEFAULT_LOG_FORMAT)
    logging.basicConfig(
        level=numeric_level,
        format=log_format,
        force=True,  # Override any existing configuration
    )
    logger.info(
        "Logging configured",
        extra={"log_level": log_level, "numeric_level": numeric_level},
    )


class DatabaseSettings(BaseModel):
    """Which engine backs the DAOs and how to reach it."""

    engine: str = Field(
        default=ENGINE_MEMORY,
        description="Engine name, 'memory' or 'mongodb'",
    )
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "entity_dao"

    @classmethod
    def from_environ(cls) -> "DatabaseSettings":
        settings = cls(
            engine=os.environ.get("ENTITY_DAO_ENGINE", ENGINE_MEMORY).lower(),
            mongodb_uri=os.environ.get(
                "MONGODB_URI", "mongodb://localhost:27017"
            ),
            mongodb_database=os.environ.get("MONGODB_DATABASE", "entity_dao"),
        )
        logger.debug(
            "Database settings loaded",
            extra={
                "engine": settings.engine,
                "mongodb_database": settings.mongodb_database,
            },
        )
        return settings
