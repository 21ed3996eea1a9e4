"""
Display name domain model.
"""

from typing import Optional

from .base import Entity


class DisplayNameEntity(Entity):
    """A unique, human readable label that can be reserved by a party."""

    display_name: Optional[str] = None
