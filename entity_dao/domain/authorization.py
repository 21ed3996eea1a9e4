"""
Authorization domain models: contexts, permission bits and roles.

An authorization context groups permission bits (for example "PERSON" with
bits READ, UPDATE, DELETE). A role owns a set of permission bits through
RolePermissionBitEntity records and may inherit from a parent role.
"""

from typing import Optional

from .base import Entity


class AuthContextEntity(Entity):
    """Named group of permission bits."""

    name: Optional[str] = None
    description: Optional[str] = None
    sort_order: int = 0
    enabled: bool = True


class PermissionBitEntity(Entity):
    """A single permission inside an authorization context.

    Both the name and the position are unique inside the owning context.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    position: Optional[int] = None
    id_auth_context: Optional[str] = None
    sort_order: int = 0


class RoleEntity(Entity):
    """Named set of permission bits."""

    name: Optional[str] = None
    description: Optional[str] = None
    enabled: bool = True
    is_root: bool = False
    id_parent_role: Optional[str] = None


class RolePermissionBitEntity(Entity):
    """Association between a role and a permission bit."""

    id_role: Optional[str] = None
    id_permission_bit: Optional[str] = None
