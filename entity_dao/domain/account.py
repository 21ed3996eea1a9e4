"""
Account domain models.

An account is the login identity of a party. Accounts are linked to roles
through AccountRoleEntity records, emulating a join table on top of a
document store.
"""

from datetime import datetime
from typing import Optional

from .base import Entity


class AccountEntity(Entity):
    """Login identity. Usernames are unique across all accounts."""

    username: Optional[str] = None
    password: Optional[str] = None
    enabled: bool = True
    locked: bool = False
    expire: Optional[datetime] = None
    expire_password: Optional[datetime] = None
    contact_id: Optional[str] = None


class AccountRoleEntity(Entity):
    """Association between an account and a role."""

    id_account: Optional[str] = None
    id_role: Optional[str] = None
