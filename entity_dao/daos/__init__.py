"""
Entity DAOs.

Each DAO is engine agnostic: it adds the entity specific validations and
finders on top of AbstractDataAccessObject and runs its uniqueness checks
as mongo-like queries through whichever DbEngine it was built with.
"""

from .account import AccountDao
from .account_role import AccountRoleDao
from .auth_context import AuthContextDao
from .display_name import DisplayNameDao
from .geography import CityDao, CountryDao, StateProvinceDao
from .party import PartyDao
from .permission_bit import PermissionBitDao
from .role import RoleDao
from .role_permission_bit import RolePermissionBitDao

__all__ = [
    "AccountDao",
    "AccountRoleDao",
    "AuthContextDao",
    "CityDao",
    "CountryDao",
    "DisplayNameDao",
    "PartyDao",
    "PermissionBitDao",
    "RoleDao",
    "RolePermissionBitDao",
    "StateProvinceDao",
]
