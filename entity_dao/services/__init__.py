"""
Services spanning more than one DAO.
"""

from .role_service import RoleService

__all__ = ["RoleService"]
