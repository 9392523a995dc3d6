"""
Models package for data access layer.
"""
from .database import (
    USER_ROLES_TBL,
    LEGACY_ROLES_TBL,
    EMPLOYEES_TBL,
    STAFFS_TBL,
    ROLE_PERMISSIONS_TBL,
)
from .permission_repository import get_user_permission_document, get_legacy_role
from .employee_repository import get_employee, scan_all_employees
from .staff_repository import find_staff_by_auth_user_id
from .role_permission_repository import load_role_permission_row

__all__ = [
    'USER_ROLES_TBL',
    'LEGACY_ROLES_TBL',
    'EMPLOYEES_TBL',
    'STAFFS_TBL',
    'ROLE_PERMISSIONS_TBL',
    'get_user_permission_document',
    'get_legacy_role',
    'get_employee',
    'scan_all_employees',
    'find_staff_by_auth_user_id',
    'load_role_permission_row',
]
