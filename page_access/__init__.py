"""
Page-level access control for the HRMS web app.
"""
from .capabilities import ActionDecision, CapabilitySet, check_action, derive_capabilities
from .legacy import legacy_can_edit, legacy_can_edit_page
from .permissions import (
    DEFAULT_ROLE_PERMISSIONS,
    PageName,
    PermissionLevel,
    Role,
    UserPermissions,
    get_accessible_pages,
    is_admin,
    resolve_level,
)
from .routes import page_name_for_path

__all__ = [
    'ActionDecision',
    'CapabilitySet',
    'check_action',
    'derive_capabilities',
    'legacy_can_edit',
    'legacy_can_edit_page',
    'DEFAULT_ROLE_PERMISSIONS',
    'PageName',
    'PermissionLevel',
    'Role',
    'UserPermissions',
    'get_accessible_pages',
    'is_admin',
    'resolve_level',
    'page_name_for_path',
]
