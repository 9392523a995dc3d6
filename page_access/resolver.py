"""
Identity resolution: user id -> role and per-page overrides.

Lookup order for the role:
1. permission document (`userRoles`)
2. legacy role document
3. employee record
4. staff record linked by `authUserId`
5. `employee`

Overrides only ever come from the permission document. A user resolved through
steps 2-5 gets the role defaults and nothing else.
"""
from typing import Optional

from .cache import TTLCache
from .config import ROLE_CACHE_TTL
from .errors import PermissionStoreError
from .logging_config import create_logger
from .models import (
    find_staff_by_auth_user_id,
    get_employee,
    get_legacy_role,
    get_user_permission_document,
)
from .permissions import Role, UserPermissions

logger = create_logger("services.resolver")

DEFAULT_ROLE = Role.EMPLOYEE.value


def _role_of(item) -> Optional[str]:
    role = (item or {}).get("role") or ""
    return role if isinstance(role, str) and role.strip() else None


class IdentityResolver:
    """Reads roles and overrides from the stores; owns the role cache."""

    def __init__(self, role_cache: Optional[TTLCache] = None):
        self.role_cache = role_cache if role_cache is not None else TTLCache(ROLE_CACHE_TTL, name="role_cache")

    # ========= PERMISSION DOCUMENT =========
    def fetch_user_permissions(self, user_id: str) -> Optional[UserPermissions]:
        """Permission document as UserPermissions, None when there is none.

        Raises PermissionStoreError when the store cannot be read.
        """
        doc = get_user_permission_document(user_id)
        if doc is None:
            return None
        return UserPermissions.from_document(doc)

    # ========= ROLE =========
    def fetch_user_role(self, user_id: str) -> str:
        """Role string through the full fallback chain; never raises."""
        try:
            doc = get_user_permission_document(user_id)
        except Exception as e:
            logger.error(f"Error fetching user role for {user_id}: {e}")
            return DEFAULT_ROLE
        if doc is not None:
            return _role_of(doc) or DEFAULT_ROLE
        return self._fetch_legacy_role(user_id)

    def _fetch_legacy_role(self, user_id: str) -> str:
        """Steps 2-5 of the chain, for callers that already know there is no permission document."""
        try:
            role = get_legacy_role(user_id)
            if role:
                logger.info(f"Role for {user_id} taken from legacy role document")
                return role

            role = _role_of(get_employee(user_id))
            if role:
                logger.info(f"Role for {user_id} taken from employee record")
                return role

            role = _role_of(find_staff_by_auth_user_id(user_id))
            if role:
                logger.info(f"Role for {user_id} taken from staff record")
                return role

            logger.warning(f"No role found for {user_id}; defaulting to {DEFAULT_ROLE}")
            return DEFAULT_ROLE
        except Exception as e:
            logger.error(f"Error fetching user role for {user_id}: {e}")
            return DEFAULT_ROLE

    def get_cached_user_role(self, user_id: str) -> str:
        return self.role_cache.get_or_fetch(user_id, lambda: self.fetch_user_role(user_id))

    def clear_user_role_cache(self, user_id: Optional[str] = None) -> None:
        self.role_cache.invalidate(user_id)

    # ========= FULL RESOLUTION =========
    def resolve(self, user_id: str) -> Optional[UserPermissions]:
        """
        Build the UserPermissions for one identity.

        A failing permission store resolves to None (no access). Without a
        permission document only the role comes from the legacy chain; the
        overrides stay empty.
        """
        try:
            perms = self.fetch_user_permissions(user_id)
        except PermissionStoreError:
            logger.exception(f"Permission store unavailable while resolving {user_id}")
            return None
        if perms is not None:
            return perms

        raw_role = self.role_cache.get_or_fetch(user_id, lambda: self._fetch_legacy_role(user_id))
        role = Role.parse(raw_role)
        logger.info(f"Resolved {user_id} via fallback chain: role={role.value}")
        return UserPermissions(role=role, permissions={}, raw_role=raw_role)
