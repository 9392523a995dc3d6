"""
Page permission lattice.

Resolves a (role, overrides, page) triple to one PermissionLevel:

- full:    create, view, edit, delete, approve
- view:    read everything, write nothing
- partial: read own + create/submit own data, no edit/delete/approve
- none:    page hidden and inaccessible

`view` and `partial` are not comparable; only `full` dominates the others.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from .logging_config import create_logger

logger = create_logger("services.permissions")


# ========= ENUMERATIONS =========
class PermissionLevel(str, Enum):
    FULL = "full"
    VIEW = "view"
    PARTIAL = "partial"
    NONE = "none"

    @classmethod
    def parse(cls, value: Any) -> "PermissionLevel":
        """Total conversion; anything unrecognised becomes NONE."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.NONE


class Role(str, Enum):
    ADMIN = "admin"
    EMPLOYEE = "employee"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: Any) -> "Role":
        if isinstance(value, cls):
            return value
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.EMPLOYEE
        if is_admin(value):
            return cls.ADMIN
        if isinstance(value, str) and value.strip().lower() == cls.EMPLOYEE.value:
            return cls.EMPLOYEE
        return cls.CUSTOM


class PageName(str, Enum):
    DASHBOARD = "Dashboard"
    PROFILE = "Profile"
    DOCUMENTS = "Documents"
    STAFFS = "Staffs"
    LEAVE = "Leave"
    REQUESTS = "Requests"
    COMPLAINTS = "Complaints"
    PAYROLLS = "Payrolls"
    OVERTIME = "Overtime"
    SCHEDULES = "Schedules"
    SETTINGS = "Settings"

    @classmethod
    def parse(cls, value: Any) -> Optional["PageName"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            return None


# Tagged default policies; the legacy table uses the opposite polarity (see legacy.py)
LATTICE_MISSING_POLICY = "fail_closed"

PageLike = Union[PageName, str]


def is_admin(role: Any) -> bool:
    """Admin match on a Role or raw stored role string ('admin' / 'administrator')."""
    if isinstance(role, Role):
        return role is Role.ADMIN
    if not role or not isinstance(role, str):
        return False
    return role.strip().lower() in ("admin", "administrator")


# ========= ROLE DEFAULTS =========
# Consulted only when the user has no explicit entry for the page.
# Admin is resolved before this table; custom has no defaults.
DEFAULT_ROLE_PERMISSIONS: Mapping[Role, Mapping[PageName, PermissionLevel]] = MappingProxyType({
    Role.ADMIN: MappingProxyType({}),
    Role.EMPLOYEE: MappingProxyType({
        PageName.DASHBOARD:  PermissionLevel.FULL,
        PageName.PROFILE:    PermissionLevel.FULL,
        PageName.DOCUMENTS:  PermissionLevel.FULL,
        PageName.COMPLAINTS: PermissionLevel.PARTIAL,
        PageName.REQUESTS:   PermissionLevel.PARTIAL,
        PageName.LEAVE:      PermissionLevel.PARTIAL,
    }),
    Role.CUSTOM: MappingProxyType({}),
})

# Pages that never fall back to the role default table for non-admins
NO_DEFAULT_PAGES = frozenset({PageName.SETTINGS})

# ========= PAGE ROUTES =========
PAGE_ROUTE_MAP: Mapping[PageName, List[str]] = MappingProxyType({
    PageName.DASHBOARD:  ["/"],
    PageName.PROFILE:    ["/profile"],
    PageName.DOCUMENTS:  ["/documents"],
    PageName.STAFFS:     ["/staffs", "/staffs/create", "/staffs/management", "/staffs/view/:id"],
    PageName.LEAVE:      ["/leave", "/leave/request", "/leave/status"],
    PageName.REQUESTS:   ["/requests", "/requests/purchasing", "/requests/using"],
    PageName.COMPLAINTS: ["/complaints", "/complaints/registration", "/complaints/resolving"],
    PageName.PAYROLLS:   ["/payrolls", "/payrolls/management", "/payrolls/settings", "/payrolls/overtime-calculation"],
    PageName.OVERTIME:   ["/overtime"],
    PageName.SCHEDULES:  ["/schedules"],
    PageName.SETTINGS:   ["/settings"],
})


def _is_none_literal(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() == PermissionLevel.NONE.value


def routes_for_page(page: PageLike) -> List[str]:
    name = PageName.parse(page)
    return list(PAGE_ROUTE_MAP.get(name, [])) if name else []


# ========= USER PERMISSIONS =========
@dataclass(frozen=True)
class UserPermissions:
    """Role plus explicit per-page overrides for one authenticated identity."""
    role: Role
    permissions: Mapping[PageName, PermissionLevel] = field(default_factory=dict)
    # stored role string, only used to key the legacy role permission table
    raw_role: str = field(default="", compare=False)

    def __post_init__(self):
        object.__setattr__(self, "permissions", MappingProxyType(dict(self.permissions)))
        if not self.raw_role:
            object.__setattr__(self, "raw_role", self.role.value)

    @classmethod
    def from_document(cls, doc: Optional[Dict[str, Any]]) -> "UserPermissions":
        """Build from a stored `{role, permissions: {pageName: level}}` document."""
        doc = doc or {}
        raw = doc.get("permissions") or {}
        overrides: Dict[PageName, PermissionLevel] = {}
        if isinstance(raw, dict):
            for key, value in raw.items():
                page = PageName.parse(key)
                if page is None:
                    logger.warning(f"Ignoring override for unknown page '{key}'")
                    continue
                level = PermissionLevel.parse(value)
                if level is PermissionLevel.NONE and not _is_none_literal(value):
                    logger.warning(f"Malformed permission value {value!r} for page {key}; treating as none")
                overrides[page] = level
        else:
            logger.warning(f"Ignoring permissions of unexpected type {type(raw).__name__}")
        raw_role = doc.get("role")
        return cls(
            role=Role.parse(raw_role),
            permissions=overrides,
            raw_role=raw_role.strip() if isinstance(raw_role, str) else "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role.value,
            "permissions": {p.value: lvl.value for p, lvl in self.permissions.items()},
        }


# ========= RESOLUTION =========
def resolve_level(user: Optional[UserPermissions], page: PageLike) -> PermissionLevel:
    """
    Resolve one page to a PermissionLevel, in strict order:

    1. no user                -> none
    2. admin                  -> full (before overrides, defaults and page special-cases)
    3. Settings               -> explicit override, else none
    4. explicit override      -> returned verbatim
    5. role default table     -> if present
    6. otherwise              -> none
    """
    if user is None:
        return PermissionLevel.NONE
    if user.role is Role.ADMIN:
        return PermissionLevel.FULL

    name = PageName.parse(page)
    if name is None:
        return PermissionLevel.NONE

    explicit = user.permissions.get(name)
    if name in NO_DEFAULT_PAGES:
        return explicit if explicit is not None else PermissionLevel.NONE
    if explicit is not None:
        return explicit

    default = DEFAULT_ROLE_PERMISSIONS.get(user.role, {}).get(name)
    if default is not None:
        return default
    return PermissionLevel.NONE


def can_access_page(user: Optional[UserPermissions], page: PageLike) -> bool:
    return resolve_level(user, page) is not PermissionLevel.NONE


def can_view_page(user: Optional[UserPermissions], page: PageLike) -> bool:
    return resolve_level(user, page) in (PermissionLevel.FULL, PermissionLevel.VIEW, PermissionLevel.PARTIAL)


def can_manage_page(user: Optional[UserPermissions], page: PageLike) -> bool:
    return resolve_level(user, page) is PermissionLevel.FULL


def can_submit_own_data(user: Optional[UserPermissions], page: PageLike) -> bool:
    return resolve_level(user, page) in (PermissionLevel.FULL, PermissionLevel.PARTIAL)


def has_partial_access(user: Optional[UserPermissions], page: PageLike) -> bool:
    return resolve_level(user, page) is PermissionLevel.PARTIAL


def can_edit_or_delete(user: Optional[UserPermissions], page: PageLike) -> bool:
    # partial users cannot edit or delete, not even their own submissions
    return resolve_level(user, page) is PermissionLevel.FULL


def can_approve_or_manage_others(user: Optional[UserPermissions], page: PageLike) -> bool:
    return resolve_level(user, page) is PermissionLevel.FULL


def get_accessible_pages(user: Optional[UserPermissions]) -> List[PageName]:
    """Pages whose resolved level is not none, in menu order."""
    if user is None:
        return []
    return [page for page in PageName if can_access_page(user, page)]
