"""
Route path to page name mapping used by route guards.

Unmapped routes return None, and guards grant access for them
(`UNMAPPED_ROUTE_POLICY`). This is the one place where the engine fails open
on missing data: it keeps routes that were never wired into the permission
system reachable.
"""
from typing import Any, Dict, Optional

from .logging_config import create_logger
from .permissions import PageName, UserPermissions, can_access_page

logger = create_logger("services.routes")

UNMAPPED_ROUTE_POLICY = "fail_open"

ROOT_SENTINEL = "/"

SEGMENT_TO_PAGE: Dict[str, PageName] = {
    "": PageName.DASHBOARD,
    "staffs": PageName.STAFFS,
    "leave": PageName.LEAVE,
    "requests": PageName.REQUESTS,
    "complaints": PageName.COMPLAINTS,
    "payrolls": PageName.PAYROLLS,
    "overtime": PageName.OVERTIME,
    "schedules": PageName.SCHEDULES,
    "settings": PageName.SETTINGS,
    "profile": PageName.PROFILE,
    "documents": PageName.DOCUMENTS,
}


def normalize_path(path: Any) -> str:
    """Strip leading/trailing slashes; the root collapses to the sentinel."""
    if not isinstance(path, str):
        return ""
    if path == ROOT_SENTINEL:
        return ROOT_SENTINEL
    return path.strip("/")


def page_name_for_path(path: Any) -> Optional[PageName]:
    if not isinstance(path, str):
        return None
    normalized = normalize_path(path)
    if normalized == ROOT_SENTINEL:
        return PageName.DASHBOARD
    base_segment = normalized.split("/")[0]
    return SEGMENT_TO_PAGE.get(base_segment)


def check_route_access(user: Optional[UserPermissions], path: Any) -> Dict[str, Any]:
    """Guard decision for a path: mapped pages go through the lattice, unmapped ones are granted."""
    page = page_name_for_path(path)
    if page is None:
        logger.warning(f"Could not determine page name for path: {path}")
        return {"path": path, "page": None, "unmapped": True, "hasAccess": True}
    return {
        "path": path,
        "page": page.value,
        "unmapped": False,
        "hasAccess": can_access_page(user, page),
    }
