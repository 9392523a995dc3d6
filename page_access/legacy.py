"""
Bridge for the pre-RBAC role permission table.

Rows look like `{"role": "employee", "pages": {"Staffs": true, "Leave": "view"}}`,
where a page value is a boolean, one of `view | edit | not_access`, or missing.
The table only answers the two-state edit check below; it never feeds the
lattice.

Missing data is fail-open here (`LEGACY_MISSING_ROW_POLICY`), the opposite of
the lattice. Deployments that predate the permission rows rely on that, so the
two defaults are kept apart.
"""
from typing import Any, Dict, Iterable, List, Optional

from .logging_config import create_logger
from .models import load_role_permission_row
from .permissions import PageLike, PageName, Role, is_admin

logger = create_logger("services.legacy")

LEGACY_MISSING_ROW_POLICY = "fail_open"

LEGACY_VIEW = "view"
LEGACY_EDIT = "edit"
LEGACY_NOT_ACCESS = "not_access"


def normalize_legacy_value(value: Any) -> Any:
    """missing -> edit, True -> edit, False -> not_access, strings pass through."""
    if value is None:
        return LEGACY_EDIT
    if isinstance(value, bool):
        return LEGACY_EDIT if value else LEGACY_NOT_ACCESS
    return value


def normalize_legacy_table(rows: Any) -> List[Dict[str, Any]]:
    """Keep well-formed rows only: a role string and a dict of pages."""
    out: List[Dict[str, Any]] = []
    if rows is None:
        return out
    if not isinstance(rows, (list, tuple)):
        logger.warning(f"Ignoring legacy table of unexpected type {type(rows).__name__}")
        return out
    for row in rows:
        if not isinstance(row, dict) or not isinstance(row.get("role"), str):
            continue
        pages = row.get("pages")
        out.append({"role": row["role"], "pages": pages if isinstance(pages, dict) else {}})
    return out


def _page_key(page: PageLike) -> str:
    return page.value if isinstance(page, PageName) else str(page)


def _role_key(role: Any) -> str:
    return role.value if isinstance(role, Role) else str(role or "")


def _row_can_edit(row: Dict[str, Any], page: PageLike) -> bool:
    pages = row.get("pages") if isinstance(row.get("pages"), dict) else {}
    return normalize_legacy_value(pages.get(_page_key(page))) == LEGACY_EDIT


def legacy_can_edit(role: Any, page: PageLike, table: Optional[Iterable[Dict[str, Any]]]) -> bool:
    """
    Two-state edit check against an in-memory legacy table.

    admin -> True; no row for the role -> True; otherwise the normalized page
    value must be `edit`.
    """
    if is_admin(role):
        return True
    role_key = _role_key(role)
    for row in normalize_legacy_table(table):
        if row["role"] == role_key:
            return _row_can_edit(row, page)
    return True


def legacy_can_edit_page(page: PageLike, role: Any) -> bool:
    """Same check reading the role's row from the store; a store failure denies."""
    if is_admin(role):
        return True
    try:
        row = load_role_permission_row(_role_key(role))
    except Exception as e:
        logger.error(f"Error checking edit permission for role {role} on {_page_key(page)}: {e}")
        return False
    if not row:
        return True
    return _row_can_edit(row, page)
