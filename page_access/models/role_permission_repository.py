"""
Legacy role permission table repository (`{role, pages: {pageName: bool|str}}` rows).
"""
from typing import Any, Dict, Optional
from .database import ROLE_PERMISSIONS_TBL


def load_role_permission_row(role: str) -> Optional[Dict[str, Any]]:
    """Load the legacy permission row for one role name."""
    return ROLE_PERMISSIONS_TBL.get_item(Key={"role": str(role)}).get("Item")
