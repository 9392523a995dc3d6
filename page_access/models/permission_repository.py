"""
Permission document repository (`{role, permissions: {pageName: level}}` keyed by user id).
"""
from typing import Any, Dict, Optional
from botocore.exceptions import BotoCoreError, ClientError
from ..errors import PermissionStoreError
from ..logging_config import create_logger
from .database import USER_ROLES_TBL, LEGACY_ROLES_TBL

logger = create_logger("models.permission_repository")


def get_user_permission_document(user_id: str) -> Optional[Dict[str, Any]]:
    """Load the permission document for a user, None when it does not exist.

    Store failures raise PermissionStoreError so callers can tell them apart
    from a missing document.
    """
    try:
        resp = USER_ROLES_TBL.get_item(Key={"userID": str(user_id)})
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Error loading permission document for {user_id}: {e}")
        raise PermissionStoreError(f"permission store unavailable for {user_id}") from e
    return resp.get("Item")


def get_legacy_role(user_id: str) -> Optional[str]:
    """Bare role string from the pre-RBAC role document, if any."""
    resp = LEGACY_ROLES_TBL.get_item(Key={"userID": str(user_id)})
    item = resp.get("Item") or {}
    role = item.get("role")
    return role if isinstance(role, str) and role.strip() else None
