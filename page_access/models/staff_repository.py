"""
Staff directory repository (staff rows linked to an auth user id).
"""
from typing import Any, Dict, Optional
from boto3.dynamodb.conditions import Key, Attr
from botocore.exceptions import ClientError
from ..config import TABLE_CONFIG
from ..logging_config import create_logger
from .database import STAFFS_TBL

logger = create_logger("models.staff_repository")


def find_staff_by_auth_user_id(user_id: str) -> Optional[Dict[str, Any]]:
    """First staff row whose authUserId matches, using the GSI and falling back to a scan."""
    try:
        resp = STAFFS_TBL.query(
            IndexName=TABLE_CONFIG["staff_auth_index"],
            KeyConditionExpression=Key("authUserId").eq(str(user_id)),
            Limit=1,
        )
        items = resp.get("Items", []) or []
    except ClientError as e:
        msg = (e.response.get("Error", {}) or {}).get("Message", str(e))
        if "does not have the specified index" in msg or "backfilling" in msg.lower():
            logger.warning(f"Staff index unavailable, scanning for authUserId={user_id}")
            items = []
            scan_kwargs = {"FilterExpression": Attr("authUserId").eq(str(user_id))}
            while True:
                resp = STAFFS_TBL.scan(**scan_kwargs)
                items.extend(resp.get("Items", []) or [])
                if items or "LastEvaluatedKey" not in resp:
                    break
                scan_kwargs["ExclusiveStartKey"] = resp["LastEvaluatedKey"]
        else:
            raise
    return items[0] if items else None
