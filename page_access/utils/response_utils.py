"""
Response utilities for API responses and CORS handling.
"""
import json
from typing import Any, Dict, Optional
from ..config import ALLOWED_ORIGINS
from .json_utils import json_clean


def get_cors_headers(event: Dict[str, Any]) -> Dict[str, str]:
    """Get CORS headers based on request origin."""
    headers = event.get("headers", {}) or {}
    origin = (headers.get("origin") or headers.get("Origin") or "").rstrip("/")
    cors_origin = origin if origin in ALLOWED_ORIGINS else "null"
    return {
        "Access-Control-Allow-Origin": cors_origin,
        "Access-Control-Allow-Headers": "Content-Type, Authorization, x-user-id",
        "Access-Control-Allow-Methods": "OPTIONS,GET,DELETE",
        "Access-Control-Allow-Credentials": "true",
    }


def build_response(event: Optional[Dict[str, Any]] = None, data: Any = None, *,
                   status: int = 200, error: Optional[str] = None) -> Dict[str, Any]:
    """
    Build a standard API response with CORS headers and JSON body.
    """
    headers = get_cors_headers(event or {})

    if error:
        body = {"error": error}
        if status == 200:
            status = 400 if error == "Validation error" else 403 if error == "Forbidden" else 401
    else:
        body = data or {}

    return {
        "statusCode": status,
        "headers": headers,
        "body": json.dumps(json_clean(body), default=str),
    }
