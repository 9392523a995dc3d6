"""
Main Lambda function handler - Entry point for the page permissions API.

Architecture:
- Entry Point: lambda_handler validates and routes requests
- Handlers: Parse query parameters, shape responses
- Session / Resolver: Identity resolution and capability queries
- Models: Data access layer
- Utils: Shared utilities and helpers

The role cache and the employee directory cache live at module level, so they
survive across invocations of a warm container; each request gets its own
PermissionSession.
"""
from typing import Any, Dict
from .directory import EmployeeDirectory
from .handlers import (
    handle_options_request,
    handle_get_request,
    handle_delete_request,
    extract_caller_identity
)
from .logging_config import create_logger
from .resolver import IdentityResolver
from .session import PermissionSession
from .utils import build_response

logger = create_logger("permissions.lambda_handler")

RESOLVER = IdentityResolver()
DIRECTORY = EmployeeDirectory()


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler for the page permissions API.

    Routes requests based on HTTP method:
    - OPTIONS: CORS preflight and API metadata
    - GET: Resolve the caller's permissions (all pages, one page, an action, a route)
    - DELETE: Invalidate cached roles (caller only, or everything with scope=all)
    """
    method = (event.get("httpMethod") or "").upper()
    logger.info(f"Permissions Lambda Handler - Method: {method}")

    if method == "OPTIONS":
        return handle_options_request(event)

    caller_id, error_response = extract_caller_identity(event)
    if error_response:
        return error_response

    logger.info(f"Request by user: {caller_id}")

    try:
        if method == "GET":
            session = PermissionSession(RESOLVER)
            try:
                return handle_get_request(event, caller_id, session)
            finally:
                session.close()
        elif method == "DELETE":
            return handle_delete_request(event, caller_id, RESOLVER, DIRECTORY)
        else:
            return build_response(
                event=event,
                error="Method Not Allowed. Use GET or DELETE.",
                status=405
            )
    except Exception:
        logger.exception("Unhandled error in lambda_handler")
        return build_response(
            event=event,
            error="Internal server error",
            status=500
        )


logger.info("Page permissions Lambda Handler initialized")
