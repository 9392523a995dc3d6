"""
Permission handler for routing and request orchestration.
"""
from typing import Any, Dict, Optional, Tuple
import jwt
from ..config import JWT_SECRET
from ..directory import EmployeeDirectory
from ..logging_config import create_logger
from ..permissions import PageName
from ..resolver import IdentityResolver
from ..routes import UNMAPPED_ROUTE_POLICY, check_route_access
from ..session import PermissionSession
from ..utils import build_response, now_iso

logger = create_logger("handlers.permission_handler")

SUPPORTED_ACTIONS = ("create", "edit", "delete", "approve")


def _flag(qs: Dict[str, Any], name: str) -> bool:
    return str(qs.get(name) or "").strip().lower() == "true"


def handle_options_request(event: Dict[str, Any]) -> Dict[str, Any]:
    """Handle OPTIONS request for CORS preflight."""
    return build_response(
        event=event,
        data={
            "ok": True,
            "supportedMethods": ["GET", "DELETE", "OPTIONS"],
            "pages": [p.value for p in PageName],
            "actions": list(SUPPORTED_ACTIONS),
            "unmappedRoutePolicy": UNMAPPED_ROUTE_POLICY,
            "queryParameters": {
                "page": "Page name to resolve (e.g. Staffs)",
                "action": "create | edit | delete | approve, together with page",
                "isOwnData": "true when the record belongs to the caller (display only)",
                "legacy": "true to answer from the legacy role permission table",
                "path": "Route path to map to a page and check"
            }
        },
        status=200
    )


def handle_get_request(event: Dict[str, Any], caller_id: str, session: PermissionSession) -> Dict[str, Any]:
    """Handle GET request for permission queries."""
    qs = event.get("queryStringParameters") or {}
    page_param = (qs.get("page") or "").strip()
    action = (qs.get("action") or "").strip()
    path = qs.get("path")

    session.on_identity_change(caller_id)
    base = {"userId": caller_id, "state": session.state.value, "retrievedAt": now_iso()}

    if path is not None:
        decision = check_route_access(session.user_permissions, path)
        return build_response(event=event, data={**base, **decision}, status=200)

    if not page_param:
        user = session.user_permissions
        return build_response(event=event, data={
            **base,
            "role": user.role.value if user else None,
            "pages": {p.value: session.page_summary(p) for p in PageName},
            "accessiblePages": [p.value for p in session.accessible_pages()],
        }, status=200)

    page = PageName.parse(page_param)
    if page is None:
        return build_response(event=event, error=f"Unknown page: {page_param}", status=400)

    if _flag(qs, "legacy"):
        return build_response(event=event, data={
            **base, "page": page.value, "legacyCanEdit": session.legacy_can_edit(page)
        }, status=200)

    if action:
        if action not in SUPPORTED_ACTIONS:
            return build_response(event=event, error=f"Unsupported action: {action}", status=400)
        decision = session.check_action(page, action, is_own_data=_flag(qs, "isOwnData"))
        return build_response(event=event, data={**base, "page": page.value, **decision.to_dict()}, status=200)

    return build_response(event=event, data={**base, **session.page_summary(page)}, status=200)


def handle_delete_request(event: Dict[str, Any], caller_id: str, resolver: IdentityResolver,
                          directory: EmployeeDirectory) -> Dict[str, Any]:
    """Handle DELETE request: explicit cache invalidation."""
    qs = event.get("queryStringParameters") or {}
    scope = (qs.get("scope") or "self").strip().lower()

    if scope == "all":
        resolver.clear_user_role_cache()
        directory.clear_employees_cache()
    elif scope == "self":
        resolver.clear_user_role_cache(caller_id)
    else:
        return build_response(event=event, error=f"Unsupported scope: {scope}", status=400)

    logger.info(f"Cache invalidated by {caller_id} (scope={scope})")
    return build_response(event=event, data={"ok": True, "scope": scope, "invalidatedAt": now_iso()}, status=200)


def _bearer_subject(event: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """Subject of an HS256 bearer token, or an error message."""
    headers = event.get("headers", {}) or {}
    auth_header = headers.get("Authorization") or headers.get("authorization") or ""
    if not auth_header.startswith("Bearer ") or not JWT_SECRET:
        return None, None
    token = auth_header[len("Bearer "):].strip()
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        return None, "Token expired"
    except jwt.InvalidTokenError:
        return None, "Invalid token"
    return payload.get("sub"), None


def extract_caller_identity(event: Dict[str, Any]) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
    """Extract caller identity from the event."""
    authz_ctx = (event.get("requestContext", {}) or {}).get("authorizer", {}) or {}
    caller_id = authz_ctx.get("sub") or authz_ctx.get("user_id") or (event.get("headers", {}) or {}).get("x-user-id")

    if not caller_id:
        caller_id, token_error = _bearer_subject(event)
        if token_error:
            return None, build_response(event=event, error=token_error, status=401)

    if not caller_id:
        return None, build_response(event=event, error="missing user identity", status=401)

    return str(caller_id), None
