"""
Capability derivation.

Maps one PermissionLevel (plus the admin flag) to the boolean capabilities the
UI layer gates on, and refines them per action verb with a denial reason.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .permissions import PageLike, PermissionLevel, UserPermissions, resolve_level


@dataclass(frozen=True)
class CapabilitySet:
    can_access: bool = False
    can_view: bool = False
    can_manage: bool = False
    can_submit: bool = False
    is_partial_access: bool = False
    can_edit_or_delete: bool = False
    can_approve_or_manage_others: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {
            "canAccess": self.can_access,
            "canView": self.can_view,
            "canManage": self.can_manage,
            "canSubmit": self.can_submit,
            "isPartialAccess": self.is_partial_access,
            "canEditOrDelete": self.can_edit_or_delete,
            "canApproveOrManageOthers": self.can_approve_or_manage_others,
        }


NO_CAPABILITIES = CapabilitySet()

_CAPABILITY_TABLE: Dict[PermissionLevel, CapabilitySet] = {
    PermissionLevel.FULL: CapabilitySet(
        can_access=True, can_view=True, can_manage=True, can_submit=True,
        is_partial_access=False, can_edit_or_delete=True, can_approve_or_manage_others=True,
    ),
    PermissionLevel.VIEW: CapabilitySet(
        can_access=True, can_view=True, can_manage=False, can_submit=False,
        is_partial_access=False, can_edit_or_delete=False, can_approve_or_manage_others=False,
    ),
    PermissionLevel.PARTIAL: CapabilitySet(
        can_access=True, can_view=True, can_manage=False, can_submit=True,
        is_partial_access=True, can_edit_or_delete=False, can_approve_or_manage_others=False,
    ),
    PermissionLevel.NONE: NO_CAPABILITIES,
}


def derive_capabilities(level: Any, is_admin: bool = False) -> CapabilitySet:
    """Pure mapping from a level to its capability set. Admin always derives full."""
    if is_admin:
        return _CAPABILITY_TABLE[PermissionLevel.FULL]
    return _CAPABILITY_TABLE[PermissionLevel.parse(level)]


def capabilities_for(user: Optional[UserPermissions], page: PageLike) -> CapabilitySet:
    return derive_capabilities(resolve_level(user, page))


# ========= GUARDS & BUTTONS =========
GUARD_KINDS = {
    "access": "can_access",
    "view": "can_view",
    "manage": "can_manage",
    "submit": "can_submit",
    "editDelete": "can_edit_or_delete",
    "approve": "can_approve_or_manage_others",
}

BUTTON_TOOLTIPS = {
    "manage": "You need full access to perform this action",
    "submit": "You can only submit your own data",
    "view": "You need view access to perform this action",
}


def check_guard(caps: CapabilitySet, kind: str) -> bool:
    """Conditional-render check; unknown kinds are denied."""
    attr = GUARD_KINDS.get(kind)
    return bool(attr and getattr(caps, attr))


def check_button(caps: CapabilitySet, kind: str) -> Dict[str, Any]:
    """Enabled flag and default tooltip for a manage/submit/view button."""
    allowed = kind in BUTTON_TOOLTIPS and check_guard(caps, kind)
    return {
        "allowed": allowed,
        "tooltip": "" if allowed else BUTTON_TOOLTIPS.get(kind, ""),
    }


# ========= ACTION POLICY =========
ACTION_REASONS = {
    # action: (reason when partial, reason otherwise)
    "create": (
        "You can only create your own data",
        "You need permission to create",
    ),
    "edit": (
        "You cannot edit data after submission. You can only create and submit your own data.",
        "You need full access to edit data",
    ),
    "delete": (
        "You cannot delete data. You can only create and submit your own data.",
        "You need full access to delete data",
    ),
    "approve": (
        "You cannot approve requests. This is an admin-only action.",
        "You need full access to approve requests",
    ),
}

UNKNOWN_ACTION_REASON = "Unsupported action"


@dataclass(frozen=True)
class ActionDecision:
    action: str
    allowed: bool
    level: PermissionLevel
    is_partial_access: bool
    reason: str = ""
    is_own_data: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action,
            "allowed": self.allowed,
            "level": self.level.value,
            "isPartialAccess": self.is_partial_access,
            "reason": self.reason,
            "isOwnData": self.is_own_data,
        }


def _action_allowed(caps: CapabilitySet, action: str) -> bool:
    if action == "create":
        return caps.can_submit
    if action in ("edit", "delete"):
        return caps.can_edit_or_delete
    if action == "approve":
        return caps.can_approve_or_manage_others
    return False


def check_action(level: Any, action: str, is_own_data: bool = False) -> ActionDecision:
    """
    Page-level gate for one action verb.

    `is_own_data` is carried through for messaging only: a partial user is
    denied edit/delete even on records they created.
    """
    lvl = PermissionLevel.parse(level)
    caps = derive_capabilities(lvl)
    allowed = _action_allowed(caps, action)

    reason = ""
    if not allowed:
        reasons = ACTION_REASONS.get(action)
        if reasons is None:
            reason = UNKNOWN_ACTION_REASON
        else:
            reason = reasons[0] if caps.is_partial_access else reasons[1]

    return ActionDecision(
        action=action,
        allowed=allowed,
        level=lvl,
        is_partial_access=caps.is_partial_access,
        reason=reason,
        is_own_data=bool(is_own_data),
    )
