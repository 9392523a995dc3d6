import pytest

from page_access.capabilities import (
    ACTION_REASONS,
    CapabilitySet,
    capabilities_for,
    check_action,
    check_button,
    check_guard,
    derive_capabilities,
)
from page_access.permissions import PageName, PermissionLevel, Role, UserPermissions

# level -> (access, view, manage, submit, partial, editDelete, approve)
TRUTH_TABLE = {
    PermissionLevel.FULL:    (True, True, True, True, False, True, True),
    PermissionLevel.VIEW:    (True, True, False, False, False, False, False),
    PermissionLevel.PARTIAL: (True, True, False, True, True, False, False),
    PermissionLevel.NONE:    (False, False, False, False, False, False, False),
}


def _flags(caps: CapabilitySet):
    return (
        caps.can_access,
        caps.can_view,
        caps.can_manage,
        caps.can_submit,
        caps.is_partial_access,
        caps.can_edit_or_delete,
        caps.can_approve_or_manage_others,
    )


class TestDeriveCapabilities:
    @pytest.mark.parametrize("level,expected", list(TRUTH_TABLE.items()))
    def test_truth_table(self, level, expected):
        assert _flags(derive_capabilities(level)) == expected

    @pytest.mark.parametrize("level", list(PermissionLevel))
    def test_partial_never_edits_or_approves(self, level):
        caps = derive_capabilities(level)
        assert caps.is_partial_access == (level is PermissionLevel.PARTIAL)
        if caps.is_partial_access:
            assert not caps.can_edit_or_delete
            assert not caps.can_approve_or_manage_others

    def test_admin_flag_derives_full(self):
        assert derive_capabilities(PermissionLevel.NONE, is_admin=True) == derive_capabilities(PermissionLevel.FULL)

    def test_unknown_level_is_no_capabilities(self):
        assert _flags(derive_capabilities("superuser")) == TRUTH_TABLE[PermissionLevel.NONE]

    def test_to_dict_keys(self):
        assert derive_capabilities("partial").to_dict() == {
            "canAccess": True,
            "canView": True,
            "canManage": False,
            "canSubmit": True,
            "isPartialAccess": True,
            "canEditOrDelete": False,
            "canApproveOrManageOthers": False,
        }


class TestScenarios:
    def test_employee_complaints(self, employee_user):
        caps = capabilities_for(employee_user, PageName.COMPLAINTS)
        assert _flags(caps) == (True, True, False, True, True, False, False)

    def test_custom_staffs(self, custom_user):
        assert _flags(capabilities_for(custom_user, PageName.STAFFS)) == TRUTH_TABLE[PermissionLevel.NONE]

    def test_employee_staffs_view_override(self):
        user = UserPermissions(role=Role.EMPLOYEE, permissions={PageName.STAFFS: PermissionLevel.VIEW})
        caps = capabilities_for(user, PageName.STAFFS)
        assert caps.can_view
        assert not caps.can_manage
        assert not caps.can_submit


class TestActionPolicy:
    def test_partial_can_create(self):
        decision = check_action(PermissionLevel.PARTIAL, "create")
        assert decision.allowed
        assert decision.reason == ""

    @pytest.mark.parametrize("action", ["edit", "delete", "approve"])
    def test_partial_denied_with_partial_reason(self, action):
        decision = check_action(PermissionLevel.PARTIAL, action)
        assert not decision.allowed
        assert decision.is_partial_access
        assert decision.reason == ACTION_REASONS[action][0]

    @pytest.mark.parametrize("action", ["edit", "delete"])
    def test_own_data_hint_does_not_grant(self, action):
        decision = check_action(PermissionLevel.PARTIAL, action, is_own_data=True)
        assert not decision.allowed
        assert decision.is_own_data

    def test_view_denied_with_generic_reason(self):
        decision = check_action(PermissionLevel.VIEW, "create")
        assert not decision.allowed
        assert not decision.is_partial_access
        assert decision.reason == "You need permission to create"

    @pytest.mark.parametrize("action", ["create", "edit", "delete", "approve"])
    def test_full_allows_everything(self, action):
        assert check_action(PermissionLevel.FULL, action).allowed

    def test_unknown_action_denied(self):
        decision = check_action(PermissionLevel.FULL, "archive")
        assert not decision.allowed
        assert decision.reason == "Unsupported action"

    def test_decision_exposes_level(self):
        payload = check_action("partial", "edit").to_dict()
        assert payload["level"] == "partial"
        assert payload["isPartialAccess"] is True
        assert payload["allowed"] is False


class TestGuardsAndButtons:
    def test_guard_kinds(self):
        caps = derive_capabilities(PermissionLevel.PARTIAL)
        assert check_guard(caps, "access")
        assert check_guard(caps, "submit")
        assert not check_guard(caps, "editDelete")
        assert not check_guard(caps, "approve")
        assert not check_guard(caps, "bogus")

    def test_button_tooltips(self):
        caps = derive_capabilities(PermissionLevel.VIEW)
        assert check_button(caps, "view") == {"allowed": True, "tooltip": ""}
        assert check_button(caps, "manage") == {
            "allowed": False,
            "tooltip": "You need full access to perform this action",
        }
        assert check_button(caps, "approve") == {"allowed": False, "tooltip": ""}
