import threading
from unittest.mock import MagicMock, patch

import pytest

from page_access.capabilities import CapabilitySet
from page_access.permissions import PageName, PermissionLevel, Role, UserPermissions
from page_access.session import PermissionSession, SessionState


def make_resolver(result=None, side_effect=None):
    resolver = MagicMock()
    if side_effect is not None:
        resolver.resolve.side_effect = side_effect
    else:
        resolver.resolve.return_value = result
    return resolver


class TestLifecycle:
    def test_initial_state_is_loading_and_denies(self):
        session = PermissionSession(make_resolver())
        assert session.state is SessionState.LOADING
        assert session.loading
        assert session.get_level(PageName.DASHBOARD) is PermissionLevel.NONE
        assert session.capabilities(PageName.DASHBOARD) == CapabilitySet()

    def test_identity_change_loads_permissions(self, employee_user):
        resolver = make_resolver(employee_user)
        session = PermissionSession(resolver)

        session.on_identity_change("u1")

        resolver.resolve.assert_called_once_with("u1")
        assert session.state is SessionState.READY
        assert not session.loading
        assert session.user_id == "u1"
        assert session.get_level(PageName.COMPLAINTS) is PermissionLevel.PARTIAL
        assert session.can_submit(PageName.COMPLAINTS)
        assert not session.can_edit_or_delete(PageName.COMPLAINTS)
        assert session.is_partial_access(PageName.COMPLAINTS)

    def test_failed_load_is_ready_with_no_access(self):
        session = PermissionSession(make_resolver(side_effect=RuntimeError("boom")))
        session.on_identity_change("u1")
        assert session.state is SessionState.READY
        assert session.user_permissions is None
        assert not session.can_access(PageName.DASHBOARD)

    def test_sign_out_clears_user(self, admin_user):
        session = PermissionSession(make_resolver(admin_user))
        session.on_identity_change("u1")
        assert session.can_manage(PageName.SETTINGS)

        session.on_identity_change(None)
        assert session.state is SessionState.SIGNED_OUT
        assert session.user_id is None
        assert not session.can_access(PageName.SETTINGS)
        assert session.accessible_pages() == []

    def test_identity_change_replaces_user(self, admin_user, custom_user):
        resolver = make_resolver()
        resolver.resolve.side_effect = [admin_user, custom_user]
        session = PermissionSession(resolver)

        session.on_identity_change("admin-1")
        assert session.can_approve_or_manage_others(PageName.LEAVE)
        session.on_identity_change("custom-1")
        assert session.user_id == "custom-1"
        assert not session.can_view(PageName.LEAVE)

    def test_refresh_clears_role_cache(self, employee_user):
        resolver = make_resolver(employee_user)
        session = PermissionSession(resolver)
        session.on_identity_change("u1")

        session.refresh()

        resolver.clear_user_role_cache.assert_called_once_with("u1")
        assert resolver.resolve.call_count == 2

    def test_refresh_without_identity_is_noop(self):
        resolver = make_resolver()
        assert PermissionSession(resolver).refresh() is None
        resolver.resolve.assert_not_called()


class TestBackgroundLoad:
    def test_loading_is_observable_until_fetch_completes(self, employee_user):
        release = threading.Event()

        def slow_resolve(user_id):
            release.wait(5)
            return employee_user

        session = PermissionSession(make_resolver(side_effect=slow_resolve))
        future = session.on_identity_change("u1", wait=False)
        try:
            assert session.loading
            assert not session.can_access(PageName.DASHBOARD)
            release.set()
            future.result(timeout=5)
            assert session.wait_until_ready(timeout=5)
            assert session.can_access(PageName.DASHBOARD)
        finally:
            release.set()
            session.close()

    def test_stale_load_is_discarded(self, admin_user, custom_user):
        release = threading.Event()

        def resolve(user_id):
            if user_id == "slow-admin":
                release.wait(5)
                return admin_user
            return custom_user

        session = PermissionSession(make_resolver(side_effect=resolve))
        future = session.on_identity_change("slow-admin", wait=False)
        try:
            session.on_identity_change("custom-1")
            release.set()
            future.result(timeout=5)
            assert session.user_id == "custom-1"
            assert session.user_permissions is custom_user
            assert not session.can_access(PageName.STAFFS)
        finally:
            release.set()
            session.close()


class TestQueries:
    def test_check_action_and_summary(self, employee_user):
        session = PermissionSession(make_resolver(employee_user))
        session.on_identity_change("u1")

        decision = session.check_action(PageName.LEAVE, "edit", is_own_data=True)
        assert not decision.allowed
        assert decision.level is PermissionLevel.PARTIAL

        summary = session.page_summary("Leave")
        assert summary["page"] == "Leave"
        assert summary["level"] == "partial"
        assert summary["capabilities"]["canSubmit"] is True

    def test_legacy_can_edit_uses_raw_role(self):
        user = UserPermissions(role=Role.CUSTOM, raw_role="manager")
        session = PermissionSession(make_resolver(user))
        session.on_identity_change("u1")
        with patch("page_access.session.legacy_can_edit_page", return_value=False) as legacy:
            assert session.legacy_can_edit(PageName.STAFFS) is False
        legacy.assert_called_once_with(PageName.STAFFS, "manager")

    def test_legacy_can_edit_denied_while_loading(self):
        session = PermissionSession(make_resolver())
        with patch("page_access.session.legacy_can_edit_page") as legacy:
            assert session.legacy_can_edit(PageName.STAFFS) is False
        legacy.assert_not_called()
