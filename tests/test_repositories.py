from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from page_access.errors import PermissionStoreError
from page_access.models import employee_repository, permission_repository, staff_repository


def client_error(message, code="ValidationException", operation="Query"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class TestPermissionRepository:
    def test_returns_item(self):
        table = MagicMock()
        table.get_item.return_value = {"Item": {"userID": "u1", "role": "admin"}}
        with patch.object(permission_repository, "USER_ROLES_TBL", table):
            assert permission_repository.get_user_permission_document("u1")["role"] == "admin"
        table.get_item.assert_called_once_with(Key={"userID": "u1"})

    def test_missing_document_is_none(self):
        table = MagicMock()
        table.get_item.return_value = {}
        with patch.object(permission_repository, "USER_ROLES_TBL", table):
            assert permission_repository.get_user_permission_document("u1") is None

    def test_client_error_raises_store_error(self):
        table = MagicMock()
        table.get_item.side_effect = client_error("throttled", code="ProvisionedThroughputExceededException")
        with patch.object(permission_repository, "USER_ROLES_TBL", table):
            with pytest.raises(PermissionStoreError):
                permission_repository.get_user_permission_document("u1")

    @pytest.mark.parametrize("item,expected", [
        ({"userID": "u1", "role": "custom"}, "custom"),
        ({"userID": "u1", "role": "  "}, None),
        ({"userID": "u1"}, None),
    ])
    def test_legacy_role(self, item, expected):
        table = MagicMock()
        table.get_item.return_value = {"Item": item}
        with patch.object(permission_repository, "LEGACY_ROLES_TBL", table):
            assert permission_repository.get_legacy_role("u1") == expected


class TestStaffRepository:
    def test_query_by_index(self):
        table = MagicMock()
        table.query.return_value = {"Items": [{"authUserId": "u1", "role": "manager"}]}
        with patch.object(staff_repository, "STAFFS_TBL", table):
            assert staff_repository.find_staff_by_auth_user_id("u1")["role"] == "manager"
        table.scan.assert_not_called()

    def test_missing_index_falls_back_to_scan(self):
        table = MagicMock()
        table.query.side_effect = client_error("The table does not have the specified index: authUserId-index")
        table.scan.side_effect = [
            {"Items": [], "LastEvaluatedKey": {"staffID": "s1"}},
            {"Items": [{"authUserId": "u1", "role": "employee"}]},
        ]
        with patch.object(staff_repository, "STAFFS_TBL", table):
            assert staff_repository.find_staff_by_auth_user_id("u1")["role"] == "employee"
        assert table.scan.call_count == 2
        assert table.scan.call_args.kwargs["ExclusiveStartKey"] == {"staffID": "s1"}

    def test_other_client_errors_propagate(self):
        table = MagicMock()
        table.query.side_effect = client_error("Access denied", code="AccessDeniedException")
        with patch.object(staff_repository, "STAFFS_TBL", table):
            with pytest.raises(ClientError):
                staff_repository.find_staff_by_auth_user_id("u1")

    def test_no_match(self):
        table = MagicMock()
        table.query.return_value = {"Items": []}
        with patch.object(staff_repository, "STAFFS_TBL", table):
            assert staff_repository.find_staff_by_auth_user_id("u1") is None


def test_scan_all_employees_paginates():
    table = MagicMock()
    table.scan.side_effect = [
        {"Items": [{"employeeID": "e1"}], "LastEvaluatedKey": {"employeeID": "e1"}},
        {"Items": [{"employeeID": "e2"}]},
    ]
    with patch.object(employee_repository, "EMPLOYEES_TBL", table):
        rows = employee_repository.scan_all_employees()
    assert [r["employeeID"] for r in rows] == ["e1", "e2"]
