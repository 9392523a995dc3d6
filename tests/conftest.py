"""
Shared fixtures for the permission service tests.
"""
import os

os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

import pytest

from page_access.permissions import PageName, PermissionLevel, Role, UserPermissions


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def admin_user():
    return UserPermissions(role=Role.ADMIN, permissions={PageName.STAFFS: PermissionLevel.NONE})


@pytest.fixture
def employee_user():
    return UserPermissions(role=Role.EMPLOYEE)


@pytest.fixture
def custom_user():
    return UserPermissions(role=Role.CUSTOM)
