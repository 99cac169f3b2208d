"""Tests for kimi_kitchen/services/roles.py - role predicates."""
import uuid

import pytest

from kimi_kitchen.services.roles import (
    Role,
    get_role_display_name,
    get_role_permissions,
    has_any_role,
    has_role,
    is_self_modification,
)


class TestHasRole:
    @pytest.mark.parametrize("user_role,required,expected", [
        (Role.ADMIN, Role.ADMIN, True),
        (Role.ADMIN, Role.CUSTOMER, True),
        (Role.MANAGER, Role.CHEF, True),
        (Role.MANAGER, Role.ADMIN, False),
        (Role.CHEF, Role.MANAGER, False),
        (Role.CUSTOMER, Role.CUSTOMER, True),
        (Role.CUSTOMER, Role.CHEF, False),
    ])
    def test_hierarchy(self, user_role, required, expected):
        assert has_role(user_role, required) is expected

    @pytest.mark.parametrize("user_role", [None, "", "SUPERUSER"])
    def test_missing_or_unknown_role(self, user_role):
        assert has_role(user_role, Role.CUSTOMER) is False


class TestHasAnyRole:
    def test_membership(self):
        assert has_any_role(Role.MANAGER, [Role.ADMIN, Role.MANAGER]) is True
        assert has_any_role(Role.CHEF, [Role.ADMIN, Role.MANAGER]) is False

    def test_not_hierarchical(self):
        # ADMIN outranks CHEF but is not in the set
        assert has_any_role(Role.ADMIN, [Role.CHEF]) is False

    def test_missing_role(self):
        assert has_any_role(None, [Role.ADMIN]) is False


class TestRoleDescriptions:
    def test_display_names(self):
        assert get_role_display_name(Role.ADMIN) == "Administrator"
        assert get_role_display_name(Role.CHEF) == "Chef"
        assert get_role_display_name("UNKNOWN") == "Customer"

    def test_permissions(self):
        assert "User management" in get_role_permissions(Role.ADMIN)
        assert get_role_permissions("UNKNOWN") == ["Basic access"]


class TestSelfModification:
    def test_same_id(self):
        user_id = uuid.uuid4()
        assert is_self_modification(user_id, user_id) is True
        assert is_self_modification(user_id, uuid.UUID(str(user_id))) is True

    def test_different_id(self):
        assert is_self_modification(uuid.uuid4(), uuid.uuid4()) is False
