"""test_models.py: Unit tests for the accounts models."""

import pytest

from accounts.models import AdminUser, Role
from conftest import AdminUserFactory

pytestmark = pytest.mark.django_db


def test_role_name_comes_from_role(operator_user: AdminUser) -> None:
    assert operator_user.role_name == Role.Name.OPERATOR


def test_role_name_is_none_without_role(no_role_user: AdminUser) -> None:
    assert no_role_user.role_name is None


def test_display_name_falls_back_to_username(admin_user_factory: AdminUserFactory) -> None:
    user = admin_user_factory(first_name="", last_name="")
    assert user.display_name == user.username


def test_display_name_uses_full_name(operator_user: AdminUser) -> None:
    assert operator_user.display_name == "Ana Atendente"


def test_with_role_filters_users(operator_user: AdminUser, manager_user: AdminUser, no_role_user: AdminUser) -> None:
    operators = AdminUser.objects.with_role(Role.Name.OPERATOR)
    assert list(operators) == [operator_user]
    assert set(AdminUser.objects.with_role(Role.Name.OPERATOR, Role.Name.MANAGER)) == {operator_user, manager_user}
