import orjson
import pytest
from django.test.client import Client
from django.urls import reverse

from accounts.models import AdminUser, Role

pytestmark = pytest.mark.django_db


class TestMe:
    def test_me_returns_role_and_permissions(self, operator_client: Client, operator_user: AdminUser) -> None:
        response = operator_client.get(reverse("api:me"))

        assert response.status_code == 200
        data = response.json()
        assert data["username"] == operator_user.username
        assert data["role"]["name"] == "operator"
        assert "manage_participants" in data["permissions"]
        assert "manage_users" not in data["permissions"]

    def test_me_requires_auth(self, client: Client) -> None:
        assert client.get(reverse("api:me")).status_code == 401

    def test_list_roles(self, operator_client: Client, role_admin: Role, role_manager: Role) -> None:
        response = operator_client.get(reverse("api:list_roles"))

        assert response.status_code == 200
        assert {"admin", "manager", "operator"} <= {r["name"] for r in response.json()}


class TestUserManagement:
    def test_operator_cannot_list_users(self, operator_client: Client) -> None:
        assert operator_client.get(reverse("api:list_users")).status_code == 403

    def test_manager_lists_users(self, manager_client: Client, operator_user: AdminUser) -> None:
        response = manager_client.get(reverse("api:list_users"))

        assert response.status_code == 200
        assert operator_user.username in [u["username"] for u in response.json()]

    def test_create_user_with_role(self, admin_role_client: Client, role_operator: Role) -> None:
        payload = {"username": "novo", "password": "segredo1", "role_id": str(role_operator.id)}

        response = admin_role_client.post(
            reverse("api:create_user"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 201
        user = AdminUser.objects.get(username="novo")
        assert user.role == role_operator
        assert user.check_password("segredo1")

    def test_create_duplicate_username(self, admin_role_client: Client, operator_user: AdminUser) -> None:
        payload = {"username": operator_user.username, "password": "segredo1"}

        response = admin_role_client.post(
            reverse("api:create_user"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 400

    def test_short_password_is_rejected(self, admin_role_client: Client) -> None:
        payload = {"username": "curto", "password": "123"}

        response = admin_role_client.post(
            reverse("api:create_user"), data=orjson.dumps(payload), content_type="application/json"
        )

        assert response.status_code == 422

    def test_update_user(self, admin_role_client: Client, operator_user: AdminUser) -> None:
        response = admin_role_client.patch(
            reverse("api:update_user", kwargs={"user_id": operator_user.id}),
            data=orjson.dumps({"first_name": "Beatriz"}),
            content_type="application/json",
        )

        assert response.status_code == 200
        operator_user.refresh_from_db()
        assert operator_user.first_name == "Beatriz"

    def test_cannot_delete_self(self, admin_role_client: Client, admin_role_user: AdminUser) -> None:
        response = admin_role_client.delete(reverse("api:delete_user", kwargs={"user_id": admin_role_user.id}))

        assert response.status_code == 400
        assert AdminUser.objects.filter(pk=admin_role_user.pk).exists()

    def test_delete_user(self, admin_role_client: Client, operator_user: AdminUser) -> None:
        response = admin_role_client.delete(reverse("api:delete_user", kwargs={"user_id": operator_user.id}))

        assert response.status_code == 204
        assert not AdminUser.objects.filter(pk=operator_user.pk).exists()

    def test_reset_password(self, admin_role_client: Client, operator_user: AdminUser) -> None:
        response = admin_role_client.post(
            reverse("api:reset_user_password", kwargs={"user_id": operator_user.id}),
            data=orjson.dumps({"password1": "nova-senha", "password2": "nova-senha"}),
            content_type="application/json",
        )

        assert response.status_code == 200
        operator_user.refresh_from_db()
        assert operator_user.check_password("nova-senha")

    def test_reset_password_mismatch(self, admin_role_client: Client, operator_user: AdminUser) -> None:
        response = admin_role_client.post(
            reverse("api:reset_user_password", kwargs={"user_id": operator_user.id}),
            data=orjson.dumps({"password1": "nova-senha", "password2": "outra-senha"}),
            content_type="application/json",
        )

        assert response.status_code == 422


class TestSetSingleRole:
    def test_replaces_previous_role(
        self, admin_role_client: Client, operator_user: AdminUser, role_manager: Role
    ) -> None:
        response = admin_role_client.put(
            reverse("api:set_user_role", kwargs={"user_id": operator_user.id}),
            data=orjson.dumps({"role_id": str(role_manager.id)}),
            content_type="application/json",
        )

        assert response.status_code == 200
        operator_user.refresh_from_db()
        assert operator_user.role == role_manager
        assert response.json()["role"]["name"] == "manager"

    def test_manager_cannot_set_roles(
        self, manager_client: Client, operator_user: AdminUser, role_manager: Role
    ) -> None:
        response = manager_client.put(
            reverse("api:set_user_role", kwargs={"user_id": operator_user.id}),
            data=orjson.dumps({"role_id": str(role_manager.id)}),
            content_type="application/json",
        )

        assert response.status_code == 403
