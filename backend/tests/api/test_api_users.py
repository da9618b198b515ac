"""
用户管理 API 测试
"""
from fastapi.testclient import TestClient


class TestUsers:

    def test_list_users_admin(self, client: TestClient, admin_headers, normal_user, other_user):
        response = client.get("/users", headers=admin_headers)

        assert response.status_code == 200
        emails = {u["email"] for u in response.json()}
        assert emails == {"guest@test.com", "other@test.com"}

    def test_list_users_filter(self, client: TestClient, admin_headers, normal_user, other_user):
        response = client.get("/users", headers=admin_headers, params={"full_name": "李"})
        assert [u["email"] for u in response.json()] == ["other@test.com"]

    def test_list_users_filter_status(self, client: TestClient, admin_headers, normal_user):
        response = client.get("/users", headers=admin_headers, params={"status": "inactive"})
        assert response.json() == []

    def test_list_users_forbidden_for_user(self, client: TestClient, user_headers):
        response = client.get("/users", headers=user_headers)
        assert response.status_code == 403

    def test_get_own_profile(self, client: TestClient, user_headers, normal_user):
        response = client.get(f"/users/{normal_user.id}", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["profile"]["full_name"] == "张三"

    def test_get_other_profile_forbidden(self, client: TestClient, user_headers, other_user):
        response = client.get(f"/users/{other_user.id}", headers=user_headers)
        assert response.status_code == 403

    def test_admin_get_missing_user(self, client: TestClient, admin_headers):
        response = client.get("/users/missing", headers=admin_headers)
        assert response.status_code == 404

    def test_update_own_profile(self, client: TestClient, user_headers, normal_user):
        response = client.patch(f"/users/{normal_user.id}", headers=user_headers, json={
            "address": "杭州市滨江区"
        })

        assert response.status_code == 200
        assert response.json()["profile"]["address"] == "杭州市滨江区"

    def test_update_empty_body(self, client: TestClient, user_headers, normal_user):
        response = client.patch(f"/users/{normal_user.id}", headers=user_headers, json={})
        assert response.status_code == 400

    def test_user_cannot_change_status(self, client: TestClient, user_headers, normal_user):
        response = client.patch(f"/users/{normal_user.id}", headers=user_headers, json={
            "status": "inactive"
        })
        assert response.status_code == 403
        assert response.json()["detail"] == "无权修改账号状态"

    def test_admin_can_change_status(self, client: TestClient, admin_headers, normal_user):
        response = client.patch(f"/users/{normal_user.id}", headers=admin_headers, json={
            "status": "inactive"
        })
        assert response.status_code == 200
        assert response.json()["profile"]["status"] == "inactive"

    def test_update_null_email(self, client: TestClient, user_headers, normal_user):
        """显式传 null 的非空字段返回 422"""
        response = client.patch(f"/users/{normal_user.id}", headers=user_headers, json={
            "email": None
        })
        assert response.status_code == 422

    def test_update_null_profile_field(self, client: TestClient, user_headers, normal_user):
        response = client.patch(f"/users/{normal_user.id}", headers=user_headers, json={
            "full_name": None, "address": "杭州市滨江区"
        })
        assert response.status_code == 422

        response = client.get(f"/users/{normal_user.id}", headers=user_headers)
        assert response.json()["profile"]["full_name"] == "张三"
        assert response.json()["profile"]["address"] == "杭州市西湖区"

    def test_delete_user(self, client: TestClient, admin_headers, normal_user, other_user):
        response = client.delete(f"/users/{normal_user.id}", headers=admin_headers)

        assert response.status_code == 200
        assert [u["email"] for u in response.json()] == ["other@test.com"]

    def test_delete_missing_user(self, client: TestClient, admin_headers):
        response = client.delete("/users/missing", headers=admin_headers)
        assert response.status_code == 404
