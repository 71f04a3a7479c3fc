"""
Test suite for users.

Tests cover:
- Registration with hashed passwords
- Partial updates through the camelCase field map
- Job applications
- API endpoints
"""

import pytest

from jobly.core.database import fetch_one
from jobly.core.errors import DuplicateError, NoDataError, NotFoundError
from jobly.core.security import pwd_context
from jobly.crud import user as user_crud


NEW_USER = {
    "username": "new",
    "password": "password",
    "firstName": "Test",
    "lastName": "Tester",
    "email": "test@test.com",
    "isAdmin": False,
}


class TestUserCrud:
    """Tests for the user repository"""

    def test_register(self, seeded_db):
        user = user_crud.register(seeded_db, NEW_USER)

        assert user["username"] == "new"
        assert user["firstName"] == "Test"
        assert not user["isAdmin"]
        assert "password" not in user

        stored = fetch_one(seeded_db, "SELECT password FROM users WHERE username = $1", ["new"])
        assert stored["password"].startswith("$2b$")
        assert pwd_context.verify("password", stored["password"])

    def test_register_admin(self, seeded_db):
        user = user_crud.register(seeded_db, {**NEW_USER, "isAdmin": True})
        assert user["isAdmin"]

    def test_register_duplicate(self, seeded_db):
        with pytest.raises(DuplicateError):
            user_crud.register(seeded_db, {**NEW_USER, "username": "u1"})

    def test_find_all(self, seeded_db):
        users = user_crud.find_all(seeded_db)
        assert [u["username"] for u in users] == ["u1", "u2"]
        assert users[0]["email"] == "user1@user.com"

    def test_get(self, seeded_db):
        user = user_crud.get(seeded_db, "u1")
        assert user["firstName"] == "U1F"
        assert user["jobs"] == []

    def test_get_not_found(self, seeded_db):
        with pytest.raises(NotFoundError):
            user_crud.get(seeded_db, "nope")

    def test_update_maps_field_names(self, seeded_db):
        user = user_crud.update(seeded_db, "u1", {"firstName": "zane", "lastName": "goodman", "isAdmin": True})

        assert user["firstName"] == "zane"
        assert user["lastName"] == "goodman"
        assert user["isAdmin"]

        stored = fetch_one(seeded_db, "SELECT first_name, last_name FROM users WHERE username = $1", ["u1"])
        assert stored == {"first_name": "zane", "last_name": "goodman"}

    def test_update_hashes_password(self, seeded_db):
        user_crud.update(seeded_db, "u1", {"password": "new-password"})

        stored = fetch_one(seeded_db, "SELECT password FROM users WHERE username = $1", ["u1"])
        assert stored["password"] != "new-password"
        assert pwd_context.verify("new-password", stored["password"])

    def test_update_does_not_mutate_input(self, seeded_db):
        data = {"password": "new-password"}
        user_crud.update(seeded_db, "u1", data)
        assert data == {"password": "new-password"}

    def test_update_not_found(self, seeded_db):
        with pytest.raises(NotFoundError):
            user_crud.update(seeded_db, "nope", {"firstName": "x"})

    def test_update_no_data(self, seeded_db):
        with pytest.raises(NoDataError):
            user_crud.update(seeded_db, "u1", {})

    def test_remove(self, seeded_db):
        user_crud.remove(seeded_db, "u1")
        with pytest.raises(NotFoundError):
            user_crud.get(seeded_db, "u1")

    def test_remove_not_found(self, seeded_db):
        with pytest.raises(NotFoundError):
            user_crud.remove(seeded_db, "nope")


class TestJobApplications:
    """Tests for applying to jobs"""

    def test_apply(self, seeded_db):
        user_crud.apply_to_job(seeded_db, "u1", 2)
        user_crud.apply_to_job(seeded_db, "u1", 1)

        assert user_crud.get(seeded_db, "u1")["jobs"] == [1, 2]

    def test_apply_twice(self, seeded_db):
        user_crud.apply_to_job(seeded_db, "u1", 1)
        with pytest.raises(DuplicateError):
            user_crud.apply_to_job(seeded_db, "u1", 1)

    def test_apply_missing_job(self, seeded_db):
        with pytest.raises(NotFoundError):
            user_crud.apply_to_job(seeded_db, "u1", 99)

    def test_apply_missing_user(self, seeded_db):
        with pytest.raises(NotFoundError):
            user_crud.apply_to_job(seeded_db, "nope", 1)


class TestUserEndpoints:
    """Tests for /users endpoints"""

    def test_create_user(self, client, seeded_db, api_prefix):
        response = client.post(f"{api_prefix}/users/", json=NEW_USER)

        assert response.status_code == 201
        assert response.json() == {
            "username": "new",
            "firstName": "Test",
            "lastName": "Tester",
            "email": "test@test.com",
            "isAdmin": False,
        }

    def test_create_user_invalid_email(self, client, api_prefix):
        response = client.post(f"{api_prefix}/users/", json={**NEW_USER, "email": "not-an-email"})
        assert response.status_code == 422

    def test_create_duplicate_user(self, client, seeded_db, api_prefix):
        response = client.post(f"{api_prefix}/users/", json={**NEW_USER, "username": "u2"})
        assert response.status_code == 400

    def test_list_users(self, client, seeded_db, api_prefix):
        response = client.get(f"{api_prefix}/users/")

        assert response.status_code == 200
        assert [u["username"] for u in response.json()] == ["u1", "u2"]
        assert all("password" not in u for u in response.json())

    def test_get_user_with_applications(self, client, seeded_db, api_prefix):
        client.post(f"{api_prefix}/users/u1/jobs/1")
        response = client.get(f"{api_prefix}/users/u1")

        assert response.status_code == 200
        assert response.json()["jobs"] == [1]

    def test_update_user(self, client, seeded_db, api_prefix):
        response = client.patch(f"{api_prefix}/users/u1", json={"firstName": "New", "isAdmin": True})

        assert response.status_code == 200
        data = response.json()
        assert data["firstName"] == "New"
        assert data["isAdmin"] is True
        assert data["lastName"] == "U1L"

    def test_update_user_unknown_field(self, client, seeded_db, api_prefix):
        response = client.patch(f"{api_prefix}/users/u1", json={"username": "other"})
        assert response.status_code == 422

    def test_update_user_empty_body(self, client, seeded_db, api_prefix):
        response = client.patch(f"{api_prefix}/users/u1", json={})
        assert response.status_code == 400

    def test_delete_user(self, client, seeded_db, api_prefix):
        response = client.delete(f"{api_prefix}/users/u1")
        assert response.status_code == 204
        assert client.get(f"{api_prefix}/users/u1").status_code == 404

    def test_apply_to_job(self, client, seeded_db, api_prefix):
        response = client.post(f"{api_prefix}/users/u2/jobs/2")

        assert response.status_code == 201
        assert response.json() == {"applied": 2}

    def test_apply_to_missing_job(self, client, seeded_db, api_prefix):
        response = client.post(f"{api_prefix}/users/u2/jobs/99")
        assert response.status_code == 404


    @pytest.mark.parametrize("field", ["firstName", "lastName", "password", "email", "isAdmin"])
    def test_update_user_null_field(self, client, seeded_db, api_prefix, field):
        response = client.patch(f"{api_prefix}/users/u1", json={field: None})

        assert response.status_code == 422
        stored = fetch_one(seeded_db, "SELECT password, first_name FROM users WHERE username = $1", ["u1"])
        assert stored["password"] is not None
        assert stored["first_name"] == "U1F"
