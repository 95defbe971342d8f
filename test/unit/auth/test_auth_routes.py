from unittest.mock import patch

from pymongo.errors import PyMongoError

from conftest import TEST_PASSWORD
from helpdesk.exceptions import DatabaseQueryError
from helpdesk.repositories import MongoPersonRepository


def test_login_and_logout(client, seed_test_admin):
    """Test que un usuario puede iniciar sesión, consultar su perfil y cerrar sesión."""
    login_response = client.post("/auth/login", json={"username": "admin", "password": TEST_PASSWORD})
    assert login_response.status_code == 200
    assert login_response.get_json()["message"] == "¡Bienvenido de nuevo!"
    assert login_response.get_json()["user"]["role"] == "admin"

    me_response = client.get("/auth/me")
    assert me_response.status_code == 200
    assert me_response.get_json()["username"] == "admin"
    assert "password_hash" not in me_response.get_json()

    logout_response = client.post("/auth/logout")
    assert logout_response.status_code == 200
    assert logout_response.get_json() == {"message": "Has cerrado sesión correctamente."}

    assert client.get("/auth/me").status_code == 401


def test_login_with_email(client, seed_test_client):
    response = client.post("/auth/login", json={"username": "cliente@example.com", "password": TEST_PASSWORD})
    assert response.status_code == 200
    assert response.get_json()["user"]["firstName"] == "Acme"


def test_login_with_wrong_password(client, seed_test_admin):
    response = client.post("/auth/login", json={"username": "admin", "password": "incorrecta"})

    assert response.status_code == 401
    assert response.get_json() == {"message": "Usuario o contraseña incorrectos"}
    assert client.get("/auth/me").status_code == 401


def test_login_unknown_user(client, db):
    response = client.post("/auth/login", json={"username": "nadie", "password": TEST_PASSWORD})
    assert response.status_code == 401


def test_login_missing_fields(client, db):
    response = client.post("/auth/login", json={"username": "admin"})

    assert response.status_code == 400
    assert "password" in response.get_json()["errors"]


def test_login_with_form_data(client, seed_test_admin):
    response = client.post("/auth/login", data={"username": "admin", "password": TEST_PASSWORD})
    assert response.status_code == 200


def test_login_store_failure(client, db):
    error = DatabaseQueryError(original_exception=PyMongoError("down"))
    with patch.object(MongoPersonRepository, "find_by_username_or_email", side_effect=error):
        response = client.post("/auth/login", json={"username": "admin", "password": TEST_PASSWORD})

    assert response.status_code == 500


def test_logout_requires_login(client, db):
    response = client.post("/auth/logout")
    assert response.status_code == 401
    assert response.get_json() == {"message": "Unauthorized"}


def test_csrf_token_endpoint(client, db):
    response = client.get("/auth/csrf-token")
    assert response.status_code == 200
    assert response.get_json()["csrfToken"]


def test_login_with_csrf_enabled_requires_token_header(app, client, seed_test_admin):
    """
    GIVEN an application with CSRF protection enabled
    WHEN the JSON login is sent without and then with the token from /auth/csrf-token
    THEN the first attempt is rejected with 400 and the second logs the user in
    """
    app.config["WTF_CSRF_ENABLED"] = True
    credentials = {"username": "admin", "password": TEST_PASSWORD}

    rejected = client.post("/auth/login", json=credentials)
    assert rejected.status_code == 400
    assert rejected.get_json() == {"message": "The CSRF token is missing."}
    assert client.get("/auth/me").status_code == 401

    token = client.get("/auth/csrf-token").get_json()["csrfToken"]
    accepted = client.post("/auth/login", json=credentials, headers={"X-CSRFToken": token})

    assert accepted.status_code == 200
    assert accepted.get_json()["user"]["username"] == "admin"
