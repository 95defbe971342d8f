import pytest
from helpdesk import create_app, mongo
from werkzeug.security import generate_password_hash
from unittest.mock import patch
import logging
from datetime import datetime
import mongomock

# Desactivar la propagación de logs para evitar duplicados en la consola de pytest
logging.getLogger("werkzeug").setLevel(logging.ERROR)
logging.getLogger("flask_limiter").setLevel(logging.ERROR)

TEST_PASSWORD = "ThisIsA-Valid-Password123!"


@pytest.fixture(scope="function")
def app():
    """Crea y configura una instancia de la aplicación Flask para cada test."""
    with patch('flask_pymongo.MongoClient', mongomock.MongoClient):
        app = create_app('testing')
        yield app


@pytest.fixture(scope="function")
def client(app):
    """Cliente de prueba simple para la aplicación Flask."""
    return app.test_client()


@pytest.fixture(scope="function")
def db(app):
    """Fixture que proporciona acceso a la BD y la limpia antes de cada test."""
    with app.app_context():
        mongo.db.client.drop_database(mongo.db.name)
        yield mongo


def make_persona(db, username, firstName, lastName, role, **extra):
    """Inserta una persona en `personas` y devuelve el documento con su _id."""
    persona = {
        "username": username,
        "email": f"{username}@example.com",
        "firstName": firstName,
        "lastName": lastName,
        "avatar": None,
        "phone": "+34600000000",
        "role": role,
        "password_hash": generate_password_hash(TEST_PASSWORD),
    }
    persona.update(extra)
    result = db.db.personas.insert_one(persona)
    persona["_id"] = result.inserted_id
    return persona


def make_ticket(db, client_id, created_at=None, **fields):
    """Inserta un ticket con valores por defecto razonables y devuelve el documento."""
    created_at = created_at or datetime(2024, 1, 15, 12, 0)
    ticket = {
        "title": "Ticket de prueba",
        "description": "Descripción del ticket de prueba.",
        "status": "Open",
        "type": "Hardware",
        "priority": "Medium",
        "createdAt": created_at,
        "updatedAt": created_at,
        "userId": None,
        "clientId": client_id,
    }
    ticket.update(fields)
    result = db.db.tickets.insert_one(ticket)
    ticket["_id"] = result.inserted_id
    return ticket


@pytest.fixture(scope="function")
def seed_test_admin(db):
    """Crea un usuario administrador de prueba."""
    return make_persona(db, "admin", "Admin", "User", "admin")


@pytest.fixture(scope="function")
def seed_test_technician(db):
    """Crea un técnico de prueba."""
    return make_persona(db, "tecnico", "Lucía", "Martín", "tecnico")


@pytest.fixture(scope="function")
def seed_test_client(db):
    """Crea un cliente de prueba (la empresa que abre los tickets)."""
    return make_persona(db, "cliente", "Acme", "S.L.", "cliente")


def login(client, persona):
    """Función de ayuda para iniciar sesión con una persona en los tests."""
    response = client.post(
        "/auth/login",
        json={"username": persona["username"], "password": TEST_PASSWORD},
    )
    assert response.status_code == 200, response.get_json()
    return response


@pytest.fixture
def authenticated_admin_client(client, seed_test_admin):
    """Cliente de prueba que ya ha iniciado sesión como administrador."""
    login(client, seed_test_admin)
    return client


@pytest.fixture
def logged_in_technician_client(client, seed_test_technician):
    """Cliente de prueba que ya ha iniciado sesión como técnico."""
    login(client, seed_test_technician)
    return client


@pytest.fixture
def logged_in_client(client, seed_test_client):
    """Cliente de prueba que ya ha iniciado sesión con el rol cliente."""
    login(client, seed_test_client)
    return client
