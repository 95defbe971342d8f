# helpdesk/commands.py

from flask.cli import with_appcontext
from helpdesk import mongo
from helpdesk.auth.models import Persona
from helpdesk.models import Priority, Role, Status, TicketType
import click
import pymongo
import random
import secrets
import string
from datetime import datetime, timedelta, timezone

SAMPLE_PERSONAS = [
    {'username': 'admin', 'firstName': 'Admin', 'lastName': 'User', 'email': 'admin@example.com', 'phone': '+34600000001', 'role': Role.ADMIN.value},
    {'username': 'tecnico_redes', 'firstName': 'Lucía', 'lastName': 'Martín', 'email': 'lucia.martin@example.com', 'phone': '+34600000002', 'role': Role.TECHNICIAN.value},
    {'username': 'tecnico_soporte', 'firstName': 'Javier', 'lastName': 'Ruiz', 'email': 'javier.ruiz@example.com', 'phone': '+34600000003', 'role': Role.TECHNICIAN.value},
    {'username': 'cliente_acme', 'firstName': 'Acme', 'lastName': 'S.L.', 'email': 'it@acme.example.com', 'phone': '+34600000004', 'role': Role.CLIENT.value},
    {'username': 'cliente_globex', 'firstName': 'Globex', 'lastName': 'S.A.', 'email': 'it@globex.example.com', 'phone': '+34600000005', 'role': Role.CLIENT.value},
]

SAMPLE_TITLES = [
    "No funciona la impresora de la planta 2",
    "Solicitud de acceso a la VPN",
    "El portátil no arranca",
    "Error al instalar la actualización del ERP",
    "Restablecer contraseña de correo",
    "La red Wi-Fi se desconecta",
]


def _random_password(length=12):
    alphabet = string.ascii_letters + string.digits + string.punctuation
    return ''.join(secrets.choice(alphabet) for i in range(length))


@click.command("init-db-data")
@click.option("--tickets", "ticket_count", default=30, show_default=True, help="Número de tickets de ejemplo a crear.")
@with_appcontext
def init_db_data_command(ticket_count):
    """Inicializa la base de datos con personas y tickets de ejemplo."""
    click.echo("Iniciando carga de datos iniciales para MongoDB...")

    try:
        for persona_data in SAMPLE_PERSONAS:
            username = persona_data['username']
            if mongo.db.personas.find_one({"username": username}):
                click.echo(f"El usuario '{username}' ya existe.")
                continue

            password = _random_password()
            user = Persona(password=password, **persona_data)
            mongo.db.personas.insert_one(user.to_document())
            click.echo(f"Usuario '{username}' creado con éxito.")
            click.echo(f"  -> Contraseña para '{username}': {password}")

        if mongo.db.tickets.count_documents({}) > 0:
            click.echo("Los Tickets ya existen.")
        else:
            click.echo("Cargando tickets de ejemplo...")
            technicians = [p['_id'] for p in mongo.db.personas.find({"role": Role.TECHNICIAN.value})]
            clients = [p['_id'] for p in mongo.db.personas.find({"role": Role.CLIENT.value})]
            now = datetime.now(timezone.utc)
            tickets = []
            for i in range(ticket_count):
                created_at = now - timedelta(days=random.randint(0, 180), minutes=random.randint(0, 1440))
                tickets.append({
                    "title": random.choice(SAMPLE_TITLES),
                    "description": "Ticket generado automáticamente para pruebas.",
                    "status": random.choice(list(Status)).value,
                    "type": random.choice(list(TicketType)).value,
                    "priority": random.choice(list(Priority)).value,
                    "createdAt": created_at,
                    "updatedAt": created_at,
                    # Algunos tickets quedan sin técnico asignado
                    "userId": random.choice(technicians + [None]) if technicians else None,
                    "clientId": random.choice(clients),
                })
            if tickets:
                mongo.db.tickets.insert_many(tickets)
            click.echo(f"{len(tickets)} tickets cargados.")

        click.echo("\nCarga de datos iniciales finalizada con éxito.")

    except pymongo.errors.PyMongoError as e:
        click.echo(f"\nERROR: Ocurrió un error de base de datos durante la inicialización: {e}", err=True)
