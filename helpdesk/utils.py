# helpdesk/utils.py

from datetime import timezone
from bson.objectid import ObjectId

TICKET_FIELDS = ("title", "description", "status", "type", "priority")
PERSON_FIELDS = ("firstName", "lastName", "email", "avatar", "phone")


def to_utc(value):
    """Normaliza un datetime a UTC. PyMongo devuelve datetimes 'naive' que ya están en UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def month_key(value):
    """Clave 'YYYY-MM' del mes calendario (UTC) de un datetime."""
    return to_utc(value).strftime("%Y-%m")


def isoformat(value):
    if value is None:
        return None
    return to_utc(value).isoformat().replace("+00:00", "Z")


def object_id_str(value):
    return str(value) if isinstance(value, ObjectId) else value


def full_name(person):
    return f"{person.get('firstName', '')} {person.get('lastName', '')}"


def serialize_ticket(ticket):
    """Convierte un documento de ticket de MongoDB en un dict apto para JSON."""
    data = {"id": str(ticket["_id"])}
    for field in TICKET_FIELDS:
        data[field] = ticket.get(field)
    data["createdAt"] = isoformat(ticket.get("createdAt"))
    data["updatedAt"] = isoformat(ticket.get("updatedAt"))
    data["userId"] = object_id_str(ticket.get("userId"))
    data["clientId"] = object_id_str(ticket.get("clientId"))
    return data


def serialize_person(person):
    """Datos públicos de una persona (sin credenciales). None si no existe."""
    if not person:
        return None
    data = {"id": str(person["_id"])}
    for field in PERSON_FIELDS:
        data[field] = person.get(field)
    return data
