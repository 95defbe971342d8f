# helpdesk/models.py
#
# Con PyMongo no se usan clases de modelo como con un ORM: los tickets y las
# personas se manejan como diccionarios (documentos de MongoDB). Aquí viven los
# valores cerrados que pueden tomar sus campos.

from enum import Enum


class Status(str, Enum):
    """Estado de un ticket. Los reportes cuentan 'Open' como pendiente y 'Closed' como completado."""
    OPEN = "Open"
    IN_PROGRESS = "InProgress"
    CLOSED = "Closed"


class TicketType(str, Enum):
    HARDWARE = "Hardware"
    SOFTWARE = "Software"
    NETWORK = "Network"
    ACCOUNT = "Account"
    OTHER = "Other"


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


class Role(str, Enum):
    ADMIN = "admin"
    TECHNICIAN = "tecnico"
    CLIENT = "cliente"


def choices_for(enum_cls, empty_label=None):
    """Lista de (valor, etiqueta) para poblar un SelectField."""
    choices = [(member.value, member.value) for member in enum_cls]
    if empty_label is not None:
        choices = [('', empty_label)] + choices
    return choices
