# helpdesk/metadata.py
#
# Catálogo estático de presentación para los tipos de ticket. Se construye una
# sola vez al importar el módulo y es de solo lectura.

from collections import namedtuple
from types import MappingProxyType

from helpdesk.exceptions import MetadataCatalogError
from helpdesk.models import TicketType

TypeMetadata = namedtuple("TypeMetadata", ["text", "color", "icon"])

TICKET_TYPE_METADATA = MappingProxyType({
    TicketType.HARDWARE.value: TypeMetadata("Hardware", "#f97316", "cpu"),
    TicketType.SOFTWARE.value: TypeMetadata("Software", "#3b82f6", "app-window"),
    TicketType.NETWORK.value: TypeMetadata("Redes", "#22c55e", "network"),
    TicketType.ACCOUNT.value: TypeMetadata("Cuentas y accesos", "#a855f7", "user-cog"),
    TicketType.OTHER.value: TypeMetadata("Otros", "#64748b", "circle-help"),
})


def lookup_type(ticket_type):
    """Devuelve el TypeMetadata de un tipo de ticket o lanza MetadataCatalogError."""
    key = ticket_type.value if isinstance(ticket_type, TicketType) else ticket_type
    try:
        return TICKET_TYPE_METADATA[key]
    except (KeyError, TypeError):
        raise MetadataCatalogError(ticket_type)
