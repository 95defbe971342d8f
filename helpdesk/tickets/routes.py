from flask import jsonify
from flask_login import current_user
import logging
from helpdesk.tickets import tickets_bp
from helpdesk.auth.decorators import api_login_required
from helpdesk.exceptions import DatabaseQueryError, MetadataCatalogError
from helpdesk.metadata import lookup_type
from helpdesk.repositories import MongoPersonRepository, MongoTicketRepository
from helpdesk.utils import serialize_person, serialize_ticket

logger = logging.getLogger(__name__)


def build_ticket_info(ticket, persons):
    """Ticket con el técnico asignado (`user`) y el cliente (`client`) embebidos."""
    data = serialize_ticket(ticket)
    people = persons.find_by_ids(
        person_id for person_id in (ticket.get("userId"), ticket.get("clientId")) if person_id is not None
    )
    data["user"] = serialize_person(people.get(ticket.get("userId")))
    data["client"] = serialize_person(people.get(ticket.get("clientId")))
    try:
        metadata = lookup_type(ticket.get("type"))
        data["typeDisplay"] = metadata._asdict()
    except MetadataCatalogError as e:
        logger.warning(f"Ticket {data['id']}: {e}")
        data["typeDisplay"] = None
    return data


@tickets_bp.route('/tickets/<string:ticket_id>', methods=['GET'])
@api_login_required
def ticket_detail(ticket_id):
    try:
        ticket = MongoTicketRepository().find_by_id(ticket_id)
        if not ticket:
            return jsonify({"message": "Ticket no encontrado"}), 404

        # Un cliente solo puede ver sus propios tickets
        if current_user.is_client and str(ticket.get("clientId")) != current_user.id:
            logger.warning(f"El cliente {current_user.username} intentó ver el ticket {ticket_id} de otro cliente.")
            return jsonify({"message": "No tienes permiso para ver este ticket"}), 403

        data = build_ticket_info(ticket, MongoPersonRepository())
    except DatabaseQueryError:
        logger.error(f"Error al buscar ticket {ticket_id}", exc_info=True)
        return jsonify({"message": "Hubo un error al obtener el ticket"}), 500

    return jsonify(data), 200
