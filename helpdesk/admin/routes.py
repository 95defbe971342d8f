from flask import jsonify, Response, request
from flask_login import current_user
from helpdesk.admin import admin_bp
from helpdesk.admin.forms import TicketFilterForm
from helpdesk.auth.decorators import admin_required
from helpdesk.exceptions import DatabaseQueryError
from helpdesk.repositories import MongoTicketRepository
import logging
from datetime import datetime
from io import BytesIO
from openpyxl import Workbook

logger = logging.getLogger(__name__)

# Columnas de la tabla de asignación: (campo, encabezado)
ASSIGNMENT_COLUMNS = [
    ("id", "ID"),
    ("title", "Título"),
    ("status", "Estado"),
    ("type", "Tipo"),
    ("priority", "Prioridad"),
]


def assignment_row(ticket):
    return {
        "id": str(ticket["_id"]),
        "title": ticket.get("title"),
        "status": ticket.get("status"),
        "type": ticket.get("type"),
        "priority": ticket.get("priority"),
    }


def _filtered_rows(form):
    query = form.build_query()
    logger.debug(f"Consulta final de MongoDB: {query}")
    tickets = MongoTicketRepository().find_filtered(query)
    return [assignment_row(ticket) for ticket in tickets]


@admin_bp.route('/asignar-ticket', methods=['GET'])
@admin_required
def list_assignable_tickets():
    form = TicketFilterForm(request.args)
    if not form.validate():
        logger.debug(f"Errores de validación del formulario de filtro: {form.errors}")
        return jsonify({"message": "Filtros inválidos", "errors": form.errors}), 400

    try:
        rows = _filtered_rows(form)
    except DatabaseQueryError:
        logger.error("Error al buscar tickets para asignar", exc_info=True)
        return jsonify({"message": "Hubo un error al obtener los tickets"}), 500

    logger.info(f'Usuario {current_user.username} consultó los tickets. Se encontraron {len(rows)} tickets.')
    return jsonify({
        "columns": [{"accessorKey": key, "header": header} for key, header in ASSIGNMENT_COLUMNS],
        "tickets": rows,
    }), 200


@admin_bp.route('/asignar-ticket/export', methods=['GET'])
@admin_required
def export_assignable_tickets():
    # Misma lógica de filtrado que list_assignable_tickets
    form = TicketFilterForm(request.args)
    if not form.validate():
        return jsonify({"message": "Filtros inválidos", "errors": form.errors}), 400

    try:
        rows = _filtered_rows(form)
    except DatabaseQueryError:
        logger.error("Error al exportar tickets", exc_info=True)
        return jsonify({"message": "Hubo un error al generar el reporte de tickets"}), 500

    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Tickets"

    worksheet.append([header for _, header in ASSIGNMENT_COLUMNS])
    for row in rows:
        worksheet.append([row[key] if row[key] is not None else 'N/A' for key, _ in ASSIGNMENT_COLUMNS])

    output = BytesIO()
    workbook.save(output)
    output.seek(0)

    logger.info(f'Usuario {current_user.username} ha generado un reporte de tickets en ".xlsx" con {len(rows)} tickets.')

    return Response(
        output.read(),
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment;filename=tickets_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"}
    )
