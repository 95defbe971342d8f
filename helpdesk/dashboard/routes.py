from collections import namedtuple
from flask import jsonify, request
import logging
from helpdesk.dashboard import dashboard_bp
from helpdesk.dashboard import reports
from helpdesk.dashboard.reports import ReportRoute
from helpdesk.auth.decorators import api_login_required
from helpdesk.exceptions import DatabaseQueryError, InvalidRouteError, MetadataCatalogError
from helpdesk.repositories import MongoPersonRepository, MongoTicketRepository

logger = logging.getLogger(__name__)

ReportHandler = namedtuple("ReportHandler", ["function", "error_message"])

REPORT_HANDLERS = {
    ReportRoute.SUMMARY: ReportHandler(
        reports.get_summary, "Hubo un error al obtener el resumen de tickets"),
    ReportRoute.RESOLUTION_RATE: ReportHandler(
        reports.get_resolution_rate, "Hubo un error al obtener la tasa de resolución"),
    ReportRoute.MONTHLY_SUMMARY: ReportHandler(
        reports.get_monthly_summary, "Hubo un error al obtener el resumen mensual de tickets"),
    ReportRoute.BY_CATEGORY: ReportHandler(
        reports.get_by_category, "Hubo un error al obtener el desglose por categoría"),
    ReportRoute.TECHNICIAN_PERFORMANCE: ReportHandler(
        reports.get_technician_performance, "Hubo un error al obtener el rendimiento de los técnicos"),
    ReportRoute.COMPANY_SUMMARY: ReportHandler(
        reports.get_company_summary, "Hubo un error al obtener el resumen por empresa"),
    ReportRoute.RECENT_TICKETS: ReportHandler(
        reports.get_recent_tickets, "Hubo un error al obtener los tickets recientes"),
}

_missing = set(ReportRoute) - set(REPORT_HANDLERS)
if _missing:
    raise RuntimeError(f"Reportes sin handler: {sorted(r.value for r in _missing)}")

CATALOG_ERROR_MESSAGE = "La categoría de ticket no está configurada en el catálogo"


def parse_route(value):
    """Devuelve el ReportRoute para `value` o lanza InvalidRouteError."""
    try:
        return ReportRoute(value)
    except ValueError:
        raise InvalidRouteError(value)


def run_report(route, tickets=None, persons=None):
    """
    Ejecuta un reporte y devuelve (cuerpo, código de estado).
    Un fallo dentro del reporte nunca devuelve resultados parciales.
    """
    handler = REPORT_HANDLERS[route]
    tickets = tickets if tickets is not None else MongoTicketRepository()
    persons = persons if persons is not None else MongoPersonRepository()
    try:
        return handler.function(tickets, persons), 200
    except MetadataCatalogError as e:
        logger.error(f"Reporte '{route.value}': {e}")
        return {"message": CATALOG_ERROR_MESSAGE}, 500
    except DatabaseQueryError as e:
        logger.error(f"Reporte '{route.value}' falló: {e.original_exception}", exc_info=True)
        return {"message": handler.error_message}, 500


@dashboard_bp.route('/dashboard-routes', methods=['GET'])
@api_login_required
def dashboard_routes():
    try:
        route = parse_route(request.args.get('route'))
    except InvalidRouteError as e:
        logger.warning(f"Reporte desconocido solicitado: {e.route!r}")
        return jsonify({"message": str(e)}), 400

    body, status = run_report(route)
    return jsonify(body), status
