# helpdesk/dashboard/reports.py
"""
Reportes del panel de administración.

Cada función es una lectura independiente sobre el almacén de tickets: recibe
los repositorios, no modifica nada y devuelve un valor serializable a JSON.
Los errores de base de datos se propagan como DatabaseQueryError y el router
los convierte en una respuesta 500.
"""

from enum import Enum

from helpdesk.metadata import lookup_type
from helpdesk.models import Status
from helpdesk.utils import full_name, month_key, serialize_ticket

UNKNOWN_CLIENT_NAME = "Unknown"
RECENT_TICKETS_LIMIT = 5


class ReportRoute(str, Enum):
    """Reportes que se pueden pedir con ?route=<valor>."""
    SUMMARY = "summary"
    RESOLUTION_RATE = "resolution-rate"
    MONTHLY_SUMMARY = "monthly-summary"
    BY_CATEGORY = "by-category"
    TECHNICIAN_PERFORMANCE = "technician-performance"
    COMPANY_SUMMARY = "company-summary"
    RECENT_TICKETS = "recent-tickets"


def _status_totals(tickets):
    total = tickets.count()
    completed = tickets.count({"status": Status.CLOSED.value})
    return total, completed


def get_summary(tickets, persons=None):
    total, completed = _status_totals(tickets)
    pending = tickets.count({"status": Status.OPEN.value})
    return {
        "totalTickets": total,
        "pendingTickets": pending,
        "completedTickets": completed,
    }


def get_resolution_rate(tickets, persons=None):
    """Porcentaje de tickets cerrados. Sin tickets la tasa es 0.0."""
    total, completed = _status_totals(tickets)
    if total == 0:
        return {"resolutionRate": 0.0}
    return {"resolutionRate": completed / total * 100}


def get_monthly_summary(tickets, persons=None):
    # El almacén agrupa por la marca de tiempo exacta; aquí se junta por mes.
    monthly = {}
    for item in tickets.count_by("createdAt"):
        created_at = item["_id"]
        if created_at is None:
            continue
        month = month_key(created_at)
        bucket = monthly.setdefault(month, {"month": month, "tickets": 0})
        bucket["tickets"] += item["count"]
    return sorted(monthly.values(), key=lambda bucket: bucket["month"])


def get_by_category(tickets, persons=None):
    result = []
    for item in tickets.count_by("type"):
        metadata = lookup_type(item["_id"])
        result.append({
            "type": metadata.text,
            "count": item["count"],
            "color": metadata.color,
            "icon": metadata.icon,
        })
    return result


def get_technician_performance(tickets, persons):
    groups = tickets.status_counts_by("userId", exclude_null=True)
    technicians = persons.find_by_ids(group["_id"] for group in groups)

    result = []
    for group in groups:
        technician = technicians.get(group["_id"])
        if technician is None:
            continue
        result.append({
            "name": full_name(technician),
            "total": group["total"],
            "completed": group["completed"],
            "pending": group["pending"],
        })
    return result


def get_company_summary(tickets, persons):
    groups = tickets.status_counts_by("clientId")
    clients = persons.find_by_ids(group["_id"] for group in groups if group["_id"] is not None)

    result = []
    for group in groups:
        client = clients.get(group["_id"])
        result.append({
            "name": full_name(client) if client else UNKNOWN_CLIENT_NAME,
            "completed": group["completed"],
            "pending": group["pending"],
        })
    return result


def get_recent_tickets(tickets, persons=None, limit=RECENT_TICKETS_LIMIT):
    return [serialize_ticket(ticket) for ticket in tickets.find_recent(limit)]
