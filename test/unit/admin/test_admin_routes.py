from io import BytesIO

from openpyxl import load_workbook

from conftest import make_ticket

LIST_URL = "/admin/asignar-ticket"
EXPORT_URL = "/admin/asignar-ticket/export"


def test_assignment_listing_requires_admin(logged_in_technician_client, db):
    """
    GIVEN a logged-in technician
    WHEN they open the ticket assignment table
    THEN they should get a 403 Forbidden error
    """
    response = logged_in_technician_client.get(LIST_URL)
    assert response.status_code == 403


def test_assignment_listing_requires_login(client, db):
    assert client.get(LIST_URL).status_code == 401


def test_assignment_listing_rows(authenticated_admin_client, db, seed_test_client):
    older = make_ticket(db, seed_test_client["_id"], title="Impresora", status="Open", type="Hardware", priority="Low")
    newer = make_ticket(db, seed_test_client["_id"], title="VPN", status="Closed", type="Network", priority="High",
                        created_at=older["createdAt"].replace(month=2))

    response = authenticated_admin_client.get(LIST_URL)

    assert response.status_code == 200
    data = response.get_json()
    assert [c["accessorKey"] for c in data["columns"]] == ["id", "title", "status", "type", "priority"]
    assert data["tickets"] == [
        {"id": str(newer["_id"]), "title": "VPN", "status": "Closed", "type": "Network", "priority": "High"},
        {"id": str(older["_id"]), "title": "Impresora", "status": "Open", "type": "Hardware", "priority": "Low"},
    ]


def test_assignment_listing_filters(authenticated_admin_client, db, seed_test_client):
    first = make_ticket(db, seed_test_client["_id"], status="Open", priority="Urgent")
    make_ticket(db, seed_test_client["_id"], status="Closed", priority="Urgent")
    make_ticket(db, seed_test_client["_id"], status="Open", priority="Low")

    by_status = authenticated_admin_client.get(LIST_URL, query_string={"status": "Open", "priority": "Urgent"})
    by_id = authenticated_admin_client.get(LIST_URL, query_string={"ticket_id": str(first["_id"])})

    assert [t["id"] for t in by_status.get_json()["tickets"]] == [str(first["_id"])]
    assert [t["id"] for t in by_id.get_json()["tickets"]] == [str(first["_id"])]


def test_assignment_listing_invalid_filters(authenticated_admin_client, db):
    bad_id = authenticated_admin_client.get(LIST_URL, query_string={"ticket_id": "z" * 24})
    bad_status = authenticated_admin_client.get(LIST_URL, query_string={"status": "Archived"})

    assert bad_id.status_code == 400
    assert "ticket_id" in bad_id.get_json()["errors"]
    assert bad_status.status_code == 400
    assert "status" in bad_status.get_json()["errors"]


def test_export_assignment_listing(authenticated_admin_client, db, seed_test_client):
    ticket = make_ticket(db, seed_test_client["_id"], title="Portátil")

    response = authenticated_admin_client.get(EXPORT_URL)

    assert response.status_code == 200
    assert response.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert "attachment;filename=tickets_" in response.headers["Content-Disposition"]

    worksheet = load_workbook(BytesIO(response.data)).active
    rows = list(worksheet.iter_rows(values_only=True))
    assert rows[0] == ("ID", "Título", "Estado", "Tipo", "Prioridad")
    assert rows[1] == (str(ticket["_id"]), "Portátil", "Open", "Hardware", "Medium")
