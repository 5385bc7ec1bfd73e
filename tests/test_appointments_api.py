from conftest import MONDAY

from salon.database import SessionLocal
from salon.models import Appointment


def setup_salon(make_service, make_client, make_professional):
    service = make_service(duration=60, price=50.0)
    customer = make_client()
    professional = make_professional()
    return service, customer, professional


def test_requires_authentication(client):
    assert client.get("/api/appointments").status_code == 401
    response = client.get("/api/appointments", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_end_date_is_derived_from_service_duration(book, make_service, make_client, make_professional):
    service = make_service(duration=45)
    customer = make_client()
    professional = make_professional()

    response = book(customer["id"], service["id"], f"{MONDAY}T10:00:00", professional["id"])

    assert response.status_code == 201
    body = response.json()
    assert body["date"] == f"{MONDAY}T10:00:00"
    assert body["endDate"] == f"{MONDAY}T10:45:00"
    assert body["status"] == "confirmed"
    assert body["paymentStatus"] == "pending"
    assert body["clientName"] == "Maria Silva"
    assert body["professionalName"] == "Ana"


def test_back_to_back_allowed_overlap_rejected(book, make_service, make_client, make_professional):
    service, customer, professional = setup_salon(make_service, make_client, make_professional)

    first = book(customer["id"], service["id"], f"{MONDAY}T10:00:00", professional["id"])
    second = book(customer["id"], service["id"], f"{MONDAY}T11:00:00", professional["id"])
    overlapping = book(customer["id"], service["id"], f"{MONDAY}T10:30:00", professional["id"])

    assert first.status_code == 201
    assert second.status_code == 201
    assert overlapping.status_code == 409
    assert overlapping.json()["code"] == "appointment_conflict"


def test_other_professional_and_unassigned_do_not_conflict(
    book, make_service, make_client, make_professional
):
    service, customer, professional = setup_salon(make_service, make_client, make_professional)
    colleague = make_professional(name="Bia")

    assert book(customer["id"], service["id"], f"{MONDAY}T10:00:00", professional["id"]).status_code == 201
    assert book(customer["id"], service["id"], f"{MONDAY}T10:00:00", colleague["id"]).status_code == 201
    assert book(customer["id"], service["id"], f"{MONDAY}T10:00:00").status_code == 201
    assert book(customer["id"], service["id"], f"{MONDAY}T10:00:00").status_code == 201


def test_cancelled_appointment_frees_the_slot(client, headers, book, make_service, make_client, make_professional):
    service, customer, professional = setup_salon(make_service, make_client, make_professional)
    first = book(customer["id"], service["id"], f"{MONDAY}T10:00:00", professional["id"]).json()

    response = client.put(f"/api/appointments/{first['id']}", json={"status": "cancelled"}, headers=headers)
    assert response.status_code == 200

    assert book(customer["id"], service["id"], f"{MONDAY}T10:00:00", professional["id"]).status_code == 201


def test_unknown_service_fails_before_any_write(book, make_client, make_professional):
    customer = make_client()
    professional = make_professional()

    response = book(customer["id"], 999, f"{MONDAY}T10:00:00", professional["id"])

    assert response.status_code == 404
    db = SessionLocal()
    try:
        assert db.query(Appointment).count() == 0
    finally:
        db.close()


def test_unknown_client_and_professional_are_not_found(book, make_service, make_client):
    service = make_service()
    customer = make_client()
    assert book(999, service["id"], f"{MONDAY}T10:00:00").status_code == 404
    assert book(customer["id"], service["id"], f"{MONDAY}T10:00:00", 999).status_code == 404


def test_check_conflict_endpoint_honours_exclusion(client, headers, book, make_service, make_client, make_professional):
    service, customer, professional = setup_salon(make_service, make_client, make_professional)
    existing = book(customer["id"], service["id"], f"{MONDAY}T10:00:00", professional["id"]).json()

    def check(date, **extra):
        payload = {"professionalId": professional["id"], "serviceId": service["id"], "date": date, **extra}
        response = client.post("/api/appointments/check-conflict", json=payload, headers=headers)
        assert response.status_code == 200
        return response.json()["hasConflict"]

    assert check(f"{MONDAY}T10:30:00") is True
    assert check(f"{MONDAY}T11:00:00") is False
    assert check(f"{MONDAY}T09:00:00") is False
    assert check(f"{MONDAY}T10:00:00", excludeId=existing["id"]) is False

    unassigned = client.post(
        "/api/appointments/check-conflict",
        json={"professionalId": None, "serviceId": service["id"], "date": f"{MONDAY}T10:00:00"},
        headers=headers,
    )
    assert unassigned.json() == {"hasConflict": False}


def test_update_rechecks_only_when_schedule_changes(client, headers, book, make_service, make_client, make_professional):
    service, customer, professional = setup_salon(make_service, make_client, make_professional)
    first = book(customer["id"], service["id"], f"{MONDAY}T10:00:00", professional["id"]).json()
    book(customer["id"], service["id"], f"{MONDAY}T11:00:00", professional["id"])

    # Editing notes in place never conflicts with itself
    response = client.put(f"/api/appointments/{first['id']}", json={"notes": "Bring photos"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["notes"] == "Bring photos"

    moved = client.put(
        f"/api/appointments/{first['id']}", json={"date": f"{MONDAY}T10:30:00"}, headers=headers
    )
    assert moved.status_code == 409

    earlier = client.put(
        f"/api/appointments/{first['id']}", json={"date": f"{MONDAY}T09:30:00"}, headers=headers
    )
    assert earlier.status_code == 200
    assert earlier.json()["endDate"] == f"{MONDAY}T10:30:00"


def test_changing_service_recomputes_end_date(client, headers, book, make_service, make_client, make_professional):
    service, customer, professional = setup_salon(make_service, make_client, make_professional)
    longer = make_service(name="Coloring", duration=120, price=150.0)
    appointment = book(customer["id"], service["id"], f"{MONDAY}T14:00:00", professional["id"]).json()

    response = client.put(
        f"/api/appointments/{appointment['id']}", json={"serviceId": longer["id"]}, headers=headers
    )

    assert response.status_code == 200
    assert response.json()["endDate"] == f"{MONDAY}T16:00:00"
    assert response.json()["serviceName"] == "Coloring"


def test_unassigning_a_professional(client, headers, book, make_service, make_client, make_professional):
    service, customer, professional = setup_salon(make_service, make_client, make_professional)
    appointment = book(customer["id"], service["id"], f"{MONDAY}T14:00:00", professional["id"]).json()

    response = client.put(
        f"/api/appointments/{appointment['id']}", json={"professionalId": None}, headers=headers
    )

    assert response.status_code == 200
    assert response.json()["professionalId"] is None


def test_status_transitions(client, headers, book, make_service, make_client):
    service = make_service()
    customer = make_client()
    appointment = book(customer["id"], service["id"], f"{MONDAY}T10:00:00", status="pending").json()
    url = f"/api/appointments/{appointment['id']}"

    assert client.put(url, json={"status": "completed"}, headers=headers).status_code == 400
    assert client.put(url, json={"status": "pending"}, headers=headers).status_code == 200
    assert client.put(url, json={"status": "confirmed"}, headers=headers).status_code == 200
    assert client.put(url, json={"status": "pending"}, headers=headers).status_code == 400
    assert client.put(url, json={"status": "completed"}, headers=headers).status_code == 200

    response = client.put(url, json={"status": "cancelled"}, headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"


def test_list_by_day_and_range(client, headers, book, make_service, make_client):
    service = make_service()
    customer = make_client()
    book(customer["id"], service["id"], "2030-06-03T10:00:00")
    book(customer["id"], service["id"], "2030-06-03T23:30:00")
    book(customer["id"], service["id"], "2030-06-04T09:00:00")
    book(customer["id"], service["id"], "2030-06-06T09:00:00")

    day = client.get("/api/appointments", params={"date": "2030-06-03"}, headers=headers).json()
    assert [a["date"] for a in day] == ["2030-06-03T10:00:00", "2030-06-03T23:30:00"]

    week = client.get(
        "/api/appointments", params={"startDate": "2030-06-03", "endDate": "2030-06-04"}, headers=headers
    ).json()
    assert len(week) == 3

    assert len(client.get("/api/appointments", headers=headers).json()) == 4


def test_delete_appointment(client, headers, book, make_service, make_client):
    service = make_service()
    customer = make_client()
    appointment = book(customer["id"], service["id"], f"{MONDAY}T10:00:00").json()
    url = f"/api/appointments/{appointment['id']}"

    assert client.delete(url, headers=headers).status_code == 204
    assert client.get(url, headers=headers).status_code == 404
    assert client.delete(url, headers=headers).status_code == 404


def test_appointments_are_scoped_to_their_salon(client, book, make_service, make_client):
    from conftest import auth_headers, create_admin

    service = make_service()
    customer = make_client()
    appointment = book(customer["id"], service["id"], f"{MONDAY}T10:00:00").json()

    other = auth_headers(create_admin("other").id)
    assert client.get(f"/api/appointments/{appointment['id']}", headers=other).status_code == 404
    assert client.get("/api/appointments", headers=other).json() == []
