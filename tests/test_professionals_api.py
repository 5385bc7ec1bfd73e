def test_defaults_to_weekday_business_hours(make_professional):
    professional = make_professional()
    assert professional["workDays"] == [1, 2, 3, 4, 5]
    assert professional["workStartTime"] == "08:00"
    assert professional["workEndTime"] == "18:00"
    assert professional["lunchStartTime"] is None
    assert professional["canAccessSystem"] is False


def test_schedule_is_validated(client, headers):
    base = {"name": "Ana", "specialty": "Hair", "phone": "11911112222"}

    inverted = client.post(
        "/api/professionals", json={**base, "workStartTime": "18:00", "workEndTime": "08:00"}, headers=headers
    )
    lunch_outside = client.post(
        "/api/professionals",
        json={**base, "lunchStartTime": "07:00", "lunchEndTime": "08:30"},
        headers=headers,
    )
    half_lunch = client.post("/api/professionals", json={**base, "lunchStartTime": "12:00"}, headers=headers)
    bad_day = client.post("/api/professionals", json={**base, "workDays": [1, 7]}, headers=headers)
    bad_time = client.post("/api/professionals", json={**base, "workStartTime": "8am"}, headers=headers)

    assert inverted.status_code == 400
    assert lunch_outside.status_code == 400
    assert half_lunch.status_code == 400
    assert bad_day.status_code == 422
    assert bad_time.status_code == 422


def test_update_merges_with_stored_schedule(client, headers, make_professional):
    professional = make_professional(lunchStartTime="12:00", lunchEndTime="13:00")
    url = f"/api/professionals/{professional['id']}"

    # New end would cut through the stored lunch break
    assert client.put(url, json={"workEndTime": "12:30"}, headers=headers).status_code == 400

    response = client.put(url, json={"workEndTime": "12:00", "lunchStartTime": None, "lunchEndTime": None}, headers=headers)
    assert response.status_code == 200
    assert response.json()["workEndTime"] == "12:00"
    assert response.json()["lunchStartTime"] is None

    response = client.put(url, json={"workDays": [6, 2, 2]}, headers=headers)
    assert response.json()["workDays"] == [2, 6]


def test_deleting_a_professional_unassigns_their_appointments(
    client, headers, book, make_service, make_client, make_professional
):
    service = make_service()
    customer = make_client()
    professional = make_professional()
    appointment = book(customer["id"], service["id"], "2030-06-03T10:00:00", professional["id"]).json()

    assert client.delete(f"/api/professionals/{professional['id']}", headers=headers).status_code == 204

    remaining = client.get(f"/api/appointments/{appointment['id']}", headers=headers).json()
    assert remaining["professionalId"] is None
    assert client.get(f"/api/professionals/{professional['id']}", headers=headers).status_code == 404


def test_unknown_professional(client, headers):
    assert client.get("/api/professionals/999", headers=headers).status_code == 404
    assert client.put("/api/professionals/999", json={"name": "X"}, headers=headers).status_code == 404
