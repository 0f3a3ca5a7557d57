from datetime import timedelta

from consultations.core.clock import business_today


def _tomorrow() -> str:
    return (business_today() + timedelta(days=1)).isoformat()


def _booking_payload(**overrides) -> dict:
    payload = {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "company": "Acme",
        "notes": "Interested in a migration review",
        "date": _tomorrow(),
        "timeSlot": "10:00",
    }
    payload.update(overrides)
    return payload


def test_availability_lists_default_working_day(client):
    response = client.get("/availability", params={"date": _tomorrow()})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["date"] == _tomorrow()
    assert body["totalSlots"] == 16
    assert body["availableCount"] == 16
    assert body["bookedCount"] == 0
    assert body["slots"][0] == "09:00"
    assert body["slots"][-1] == "16:30"


def test_availability_requires_valid_current_date(client):
    missing = client.get("/availability")
    malformed = client.get("/availability", params={"date": "tomorrow"})
    past = client.get("/availability", params={"date": (business_today() - timedelta(days=1)).isoformat()})

    assert missing.status_code == 400
    assert malformed.status_code == 400
    assert malformed.json()["detail"] == "Invalid date format. Use YYYY-MM-DD"
    assert past.status_code == 400
    assert past.json()["error"]["code"] == "invalid_input"


def test_create_booking_then_slot_disappears_from_availability(client):
    created = client.post("/bookings", json=_booking_payload())

    assert created.status_code == 201
    body = created.json()
    assert body["success"] is True
    assert body["booking"]["status"] == "pending"
    assert body["booking"]["time_slot"] == "10:00"
    assert body["booking"]["company"] == "Acme"

    availability = client.get("/availability", params={"date": _tomorrow()}).json()
    assert "10:00" not in availability["slots"]
    assert availability["bookedCount"] == 1
    assert availability["availableCount"] == 15


def test_double_booking_is_rejected_with_slot_conflict(client):
    assert client.post("/bookings", json=_booking_payload()).status_code == 201

    response = client.post("/bookings", json=_booking_payload(email="second@example.com"))

    assert response.status_code == 400
    body = response.json()
    assert body["error"]["code"] == "slot_conflict"
    assert body["detail"] == "This time slot is already booked"


def test_create_booking_validation_errors_are_client_errors(client):
    missing = client.post("/bookings", json={"name": "Jane"})
    bad_email = client.post("/bookings", json=_booking_payload(email="jane"))
    off_grid = client.post("/bookings", json=_booking_payload(timeSlot="10:10"))

    assert missing.status_code == 400
    assert missing.json()["detail"] == "Name, email, date, and time slot are required"
    assert bad_email.status_code == 400
    assert bad_email.json()["detail"] == "Invalid email format"
    assert off_grid.status_code == 400
    assert off_grid.json()["error"]["code"] == "invalid_input"


def test_create_booking_rejects_non_string_fields_as_invalid_input(client):
    numeric_name = client.post("/bookings", json=_booking_payload(name=123))
    numeric_date = client.post("/bookings", json=_booking_payload(date=20300101))
    list_slot = client.post("/bookings", json=_booking_payload(timeSlot=["10:00"]))

    assert numeric_name.status_code == 400
    assert numeric_name.json()["error"]["code"] == "invalid_input"
    assert numeric_name.json()["detail"] == "Name must be a string"
    assert numeric_date.status_code == 400
    assert numeric_date.json()["detail"] == "Invalid date format. Use YYYY-MM-DD"
    assert list_slot.status_code == 400
    assert list_slot.json()["detail"] == "Time slot must be a string"


def test_create_booking_rejects_values_longer_than_columns(client):
    long_name = client.post("/bookings", json=_booking_payload(name="x" * 256))
    long_company = client.post("/bookings", json=_booking_payload(company="y" * 300))
    at_limit = client.post("/bookings", json=_booking_payload(name="z" * 255))

    assert long_name.status_code == 400
    assert long_name.json()["detail"] == "Name must be at most 255 characters"
    assert long_company.status_code == 400
    assert long_company.json()["detail"] == "Company must be at most 255 characters"
    assert at_limit.status_code == 201


def test_booking_admin_routes_require_token(client):
    assert client.get("/bookings").status_code == 401
    assert client.get("/bookings/stats").status_code == 401
    assert client.patch("/bookings/1", json={"status": "confirmed"}).status_code == 401
    assert client.delete("/bookings/1").status_code == 401


def test_admin_confirms_and_cancels_booking(client, admin_headers):
    booking_id = client.post("/bookings", json=_booking_payload()).json()["booking"]["id"]

    confirmed = client.patch(f"/bookings/{booking_id}", json={"status": "confirmed"}, headers=admin_headers)
    assert confirmed.status_code == 200
    assert confirmed.json()["booking"]["status"] == "confirmed"
    assert confirmed.json()["message"] == "Booking status updated successfully"

    cancelled = client.patch(f"/bookings/{booking_id}", json={"status": "cancelled"}, headers=admin_headers)
    assert cancelled.json()["booking"]["status"] == "cancelled"

    rebooked = client.post("/bookings", json=_booking_payload(email="second@example.com"))
    assert rebooked.status_code == 201


def test_status_update_errors(client, admin_headers):
    booking_id = client.post("/bookings", json=_booking_payload()).json()["booking"]["id"]

    invalid = client.patch(f"/bookings/{booking_id}", json={"status": "archived"}, headers=admin_headers)
    missing = client.patch("/bookings/9999", json={"status": "confirmed"}, headers=admin_headers)

    assert invalid.status_code == 400
    assert invalid.json()["detail"] == "Invalid status. Must be: pending, confirmed, completed, or cancelled"
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "not_found"


def test_status_update_with_non_string_status_is_invalid_input(client, admin_headers):
    booking_id = client.post("/bookings", json=_booking_payload()).json()["booking"]["id"]

    numeric = client.patch(f"/bookings/{booking_id}", json={"status": 5}, headers=admin_headers)
    absent = client.patch(f"/bookings/{booking_id}", json={}, headers=admin_headers)

    assert numeric.status_code == 400
    assert numeric.json()["error"]["code"] == "invalid_input"
    assert numeric.json()["detail"] == "Invalid status. Must be: pending, confirmed, completed, or cancelled"
    assert absent.status_code == 400
    assert client.get(f"/bookings/{booking_id}", headers=admin_headers).json()["booking"]["status"] == "pending"


def test_list_filters_and_paginates(client, admin_headers):
    for slot in ["09:00", "09:30", "10:00"]:
        client.post("/bookings", json=_booking_payload(timeSlot=slot))
    first_id = client.get("/bookings", headers=admin_headers).json()["bookings"][-1]["id"]
    client.patch(f"/bookings/{first_id}", json={"status": "cancelled"}, headers=admin_headers)

    everything = client.get("/bookings", headers=admin_headers).json()
    page = client.get("/bookings", params={"limit": 1, "offset": 1}, headers=admin_headers).json()
    cancelled = client.get("/bookings", params={"status": "cancelled"}, headers=admin_headers).json()
    out_of_range = client.get("/bookings", params={"endDate": business_today().isoformat()}, headers=admin_headers)

    assert everything["pagination"]["total"] == 3
    assert [booking["time_slot"] for booking in everything["bookings"]] == ["10:00", "09:30", "09:00"]
    assert page["pagination"] == {"total": 3, "limit": 1, "offset": 1}
    assert page["bookings"][0]["time_slot"] == "09:30"
    assert cancelled["pagination"]["total"] == 1
    assert cancelled["bookings"][0]["id"] == first_id
    assert out_of_range.json()["bookings"] == []


def test_get_delete_and_bulk_delete(client, admin_headers):
    ids = [
        client.post("/bookings", json=_booking_payload(timeSlot=slot)).json()["booking"]["id"]
        for slot in ["11:00", "11:30", "12:00"]
    ]

    fetched = client.get(f"/bookings/{ids[0]}", headers=admin_headers)
    assert fetched.status_code == 200
    assert fetched.json()["booking"]["notes"] == "Interested in a migration review"

    deleted = client.delete(f"/bookings/{ids[0]}", headers=admin_headers)
    assert deleted.json() == {"success": True, "message": "Booking deleted successfully"}
    assert client.get(f"/bookings/{ids[0]}", headers=admin_headers).status_code == 404

    bulk = client.post("/bookings/bulk-delete", json={"ids": [ids[1], ids[2], 9999]}, headers=admin_headers)
    assert bulk.status_code == 200
    assert bulk.json()["deletedCount"] == 2
    assert bulk.json()["missingIds"] == [9999]

    empty = client.post("/bookings/bulk-delete", json={"ids": []}, headers=admin_headers)
    assert empty.status_code == 400
    assert empty.json()["detail"] == "Booking IDs array is required"

    for bad_ids in ("1,2", ["a"], [True], None):
        rejected = client.post("/bookings/bulk-delete", json={"ids": bad_ids}, headers=admin_headers)
        assert rejected.status_code == 400
        assert rejected.json()["detail"] == "Booking IDs array is required"


def test_booking_stats(client, admin_headers):
    first = client.post("/bookings", json=_booking_payload(timeSlot="13:00")).json()["booking"]["id"]
    client.post("/bookings", json=_booking_payload(timeSlot="13:30"))
    client.patch(f"/bookings/{first}", json={"status": "completed"}, headers=admin_headers)

    stats = client.get("/bookings/stats", headers=admin_headers).json()["stats"]

    assert stats["total"] == 2
    assert stats["pending"] == 1
    assert stats["completed"] == 1
    assert stats["cancelled"] == 0
    assert stats["today"] == 0
    assert stats["completionRate"] == 50.0


def test_booking_succeeds_when_notification_delivery_fails(client, monkeypatch):
    from consultations.services import email_service

    def explode(_):
        raise RuntimeError("smtp down")

    monkeypatch.setattr(email_service, "send_booking_confirmation", explode)

    response = client.post("/bookings", json=_booking_payload(timeSlot="15:00"))

    assert response.status_code == 201
    availability = client.get("/availability", params={"date": _tomorrow()}).json()
    assert "15:00" not in availability["slots"]
