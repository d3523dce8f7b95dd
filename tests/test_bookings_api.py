from decimal import Decimal

import pytest

API = "/api/v1/tickets"


def _booking(network, train="Southern Mail", origin="PUNE", destination="HYB", **extra):
    payload = {
        "train_id": network["trains"][train],
        "origin_station_id": network["stations"][origin],
        "destination_station_id": network["stations"][destination],
        "passenger_name": "Asha Rao",
    }
    payload.update(extra)
    return payload


def _seats(client, train_id):
    return client.get(f"/api/v1/trains/{train_id}").json()["available_seats"]


@pytest.fixture
def ticket(client, network):
    response = client.post(f"{API}/", json=_booking(network, travel_date="2026-11-02"))
    assert response.status_code == 201
    return response.json()


def test_booking_prices_leg_from_timetable(ticket):
    assert ticket["booking_code"].startswith("TRH")
    assert ticket["train_name"] == "Southern Mail"
    assert ticket["origin_station_name"] == "Pune Junction"
    assert ticket["destination_station_name"] == "Hyderabad Deccan"
    assert ticket["departure_time"] == "08:40"
    assert ticket["arrival_time"] == "12:00"
    assert Decimal(ticket["distance_km"]) == Decimal("200")
    assert ticket["price"] == 400
    assert ticket["travel_date"] == "2026-11-02"
    assert ticket["payment_method"] == "cash"
    assert ticket["payment_status"] == "pending"


def test_booking_takes_one_seat(client, network, ticket):
    assert _seats(client, network["trains"]["Southern Mail"]) == 69


def test_booking_refused_when_train_is_full(client, network):
    train_id = network["trains"]["Express 101"]
    client.put(f"/api/v1/trains/{train_id}", json={"available_seats": 1})

    first = client.post(f"{API}/", json=_booking(network, "Express 101", "MMCT", "DLI"))
    second = client.post(f"{API}/", json=_booking(network, "Express 101", "MMCT", "DLI"))

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json()["detail"] == "No seats available on this train"
    assert _seats(client, train_id) == 0
    assert client.get(f"{API}/", params={"train_id": train_id}).json()["total"] == 1


def test_booking_refused_against_direction_of_travel(client, network):
    response = client.post(f"{API}/", json=_booking(network, origin="HYB", destination="PUNE"))

    assert response.status_code == 400
    assert response.json()["detail"] == "No valid journey for this selection"
    assert _seats(client, network["trains"]["Southern Mail"]) == 70


def test_booking_refused_for_station_off_route(client, network):
    response = client.post(f"{API}/", json=_booking(network, destination="DLI"))

    assert response.status_code == 400
    assert client.get(f"{API}/").json()["total"] == 0


def test_booking_same_station_twice(client, network):
    response = client.post(f"{API}/", json=_booking(network, destination="PUNE"))

    assert response.status_code == 400


def test_booking_train_out_of_service(client, network):
    train_id = network["trains"]["Southern Mail"]
    client.put(f"/api/v1/trains/{train_id}", json={"is_active": False})

    response = client.post(f"{API}/", json=_booking(network))

    assert response.status_code == 400
    assert _seats(client, train_id) == 70


def test_booking_unknown_train(client, network):
    payload = _booking(network)
    payload["train_id"] = 9999

    response = client.post(f"{API}/", json=payload)

    assert response.status_code == 404


def test_booking_requires_passenger_name(client, network):
    response = client.post(f"{API}/", json=_booking(network, passenger_name=""))

    assert response.status_code == 422


def test_lookup_ticket_by_code(client, ticket):
    response = client.get(f"{API}/code/{ticket['booking_code'].lower()}")

    assert response.status_code == 200
    assert response.json()["id"] == ticket["id"]


def test_lookup_unknown_code(client, network):
    response = client.get(f"{API}/code/TRH00000000")

    assert response.status_code == 404


def test_verify_payment(client, ticket):
    response = client.put(f"{API}/{ticket['id']}/payment-status", json={"payment_status": "paid"})

    assert response.status_code == 200
    assert response.json()["payment_status"] == "paid"

    paid = client.get(f"{API}/", params={"payment_status": "paid"}).json()
    pending = client.get(f"{API}/", params={"payment_status": "pending"}).json()
    assert [t["id"] for t in paid["tickets"]] == [ticket["id"]]
    assert pending["total"] == 0


def test_verify_payment_rejects_unknown_status(client, ticket):
    response = client.put(f"{API}/{ticket['id']}/payment-status", json={"payment_status": "waived"})

    assert response.status_code == 422


def test_verify_payment_unknown_ticket(client, network):
    response = client.put(f"{API}/9999/payment-status", json={"payment_status": "paid"})

    assert response.status_code == 404


def test_issued_ticket_keeps_fare_after_train_changes(client, network, ticket):
    train_id = network["trains"]["Southern Mail"]
    client.put(f"/api/v1/trains/{train_id}", json={"price_per_km": 5})

    data = client.get(f"{API}/{ticket['id']}").json()

    assert data["price"] == 400
