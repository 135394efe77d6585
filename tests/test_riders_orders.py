import pytest
from sqlalchemy.exc import OperationalError

from shopadmin.domain.orders.repository import OrderRepository
from shopadmin.domain.orders.schemas import next_statuses
from shopadmin.domain.riders.schemas import RiderCreate
from shopadmin.domain.riders.service import RiderService


def rider_payload(**fields):
    payload = {"name": "Ali", "phone": "0300-1234567", "password": "secret123"}
    payload.update(fields)
    return payload


def order_payload(**fields):
    payload = {
        "customerName": "Sara",
        "phone": "+92 300 7654321",
        "address": "House 12, Street 4",
        "items": ["Zinger Burger x2", "Fries x1"],
        "total": 1050,
    }
    payload.update(fields)
    return payload


class TestRiders:
    def test_create_hides_password(self, client, auth_headers):
        response = client.post("/riders", json=rider_payload(), headers=auth_headers)
        assert response.status_code == 201
        body = response.json()
        assert body["phone"] == "03001234567"
        assert body["status"] == "offline"
        assert "password" not in body
        assert "password_hash" not in body

    def test_phone_is_unique_after_normalising(self, client, auth_headers):
        client.post("/riders", json=rider_payload(), headers=auth_headers)
        response = client.post("/riders", json=rider_payload(phone="0300 1234567"), headers=auth_headers)
        assert response.status_code == 409

    @pytest.mark.parametrize("fields", [{"password": "123"}, {"phone": "12"}, {"status": "asleep"}])
    def test_validation(self, client, auth_headers, fields):
        assert client.post("/riders", json=rider_payload(**fields), headers=auth_headers).status_code == 422

    def test_status_filter(self, client, auth_headers):
        rider = client.post("/riders", json=rider_payload(), headers=auth_headers).json()
        client.patch(f"/riders/{rider['id']}/status", json={"status": "active"}, headers=auth_headers)
        active = client.get("/riders?status=active", headers=auth_headers).json()
        assert [r["id"] for r in active] == [rider["id"]]
        assert client.get("/riders?status=busy", headers=auth_headers).json() == []

    def test_password_is_hashed(self, db):
        service = RiderService(db)
        rider = service.create_rider(RiderCreate(**rider_payload()))
        assert rider.password_hash != "secret123"
        assert service.check_credentials("03001234567", "secret123").id == rider.id
        assert service.check_credentials("03001234567", "wrong-pass") is None


class TestOrders:
    def test_next_statuses(self):
        assert next_statuses("processing") == ["out_for_delivery", "delivered", "canceled"]
        assert next_statuses("delivered") == ["processing", "out_for_delivery", "canceled"]

    def test_create_and_filter(self, client, auth_headers):
        response = client.post("/orders", json=order_payload(), headers=auth_headers)
        assert response.status_code == 201, response.text
        order = response.json()
        assert order["status"] == "processing"
        assert order["phone"] == "+923007654321"
        assert "processing" not in order["nextStatuses"]

        client.post("/orders", json=order_payload(customerName="Bilal"), headers=auth_headers)
        client.patch(f"/orders/{order['id']}/status", json={"status": "canceled"}, headers=auth_headers)

        canceled = client.get("/orders?status=canceled", headers=auth_headers).json()
        assert [o["customerName"] for o in canceled] == ["Sara"]

    @pytest.mark.parametrize("fields", [{"total": 0}, {"items": []}, {"customerName": " "}])
    def test_validation(self, client, auth_headers, fields):
        assert client.post("/orders", json=order_payload(**fields), headers=auth_headers).status_code == 422

    def test_unknown_status_rejected(self, client, auth_headers):
        order = client.post("/orders", json=order_payload(), headers=auth_headers).json()
        response = client.patch(f"/orders/{order['id']}/status", json={"status": "lost"}, headers=auth_headers)
        assert response.status_code == 422

    def test_delivery_counts_for_rider(self, client, auth_headers):
        rider = client.post("/riders", json=rider_payload(), headers=auth_headers).json()
        order = client.post("/orders", json=order_payload(riderId=rider["id"]), headers=auth_headers).json()
        assert order["riderName"] == "Ali"

        client.patch(f"/orders/{order['id']}/status", json={"status": "delivered"}, headers=auth_headers)
        assert client.get(f"/riders/{rider['id']}", headers=auth_headers).json()["ordersCompleted"] == 1

        client.patch(f"/orders/{order['id']}/status", json={"status": "processing"}, headers=auth_headers)
        assert client.get(f"/riders/{rider['id']}", headers=auth_headers).json()["ordersCompleted"] == 0

    def test_unknown_rider_rejected(self, client, auth_headers):
        response = client.post("/orders", json=order_payload(riderId="missing"), headers=auth_headers)
        assert response.status_code == 400

    def test_order_with_coupon_counts_a_use(self, client, auth_headers):
        coupon = client.post(
            "/coupons",
            json={"code": "ONCE", "name": "Once", "discountType": "fixed_amount", "discountValue": 100, "usageLimit": 1},
            headers=auth_headers,
        ).json()

        response = client.post("/orders", json=order_payload(couponCode="once"), headers=auth_headers)
        assert response.status_code == 201
        assert client.get(f"/coupons/{coupon['id']}", headers=auth_headers).json()["usedCount"] == 1

        response = client.post("/orders", json=order_payload(couponCode="ONCE"), headers=auth_headers)
        assert response.status_code == 400

    def test_failed_order_does_not_use_up_coupon(self, client, auth_headers, monkeypatch):
        coupon = client.post(
            "/coupons",
            json={"code": "SOLO", "name": "Solo", "discountType": "fixed_amount", "discountValue": 100, "usageLimit": 1},
            headers=auth_headers,
        ).json()

        def fail_insert(db, **data):
            raise OperationalError("INSERT INTO orders", {}, Exception("database is locked"))

        monkeypatch.setattr(OrderRepository, "create_order", staticmethod(fail_insert))
        response = client.post("/orders", json=order_payload(couponCode="SOLO"), headers=auth_headers)
        assert response.status_code == 503
        assert client.get(f"/coupons/{coupon['id']}", headers=auth_headers).json()["usedCount"] == 0

        monkeypatch.undo()
        response = client.post("/orders", json=order_payload(couponCode="SOLO"), headers=auth_headers)
        assert response.status_code == 201

    def test_first_order_coupon_only_works_once_per_phone(self, client, auth_headers):
        client.post(
            "/coupons",
            json={
                "code": "WELCOME",
                "name": "Welcome",
                "discountType": "percentage",
                "discountValue": 10,
                "isFirstOrderOnly": True,
            },
            headers=auth_headers,
        )

        response = client.post("/orders", json=order_payload(couponCode="WELCOME"), headers=auth_headers)
        assert response.status_code == 201

        response = client.post("/orders", json=order_payload(couponCode="WELCOME"), headers=auth_headers)
        assert response.status_code == 400
        assert "first order" in response.json()["detail"].lower()

        response = client.post(
            "/orders", json=order_payload(phone="0311-1111111", couponCode="WELCOME"), headers=auth_headers
        )
        assert response.status_code == 201
