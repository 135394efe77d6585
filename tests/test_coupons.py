from datetime import date

import pytest

from shopadmin.domain.coupons.discounts import (
    CODE_ALPHABET,
    CouponRejected,
    calculate_discount,
    check_eligibility,
    generate_code,
)


class TestDiscounts:
    def test_generate_code(self):
        code = generate_code()
        assert len(code) == 8
        assert all(ch in CODE_ALPHABET for ch in code)

    def test_percentage_clamped_to_cap(self):
        assert calculate_discount("percentage", 20, 1000) == 200
        assert calculate_discount("percentage", 20, 1000, max_discount_amount=150) == 150

    def test_fixed_amount_never_exceeds_order(self):
        assert calculate_discount("fixed_amount", 300, 1000) == 300
        assert calculate_discount("fixed_amount", 300, 200) == 200

    def test_free_delivery_discounts_the_fee(self):
        assert calculate_discount("free_delivery", 0, 1000, delivery_fee=150) == 150

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"status": "inactive"}, "not active"),
            ({"start_date": "2024-06-02"}, "not valid yet"),
            ({"end_date": "2024-05-31"}, "expired"),
            ({"usage_limit": 5, "used_count": 5}, "usage limit"),
            ({"min_order_amount": 1500}, "Minimum order amount"),
            ({"is_first_order_only": True, "is_first_order": False}, "first order"),
        ],
    )
    def test_rejections(self, overrides, message):
        params = {"status": "active", "order_amount": 1000, "today": date(2024, 6, 1)}
        params.update(overrides)
        with pytest.raises(CouponRejected, match=message):
            check_eligibility(**params)

    def test_window_is_inclusive(self):
        check_eligibility(
            status="active",
            order_amount=1000,
            today=date(2024, 6, 1),
            start_date="2024-06-01",
            end_date="2024-06-01",
        )


def coupon_payload(**fields):
    payload = {"code": "save20", "name": "Save 20", "discountType": "percentage", "discountValue": 20}
    payload.update(fields)
    return payload


def test_code_is_upper_cased_and_unique(client, auth_headers):
    response = client.post("/coupons", json=coupon_payload(), headers=auth_headers)
    assert response.status_code == 201
    assert response.json()["code"] == "SAVE20"

    response = client.post("/coupons", json=coupon_payload(code="SAVE20"), headers=auth_headers)
    assert response.status_code == 409


@pytest.mark.parametrize(
    "fields",
    [
        {"discountValue": 0},
        {"discountValue": 150},
        {"discountType": "fixed_amount", "discountValue": -5},
        {"code": "NO SPACES"},
        {"startDate": "2024-06-10", "endDate": "2024-06-01"},
    ],
)
def test_coupon_validation(client, auth_headers, fields):
    assert client.post("/coupons", json=coupon_payload(**fields), headers=auth_headers).status_code == 422


def test_generate_code_endpoint(client, auth_headers):
    code = client.get("/coupons/generate-code", headers=auth_headers).json()["code"]
    assert len(code) == 8


def test_update_coupon(client, auth_headers):
    coupon = client.post("/coupons", json=coupon_payload(), headers=auth_headers).json()
    response = client.put(f"/coupons/{coupon['id']}", json={"discountValue": 150}, headers=auth_headers)
    assert response.status_code == 400

    response = client.put(f"/coupons/{coupon['id']}", json={"status": "inactive"}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "inactive"


def test_apply_coupon(client, auth_headers):
    client.post("/coupons", json=coupon_payload(maxDiscountAmount=150), headers=auth_headers)

    response = client.post("/public/coupons/apply", json={"code": "save20", "orderAmount": 1000})
    assert response.status_code == 200
    assert response.json() == {
        "code": "SAVE20",
        "discount": 150,
        "freeDelivery": False,
        "orderAmount": 1000,
        "finalAmount": 850,
    }


def test_apply_unknown_or_rejected_coupon(client, auth_headers):
    assert client.post("/public/coupons/apply", json={"code": "NOPE", "orderAmount": 100}).status_code == 404

    client.post("/coupons", json=coupon_payload(minOrderAmount=2000), headers=auth_headers)
    response = client.post("/public/coupons/apply", json={"code": "SAVE20", "orderAmount": 1000})
    assert response.status_code == 400
    assert "Minimum order amount" in response.json()["detail"]


def test_free_delivery_uses_delivery_settings(client, auth_headers):
    client.put(
        "/shop/delivery-settings",
        json={"minDeliveryTime": 20, "maxDeliveryTime": 40, "deliveryCharges": 200},
        headers=auth_headers,
    )
    client.post(
        "/coupons",
        json=coupon_payload(code="FREESHIP", discountType="free_delivery", discountValue=0),
        headers=auth_headers,
    )
    body = client.post("/public/coupons/apply", json={"code": "FREESHIP", "orderAmount": 800}).json()
    assert body["freeDelivery"] is True
    assert body["discount"] == 200
    assert body["finalAmount"] == 800
