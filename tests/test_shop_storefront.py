import pytest

from shopadmin.domain.shop.schemas import DeliverySettingsSchema

PROFILE = {
    "shopName": "Burger Point",
    "tagline": "Fresh & hot",
    "shortDesc": "Burgers since 2010",
    "aboutDesc": "Family owned.",
    "contacts": [
        {"type": "phone", "label": "Main", "number": "042-1234567"},
        {"type": "whatsapp", "number": "+92 300 1112223"},
    ],
    "socials": [{"platform": "Instagram", "url": "https://instagram.com/burgerpoint"}],
    "location": {
        "address": "Main Boulevard, Lahore",
        "latitude": 31.52,
        "longitude": 74.35,
        "googleMapsUrl": "https://maps.google.com/?q=31.52,74.35",
    },
}


class TestDeliverySettings:
    def test_fee(self):
        settings = DeliverySettingsSchema(
            deliveryCharges=150, freeDeliveryThreshold=1500, enableFreeDelivery=True
        )
        assert settings.fee_for(1000) == 150
        assert settings.fee_for(1500) == 0

    def test_threshold_ignored_when_disabled(self):
        settings = DeliverySettingsSchema(deliveryCharges=150, freeDeliveryThreshold=1500)
        assert settings.fee_for(5000) == 150

    @pytest.mark.parametrize(
        "fields",
        [
            {"minDeliveryTime": 30, "maxDeliveryTime": 30},
            {"minDeliveryTime": 40, "maxDeliveryTime": 30},
            {"deliveryCharges": -1},
            {"enableFreeDelivery": True},
        ],
    )
    def test_validation(self, fields):
        with pytest.raises(ValueError):
            DeliverySettingsSchema(**fields)


def test_delivery_settings_api(client, auth_headers):
    assert client.get("/shop/delivery-settings", headers=auth_headers).json()["minDeliveryTime"] == 25

    response = client.put(
        "/shop/delivery-settings",
        json={"minDeliveryTime": 30, "maxDeliveryTime": 45, "deliveryCharges": 100,
              "freeDeliveryThreshold": 2000, "enableFreeDelivery": True},
        headers=auth_headers,
    )
    assert response.status_code == 200

    quote = client.get("/shop/delivery-settings/quote?orderTotal=2500", headers=auth_headers).json()
    assert quote["deliveryFee"] == 0
    assert quote["estimatedTime"] == "30-45 mins"

    response = client.put(
        "/shop/delivery-settings",
        json={"minDeliveryTime": 30, "maxDeliveryTime": 20},
        headers=auth_headers,
    )
    assert response.status_code == 422


def test_profile_save_and_replace(client, auth_headers):
    response = client.put("/shop/profile", json=PROFILE, headers=auth_headers)
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["tagline"] == "Fresh &amp; hot"
    assert [c["number"] for c in body["contacts"]] == ["0421234567", "+923001112223"]
    assert body["socials"][0]["platform"] == "instagram"

    updated = dict(PROFILE, contacts=[], location=None)
    body = client.put("/shop/profile", json=updated, headers=auth_headers).json()
    assert body["contacts"] == []
    assert body["location"] is None
    assert client.get("/shop/profile", headers=auth_headers).json()["socials"][0]["url"].startswith("https://")


@pytest.mark.parametrize(
    "overrides",
    [
        {"shopName": "  "},
        {"location": {"address": "x", "latitude": 95}},
        {"location": {"address": "x", "longitude": -181}},
        {"contacts": [{"type": "fax", "number": "0421234567"}]},
        {"socials": [{"platform": "Instagram", "url": "instagram.com"}]},
    ],
)
def test_profile_validation(client, auth_headers, overrides):
    response = client.put("/shop/profile", json=dict(PROFILE, **overrides), headers=auth_headers)
    assert response.status_code == 422


class TestStorefront:
    def test_public_shop(self, client, auth_headers):
        client.put("/shop/profile", json=PROFILE, headers=auth_headers)
        body = client.get("/public/shop").json()
        assert body["basicInfo"]["shopName"] == "Burger Point"
        assert body["about"] == "Family owned."
        assert body["location"]["latitude"] == 31.52
        assert len(body["contacts"]) == 2

    def test_public_shop_before_setup(self, client):
        body = client.get("/public/shop").json()
        assert body["basicInfo"]["shopName"] == ""
        assert body["location"] is None
        assert body["delivery"]["currency"] == "PKR"

    def test_public_hours_follow_global_switch(self, client, auth_headers):
        hours = client.get("/public/hours").json()
        assert hours[0] == {"day": "Monday", "hours": "9:00 AM - 9:00 PM"}

        client.put("/schedules/global-status", json={"isOpen": False}, headers=auth_headers)
        hours = client.get("/public/hours").json()
        assert {h["hours"] for h in hours} == {"Closed all day"}

        status = client.get("/public/status").json()
        assert status["isOpen"] is False
        assert status["acceptingOrders"] is False
        assert status["closedMessage"]

    def test_public_menu_only_shows_available_products(self, client, auth_headers):
        burgers = client.post("/categories", json={"name": "Burgers"}, headers=auth_headers).json()
        hidden = client.post(
            "/categories", json={"name": "Seasonal", "isActive": False}, headers=auth_headers
        ).json()
        client.post("/products", json={"name": "Zinger", "price": 450, "categoryId": burgers["id"]}, headers=auth_headers)
        client.post(
            "/products",
            json={"name": "Old Burger", "price": 300, "categoryId": burgers["id"], "isAvailable": False},
            headers=auth_headers,
        )
        client.post("/products", json={"name": "Mango Shake", "price": 250, "categoryId": hidden["id"]}, headers=auth_headers)

        menu = client.get("/public/menu").json()
        assert [c["name"] for c in menu] == ["Burgers"]
        assert [p["name"] for p in menu[0]["products"]] == ["Zinger"]

    def test_public_deals_only_active(self, client, auth_headers):
        base = {"name": "Duo", "category": "Deals", "items": [{"product": "Zinger", "quantity": 2}], "price": 800}
        client.post("/deals", json=base, headers=auth_headers)
        client.post("/deals", json=dict(base, name="Draft", status="draft"), headers=auth_headers)
        deals = client.get("/public/deals").json()
        assert [d["name"] for d in deals] == ["Duo"]
