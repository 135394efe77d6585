import pytest


@pytest.fixture
def burgers(client, auth_headers):
    response = client.post("/categories", json={"name": "Burgers"}, headers=auth_headers)
    assert response.status_code == 201
    return response.json()


def create_product(client, headers, **fields):
    payload = {"name": "Zinger Burger", "price": 450}
    payload.update(fields)
    return client.post("/products", json=payload, headers=headers)


def test_category_names_are_unique(client, auth_headers, burgers):
    response = client.post("/categories", json={"name": "burgers"}, headers=auth_headers)
    assert response.status_code == 409


def test_category_name_required(client, auth_headers):
    response = client.post("/categories", json={"name": "   "}, headers=auth_headers)
    assert response.status_code == 422


def test_categories_list_product_counts(client, auth_headers, burgers):
    create_product(client, auth_headers, categoryId=burgers["id"])
    create_product(client, auth_headers, name="Chicken Burger", price=350, categoryId=burgers["id"])
    client.post("/categories", json={"name": "Drinks"}, headers=auth_headers)

    counts = {c["name"]: c["productCount"] for c in client.get("/categories", headers=auth_headers).json()}
    assert counts == {"Burgers": 2, "Drinks": 0}


@pytest.mark.parametrize("fields", [{"price": 0}, {"price": -10}, {"stockQuantity": -1}])
def test_product_validation(client, auth_headers, fields):
    assert create_product(client, auth_headers, **fields).status_code == 422


def test_product_category_must_exist(client, auth_headers):
    response = create_product(client, auth_headers, categoryId="missing")
    assert response.status_code == 400


def test_product_crud(client, auth_headers, burgers):
    response = create_product(
        client, auth_headers, categoryId=burgers["id"], variants=["Regular", "Spicy", " "]
    )
    product = response.json()
    assert product["categoryName"] == "Burgers"
    assert product["variants"] == ["Regular", "Spicy"]

    response = client.put(
        f"/products/{product['id']}", json={"price": 500, "isAvailable": False}, headers=auth_headers
    )
    assert response.status_code == 200
    assert response.json()["price"] == 500
    assert response.json()["isAvailable"] is False
    assert response.json()["name"] == "Zinger Burger"

    assert client.delete(f"/products/{product['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/products/{product['id']}", headers=auth_headers).status_code == 404


def test_product_filters_and_sorting(client, auth_headers, burgers):
    create_product(client, auth_headers, categoryId=burgers["id"])
    create_product(client, auth_headers, name="Fries", price=150)
    create_product(client, auth_headers, name="Chicken Burger", price=350, categoryId=burgers["id"])

    names = [p["name"] for p in client.get("/products?sort=price_asc", headers=auth_headers).json()]
    assert names == ["Fries", "Chicken Burger", "Zinger Burger"]

    in_category = client.get(f"/products?categoryId={burgers['id']}", headers=auth_headers).json()
    assert {p["name"] for p in in_category} == {"Zinger Burger", "Chicken Burger"}

    found = client.get("/products?search=zinger", headers=auth_headers).json()
    assert [p["name"] for p in found] == ["Zinger Burger"]


def test_deleting_category_keeps_products(client, auth_headers, burgers):
    product = create_product(client, auth_headers, categoryId=burgers["id"]).json()
    assert client.delete(f"/categories/{burgers['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/products/{product['id']}", headers=auth_headers).json()["categoryId"] is None
