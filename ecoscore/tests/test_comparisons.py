"""Tests des comparaisons de produits"""

import pytest

from ecoscore.models.product import Product


@pytest.fixture
def unscored_product(db):
    product = Product(barcode="4000000000000", name="Unrated Tea")
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def create(client, headers, product_ids, name="Breakfast"):
    return client.post(
        "/api/v1/comparisons",
        json={"name": name, "product_ids": product_ids},
        headers=headers,
    )


def test_create_and_list_comparison(client, auth_headers, test_product, test_product2):
    response = create(client, auth_headers, [test_product2.id, test_product.id])
    assert response.status_code == 201
    assert response.json()["success"] is True

    response = client.get("/api/v1/comparisons", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["name"] == "Breakfast"
    # Ordre des produits conservé
    assert [p["id"] for p in data[0]["products"]] == [test_product2.id, test_product.id]


def test_create_comparison_validation(client, auth_headers, test_product):
    assert create(client, auth_headers, [test_product.id]).status_code == 422
    assert create(client, auth_headers, [test_product.id] * 2).status_code == 422
    assert (
        create(client, auth_headers, [test_product.id, test_product.id + 1], name="  ")
        .status_code
        == 422
    )


def test_create_comparison_unknown_product(client, auth_headers, test_product):
    response = create(client, auth_headers, [test_product.id, 9999])

    assert response.status_code == 400
    assert "9999" in response.json()["detail"]


def test_comparison_summary(
    client, auth_headers, test_product, test_product2, unscored_product
):
    comparison_id = create(
        client,
        auth_headers,
        [test_product.id, test_product2.id, unscored_product.id],
    ).json()["id"]

    response = client.get(
        f"/api/v1/comparisons/{comparison_id}/summary", headers=auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["product_count"] == 3
    assert data["best_product_id"] == test_product2.id
    assert data["average_eco_score"] == 60.0
    assert [row["product_id"] for row in data["rows"]] == [
        test_product.id,
        test_product2.id,
        unscored_product.id,
    ]


def test_comparison_not_visible_to_other_user(
    client, auth_headers, auth_headers_user2, test_product, test_product2
):
    comparison_id = create(
        client, auth_headers, [test_product.id, test_product2.id]
    ).json()["id"]

    response = client.get(
        f"/api/v1/comparisons/{comparison_id}/summary", headers=auth_headers_user2
    )
    assert response.status_code == 404
    assert response.json()["error"] == "comparison_not_found"

    response = client.delete(
        f"/api/v1/comparisons/{comparison_id}", headers=auth_headers_user2
    )
    assert response.status_code == 404


def test_delete_comparison(client, auth_headers, test_product, test_product2):
    comparison_id = create(
        client, auth_headers, [test_product.id, test_product2.id]
    ).json()["id"]

    response = client.delete(f"/api/v1/comparisons/{comparison_id}", headers=auth_headers)
    assert response.status_code == 200

    assert client.get("/api/v1/comparisons", headers=auth_headers).json() == []


def test_comparison_skips_deleted_products(
    client, db, auth_headers, test_product, test_product2
):
    create(client, auth_headers, [test_product.id, test_product2.id])

    db.delete(test_product2)
    db.commit()

    data = client.get("/api/v1/comparisons", headers=auth_headers).json()
    assert [p["id"] for p in data[0]["products"]] == [test_product.id]
