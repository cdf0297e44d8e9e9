"""Tests des préférences utilisateur"""


def test_default_preferences(client, auth_headers):
    response = client.get("/api/v1/preferences", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "enable_price_drop_notifications": True,
        "enable_new_alternative_notifications": True,
        "price_drop_threshold": 10.0,
        "preferred_categories": [],
        "min_eco_score": 50,
    }


def test_partial_update(client, auth_headers):
    response = client.put(
        "/api/v1/preferences",
        json={"min_eco_score": 70, "preferred_categories": ["Snacks"]},
        headers=auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["min_eco_score"] == 70
    assert data["preferred_categories"] == ["Snacks"]
    assert data["enable_price_drop_notifications"] is True

    again = client.get("/api/v1/preferences", headers=auth_headers).json()
    assert again == data


def test_update_validation(client, auth_headers):
    response = client.put(
        "/api/v1/preferences", json={"min_eco_score": 101}, headers=auth_headers
    )
    assert response.status_code == 422
