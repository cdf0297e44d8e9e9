"""Tests de l'identification par jeton Bearer"""

from datetime import timedelta

from ecoscore.core.security import create_access_token
from ecoscore.models.user import User


def bearer(payload, **kwargs):
    return {"Authorization": f"Bearer {create_access_token(payload, **kwargs)}"}


def test_missing_token(client):
    response = client.get("/api/v1/preferences")
    assert response.status_code == 401


def test_invalid_token(client):
    response = client.get(
        "/api/v1/preferences", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


def test_expired_token(client):
    headers = bearer({"sub": "open-id-x"}, expires_delta=timedelta(minutes=-1))

    response = client.get("/api/v1/preferences", headers=headers)
    assert response.status_code == 401


def test_token_without_subject(client):
    response = client.get("/api/v1/preferences", headers=bearer({"name": "Nobody"}))
    assert response.status_code == 401


def test_first_request_creates_user(client, db):
    headers = bearer({"sub": "new-open-id", "name": "New User", "email": "new@example.com"})

    response = client.get("/api/v1/preferences", headers=headers)

    assert response.status_code == 200
    user = db.query(User).filter(User.open_id == "new-open-id").one()
    assert user.name == "New User"
    assert user.email == "new@example.com"
    assert user.last_signed_in is not None


def test_known_user_updated_not_duplicated(client, db, test_user):
    headers = bearer({"sub": test_user.open_id, "name": "Renamed"})

    client.get("/api/v1/preferences", headers=headers)

    users = db.query(User).filter(User.open_id == test_user.open_id).all()
    assert len(users) == 1
    assert users[0].name == "Renamed"
    assert users[0].email == "test@example.com"


def test_health(client):
    response = client.get("/health")
    assert response.json() == {"status": "healthy"}
