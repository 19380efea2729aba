# tests/v1/test_dependencies.py
"""Tests for authentication and authorization dependencies."""

from fastapi import status

from campus_commons.core.security import create_access_token
from campus_commons.models.enums import UserStatus


def test_missing_token_is_unauthorized(client) -> None:
    response = client.get("/api/v1/reports/my")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"status": "error", "message": "Access token required"}


def test_garbage_token_is_unauthorized(client) -> None:
    response = client.get(
        "/api/v1/reports/my", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == "Could not validate credentials"


def test_expired_token_is_unauthorized(client, test_user) -> None:
    token = create_access_token(test_user.id, expires_minutes=-1)

    response = client.get("/api/v1/reports/my", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_unknown_user_is_unauthorized(client) -> None:
    token = create_access_token(987654)

    response = client.get("/api/v1/reports/my", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == "User not found"


def test_banned_user_is_forbidden(client, db_session, test_user, auth_token) -> None:
    test_user.status = UserStatus.BANNED
    db_session.flush()

    response = client.get("/api/v1/reports/my", headers=auth_token)

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_admin_routes_reject_regular_users(client, auth_token) -> None:
    for method, path in [
        ("get", "/api/v1/reports"),
        ("get", "/api/v1/moderation-queue"),
        ("get", "/api/v1/moderation-queue/stats"),
        ("delete", "/api/v1/reports/1"),
    ]:
        response = getattr(client, method)(path, headers=auth_token)
        assert response.status_code == status.HTTP_403_FORBIDDEN, path
        assert response.json()["status"] == "error"


def test_role_claim_in_token_is_not_trusted(client, test_user) -> None:
    token = create_access_token(test_user.id, role="admin")

    response = client.get("/api/v1/reports", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == status.HTTP_403_FORBIDDEN
