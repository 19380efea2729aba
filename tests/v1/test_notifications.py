# tests/v1/test_notifications.py
"""Tests for the notification centre endpoints."""

from fastapi import status

from campus_commons.models import Notification
from campus_commons.models.enums import NotificationType


def _notify(db_session, user, title, is_read=False) -> Notification:
    notification = Notification(
        user_id=user.id,
        type=NotificationType.SYSTEM,
        title=title,
        content=f"{title} body",
        is_read=is_read,
    )
    db_session.add(notification)
    db_session.flush()
    return notification


def test_list_notifications_with_unread_count(client, db_session, test_user, other_user, auth_token) -> None:
    _notify(db_session, test_user, "first")
    _notify(db_session, test_user, "second", is_read=True)
    _notify(db_session, other_user, "not yours")

    response = client.get("/api/v1/notifications", headers=auth_token)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert {n["title"] for n in data["notifications"]} == {"first", "second"}
    assert data["unread_count"] == 1
    assert data["pagination"]["total"] == 2

    response = client.get("/api/v1/notifications", params={"is_read": "false"}, headers=auth_token)
    assert [n["title"] for n in response.json()["data"]["notifications"]] == ["first"]


def test_report_creates_notification(client, auth_token, review) -> None:
    client.post(
        "/api/v1/reports",
        json={"entity_type": "review", "entity_id": review.id, "reason": "other"},
        headers=auth_token,
    )

    notifications = client.get("/api/v1/notifications", headers=auth_token).json()["data"]["notifications"]

    assert notifications[0]["title"] == "Report submitted"
    assert notifications[0]["entity_type"] == "review"
    assert notifications[0]["entity_id"] == review.id


def test_mark_read(client, db_session, test_user, other_user, auth_token) -> None:
    mine = _notify(db_session, test_user, "mine")
    theirs = _notify(db_session, other_user, "theirs")

    response = client.put(f"/api/v1/notifications/{mine.id}/read", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["notification"]["is_read"] is True

    response = client.put(f"/api/v1/notifications/{theirs.id}/read", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_mark_all_read(client, db_session, test_user, auth_token) -> None:
    for title in ("a", "b", "c"):
        _notify(db_session, test_user, title)

    response = client.put("/api/v1/notifications/read-all", headers=auth_token)

    assert response.json()["data"]["updated"] == 3
    listing = client.get("/api/v1/notifications", headers=auth_token).json()["data"]
    assert listing["unread_count"] == 0
