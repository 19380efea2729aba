# tests/v1/test_reports.py
"""Tests for report endpoints."""

from fastapi import status

from campus_commons.models import ModerationQueueItem, Report
from campus_commons.models.enums import ReportStatus


def _file_report(client, headers, entity_type, entity_id, reason="spam", **extra):
    return client.post(
        "/api/v1/reports",
        json={"entity_type": entity_type, "entity_id": entity_id, "reason": reason, **extra},
        headers=headers,
    )


def test_create_report(client, auth_token, resource, test_user, db_session) -> None:
    response = _file_report(
        client, auth_token, "resource", resource.id, details="Copied from a textbook"
    )

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["status"] == "success"
    assert body["message"] == "Report created successfully"
    report = body["data"]["report"]
    assert report["status"] == "pending"
    assert report["reporter"]["id"] == test_user.id
    assert report["details"] == "Copied from a textbook"

    item = db_session.query(ModerationQueueItem).one()
    assert item.report_count == 1


def test_create_report_validation_errors(client, auth_token) -> None:
    response = _file_report(client, auth_token, "post", 1, reason="boring")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["status"] == "error"
    assert body["message"] == "Validation failed"
    fields = {error["field"] for error in body["errors"]}
    assert {"entity_type", "reason"} <= fields


def test_create_report_missing_entity(client, auth_token) -> None:
    response = _file_report(client, auth_token, "review", 4242)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "review not found"


def test_duplicate_report_is_rejected(client, auth_token, review) -> None:
    assert _file_report(client, auth_token, "review", review.id).status_code == 201

    response = _file_report(client, auth_token, "review", review.id, reason="abuse")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "already reported" in response.json()["message"]


def test_my_reports_only_lists_own(
    client, auth_token, other_auth_token, review, resource
) -> None:
    _file_report(client, auth_token, "review", review.id)
    _file_report(client, other_auth_token, "resource", resource.id)

    response = client.get("/api/v1/reports/my", headers=auth_token)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert [report["entity_type"] for report in data["reports"]] == ["review"]
    assert data["pagination"] == {"total": 1, "page": 1, "limit": 20, "total_pages": 1}


def test_admin_lists_and_filters_reports(
    client, auth_token, other_auth_token, admin_auth_token, review, resource, other_user
) -> None:
    _file_report(client, auth_token, "review", review.id)
    _file_report(client, other_auth_token, "resource", resource.id, reason="plagiarism")

    response = client.get(
        "/api/v1/reports",
        params={"reason": "plagiarism", "limit": 500},
        headers=admin_auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert len(data["reports"]) == 1
    assert data["reports"][0]["reporter_id"] == other_user.id
    assert data["pagination"]["limit"] == 100

    response = client.get(
        "/api/v1/reports", params={"status": "handled"}, headers=admin_auth_token
    )
    assert response.json()["data"]["reports"] == []


def test_get_update_and_delete_report(
    client, auth_token, admin_auth_token, review, db_session
) -> None:
    report_id = _file_report(client, auth_token, "review", review.id).json()["data"]["report"]["id"]

    response = client.get(f"/api/v1/reports/{report_id}", headers=admin_auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["report"]["id"] == report_id

    response = client.delete(f"/api/v1/reports/{report_id}", headers=admin_auth_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "Only handled reports" in response.json()["message"]

    response = client.put(
        f"/api/v1/reports/{report_id}/status",
        json={"status": "handled"},
        headers=admin_auth_token,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["report"]["status"] == ReportStatus.HANDLED

    response = client.delete(f"/api/v1/reports/{report_id}", headers=admin_auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "status": "success",
        "message": "Report deleted successfully",
        "data": None,
    }
    assert db_session.get(Report, report_id) is None


def test_unknown_report_is_not_found(client, admin_auth_token) -> None:
    response = client.get("/api/v1/reports/31337", headers=admin_auth_token)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "Report not found"


def test_non_positive_paging_falls_back_to_defaults(client, auth_token, review) -> None:
    _file_report(client, auth_token, "review", review.id)

    response = client.get("/api/v1/reports/my?page=0&limit=0", headers=auth_token)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["pagination"] == {
        "total": 1,
        "page": 1,
        "limit": 20,
        "total_pages": 1,
    }
