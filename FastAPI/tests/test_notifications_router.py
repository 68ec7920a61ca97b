from datetime import datetime, timezone

import app.routers.notifications as notif_mod


class _Notification:
    def __init__(self, notification_id="n1", is_read=False):
        self.id = notification_id
        self.recipient_id = "a" * 24
        self.type = "application_status"
        self.message = "Your application to ACME was accepted"
        self.application_id = "a1"
        self.offer_id = None
        self.interview_details = None
        self.extra_data = {"status": "accepted"}
        self.is_read = is_read
        self.created_at = datetime(2026, 10, 2, tzinfo=timezone.utc)
        self.read_at = None


def test_anonymous_list_is_empty(anon_client):
    resp = anon_client.get("/api/notifications")
    assert resp.status_code == 200
    assert resp.json() == []


def test_list_uses_page_size(monkeypatch, client):
    seen = {}

    def fake_list(db, recipient_id, limit=50):
        seen.update(recipient_id=recipient_id, limit=limit)
        return [_Notification()]

    monkeypatch.setattr(notif_mod, "list_for_recipient", fake_list)
    monkeypatch.setattr(notif_mod.settings, "notifications_page_size", 20)
    resp = client.get("/api/notifications")
    assert resp.status_code == 200
    [item] = resp.json()
    assert item["isRead"] is False
    assert item["extraData"] == {"status": "accepted"}
    assert seen == {"recipient_id": "a" * 24, "limit": 20}


def test_unread_count(monkeypatch, client):
    monkeypatch.setattr(notif_mod, "count_unread", lambda db, recipient_id: 3)
    assert client.get("/api/notifications/unread-count").json() == {"count": 3}


def test_mark_read_not_owned_is_404(monkeypatch, client):
    monkeypatch.setattr(notif_mod, "mark_read", lambda db, notification_id, recipient_id: None)
    assert client.patch("/api/notifications/n1").status_code == 404


def test_mark_read(monkeypatch, client):
    monkeypatch.setattr(notif_mod, "mark_read", lambda db, notification_id, recipient_id: _Notification(is_read=True))
    resp = client.patch("/api/notifications/n1")
    assert resp.status_code == 200
    assert resp.json()["isRead"] is True


def test_create_rejects_unknown_type(client):
    resp = client.post("/api/notifications", json={"recipientId": "r1", "type": "spam", "message": "hi"})
    assert resp.status_code == 422


def test_create_passes_fields_through(monkeypatch, client):
    captured = {}

    def fake_create(db, **kwargs):
        captured.update(kwargs)
        return _Notification()

    monkeypatch.setattr(notif_mod, "create_from_client", fake_create)
    resp = client.post(
        "/api/notifications",
        json={"recipientId": "r1", "type": "application_accepted", "companyName": "ACME"},
    )
    assert resp.status_code == 200
    assert captured["recipient_id"] == "r1"
    assert captured["type"] == "application_accepted"
    assert captured["company_name"] == "ACME"
    assert captured["message"] is None
