"""Tests for the HTTP trigger endpoint."""

from app.registry import registry


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "pending": 0}


def test_health_path_accepts_triggers(client):
    resp = client.get("/health", params={"url": "http://x/a", "method": "GET"})
    assert resp.json() == {"success": True, "message": "Sending request in 5s"}
    assert "GET http://x/a" in registry


def test_health_path_validates_triggers(client):
    resp = client.get("/health", params={"url": "http://x/a"})
    assert resp.json() == {"success": False, "message": "method is required"}
    assert registry.size == 0


def test_trigger_schedules_call(client, dispatch_mock):
    resp = client.get("/", params={"url": "http://x/a", "method": "GET"})
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Sending request in 5s"}
    assert "GET http://x/a" in registry
    dispatch_mock.assert_not_called()


def test_trigger_on_any_path(client):
    resp = client.get("/hooks/deploy", params={"url": "http://x/a", "method": "POST"})
    assert resp.json()["success"] is True
    assert "POST http://x/a" in registry


def test_missing_url(client):
    resp = client.get("/", params={"method": "GET"})
    assert resp.json() == {"success": False, "message": "url is required"}
    assert registry.size == 0


def test_missing_method(client):
    resp = client.get("/", params={"url": "http://x/a"})
    assert resp.json() == {"success": False, "message": "method is required"}
    assert registry.size == 0


def test_non_get_is_ignored(client):
    resp = client.post("/", params={"url": "http://x/a", "method": "GET"})
    assert resp.status_code == 405
    assert resp.content == b""
    assert registry.size == 0


def test_headers_and_id_are_forwarded(client):
    client.get(
        "/",
        params={
            "url": "http://x/a",
            "method": "GET",
            "id": "nightly",
            "headers[Authorization]": "Bearer abc",
        },
    )
    call = registry.get("nightly")
    assert call is not None
    assert call.target.headers == {"Authorization": "Bearer abc"}


def test_repeat_trigger_within_window_coalesces(client, dispatch_mock):
    params = {"url": "http://x/a", "method": "GET"}
    client.get("/", params=params)
    resp = client.get("/", params=params)

    assert resp.json()["message"] == "Sending request in 5s"
    assert registry.size == 1
    dispatch_mock.assert_not_called()


def test_overdue_trigger_sends_now(client, dispatch_mock, monkeypatch):
    params = {"url": "http://x/a", "method": "GET"}
    monkeypatch.setattr(registry, "_clock", lambda: 1000.0)
    client.get("/", params=params)

    # Fast-forward past the debounce window
    monkeypatch.setattr(registry, "_clock", lambda: 1006.0)
    resp = client.get("/", params=params)

    assert resp.json() == {
        "success": True,
        "message": "Sending request in 5s and just now",
    }
    dispatch_mock.assert_called_once()
    assert dispatch_mock.call_args.args[0].url == "http://x/a"
    assert registry.size == 1
