from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_admin_reload_unauthorized(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    r = client.post("/admin/reload")
    assert r.status_code == 401


def test_admin_reload_not_configured(monkeypatch):
    monkeypatch.delenv("ADMIN_TOKEN", raising=False)
    r = client.post("/admin/reload", headers={"x-admin-token": "anything"})
    assert r.status_code == 500


def test_admin_reload_ok(monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    r = client.post("/admin/reload", headers={"x-admin-token": "secret"})
    assert r.status_code == 200
    assert r.json() == {"ok": True, "count": 5}


def test_admin_reload_recovers_from_failed_load(monkeypatch, tmp_path):
    monkeypatch.setenv("ADMIN_TOKEN", "secret")
    runtime = app.state.quiz
    runtime.source = str(tmp_path / "missing.json")
    assert client.get("/quiz/state").status_code == 503

    r = client.post("/admin/reload", headers={"x-admin-token": "secret"})
    assert r.json()["ok"] is False

    runtime.source = None
    r = client.post("/admin/reload", headers={"x-admin-token": "secret"})
    assert r.json()["ok"] is True
    assert client.get("/quiz/state").status_code == 200
