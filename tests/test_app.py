from __future__ import annotations

import io
import threading

import pytest
from PIL import Image

from payload_tracker.common.datetime_utils import today
from payload_tracker.main import create_app, initialize_with_timeout


@pytest.fixture()
def app():
    return create_app("payload_tracker.config.testing")


@pytest.fixture()
def client(app):
    return app.test_client()


def _register_and_login(client, username="ana", password="pw"):
    resp = client.post("/api/auth/register", json={"name": "Ana Souza", "username": username, "password": password})
    assert resp.status_code == 201
    resp = client.post("/api/auth/login", json={"username": username, "password": password, "role": "DRIVER"})
    assert resp.status_code == 200


def _png() -> io.BytesIO:
    buf = io.BytesIO()
    Image.new("RGB", (2, 2)).save(buf, format="PNG")
    buf.seek(0)
    return buf


def test_seed_admin_can_log_in(client):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "EVRI01", "role": "ADMIN"})

    assert resp.status_code == 200
    assert resp.get_json()["user"]["role"] == "ADMIN"


def test_admin_cannot_log_in_through_driver_tab(client):
    resp = client.post("/api/auth/login", json={"username": "admin", "password": "EVRI01", "role": "DRIVER"})

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Credenciais inválidas."


def test_duplicate_registration_is_rejected(client):
    client.post("/api/auth/register", json={"name": "Ana", "username": "ana", "password": "pw"})
    resp = client.post("/api/auth/register", json={"name": "Ana 2", "username": "ana", "password": "other"})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Usuário já existe."


def test_routes_require_login(client):
    assert client.get("/api/records").status_code == 401
    assert client.get("/api/admin/drivers").status_code == 401


def test_driver_flow_create_list_export_delete(client):
    _register_and_login(client)

    resp = client.post(
        "/api/records",
        data={
            "date": "2024-03-05",
            "mode": "INDIVIDUAL",
            "parcels": "3",
            "collections": "5",
            "photos": (_png(), "proof.png"),
        },
        content_type="multipart/form-data",
    )
    assert resp.status_code == 201
    created = resp.get_json()["records"]
    assert len(created) == 2
    assert all(r["photos"][0].startswith("data:image/png;base64,") for r in created)

    resp = client.post("/api/records", data={"date": "2024-04-01", "mode": "DAILY", "quantity": "5"})
    assert resp.status_code == 201

    groups = client.get("/api/records").get_json()["groups"]
    assert [g["monthKey"] for g in groups] == ["2024-04", "2024-03"]
    assert groups[1]["total"] == pytest.approx(7.00)
    assert groups[1]["displayTotal"] == "£7.00"

    resp = client.get("/api/records/export/2024-03")
    assert resp.status_code == 200
    assert "Payload_ana_2024-03.csv" in resp.headers["Content-Disposition"]
    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0] == "Data,Tipo,Modo,Qtd,Valor,Rotas,ID"
    assert len(lines) == 3

    parcel_id = next(r["id"] for r in created if r["type"] == "PARCEL")
    assert client.delete(f"/api/records/{parcel_id}").status_code == 200
    assert client.delete("/api/records/missing").status_code == 200
    groups = client.get("/api/records").get_json()["groups"]
    assert sum(len(g["records"]) for g in groups) == 2


def test_export_filename_survives_non_ascii_username(client):
    _register_and_login(client, username="Łukasz")
    resp = client.post("/api/records", data={"date": "2024-03-05", "mode": "INDIVIDUAL", "parcels": "2"})
    assert resp.status_code == 201

    resp = client.get("/api/records/export/2024-03")

    assert resp.status_code == 200
    disposition = resp.headers["Content-Disposition"]
    disposition.encode("latin-1")
    assert disposition.startswith("attachment;")
    assert "filename*=UTF-8''Payload_%C5%81ukasz_2024-03.csv" in disposition
    assert resp.data.decode("utf-8-sig").splitlines()[1].startswith("2024-03-05,PARCEL,INDIVIDUAL,2,2.00,")


def test_create_record_validation_error_is_400(client):
    _register_and_login(client)

    resp = client.post("/api/records", data={"date": "2024-03-05", "mode": "INDIVIDUAL"})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Preencha ao menos parcelas ou coletas."


def test_preview(client):
    _register_and_login(client)

    resp = client.post("/api/records/preview", json={"mode": "DAILY", "quantity": "150", "isTwoIDs": True})

    assert resp.get_json()["value"] == 300.0
    assert resp.get_json()["displayValue"] == "£300.00"


def test_dashboard_sums_current_month(client):
    _register_and_login(client)
    day = today().isoformat()
    client.post("/api/records", data={"date": day, "parcels": "10"})
    client.post("/api/records", data={"date": day, "mode": "DAILY"})

    body = client.get("/api/dashboard").get_json()

    assert body["totalEarnings"] == pytest.approx(190.0)
    assert body["daysWorked"] == 1
    assert body["dailyAverage"] == pytest.approx(190.0)


def test_driver_cannot_delete_someone_elses_record(app):
    owner = app.test_client()
    _register_and_login(owner, "ana")
    record_id = owner.post("/api/records", data={"date": "2024-03-05", "parcels": "1"}).get_json()["records"][0]["id"]

    intruder = app.test_client()
    _register_and_login(intruder, "bruno")

    assert intruder.delete(f"/api/records/{record_id}").status_code == 404
    assert len(owner.get("/api/records").get_json()["groups"][0]["records"]) == 1


def test_admin_views_and_global_export(app):
    driver = app.test_client()
    _register_and_login(driver, "ana")
    driver.post("/api/records", data={"date": "2024-03-05", "parcels": "3"})

    admin = app.test_client()
    admin.post("/api/auth/login", json={"username": "admin", "password": "EVRI01", "role": "ADMIN"})

    drivers = admin.get("/api/admin/drivers?q=ANA").get_json()["drivers"]
    assert [d["username"] for d in drivers] == ["ana"]
    assert "passwordHash" not in drivers[0]

    groups = admin.get(f"/api/admin/drivers/{drivers[0]['id']}/records").get_json()["groups"]
    assert groups[0]["records"][0]["value"] == 3.0

    resp = admin.get("/api/admin/export")
    assert resp.status_code == 200
    assert "Payload_GLOBAL_EXPORT_" in resp.headers["Content-Disposition"]
    assert resp.data.decode("utf-8-sig").splitlines()[1].startswith("2024-03-05,PARCEL,INDIVIDUAL,3,3.00,-,")


def test_admin_routes_forbidden_for_drivers(client):
    _register_and_login(client)
    assert client.get("/api/admin/export").status_code == 403


def test_admin_cannot_create_records(client):
    client.post("/api/auth/login", json={"username": "admin", "password": "EVRI01", "role": "ADMIN"})
    assert client.post("/api/records", data={"date": "2024-03-05", "parcels": "1"}).status_code == 403


def test_logout_clears_session(client):
    _register_and_login(client)
    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_slow_storage_initialization_does_not_block_startup(app):
    container = app.extensions["payload_tracker"]
    release = threading.Event()

    class SlowAuth:
        def initialize_storage(self):
            release.wait(5)

    class FakeContainer:
        auth_service = SlowAuth()

    try:
        assert initialize_with_timeout(FakeContainer(), 0.05) is False
    finally:
        release.set()
    assert initialize_with_timeout(container, 1.0) is True
