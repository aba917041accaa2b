import pytest_asyncio

from app.web.admin import check_scheduler
from app.web.forms import ENTITY_FORMS


@pytest_asyncio.fixture
async def admin_client(client, admin_user):
    resp = await client.post("/admin/login", data={"username": "admin", "password": "secret123"})
    assert resp.status_code == 303
    return client


async def test_login_page_renders(client):
    resp = await client.get("/admin/login")

    assert resp.status_code == 200
    assert "<form" in resp.text


async def test_login_sets_http_only_cookie(client, admin_user):
    resp = await client.post("/admin/login", data={"username": "admin", "password": "secret123"})

    assert resp.status_code == 303
    assert resp.headers["location"] == "/admin/"
    assert "access_token=" in resp.headers["set-cookie"]
    assert "httponly" in resp.headers["set-cookie"].lower()


async def test_login_wrong_password_shows_error(client, admin_user):
    resp = await client.post("/admin/login", data={"username": "admin", "password": "bad"})

    assert resp.status_code == 401
    assert "Incorrect password" in resp.text


async def test_pages_redirect_when_logged_out(client):
    for path in ("/admin/", "/admin/sessions", "/admin/students/new"):
        resp = await client.get(path)
        assert resp.status_code == 303, path
        assert resp.headers["location"] == "/admin/login"


async def test_dashboard_shows_stats(admin_client):
    resp = await admin_client.get("/admin/")

    assert resp.status_code == 200
    assert "Total users" in resp.text


async def test_every_list_page_renders(admin_client):
    for slug in ENTITY_FORMS:
        resp = await admin_client.get(f"/admin/{slug}")
        assert resp.status_code == 200, slug


async def test_unknown_entity_is_404(admin_client):
    resp = await admin_client.get("/admin/nothing")

    assert resp.status_code == 404


async def test_create_session_through_form(admin_client):
    resp = await admin_client.post(
        "/admin/sessions/new",
        data={"name": "Spring", "start_date": "2026-02-01", "end_date": "2026-06-30", "state": "ONGOING"},
    )

    assert resp.status_code == 303
    assert resp.headers["location"].startswith("/admin/sessions?message=")

    listed = await admin_client.get("/admin/sessions")
    assert "Spring" in listed.text


async def test_invalid_form_keeps_values_and_shows_banner(admin_client):
    resp = await admin_client.post(
        "/admin/sessions/new",
        data={"name": "Broken", "start_date": "2026-06-30", "end_date": "2026-01-01", "state": "ONGOING"},
    )

    assert resp.status_code == 400
    assert "Broken" in resp.text


async def test_student_form_reports_taken_username(admin_client, make_student):
    await make_student()

    resp = await admin_client.post(
        "/admin/students/new",
        data={
            "name": "Bob",
            "surname": "Stone",
            "birth_date": "2003-01-01",
            "address": "2 Main Street",
            "national_id": "NID-002",
            "status": "STUDENT",
            "username": "alice",
            "email": "bob@school.local",
            "password": "pw",
        },
    )

    assert resp.status_code == 400
    assert "Username or email already in use" in resp.text
    assert "bob@school.local" in resp.text


async def test_edit_and_delete_group(admin_client, make_group):
    group = await make_group()

    edit = await admin_client.get(f"/admin/groupes/{group['id']}/edit")
    assert edit.status_code == 200
    assert "GRPA" in edit.text

    deleted = await admin_client.post(f"/admin/groupes/{group['id']}/delete")
    assert deleted.status_code == 303

    listed = await admin_client.get("/admin/groupes")
    assert "GRPA" not in listed.text


async def test_logout_clears_cookie(admin_client):
    resp = await admin_client.get("/admin/logout")

    assert resp.status_code == 303
    assert 'access_token=""' in resp.headers["set-cookie"] or "Max-Age=0" in resp.headers["set-cookie"]


async def test_editing_missing_record_redirects_to_list(admin_client):
    resp = await admin_client.get("/admin/groupes/999/edit")

    assert resp.status_code == 303
    assert resp.headers["location"] == "/admin/groupes?message=Group+not+found"


async def test_deleting_missing_record_redirects_to_list(admin_client):
    resp = await admin_client.post("/admin/students/999/delete")

    assert resp.status_code == 303
    assert resp.headers["location"] == "/admin/students?message=Student+not+found"


async def test_live_username_check(admin_client, monkeypatch):
    monkeypatch.setattr(check_scheduler, "delay", 0)

    taken = await admin_client.post("/admin/check/username", json={"value": "admin"})
    free = await admin_client.post("/admin/check/username", json={"value": "newcomer"})

    assert taken.status_code == 200
    assert taken.json() == {
        "superseded": False,
        "available": False,
        "message": "This username is already taken",
    }
    assert free.json()["available"] is True


async def test_live_email_check(admin_client, monkeypatch):
    monkeypatch.setattr(check_scheduler, "delay", 0)

    resp = await admin_client.post("/admin/check/email", json={"value": "admin@school.local"})

    assert resp.json()["available"] is False
    assert resp.json()["message"] == "This email is already in use"


async def test_live_check_unknown_field(admin_client):
    resp = await admin_client.post("/admin/check/phone", json={"value": "123"})

    assert resp.status_code == 404


async def test_live_check_requires_login(client):
    resp = await client.post("/admin/check/username", json={"value": "admin"})

    assert resp.status_code == 401
