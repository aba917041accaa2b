import io

import pytest
from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.settings import settings
from app.models import User, UserRole
from app.schemas.student import StudentUpdate
from app.services.student_service import StudentService, safe_upload_name


def test_safe_upload_name_replaces_unsafe_characters():
    assert safe_upload_name("my photo (1).JPG", now_ms=1700000000000) == "1700000000000-my_photo__1_.JPG"


async def test_create_student_creates_account(client, auth_headers, make_student, db):
    student = await make_student()

    assert student["name"] == "Alice"
    assert student["nationalId"] == "NID-001"
    assert student["user"]["username"] == "alice"
    assert student["user"]["role"] == "STUDENT"
    assert student["photoPath"] is None

    user = await db.scalar(select(User).where(User.username == "alice"))
    assert user.role == UserRole.STUDENT
    assert user.display_name == "Alice Martin"
    assert user.password_hash != "pass1234"

    login = await client.post("/login", json={"username": "alice", "password": "pass1234"})
    assert login.status_code == 200


async def test_duplicate_username_is_rejected(client, auth_headers, make_student):
    await make_student()

    resp = await client.post(
        "/students",
        json={
            "name": "Bob",
            "surname": "Stone",
            "birthDate": "2003-01-01",
            "address": "2 Main Street",
            "nationalId": "NID-002",
            "status": "EMPLOYEE",
            "username": "alice",
            "email": "bob@school.local",
            "password": "pw",
        },
        headers=auth_headers,
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Username or email already in use"}


async def test_duplicate_national_id_is_rejected(client, auth_headers, make_student):
    await make_student()

    resp = await client.post(
        "/students",
        json={
            "name": "Bob",
            "surname": "Stone",
            "birthDate": "2003-01-01",
            "address": "2 Main Street",
            "nationalId": "NID-001",
            "status": "STUDENT",
            "username": "bob",
            "email": "bob@school.local",
            "password": "pw",
        },
        headers=auth_headers,
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "National ID already in use"}


async def test_update_student_with_multipart_and_photo(
    client, auth_headers, make_student, monkeypatch, tmp_path
):
    monkeypatch.setattr(settings, "upload_dir", str(tmp_path))
    student = await make_student()

    resp = await client.put(
        f"/students/{student['id']}",
        data={"address": "10 New Road", "status": "EMPLOYEE", "username": "alice.m"},
        files={"photo": ("me.png", b"\x89PNG fake", "image/png")},
        headers=auth_headers,
    )

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["address"] == "10 New Road"
    assert body["status"] == "EMPLOYEE"
    assert body["name"] == "Alice"
    assert body["user"]["username"] == "alice.m"
    assert body["photoPath"].startswith("/uploads/")
    assert body["photoPath"].endswith("-me.png")

    stored = list(tmp_path.iterdir())
    assert len(stored) == 1
    assert stored[0].read_bytes() == b"\x89PNG fake"


async def test_rejected_update_stores_no_photo(
    client, auth_headers, make_student, monkeypatch, tmp_path
):
    monkeypatch.setattr(settings, "upload_dir", str(tmp_path))
    await make_student()
    bob = await make_student(username="bob", email="bob@school.local", national_id="NID-002")

    resp = await client.put(
        f"/students/{bob['id']}",
        data={"username": "alice", "address": "Elsewhere"},
        files={"photo": ("face.png", b"\x89PNG fake", "image/png")},
        headers=auth_headers,
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Username or email already in use"}
    assert list(tmp_path.iterdir()) == []

    current = await client.get(f"/students/{bob['id']}", headers=auth_headers)
    assert current.json()["user"]["username"] == "bob"
    assert current.json()["address"] == "1 Main Street"
    assert current.json()["photoPath"] is None


async def test_duplicate_national_id_on_update(client, auth_headers, make_student):
    await make_student()
    bob = await make_student(username="bob", email="bob@school.local", national_id="NID-002")

    resp = await client.put(
        f"/students/{bob['id']}", data={"nationalId": "NID-001"}, headers=auth_headers
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "National ID already in use"}


async def test_keeping_own_username_is_allowed(client, auth_headers, make_student):
    student = await make_student()

    resp = await client.put(
        f"/students/{student['id']}",
        data={"username": "alice", "nationalId": "NID-001"},
        headers=auth_headers,
    )

    assert resp.status_code == 200


async def test_failed_commit_removes_saved_photo(db, make_student, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "upload_dir", str(tmp_path))
    student = await make_student()

    async def failing_commit(self):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(AsyncSession, "commit", failing_commit)
    photo = UploadFile(file=io.BytesIO(b"\x89PNG fake"), filename="face.png")

    with pytest.raises(RuntimeError):
        await StudentService(db).update(student["id"], StudentUpdate(address="Elsewhere"), photo=photo)

    assert list(tmp_path.iterdir()) == []


async def test_update_without_photo_keeps_existing_fields(client, auth_headers, make_student):
    student = await make_student()

    resp = await client.put(
        f"/students/{student['id']}", data={"surname": "Durand"}, headers=auth_headers
    )

    assert resp.status_code == 200
    assert resp.json()["surname"] == "Durand"
    assert resp.json()["nationalId"] == "NID-001"
    assert resp.json()["photoPath"] is None


async def test_update_missing_student(client, auth_headers):
    resp = await client.put("/students/999", data={"name": "X"}, headers=auth_headers)

    assert resp.status_code == 404


async def test_delete_student_removes_account(client, auth_headers, make_student, db):
    student = await make_student()

    resp = await client.delete(f"/students/{student['id']}", headers=auth_headers)
    assert resp.status_code == 204

    assert await db.scalar(select(User).where(User.username == "alice")) is None
    listed = await client.get("/students", headers=auth_headers)
    assert listed.json() == []
