async def _enroll(client, auth_headers, group_id, student_id, **extra):
    return await client.post(
        "/inscriptions",
        json={"groupId": group_id, "studentId": student_id, **extra},
        headers=auth_headers,
    )


async def test_enrollment_code_is_derived(client, auth_headers, make_group, make_student):
    group = await make_group()
    student = await make_student()

    resp = await _enroll(client, auth_headers, group["id"], student["id"])

    assert resp.status_code == 201
    body = resp.json()
    assert body["enrollmentCode"] == f"SES-NIV-GRP-{student['id']:03d}"
    assert body["paymentState"] == "UNPAID"
    assert body["group"]["name"] == "GRPA"
    assert body["student"]["user"]["username"] == "alice"


async def test_enrollment_with_payment_state(client, auth_headers, make_group, make_student):
    group = await make_group()
    student = await make_student()

    resp = await _enroll(client, auth_headers, group["id"], student["id"], paymentState="PAID")

    assert resp.json()["paymentState"] == "PAID"


async def test_enrollment_requires_group_and_student(client, auth_headers, make_group, make_student):
    group = await make_group()
    student = await make_student()

    missing_group = await _enroll(client, auth_headers, 999, student["id"])
    missing_student = await _enroll(client, auth_headers, group["id"], 999)

    assert missing_group.status_code == 404
    assert missing_group.json() == {"error": "Group not found"}
    assert missing_student.status_code == 404
    assert missing_student.json() == {"error": "Student not found"}


async def test_changing_group_recomputes_code(client, auth_headers, make_group, make_student):
    first = await make_group()
    second = await make_group(session_name="WINTER", level_name="ADV", group_name="EVENING")
    student = await make_student()
    enrollment = (await _enroll(client, auth_headers, first["id"], student["id"])).json()

    resp = await client.put(
        f"/inscriptions/{enrollment['id']}",
        json={"groupId": second["id"], "studentId": student["id"]},
        headers=auth_headers,
    )

    assert resp.status_code == 200
    assert resp.json()["enrollmentCode"] == f"WIN-ADV-EVE-{student['id']:03d}"
    assert resp.json()["groupId"] == second["id"]


async def test_payment_only_update_keeps_code(client, auth_headers, make_group, make_student):
    group = await make_group()
    student = await make_student()
    enrollment = (await _enroll(client, auth_headers, group["id"], student["id"])).json()

    resp = await client.put(
        f"/inscriptions/{enrollment['id']}",
        json={"groupId": group["id"], "studentId": student["id"], "paymentState": "PARTIAL"},
        headers=auth_headers,
    )

    assert resp.json()["paymentState"] == "PARTIAL"
    assert resp.json()["enrollmentCode"] == enrollment["enrollmentCode"]


async def test_update_to_missing_group_leaves_enrollment_unchanged(
    client, auth_headers, make_group, make_student
):
    group = await make_group()
    student = await make_student()
    enrollment = (await _enroll(client, auth_headers, group["id"], student["id"])).json()

    resp = await client.put(
        f"/inscriptions/{enrollment['id']}",
        json={"groupId": 999, "studentId": student["id"], "paymentState": "PAID"},
        headers=auth_headers,
    )
    assert resp.status_code == 404

    current = await client.get(f"/inscriptions/{enrollment['id']}", headers=auth_headers)
    assert current.json()["groupId"] == group["id"]
    assert current.json()["paymentState"] == "UNPAID"
    assert current.json()["enrollmentCode"] == enrollment["enrollmentCode"]


async def test_list_and_delete(client, auth_headers, make_group, make_student):
    group = await make_group()
    student = await make_student()
    enrollment = (await _enroll(client, auth_headers, group["id"], student["id"])).json()

    listed = await client.get("/inscriptions", headers=auth_headers)
    assert [e["id"] for e in listed.json()] == [enrollment["id"]]

    deleted = await client.delete(f"/inscriptions/{enrollment['id']}", headers=auth_headers)
    assert deleted.status_code == 204

    again = await client.delete(f"/inscriptions/{enrollment['id']}", headers=auth_headers)
    assert again.status_code == 404


async def test_deleting_student_removes_enrollments(client, auth_headers, make_group, make_student):
    group = await make_group()
    student = await make_student()
    await _enroll(client, auth_headers, group["id"], student["id"])

    await client.delete(f"/students/{student['id']}", headers=auth_headers)

    listed = await client.get("/inscriptions", headers=auth_headers)
    assert listed.json() == []
