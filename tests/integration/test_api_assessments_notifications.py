BOARDS = "/api/v1/boards/"
EVALUATOR = {"X-User-Id": "eval-1"}


def _board_with_candidate(client, seed):
    seed.job(10)
    ali = seed.candidate("Ali", applied_job_id=10)
    board_id = client.post(BOARDS, json={"board_name": "Panel", "job_ids": [10]}).json()["id"]
    return board_id, ali


def test_assessment_upsert_per_evaluator(client, seed) -> None:
    board_id, ali = _board_with_candidate(client, seed)
    url = f"{BOARDS}{board_id}/candidates/{ali.id}/assessment"

    assert client.get(url, headers=EVALUATOR).json() is None

    created = client.post(url, json={"scores": {"communication": 4}, "notes": "Clear"}, headers=EVALUATOR)
    assert created.status_code == 200
    assert created.json()["status"] == "in_progress"

    completed = client.post(url, json={"decision": "hire", "status": "completed"}, headers=EVALUATOR)
    body = completed.json()
    assert body["id"] == created.json()["id"]
    assert body["scores"] == {"communication": 4}
    assert body["notes"] == "Clear"
    assert body["decision"] == "hire"

    assert client.get(url, headers={"X-User-Id": "eval-2"}).json() is None
    rows = client.get(f"{BOARDS}{board_id}/candidates").json()
    assert rows[0]["assessment_status"] == "completed"


def test_assessment_for_unknown_candidate(client, seed) -> None:
    board_id, _ = _board_with_candidate(client, seed)
    outsider = seed.candidate("Omar")

    missing = client.get(f"{BOARDS}{board_id}/candidates/nobody/assessment")
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Candidate not found"

    off_board = client.post(f"{BOARDS}{board_id}/candidates/{outsider.id}/assessment", json={})
    assert off_board.status_code == 404
    assert off_board.json()["detail"] == "Candidate not found in this board"


def test_board_creation_notifies_candidate_and_admins(client, seed) -> None:
    seed.test(5, "Aptitude Test")
    seed.job(10, test_id=5)
    seed.user("u-ali", email="ali@example.com")
    seed.user("admin-1", role="admin")
    seed.user("hr-1", role="admin")
    seed.candidate("Ali", applied_job_id=10, user_account="u-ali")
    seed.candidate("Sara", applied_job_id=10)

    resp = client.post(BOARDS, json={"board_name": "Panel", "job_ids": [10]}, headers={"X-User-Id": "hr-1"})
    assert resp.status_code == 201

    inbox = client.get("/api/v1/notifications/user/u-ali").json()
    assert len(inbox) == 1
    assert inbox[0]["title"] == "New Test Assigned"
    assert inbox[0]["action_url"] == f"/take-test/{inbox[0]['data']['assignment_id']}"
    assert inbox[0]["read"] is False

    admin_inbox = client.get("/api/v1/notifications/user/admin-1").json()
    assert [n["title"] for n in admin_inbox] == ["Test Assignment Created"]
    assert client.get("/api/v1/notifications/user/hr-1").json() == []

    read = client.post(f"/api/v1/notifications/{inbox[0]['id']}/read")
    assert read.json()["read"] is True
    assert client.get("/api/v1/notifications/user/u-ali", params={"unread_only": True}).json() == []
