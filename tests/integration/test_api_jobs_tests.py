def test_job_and_test_catalogue(client) -> None:
    test_resp = client.post("/api/v1/tests/", json={"test_id": 5, "test_name": "Aptitude Test"})
    assert test_resp.status_code == 201

    job_resp = client.post(
        "/api/v1/jobs/",
        json={"job_id": 10, "job_name": "Assistant Director", "test_id": 5, "vacancy_count": 3},
        headers={"X-User-Id": "hr-1"},
    )
    assert job_resp.status_code == 201
    assert job_resp.json()["test_id"] == 5
    assert job_resp.json()["candidate_count"] == 0

    duplicate = client.post("/api/v1/jobs/", json={"job_id": 10, "job_name": "Again"})
    assert duplicate.status_code == 400

    assert client.get("/api/v1/tests/5").json()["test_name"] == "Aptitude Test"
    assert client.get("/api/v1/tests/6").status_code == 404
    assert [job["job_id"] for job in client.get("/api/v1/jobs/").json()] == [10]


def test_empty_test_link_means_no_test(client) -> None:
    resp = client.post("/api/v1/jobs/", json={"job_id": 11, "job_name": "Clerk", "test_id": ""})

    assert resp.status_code == 201
    assert resp.json()["test_id"] is None

    unlinked = client.put("/api/v1/jobs/11", json={"test_id": 0})
    assert unlinked.json()["test_id"] is None


def test_negative_vacancy_is_rejected(client) -> None:
    resp = client.post("/api/v1/jobs/", json={"job_id": 12, "job_name": "Clerk", "vacancy_count": -1})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Vacancy count cannot be negative"


def test_job_with_candidates_cannot_be_deleted(client, seed) -> None:
    seed.job(10)
    seed.job(11)
    seed.candidate("Ali", current_job_id=10)

    assert client.delete("/api/v1/jobs/10").status_code == 400
    assert client.delete("/api/v1/jobs/11").status_code == 204
    assert client.get("/api/v1/jobs/11").status_code == 404


def test_health(client) -> None:
    assert client.get("/health").json()["status"] == "healthy"
