CANDIDATES = "/api/v1/candidates/"


def _payload(name: str, cnic: str, **fields) -> dict:
    payload = {
        "cand_name": name,
        "cand_email": f"{name.lower()}@example.com",
        "cand_cnic_no": cnic,
    }
    payload.update(fields)
    return payload


def test_vacancy_limit_blocks_the_extra_candidate(client, seed) -> None:
    seed.job(10, vacancy_count=2)

    first = client.post(CANDIDATES, json=_payload("Ali", "1", applied_job_id=10))
    second = client.post(CANDIDATES, json=_payload("Sara", "2", applied_job_id=10))
    third = client.post(CANDIDATES, json=_payload("Omar", "3", applied_job_id=10))

    assert first.status_code == 201
    assert second.status_code == 201
    assert third.status_code == 400
    assert third.json()["detail"] == (
        "Cannot assign candidate to applied job ID 10. Maximum vacancy limit reached."
    )

    vacancy = client.get("/api/v1/jobs/10/vacancy").json()
    assert vacancy == {"job_id": 10, "vacancy_count": 2, "assigned": 2, "has_vacancy": False}


def test_update_of_a_bound_candidate_is_not_blocked_by_itself(client, seed) -> None:
    seed.job(10, vacancy_count=1)
    seed.job(11, vacancy_count=1)
    seed.candidate("Sara", applied_job_id=11)
    ali = client.post(CANDIDATES, json=_payload("Ali", "1", applied_job_id=10)).json()

    renamed = client.put(f"{CANDIDATES}{ali['id']}", json={"cand_name": "Ali Khan", "applied_job_id": 10})
    assert renamed.status_code == 200
    assert renamed.json()["cand_name"] == "Ali Khan"

    moved = client.put(f"{CANDIDATES}{ali['id']}", json={"current_job_id": 11})
    assert moved.status_code == 400
    assert "current job ID 11" in moved.json()["detail"]


def test_unknown_job_has_no_vacancy(client) -> None:
    resp = client.post(CANDIDATES, json=_payload("Ali", "1", applied_job_id=404))

    assert resp.status_code == 400


def test_duplicate_cnic_is_rejected(client) -> None:
    assert client.post(CANDIDATES, json=_payload("Ali", "12345")).status_code == 201

    duplicate = client.post(CANDIDATES, json=_payload("Sara", "12345"))

    assert duplicate.status_code == 400
    assert duplicate.json()["detail"] == "Candidate with CNIC 12345 already exists"


def test_invalid_email_answers_400(client) -> None:
    resp = client.post(CANDIDATES, json={"cand_name": "Ali", "cand_email": "nope", "cand_cnic_no": "1"})

    assert resp.status_code == 400


def test_hiring_status_follows_the_pipeline(client) -> None:
    ali = client.post(CANDIDATES, json=_payload("Ali", "1")).json()
    assert ali["hiring_status"] == "applied"

    shortlisted = client.put(f"{CANDIDATES}{ali['id']}", json={"hiring_status": "shortlisted"})
    assert shortlisted.json()["hiring_status"] == "shortlisted"

    rejected = client.put(f"{CANDIDATES}{ali['id']}", json={"hiring_status": "rejected"})
    assert rejected.status_code == 200

    reopened = client.put(f"{CANDIDATES}{ali['id']}", json={"hiring_status": "applied"})
    assert reopened.status_code == 400
    assert reopened.json()["detail"] == "Invalid hiring transition: rejected -> applied"


def test_list_candidates_by_job(client, seed) -> None:
    seed.job(10)
    seed.job(11)
    client.post(CANDIDATES, json=_payload("Ali", "1", applied_job_id=10))
    client.post(CANDIDATES, json=_payload("Omar", "2", applied_job_id=11))

    names = [c["cand_name"] for c in client.get(CANDIDATES, params={"applied_job_id": 10}).json()]

    assert names == ["Ali"]
    assert client.get(f"{CANDIDATES}missing").status_code == 404
