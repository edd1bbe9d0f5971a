from app.services.candidate_aggregator import candidate_aggregator


def test_resolve_jobs_keeps_request_order_and_skips_unknown(db, seed) -> None:
    seed.job(10)
    seed.job(11)

    jobs = candidate_aggregator.resolve_jobs(db, [11, 99, 10, 11])

    assert [job.job_id for job in jobs] == [11, 10]


def test_aggregate_merges_jobs_without_duplicates(db, seed) -> None:
    job_a = seed.job(10)
    job_b = seed.job(11)
    seed.job(12)
    ali = seed.candidate("Ali", applied_job_id=10)
    sara = seed.candidate("Sara", applied_job_id=10)
    omar = seed.candidate("Omar", applied_job_id=11)

    pool = candidate_aggregator.aggregate(db, [job_a, job_b, job_a])

    assert len(pool) == 3
    assert sorted(c.id for c in pool.candidates) == sorted([ali.id, sara.id, omar.id])
    assert pool.job_of == {ali.id: 10, sara.id: 10, omar.id: 11}


def test_job_without_applicants_contributes_nothing(db, seed) -> None:
    empty = seed.job(12)

    pool = candidate_aggregator.aggregate(db, [empty])

    assert pool.candidates == []
    assert pool.job_of == {}
