import pytest

from app.core.exceptions import BusinessRuleViolation
from app.services.vacancy_guard import JobVacancyGuard, vacancy_guard


def test_counts_candidates_through_every_job_field(db, seed) -> None:
    seed.job(10, vacancy_count=3)
    seed.candidate("Ali", applied_job_id=10)
    seed.candidate("Sara", current_job_id=10)
    seed.candidate("Omar", job_id=10)

    assert vacancy_guard.count_bound(db, 10) == 3
    assert vacancy_guard.has_vacancy(db, 10) is False


def test_full_job_has_room_for_a_candidate_already_on_it(db, seed) -> None:
    seed.job(10, vacancy_count=1)
    bound = seed.candidate("Ali", applied_job_id=10)

    assert vacancy_guard.has_vacancy(db, 10) is False
    assert vacancy_guard.has_vacancy(db, 10, exclude_candidate_id=bound.id) is True


def test_unlimited_missing_and_empty_jobs(db, seed) -> None:
    seed.job(10, vacancy_count=0)
    seed.candidate("Ali", applied_job_id=10)

    assert vacancy_guard.has_vacancy(db, 10) is True
    assert vacancy_guard.has_vacancy(db, None) is True
    assert vacancy_guard.has_vacancy(db, 0) is True
    assert vacancy_guard.has_vacancy(db, 404) is False


def test_ensure_vacancies_names_the_failing_field(db, seed) -> None:
    seed.job(7, vacancy_count=1)
    seed.candidate("Ali", applied_job_id=7)

    with pytest.raises(BusinessRuleViolation) as exc_info:
        vacancy_guard.ensure_vacancies(db, {"job_id": None, "applied_job_id": 7})

    assert exc_info.value.message == (
        "Cannot assign candidate to applied job ID 7. Maximum vacancy limit reached."
    )


def test_update_only_checks_changed_fields(db, seed) -> None:
    seed.job(10, vacancy_count=1)
    seed.job(11, vacancy_count=1)
    ali = seed.candidate("Ali", applied_job_id=10)
    seed.candidate("Sara", applied_job_id=11)

    vacancy_guard.ensure_vacancies(db, {"applied_job_id": 10, "cand_name": "Ali K"}, existing=ali)

    with pytest.raises(BusinessRuleViolation):
        vacancy_guard.ensure_vacancies(db, {"current_job_id": 11}, existing=ali)


class RecordingGuard(JobVacancyGuard):
    def __init__(self) -> None:
        self.calls = []

    def lock_jobs(self, db, job_ids):
        locked = super().lock_jobs(db, job_ids)
        self.calls.append(("lock", locked))
        return locked

    def has_vacancy(self, db, job_id, exclude_candidate_id=None):
        self.calls.append(("check", job_id))
        return super().has_vacancy(db, job_id, exclude_candidate_id)


def test_jobs_are_locked_in_id_order_before_counting(db, seed) -> None:
    seed.job(7, vacancy_count=5)
    seed.job(8, vacancy_count=5)
    guard = RecordingGuard()

    guard.ensure_vacancies(db, {"job_id": 8, "applied_job_id": 7, "current_job_id": 8})

    assert guard.calls == [("lock", [7, 8]), ("check", 8), ("check", 7), ("check", 8)]


def test_lock_jobs_deduplicates_and_sorts(db, seed) -> None:
    seed.job(7)
    seed.job(8)

    assert vacancy_guard.lock_jobs(db, [8, 7, 8]) == [7, 8]
    assert vacancy_guard.lock_jobs(db, []) == []
