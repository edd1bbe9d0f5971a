from app.models import Board
from app.services.schema_compat import (
    board_job_ids,
    extend_board_jobs,
    normalize_requested_job_ids,
    serialize_job_fields,
    set_board_jobs,
    unique_job_ids,
)


def test_unique_job_ids_drops_empty_and_repeats_keeping_order() -> None:
    assert unique_job_ids([11, None, 10, 11, 0, "", "12"]) == [11, 10, 12]
    assert unique_job_ids(None) == []


def test_request_prefers_job_ids_over_legacy_job_id() -> None:
    assert normalize_requested_job_ids([10, 11], 99) == [10, 11]
    assert normalize_requested_job_ids([], 7) == [7]
    assert normalize_requested_job_ids(None, None) == []


def test_set_board_jobs_mirrors_first_job() -> None:
    board = Board(board_name="B")
    set_board_jobs(board, [12, 10, 12])

    assert board.job_ids == [12, 10]
    assert board.job_id == 12


def test_extending_legacy_board_keeps_original_job_first() -> None:
    board = Board(board_name="Legacy", job_id=10, job_ids=None)

    added = extend_board_jobs(board, [11, 10])

    assert added == [11]
    assert board.job_ids == [10, 11]
    assert board.job_id == 10


def test_extending_with_known_jobs_leaves_legacy_board_untouched() -> None:
    board = Board(board_name="Legacy", job_id=10, job_ids=None)

    assert extend_board_jobs(board, [10]) == []
    assert board.job_ids is None
    assert board_job_ids(board) == [10]


def test_serialized_fields_always_carry_both_shapes() -> None:
    assert serialize_job_fields(None, 7) == {"job_ids": [7], "job_id": 7}
    assert serialize_job_fields([3, 4], 9) == {"job_ids": [3, 4], "job_id": 3}
    assert serialize_job_fields([], None) == {"job_ids": [], "job_id": None}
