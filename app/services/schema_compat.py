"""
Board job-association compatibility layer

Boards were first stored with a single `job_id` and later with a `job_ids`
list. Internally everything works on one canonical list; the scalar is only
written back so older readers keep seeing `job_id == job_ids[0]`.
"""
from typing import Iterable, List, Optional


def unique_job_ids(job_ids: Optional[Iterable]) -> List[int]:
    """Drop empty and repeated ids, keeping first-seen order"""
    seen = []
    for job_id in job_ids or []:
        if job_id in (None, "", 0):
            continue
        job_id = int(job_id)
        if job_id not in seen:
            seen.append(job_id)
    return seen


def normalize_requested_job_ids(job_ids: Optional[Iterable] = None, job_id: Optional[int] = None) -> List[int]:
    """
    Resolve the job reference of a create request.
    `job_ids` wins when non-empty, else the legacy `job_id` becomes a one-element list.
    """
    normalized = unique_job_ids(job_ids)
    if normalized:
        return normalized
    return unique_job_ids([job_id])


def effective_job_ids(job_ids: Optional[Iterable], job_id: Optional[int]) -> List[int]:
    """The canonical job list of a stored board, whichever shape it was saved in"""
    return normalize_requested_job_ids(job_ids, job_id)


def board_job_ids(board) -> List[int]:
    return effective_job_ids(board.job_ids, board.job_id)


def set_board_jobs(board, job_ids: Iterable[int]) -> List[int]:
    """Store the canonical list and mirror its head into the legacy column"""
    normalized = unique_job_ids(job_ids)
    # assign a new list so the JSON column is flagged dirty
    board.job_ids = list(normalized)
    board.job_id = normalized[0] if normalized else board.job_id
    return normalized


def extend_board_jobs(board, new_job_ids: Iterable[int]) -> List[int]:
    """
    Append jobs to a board, never dropping existing ones.
    A legacy scalar board is converted to list form on its first extension,
    keeping its original job first. Returns the ids that were actually added.
    """
    current = board_job_ids(board)
    added = [job_id for job_id in unique_job_ids(new_job_ids) if job_id not in current]
    if added:
        set_board_jobs(board, current + added)
    return added


def serialize_job_fields(job_ids: Optional[Iterable], job_id: Optional[int]) -> dict:
    """Shape exposed to API clients: both the list and the mirrored scalar"""
    canonical = effective_job_ids(job_ids, job_id)
    return {
        "job_ids": canonical,
        "job_id": canonical[0] if canonical else None,
    }
