"""
Batch matching runs.

Fetches skill lists from the stores, fans scoring out over a thread pool
and writes one score per (candidate, job) pair. Scoring is pure, so the
pool size only bounds resource use; all database work stays on the
calling thread.
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .database import get_session
from .env import load_settings
from .logger import get_logger
from .retry import RetryError
from .scoring import match_score
from .storage import (
    get_candidate_skills,
    get_required_skills,
    list_candidates_with_skills,
    list_open_jobs,
    record_match,
)

# (candidate_id, job_id, candidate_skills, required_skills)
Pair = Tuple[str, str, Sequence[Any], Sequence[Any]]


def _score_pair(pair: Pair) -> int:
    _, _, candidate_skills, required_skills = pair
    return match_score(candidate_skills, required_skills)


def score_pairs(pairs: List[Pair], max_workers: Optional[int] = None) -> List[Tuple[str, str, Optional[int]]]:
    """
    Score every pair concurrently, preserving input order.

    A pair whose scoring fails gets None and is logged.
    """
    if not pairs:
        return []
    logger = get_logger()
    workers = max_workers or load_settings().max_workers

    results: List[Tuple[str, str, Optional[int]]] = []
    with ThreadPoolExecutor(max_workers=min(workers, len(pairs))) as pool:
        futures = [pool.submit(_score_pair, p) for p in pairs]
        for pair, future in zip(pairs, futures):
            candidate_id, job_id = pair[0], pair[1]
            try:
                score = future.result()
            except Exception as e:
                logger.record_failure(type(e).__name__)
                logger.error("Scoring failed", candidate_id=candidate_id, job_id=job_id, error=str(e))
                score = None
            else:
                logger.record_score()
            results.append((candidate_id, job_id, score))
    return results


def _persist(session, scored: List[Tuple[str, str, Optional[int]]]) -> Dict[str, int]:
    logger = get_logger()
    counts = {"created": 0, "updated": 0, "unchanged": 0, "skipped": 0}
    for candidate_id, job_id, score in scored:
        if score is None:
            counts["skipped"] += 1
            continue
        status = record_match(session, candidate_id, job_id, score, commit=False)
        logger.record_match_write(status)
        if status == "new":
            counts["created"] += 1
        elif status == "updated":
            counts["updated"] += 1
        else:
            counts["unchanged"] += 1
    session.commit()
    return counts


def generate_matches_for_candidate(
    db_path: Path,
    candidate_id: str,
    job_limit: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> Dict[str, int]:
    """
    Score one candidate against every open job and store the results.

    Raises:
        ValueError: If the candidate does not exist
    """
    logger = get_logger()
    settings = load_settings()
    session = get_session(db_path)
    try:
        skills = get_candidate_skills(session, candidate_id)
        jobs = list_open_jobs(session, limit=job_limit or settings.job_limit)
        logger.info("Matching candidate", candidate_id=candidate_id, skills=len(skills), open_jobs=len(jobs))
        if not jobs:
            return {"created": 0, "updated": 0, "unchanged": 0, "skipped": 0}

        pairs = [(candidate_id, job.job_id, skills, job.required_skills) for job in jobs]
        counts = _persist(session, score_pairs(pairs, max_workers))
        logger.info("Candidate matching complete", candidate_id=candidate_id, **counts)
        return counts
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def generate_matches_for_job(
    db_path: Path,
    job_id: str,
    max_workers: Optional[int] = None,
) -> Dict[str, int]:
    """
    Score every candidate that has skills against one job and store the results.

    Raises:
        ValueError: If the job does not exist
    """
    logger = get_logger()
    session = get_session(db_path)
    try:
        required = get_required_skills(session, job_id)
        candidates = list_candidates_with_skills(session)
        logger.info("Matching job", job_id=job_id, required=len(required), candidates=len(candidates))
        if not candidates:
            return {"created": 0, "updated": 0, "unchanged": 0, "skipped": 0}

        pairs = [(c.candidate_id, job_id, c.skills, required) for c in candidates]
        counts = _persist(session, score_pairs(pairs, max_workers))
        logger.info("Job matching complete", job_id=job_id, **counts)
        return counts
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def generate_all_matches(
    db_path: Path,
    batch_size: Optional[int] = None,
    job_limit: Optional[int] = None,
    candidate_limit: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> Dict[str, int]:
    """
    Run candidate matching for the newest candidates with skills, in batches.

    A candidate whose run fails is logged and skipped; the rest carry on.

    Returns:
        {"processed_candidates": n, "failed_candidates": n,
         "total_matches": created + updated}
    """
    logger = get_logger()
    settings = load_settings()
    batch_size = batch_size or settings.batch_size

    session = get_session(db_path)
    try:
        candidates = list_candidates_with_skills(session, limit=candidate_limit or settings.candidate_limit)
        candidate_ids = [c.candidate_id for c in candidates]
    finally:
        session.close()

    total_created = total_updated = failed = 0
    batches = (len(candidate_ids) + batch_size - 1) // batch_size
    for i in range(0, len(candidate_ids), batch_size):
        batch = candidate_ids[i:i + batch_size]
        logger.info("Processing batch", batch=i // batch_size + 1, of=batches, size=len(batch))
        for candidate_id in batch:
            try:
                counts = generate_matches_for_candidate(
                    db_path, candidate_id, job_limit=job_limit, max_workers=max_workers
                )
            except (ValueError, RetryError) as e:
                failed += 1
                logger.record_failure(type(e).__name__)
                logger.error("Candidate matching failed", candidate_id=candidate_id, error=str(e))
                continue
            total_created += counts["created"]
            total_updated += counts["updated"]

    logger.info(
        "Batch matching complete",
        processed_candidates=len(candidate_ids),
        failed_candidates=failed,
        created=total_created,
        updated=total_updated,
    )
    return {
        "processed_candidates": len(candidate_ids),
        "failed_candidates": failed,
        "total_matches": total_created + total_updated,
    }
