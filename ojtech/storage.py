"""
Stores the scorer reads from and writes to.

- Profile/CV store: candidate skill lists.
- Job store: required skill lists and open jobs.
- Persistence sink: one match score per (candidate, job) pair.

No scoring happens here.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.exc import OperationalError

from .database import Candidate, Job, Match
from .logger import get_logger
from .normalize import coerce_skill_list
from .retry import exponential_backoff, is_transient_error


def _log_retry(attempt: int, error: Exception, delay: float) -> None:
    logger = get_logger()
    logger.record_failure(type(error).__name__, fetch=True)
    logger.warning("Transient database error, retrying", attempt=attempt, delay=delay, error=str(error))


_fetch_retry = exponential_backoff(
    max_retries=3,
    base_delay=0.5,
    exceptions=(OperationalError,),
    retry_if=is_transient_error,
    on_retry=_log_retry,
)


def diff_fields(old: Dict[str, Any], new: Dict[str, Any]) -> Dict[str, Dict[str, Any]]:
    changed = {}
    for k in set(old.keys()) | set(new.keys()):
        if old.get(k) != new.get(k):
            changed[k] = {"old": old.get(k), "new": new.get(k)}
    return changed


def _upsert(session, model, key: str, record: Dict[str, Any]) -> Dict[str, Any]:
    row = session.get(model, record[key])
    if row is None:
        session.add(model(**record))
        session.commit()
        return {"status": "new"}

    current = {f: getattr(row, f) for f in record}
    changed = diff_fields(current, record)
    if not changed:
        return {"status": "no-change"}
    for f, values in changed.items():
        setattr(row, f, values["new"])
    session.commit()
    return {"status": "updated", "changed": sorted(changed)}


def upsert_candidate(session, data: Dict[str, Any]) -> Dict[str, Any]:
    """Insert or update a candidate from a validated record."""
    record = {
        "candidate_id": data["candidate_id"].strip(),
        "full_name": data.get("full_name"),
        "skills": list(data.get("skills") or []),
    }
    return _upsert(session, Candidate, "candidate_id", record)


def upsert_job(session, data: Dict[str, Any]) -> Dict[str, Any]:
    """Insert or update a job from a validated record."""
    record = {
        "job_id": data["job_id"].strip(),
        "title": data["title"].strip(),
        "description": data.get("description"),
        "required_skills": list(data.get("required_skills") or []),
        "status": data.get("status") or "open",
    }
    return _upsert(session, Job, "job_id", record)


@_fetch_retry
def get_candidate_skills(session, candidate_id: str) -> List[Any]:
    candidate = session.get(Candidate, candidate_id)
    if candidate is None:
        raise ValueError(f"Candidate not found: {candidate_id}")
    return coerce_skill_list(candidate.skills)


@_fetch_retry
def get_required_skills(session, job_id: str) -> List[Any]:
    job = session.get(Job, job_id)
    if job is None:
        raise ValueError(f"Job not found: {job_id}")
    return coerce_skill_list(job.required_skills)


@_fetch_retry
def list_open_jobs(session, limit: int = 100) -> List[Job]:
    return (
        session.query(Job)
        .filter(Job.status == "open")
        .order_by(Job.created_at.desc(), Job.job_id)
        .limit(limit)
        .all()
    )


@_fetch_retry
def list_candidates_with_skills(session, limit: Optional[int] = None) -> List[Candidate]:
    """Newest candidates first; the limit counts only candidates that have skills."""
    candidates = session.query(Candidate).order_by(Candidate.created_at.desc(), Candidate.candidate_id).all()
    with_skills = [c for c in candidates if coerce_skill_list(c.skills)]
    return with_skills[:limit] if limit is not None else with_skills


def record_match(session, candidate_id: str, job_id: str, score: int, commit: bool = True) -> str:
    """
    Store a score for a (candidate, job) pair.

    Returns "new", "updated" or "no-change". The status of an existing
    match is left as is.
    """
    if isinstance(score, bool) or not isinstance(score, int) or not 0 <= score <= 100:
        raise ValueError(f"Match score must be an integer in [0, 100], got {score!r}")

    match = session.query(Match).filter_by(candidate_id=candidate_id, job_id=job_id).first()
    if match is None:
        session.add(Match(candidate_id=candidate_id, job_id=job_id, match_score=score, status="pending"))
        status = "new"
    elif match.match_score != score:
        match.match_score = score
        status = "updated"
    else:
        status = "no-change"

    if commit:
        session.commit()
    return status


def list_matches(
    session,
    candidate_id: Optional[str] = None,
    job_id: Optional[str] = None,
) -> List[Match]:
    query = session.query(Match)
    if candidate_id is not None:
        query = query.filter(Match.candidate_id == candidate_id)
    if job_id is not None:
        query = query.filter(Match.job_id == job_id)
    return query.order_by(Match.match_score.desc(), Match.candidate_id, Match.job_id).all()
