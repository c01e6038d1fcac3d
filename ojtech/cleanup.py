"""
Cleanup module for removing matches that point at jobs no longer open.

Closing or drafting a job leaves its matches behind; this prunes them so
candidates are not shown positions they can no longer apply to.
"""

from pathlib import Path
from typing import Tuple

from sqlalchemy import select

from .database import Job, Match, get_session
from .logger import get_logger


def prune_closed_job_matches(db_path: Path) -> Tuple[int, int]:
    """
    Delete matches whose job is not open.

    Args:
        db_path: Path to SQLite database file

    Returns:
        Tuple of (total_matches_before, total_matches_after)
    """
    logger = get_logger()
    session = get_session(db_path)
    try:
        matches_before = session.query(Match).count()
        open_job_ids = select(Job.job_id).where(Job.status == "open")
        removed = (
            session.query(Match)
            .filter(Match.job_id.notin_(open_job_ids))
            .delete(synchronize_session=False)
        )
        session.commit()
        matches_after = matches_before - removed

        logger.info(
            f"Cleanup complete: {removed} removed, {matches_after} remaining",
            matches_before=matches_before,
            matches_removed=removed,
            matches_after=matches_after,
        )
        return (matches_before, matches_after)

    except Exception as e:
        session.rollback()
        logger.error(f"Cleanup failed: {e}", error=str(e))
        raise
    finally:
        session.close()
