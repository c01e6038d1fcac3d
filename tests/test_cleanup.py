"""Tests for match pruning."""

from ojtech.cleanup import prune_closed_job_matches
from ojtech.database import Match, get_session
from ojtech.storage import record_match, upsert_job


class TestPruneClosedJobMatches:
    """Test removal of matches for jobs that are no longer open."""

    def test_removes_matches_for_closed_jobs(self, populated_db):
        session = get_session(populated_db)
        record_match(session, "stu-1", "job-web", 50)
        record_match(session, "stu-1", "job-old", 100)
        session.close()

        before, after = prune_closed_job_matches(populated_db)

        assert (before, after) == (2, 1)
        session = get_session(populated_db)
        assert [m.job_id for m in session.query(Match).all()] == ["job-web"]
        session.close()

    def test_closing_a_job_prunes_its_matches(self, populated_db):
        session = get_session(populated_db)
        record_match(session, "stu-2", "job-ml", 100)
        upsert_job(session, {"job_id": "job-ml", "title": "ML Intern", "required_skills": ["Python", "ML"], "status": "closed"})
        session.close()

        assert prune_closed_job_matches(populated_db) == (1, 0)

    def test_nothing_to_prune(self, populated_db):
        assert prune_closed_job_matches(populated_db) == (0, 0)
