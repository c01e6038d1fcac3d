"""
Pytest configuration and shared fixtures.
"""

import os

# Keep loggers built during tests off the filesystem
os.environ.setdefault("OJTECH_LOG_TO_FILE", "0")

import pytest
from pathlib import Path
from typing import Dict, Any

from ojtech.database import init_database, get_session
from ojtech.storage import upsert_candidate, upsert_job


@pytest.fixture
def valid_candidate() -> Dict[str, Any]:
    """Valid candidate record."""
    return {
        "candidate_id": "stu-1",
        "full_name": "Ana Reyes",
        "skills": ["React", "CSS", "Node.js"],
    }


@pytest.fixture
def valid_job() -> Dict[str, Any]:
    """Valid job record."""
    return {
        "job_id": "job-1",
        "title": "Frontend Intern",
        "description": "Build UI components",
        "required_skills": ["React", "Node", "CSS", "SQL"],
        "status": "open",
    }


@pytest.fixture
def db_path(tmp_path) -> Path:
    """Create an empty database."""
    path = tmp_path / "test.db"
    init_database(path)
    return path


@pytest.fixture
def db_session(db_path):
    """Session on the empty database."""
    session = get_session(db_path)
    yield session
    session.close()


@pytest.fixture
def populated_db(db_path) -> Path:
    """Database with three candidates and three jobs (one closed)."""
    session = get_session(db_path)
    for record in [
        {"candidate_id": "stu-1", "full_name": "Ana", "skills": ["React", "CSS"]},
        {"candidate_id": "stu-2", "full_name": "Ben", "skills": ["Python", "Machine Learning"]},
        {"candidate_id": "stu-3", "full_name": "Cy", "skills": []},
    ]:
        upsert_candidate(session, record)
    for record in [
        {"job_id": "job-web", "title": "Web Intern", "required_skills": ["React", "Node", "CSS", "SQL"]},
        {"job_id": "job-ml", "title": "ML Intern", "required_skills": ["Python", "ML"]},
        {"job_id": "job-old", "title": "Old Posting", "required_skills": ["React"], "status": "closed"},
    ]:
        upsert_job(session, record)
    session.close()
    return db_path
