"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for candidates, jobs and computed matches.
"""

from datetime import datetime
from pathlib import Path
from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker

from .schema import MATCH_STATUSES

Base = declarative_base()


class Candidate(Base):
    """Student profile with the skills extracted from their CV."""

    __tablename__ = "candidates"

    candidate_id = Column(String, primary_key=True)
    full_name = Column(String, nullable=True)
    skills = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


class Job(Base):
    """Job or internship posting."""

    __tablename__ = "jobs"

    job_id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    required_skills = Column(JSON, nullable=False, default=list)
    status = Column(String, nullable=False, default="open")  # open, closed, draft
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


_status_list = ", ".join(f"'{s}'" for s in MATCH_STATUSES)


class Match(Base):
    """Computed score for one (candidate, job) pair."""

    __tablename__ = "matches"
    __table_args__ = (
        UniqueConstraint("candidate_id", "job_id", name="uq_matches_candidate_job"),
        CheckConstraint("match_score >= 0 AND match_score <= 100", name="ck_matches_score_range"),
        CheckConstraint(f"status IN ({_status_list})", name="ck_matches_status"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    candidate_id = Column(String, ForeignKey("candidates.candidate_id"), nullable=False, index=True)
    job_id = Column(String, ForeignKey("jobs.job_id"), nullable=False, index=True)
    match_score = Column(Integer, nullable=False, index=True)
    status = Column(String, nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()
