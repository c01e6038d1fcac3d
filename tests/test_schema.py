"""
Tests for record validation.
"""

from ojtech.schema import validate_candidate, validate_job


class TestValidateCandidate:
    """Test candidate validation."""

    def test_valid_candidate(self, valid_candidate):
        assert validate_candidate(valid_candidate) == []

    def test_missing_id(self):
        errors = validate_candidate({"skills": ["React"]})
        assert any("candidate_id" in e for e in errors)

    def test_blank_id(self):
        errors = validate_candidate({"candidate_id": "   "})
        assert any("non-empty" in e for e in errors)

    def test_skills_optional(self):
        assert validate_candidate({"candidate_id": "stu-1"}) == []

    def test_skills_must_be_list(self):
        errors = validate_candidate({"candidate_id": "stu-1", "skills": "React"})
        assert any("skills" in e and "list" in e for e in errors)

    def test_skills_must_be_strings(self):
        errors = validate_candidate({"candidate_id": "stu-1", "skills": ["React", 5]})
        assert any("only strings" in e for e in errors)

    def test_full_name_type(self):
        errors = validate_candidate({"candidate_id": "stu-1", "full_name": 7})
        assert any("full_name" in e for e in errors)

    def test_not_an_object(self):
        assert validate_candidate(["stu-1"]) != []


class TestValidateJob:
    """Test job validation."""

    def test_valid_job(self, valid_job):
        assert validate_job(valid_job) == []

    def test_missing_fields(self):
        errors = validate_job({})
        assert any("job_id" in e for e in errors)
        assert any("title" in e for e in errors)

    def test_unknown_status(self, valid_job):
        valid_job["status"] = "archived"
        errors = validate_job(valid_job)
        assert any("status" in e for e in errors)

    def test_known_statuses(self, valid_job):
        for status in ["open", "closed", "draft"]:
            valid_job["status"] = status
            assert validate_job(valid_job) == [], f"Status {status} should be valid"

    def test_required_skills_type(self, valid_job):
        valid_job["required_skills"] = {"skills": ["React"]}
        errors = validate_job(valid_job)
        assert any("required_skills" in e for e in errors)
