from typing import Any, Dict, List

JOB_STATUSES = {"open", "closed", "draft"}
MATCH_STATUSES = ("pending", "accepted", "rejected", "applied", "declined")

CANDIDATE_REQUIRED_FIELDS = ["candidate_id"]
CANDIDATE_OPTIONAL_STR_FIELDS = ["full_name"]

JOB_REQUIRED_FIELDS = ["job_id", "title"]
JOB_OPTIONAL_STR_FIELDS = ["description", "status"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _check_fields(data: Dict[str, Any], required: List[str], optional: List[str]) -> List[str]:
    errors: List[str] = []
    for f in required:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    for f in optional:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")
    return errors


def _check_skill_list(data: Dict[str, Any], field: str) -> List[str]:
    value = data.get(field)
    if value is None:
        return []
    if not isinstance(value, list):
        return [f"Field '{field}' must be a list of strings"]
    if any(not isinstance(s, str) for s in value):
        return [f"Field '{field}' must contain only strings"]
    return []


def validate_candidate(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Candidate record must be a JSON object"]
    errors = _check_fields(data, CANDIDATE_REQUIRED_FIELDS, CANDIDATE_OPTIONAL_STR_FIELDS)
    errors.extend(_check_skill_list(data, "skills"))
    return errors


def validate_job(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Job record must be a JSON object"]
    errors = _check_fields(data, JOB_REQUIRED_FIELDS, JOB_OPTIONAL_STR_FIELDS)
    errors.extend(_check_skill_list(data, "required_skills"))

    status = data.get("status")
    if isinstance(status, str) and status not in JOB_STATUSES:
        errors.append(f"Field 'status' must be one of: {', '.join(sorted(JOB_STATUSES))}")
    return errors
