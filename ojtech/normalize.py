import re
from collections.abc import Iterable, Mapping
from typing import Any, Dict, List

# Separators that are folded to a single space: - _ . & + , / ( )
_SEPARATORS = re.compile(r"[-_.&+,/()]")


def normalize_text(s: str) -> str:
    return " ".join(s.strip().lower().split())


def normalize_skill(label: Any) -> str:
    """Canonical form of a skill label; non-text input becomes ""."""
    if not isinstance(label, str):
        return ""
    return normalize_text(_SEPARATORS.sub(" ", label.lower()))


def skill_words(label: str) -> List[str]:
    return label.split()


def coerce_skill_list(value: Any) -> List[Any]:
    """
    Turn whatever a profile or job row holds into a plain list of labels.

    Job rows sometimes store required skills as {"skills": [...]} rather
    than a bare list, and a single skill may arrive as a plain string.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Mapping):
        return coerce_skill_list(value.get("skills"))
    if isinstance(value, Iterable):
        try:
            return list(value)
        except Exception:
            return []
    return []


_RAW_SYNONYMS = {
    "javascript": ["js", "es6", "ecmascript"],
    "typescript": ["ts"],
    "react": ["reactjs", "react.js"],
    "node": ["nodejs", "node.js"],
    "python": ["py"],
    "c#": ["csharp", "c sharp"],
    "machine learning": ["ml"],
    "artificial intelligence": ["ai"],
    "aws": ["amazon web services"],
    "azure": ["microsoft azure"],
    "ui": ["user interface"],
    "ux": ["user experience"],
}

# Canonical term -> synonyms, all in normalized form ("react.js" is held as "react js")
SKILL_SYNONYMS: Dict[str, List[str]] = {
    normalize_skill(k): [normalize_skill(s) for s in syns] for k, syns in _RAW_SYNONYMS.items()
}

# Synonym -> canonical term
SYNONYM_TO_CANONICAL: Dict[str, str] = {
    syn: key for key, syns in SKILL_SYNONYMS.items() for syn in syns
}
