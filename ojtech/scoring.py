"""
Skill match scoring.

Responsibilities:
- Normalize candidate and required skill labels.
- Expand candidate labels into a variant pool (initialisms, first word, synonyms).
- Score each required skill against the pool and aggregate into a 0-100 score.

Non-Responsibilities:
- No database access.
- No labels or colors for a score range (see labels.py).

Invariant:
Given identical inputs (up to case, whitespace and separator style),
this module must always return the same score. It never raises.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Set, Tuple

from .normalize import (
    SKILL_SYNONYMS,
    SYNONYM_TO_CANONICAL,
    coerce_skill_list,
    normalize_skill,
    skill_words,
)

EXACT_WEIGHT = 1.0
CONTAINMENT_WEIGHT = 0.8
OVERLAP_WEIGHT = 0.5
MIN_OVERLAP_WORD_LEN = 2  # words must be longer than this to count as shared

EXACT = "exact"
CONTAINMENT = "containment"
OVERLAP = "overlap"
NO_MATCH = "none"


@dataclass(frozen=True)
class RequirementMatch:
    required: str
    weight: float
    kind: str
    matched_variant: Optional[str] = None


@dataclass(frozen=True)
class MatchBreakdown:
    score: int
    requirements: List[RequirementMatch] = field(default_factory=list)

    @property
    def matched(self) -> List[str]:
        return [r.required for r in self.requirements if r.kind != NO_MATCH]

    @property
    def missing(self) -> List[str]:
        return [r.required for r in self.requirements if r.kind == NO_MATCH]


def _contains_phrase(label: str, phrase: str) -> bool:
    # Word-aligned so "html" does not pick up "ml" and "email" does not pick up "ai"
    return f" {phrase} " in f" {label} "


def expand_variants(label: str) -> Set[str]:
    """Equivalent forms of one normalized candidate label."""
    if not label:
        return set()

    variants = {label}
    words = skill_words(label)
    if len(words) > 1:
        variants.add("".join(w[0] for w in words))
        variants.add(words[0])

    for key, syns in SKILL_SYNONYMS.items():
        if _contains_phrase(label, key):
            variants.update(syns)
    for syn, key in SYNONYM_TO_CANONICAL.items():
        if _contains_phrase(label, syn):
            variants.add(key)

    return variants


def candidate_variant_pool(candidate_skills: Any) -> Set[str]:
    pool: Set[str] = set()
    for raw in coerce_skill_list(candidate_skills):
        pool |= expand_variants(normalize_skill(raw))
    return pool


def _overlap_weight(required: str, variant: str) -> float:
    req_words = skill_words(required)
    var_words = skill_words(variant)
    if len(req_words) < 2 and len(var_words) < 2:
        return 0.0

    common = {
        w for w in req_words
        if len(w) > MIN_OVERLAP_WORD_LEN and w in var_words
    }
    if not common:
        return 0.0
    return OVERLAP_WEIGHT * (len(common) / max(len(req_words), len(var_words)))


def score_requirement(required: str, pool: Iterable[str]) -> RequirementMatch:
    """
    Best match for a single normalized required label.

    Only the highest weight across all variants and match kinds counts;
    several weaker matches never add up.
    """
    variants = sorted(v for v in pool if v)
    if required in variants:
        return RequirementMatch(required, EXACT_WEIGHT, EXACT, required)

    best: Tuple[float, str, Optional[str]] = (0.0, NO_MATCH, None)
    for variant in variants:
        if required in variant or variant in required:
            return RequirementMatch(required, CONTAINMENT_WEIGHT, CONTAINMENT, variant)
        weight = _overlap_weight(required, variant)
        if weight > best[0]:
            best = (weight, OVERLAP, variant)

    # Overlap tops out at OVERLAP_WEIGHT, so containment always wins when present
    return RequirementMatch(required, best[0], best[1], best[2])


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_breakdown(candidate_skills: Any, required_skills: Any) -> MatchBreakdown:
    """
    Score a candidate skill set against a job's required skills, keeping
    the per-requirement result that produced each weight.

    Blank or non-text requirements are dropped from both the sum and the
    count. Duplicated requirements are scored and counted individually.
    An empty requirement list or an empty candidate list scores 0.
    """
    required = [normalize_skill(r) for r in coerce_skill_list(required_skills)]
    required = [r for r in required if r]
    if not required:
        return MatchBreakdown(score=0)

    pool = candidate_variant_pool(candidate_skills)
    if not pool:
        return MatchBreakdown(
            score=0,
            requirements=[RequirementMatch(r, 0.0, NO_MATCH) for r in required],
        )

    results = [score_requirement(r, pool) for r in required]
    total = sum(r.weight for r in results)
    score = _round_half_up(total / len(required) * 100)
    return MatchBreakdown(score=max(0, min(100, score)), requirements=results)


def match_score(candidate_skills: Any, required_skills: Any) -> int:
    """Percentage (0-100) of the required skills satisfied by the candidate."""
    return score_breakdown(candidate_skills, required_skills).score
