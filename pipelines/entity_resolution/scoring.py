"""
Scoring Logic for Entity Resolution (v1).

Responsibilities:
- Compute a deterministic match score between a candidate material and an
  existing material.
- Emit a score breakdown and explanation.

Non-Responsibilities:
- No database access.
- No candidate selection.
- No threshold decisions.

Invariant:
Given identical inputs, this module must always return
the same score and explanation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .features import (
    ABSENT,
    CATEGORY,
    EXACT,
    NAME,
    ORIGIN,
    PARTIAL,
    SUBCATEGORY,
    extract_features,
)

# Business rules: changing any of these is a policy decision.
NAME_EXACT_POINTS = 40
NAME_PARTIAL_POINTS = 20
CATEGORY_POINTS = 30
SUBCATEGORY_POINTS = 20
ORIGIN_POINTS = 10

MAX_SCORE = NAME_EXACT_POINTS + CATEGORY_POINTS + SUBCATEGORY_POINTS + ORIGIN_POINTS


@dataclass(frozen=True)
class ScoreBreakdown:
    """Points awarded per field, with one explanation line per compared field."""

    points: Dict[str, int]
    explanation: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return int(round(sum(self.points.values())))


def _field_points(name: str, feature: str) -> int:
    if name == NAME:
        if feature == EXACT:
            return NAME_EXACT_POINTS
        if feature == PARTIAL:
            return NAME_PARTIAL_POINTS
        return 0
    if feature != EXACT:
        return 0
    return {
        CATEGORY: CATEGORY_POINTS,
        SUBCATEGORY: SUBCATEGORY_POINTS,
        ORIGIN: ORIGIN_POINTS,
    }[name]


def score_record(candidate: Mapping[str, Any], existing: Mapping[str, Any]) -> ScoreBreakdown:
    """
    Score one existing record against the candidate.

    Args:
        candidate: The record pending insertion
        existing: A stored record of the same shape

    Returns:
        ScoreBreakdown with per-field points and explanation
    """
    features = extract_features(candidate, existing)
    points: Dict[str, int] = {}
    explanation: List[str] = []

    for name, feature in features.items():
        awarded = _field_points(name, feature)
        points[name] = awarded
        if feature == ABSENT:
            explanation.append(f"{name}: not compared")
        else:
            explanation.append(f"{name}: {feature} (+{awarded})")

    return ScoreBreakdown(points=points, explanation=explanation)
