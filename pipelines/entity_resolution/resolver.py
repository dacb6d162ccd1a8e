"""
Entity Resolution Orchestrator.

Responsibilities:
- Validate the shape of the inputs.
- Invoke scoring logic for every existing record.
- Apply the match threshold and rank the survivors.

Non-Responsibilities:
- No database access.
- No feature computation.
- No mutation of persistent state or of the inputs.

Invariant:
This module must be deterministic given the same inputs.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Sequence

from .scoring import score_record

MATCH_THRESHOLD = 60


class InvalidArgument(TypeError):
    """Raised when the candidate or the existing collection has the wrong shape."""
    pass


@dataclass(frozen=True)
class MatchResult:
    record: Mapping[str, Any]
    similarity: int


def _check_inputs(candidate: Any, existing_records: Any) -> None:
    if not isinstance(candidate, Mapping):
        raise InvalidArgument(
            f"candidate must be a mapping, got {type(candidate).__name__}"
        )
    if not isinstance(existing_records, (list, tuple)):
        raise InvalidArgument(
            f"existing_records must be a list, got {type(existing_records).__name__}"
        )
    for i, record in enumerate(existing_records):
        if not isinstance(record, Mapping):
            raise InvalidArgument(
                f"existing_records[{i}] must be a mapping, got {type(record).__name__}"
            )


def find_matches(
    candidate: Mapping[str, Any],
    existing_records: Sequence[Mapping[str, Any]],
) -> List[MatchResult]:
    """
    Rank existing records that plausibly describe the same item as the candidate.

    Args:
        candidate: Record pending insertion. Scored keys are name, category,
            subcategory and origin; the origin tag may also be given as originTag.
        existing_records: Records already filtered to the caller's scope,
            same keys plus id

    Returns:
        Matches scoring at least MATCH_THRESHOLD, highest first.
        Records with equal scores keep their input order.

    Raises:
        InvalidArgument: If the inputs are not a mapping and a list of mappings
    """
    _check_inputs(candidate, existing_records)

    found = []
    for record in existing_records:
        similarity = score_record(candidate, record).total
        if similarity >= MATCH_THRESHOLD:
            found.append(MatchResult(record=record, similarity=similarity))

    # sorted() is stable, ties stay in input order
    return sorted(found, key=lambda m: m.similarity, reverse=True)


class DuplicateDetector:
    """
    Keeps the most recent duplicate check around for display.

    find_matches stays pure; this is the caller-side cache.
    """

    def __init__(self):
        self.duplicates: List[MatchResult] = []

    def find(
        self,
        candidate: Mapping[str, Any],
        existing_records: Sequence[Mapping[str, Any]],
    ) -> List[MatchResult]:
        self.duplicates = find_matches(candidate, existing_records)
        return self.duplicates

    def clear(self) -> None:
        self.duplicates = []
