"""
Feature Extraction for Entity Resolution.

Responsibilities:
- Compute individual field comparison features for material records.
- Decide which fields are present on both sides.

Non-Responsibilities:
- No weighting logic.
- No threshold logic.
- No persistence.

Invariant:
Missing data must never be treated as a mismatch.
"""

from typing import Any, Dict, Mapping, Optional

NAME = "name"
CATEGORY = "category"
SUBCATEGORY = "subcategory"
ORIGIN = "origin"
ORIGIN_TAG = "originTag"  # alternate key for the origin tag

# Feature values
EXACT = "exact"
PARTIAL = "partial"
MISMATCH = "mismatch"
ABSENT = "absent"


def field_value(record: Mapping[str, Any], field: str) -> Optional[str]:
    """Return the field as a string, or None when it is missing, empty or not a str."""
    value = record.get(field)
    if isinstance(value, str) and value != "":
        return value
    return None


def origin_value(record: Mapping[str, Any]) -> Optional[str]:
    """The origin tag, read from 'origin' and falling back to 'originTag'."""
    value = field_value(record, ORIGIN)
    if value is None:
        value = field_value(record, ORIGIN_TAG)
    return value


def compare_name(candidate: Optional[str], existing: Optional[str]) -> str:
    if candidate is None or existing is None:
        return ABSENT
    a = candidate.lower()
    b = existing.lower()
    if a == b:
        return EXACT
    if a in b or b in a:
        return PARTIAL
    return MISMATCH


def compare_exact(candidate: Optional[str], existing: Optional[str]) -> str:
    """Case-sensitive equality, used for the category key."""
    if candidate is None or existing is None:
        return ABSENT
    return EXACT if candidate == existing else MISMATCH


def compare_folded(candidate: Optional[str], existing: Optional[str]) -> str:
    """Case-insensitive equality. Whitespace is left as-is."""
    if candidate is None or existing is None:
        return ABSENT
    return EXACT if candidate.lower() == existing.lower() else MISMATCH


def extract_features(candidate: Mapping[str, Any], existing: Mapping[str, Any]) -> Dict[str, str]:
    """Compare every scored field of two records."""
    return {
        NAME: compare_name(field_value(candidate, NAME), field_value(existing, NAME)),
        CATEGORY: compare_exact(field_value(candidate, CATEGORY), field_value(existing, CATEGORY)),
        SUBCATEGORY: compare_folded(field_value(candidate, SUBCATEGORY), field_value(existing, SUBCATEGORY)),
        ORIGIN: compare_folded(origin_value(candidate), origin_value(existing)),
    }
