import math
import re
from typing import Any, Dict, List

VALID_CATEGORIES = [
    "wood",
    "reclaimed_wood",
    "metal",
    "plastic",
    "fabric",
    "glass",
    "ceramic",
    "composite",
    "other",
]
VALID_UNITS = ["mm³", "cm³", "m³", "kg", "g", "pieces", "sheets", "rolls"]
OPTIONAL_STR_FIELDS = ["subcategory", "origin", "description"]

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
MAX_TEXT_LENGTH = 1000

_NAME_CHARS = re.compile(r"^[a-zA-Z0-9\s\-&.,'()]+$")
_EVENT_HANDLER = re.compile(r"on\w+=", re.IGNORECASE)
_JS_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)


def sanitize_string(value: Any) -> str:
    """Trim, drop markup fragments and cap the length. Non-strings become ''."""
    if not isinstance(value, str):
        return ""
    s = value.strip()
    s = s.replace("<", "").replace(">", "")
    s = _JS_PROTOCOL.sub("", s)
    s = _EVENT_HANDLER.sub("", s)
    return s[:MAX_TEXT_LENGTH]


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)


def _validate_name(value: Any) -> List[str]:
    name = sanitize_string(value)
    if not name:
        return ["Material name is required"]
    if len(name) < NAME_MIN_LENGTH:
        return [f"Material name must be at least {NAME_MIN_LENGTH} characters long"]
    if len(name) > NAME_MAX_LENGTH:
        return [f"Material name must be less than {NAME_MAX_LENGTH} characters"]
    if not _NAME_CHARS.match(name):
        return ["Material name contains invalid characters"]
    return []


def validate_material(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    """
    errors: List[str] = []

    if "name" not in data:
        errors.append("Missing required field: name")
    else:
        errors.extend(_validate_name(data["name"]))

    if data.get("category") not in VALID_CATEGORIES:
        errors.append(
            f"Field 'category' must be one of: {', '.join(VALID_CATEGORIES)}"
        )

    quantity = data.get("quantity")
    if not _is_number(quantity) or quantity < 0:
        errors.append("Field 'quantity' must be a non-negative number")

    if data.get("unit") not in VALID_UNITS:
        errors.append(f"Field 'unit' must be one of: {', '.join(VALID_UNITS)}")

    for f in OPTIONAL_STR_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    cost = data.get("cost_per_unit")
    if cost is not None and (not _is_number(cost) or cost < 0):
        errors.append("Field 'cost_per_unit' must be a non-negative number if provided")

    return errors


def sanitize_material(data: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of the recognised fields with free text sanitized. Call after validation."""
    clean: Dict[str, Any] = {
        "name": sanitize_string(data["name"]),
        "category": data["category"],
        "quantity": float(data["quantity"]),
        "unit": data["unit"],
    }
    for f in OPTIONAL_STR_FIELDS:
        value = sanitize_string(data.get(f))
        clean[f] = value or None
    cost = data.get("cost_per_unit")
    clean["cost_per_unit"] = float(cost) if cost is not None else None
    return clean


def sanitize_candidate(data: Dict[str, Any]) -> Dict[str, Any]:
    """Sanitize the free-text fields of unvalidated input. Non-string values are left for the matcher to ignore."""
    clean = dict(data)
    for f in ["name", *OPTIONAL_STR_FIELDS]:
        if isinstance(clean.get(f), str):
            clean[f] = sanitize_string(clean[f])
    return clean
