"""
Boundary parsing and validation for record ids and course payloads.
"""

import math
import re
from typing import Any, Dict, Optional

from .enums import IdLookupPolicy
from .exceptions import ValidationError


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_record_id(value: Any, policy: IdLookupPolicy = IdLookupPolicy.NOT_FOUND) -> Optional[int]:
    """Parse a record id the way ``parseInt`` reads it.

    Leading digits are taken and the rest ignored, so ``"12abc"`` is 12 and
    ``"3.7"`` is 3. A value with no leading digits is malformed: it yields
    None under ``NOT_FOUND`` and raises ValidationError under ``REJECT``.
    """
    parsed = None
    if isinstance(value, bool):
        parsed = None
    elif isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        parsed = int(value) if math.isfinite(value) else None
    elif isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            parsed = int(match.group(1))

    if parsed is None and policy == IdLookupPolicy.REJECT:
        raise ValidationError(f"Invalid record id: {value!r}", error_code="invalid_id")
    return parsed


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_course(data: Dict[str, Any]) -> None:
    """Check the fields a course needs before it is stored.

    Weights are range-checked individually; their sum is not constrained.
    """
    code = data.get("code")
    if not isinstance(code, str) or not code.strip():
        raise ValidationError("Course code must be a non-empty string", error_code="invalid_code")

    target = data.get("targetGrade")
    if target is not None and (not _is_number(target) or not 0 <= target <= 100):
        raise ValidationError("Target grade must be between 0 and 100", error_code="invalid_target_grade")

    categories = data.get("gradeCategories") or []
    if not isinstance(categories, list):
        raise ValidationError("Grade categories must be a list", error_code="invalid_categories")

    seen = set()
    for category in categories:
        if not isinstance(category, dict):
            raise ValidationError("Grade category must be an object", error_code="invalid_categories")
        name = category.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Grade category name must be a non-empty string", error_code="invalid_categories")
        if name in seen:
            raise ValidationError(f"Duplicate grade category: {name}", error_code="duplicate_category")
        seen.add(name)
        weight = category.get("weight")
        if not _is_number(weight) or not 0 <= weight <= 100:
            raise ValidationError(
                f"Weight for category {name} must be between 0 and 100",
                error_code="invalid_weight",
                details={"category": name},
            )
