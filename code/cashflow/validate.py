import math
from typing import Any, Dict, Mapping, Optional

from .schemas import PAYLOAD_FIELDS, MonthlyInputs, NormalizeResult


class ValidationError(ValueError):
    def __init__(self, field: str, reason: str, message: Optional[str] = None):
        self.field = field
        self.reason = reason
        super().__init__(message or f"Field '{field}' {reason}")


def _coerce(key: str, value: Any) -> float:
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise ValidationError(key, "must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(key, "must be a number") from None
    if not math.isfinite(number):
        raise ValidationError(key, "must be a number")
    if number < 0:
        raise ValidationError(key, "must be >= 0")
    return number


def normalize_or_raise(raw: Any) -> MonthlyInputs:
    if not isinstance(raw, Mapping):
        raise ValidationError("body", "must be a JSON object", "Body must be a JSON object")
    clean: Dict[str, float] = {}
    for key, attr in PAYLOAD_FIELDS.items():
        clean[attr] = _coerce(key, raw.get(key))
    return MonthlyInputs(**clean)


def validate_and_normalize(raw: Any) -> NormalizeResult:
    try:
        return NormalizeResult(ok=True, clean_inputs=normalize_or_raise(raw))
    except ValidationError as exc:
        return NormalizeResult(ok=False, error=str(exc))


def merge_changes(base: MonthlyInputs, raw_changes: Mapping[str, Any]) -> MonthlyInputs:
    """Validate base overlaid with wire-keyed changes; returns the merged record."""
    merged = {**base.to_payload(), **raw_changes}
    return normalize_or_raise(merged)
