from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.exceptions import ValidationError


def as_non_negative_number(value: Any, field_name: str) -> Decimal:
    """Coerce a number (or numeric string) to Decimal, rejecting NaN, infinities and negatives.

    Booleans are rejected even though they are ints.
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number", errors={field_name: "must be a number"})

    try:
        if isinstance(value, Decimal):
            number = value
        elif isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                raise ValidationError(f"{field_name} must be finite", errors={field_name: "must be finite"})
            number = Decimal(str(value))
        else:
            number = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number", errors={field_name: "must be a number"})

    if not number.is_finite():
        raise ValidationError(f"{field_name} must be finite", errors={field_name: "must be finite"})
    if number < 0:
        raise ValidationError(f"{field_name} must be non-negative", errors={field_name: "must be non-negative"})
    return number
