from typing import Any, Optional


def rounded_average(value: Any) -> Optional[float]:
    """SQL ``AVG`` results come back as Decimal, float or None."""
    return round(float(value), 2) if value is not None else None
