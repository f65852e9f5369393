from typing import Optional, Tuple

from fastapi import HTTPException

from app.utils.period import current_month, month_bounds, validate_month


def checked_month(month: str) -> str:
    try:
        return validate_month(month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def resolve_month(month: Optional[str]) -> Tuple[str, str]:
    """Date bounds of ``month``, or of the current month when it is omitted."""
    try:
        return month_bounds(month or current_month())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
