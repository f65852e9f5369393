"""
Notifications Router
Budget warnings for a month's fuel and toll spending
"""
from typing import Dict

from fastapi import APIRouter, Depends

from app.core.security import get_current_user_id
from app.routers.reports import fuel_analyzer, load_month

router = APIRouter()


@router.get("/{month}")
def get_notifications(month: str, user_id: str = Depends(get_current_user_id)) -> Dict:
    _, _, summary = load_month(user_id, month)
    notifications = fuel_analyzer.budget_notices(summary)
    return {
        "month": month,
        "notifications": notifications,
        "count": len(notifications),
    }
