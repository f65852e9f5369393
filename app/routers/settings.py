"""
Settings Router
Per-month budget and the single memo shared across all months
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from app.core.deps import checked_month
from app.core.security import get_current_user_id
from app.db import dynamo
from app.models.settings import BudgetPublic, BudgetUpdate, MemoPublic, MemoUpdate

router = APIRouter()
logger = logging.getLogger(__name__)

BUDGET_KEY = "budget"
MEMO_KEY = "memo"


def load_budget(user_id: str, month: str) -> int:
    value = dynamo.get_setting(user_id, BUDGET_KEY, month)
    try:
        return int(value) if value is not None else 0
    except (TypeError, ValueError):
        logger.warning(f"Ignoring malformed budget {value!r} for user {user_id}, month {month}")
        return 0


@router.get("/budget/{month}", response_model=BudgetPublic)
def get_budget(month: str, user_id: str = Depends(get_current_user_id)):
    """Budget for a YYYY-MM month; 0 when none was set."""
    month = checked_month(month)
    return BudgetPublic(month=month, budget=load_budget(user_id, month))


@router.put("/budget/{month}", response_model=BudgetPublic)
def update_budget(month: str, update: BudgetUpdate, user_id: str = Depends(get_current_user_id)):
    month = checked_month(month)
    if not dynamo.put_setting(user_id, BUDGET_KEY, update.budget, month):
        raise HTTPException(status_code=500, detail="Failed to save budget")
    logger.info(f"Saved budget {update.budget} for user {user_id}, month {month}")
    return BudgetPublic(month=month, budget=update.budget)


@router.get("/memo", response_model=MemoPublic)
def get_memo(user_id: str = Depends(get_current_user_id)):
    value = dynamo.get_setting(user_id, MEMO_KEY)
    return MemoPublic(memo=value or "")


@router.put("/memo", response_model=MemoPublic)
def update_memo(update: MemoUpdate, user_id: str = Depends(get_current_user_id)):
    if not dynamo.put_setting(user_id, MEMO_KEY, update.memo):
        raise HTTPException(status_code=500, detail="Failed to save memo")
    return MemoPublic(memo=update.memo)
