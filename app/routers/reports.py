import logging
from typing import Dict, Tuple

from fastapi import APIRouter, Depends, HTTPException

from app.core.deps import resolve_month
from app.core.security import get_current_user_id
from app.db import dynamo
from app.routers.settings import load_budget
from app.utils.analyzer import FuelAnalyzer, MonthlySummary

router = APIRouter()
logger = logging.getLogger(__name__)
fuel_analyzer = FuelAnalyzer()


def load_month(user_id: str, month: str) -> Tuple[list, list, MonthlySummary]:
    """Fetch a month's records and budget and summarize them."""
    start_date, end_date = resolve_month(month)
    fuel_records = dynamo.list_fuel_records(user_id, start_date, end_date)
    toll_records = dynamo.list_toll_records(user_id, start_date, end_date)
    if fuel_records is None or toll_records is None:
        raise HTTPException(status_code=500, detail="Failed to load records")

    budget = load_budget(user_id, month)
    summary = fuel_analyzer.summarize(fuel_records, toll_records, budget)
    return fuel_records, toll_records, summary


@router.get("/monthly/{month}")
def monthly_report(month: str, user_id: str = Depends(get_current_user_id)) -> Dict:
    """
    Records, totals, average efficiency and budget status for a month (e.g. '2025-11').
    """
    logger.info(f"Generating monthly report for user_id: {user_id}, month: {month}")
    fuel_records, toll_records, summary = load_month(user_id, month)
    logger.info(f"Found {len(fuel_records)} fuel and {len(toll_records)} toll records for user {user_id} in month {month}")

    for record in fuel_records:
        record["efficiency"] = fuel_analyzer.record_efficiency(record)

    return {
        "month": month,
        "summary": summary.to_dict(),
        "fuel_records": fuel_records,
        "toll_records": toll_records,
        "notifications": fuel_analyzer.budget_notices(summary),
    }
