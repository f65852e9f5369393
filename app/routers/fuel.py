import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.config import settings
from app.core.deps import resolve_month
from app.core.security import get_current_user_id
from app.db import dynamo
from app.models.fuel import (
    FuelRecordCreate,
    FuelRecordInDB,
    FuelRecordPublic,
    FuelRecordUpdate,
    ReconcileRequest,
    ReconcileResponse,
)
from app.utils.analyzer import FuelAnalyzer
from app.utils.drafts import FuelRecordDraft
from app.utils.reconciler import EntryValidationError, Field, FormState, complete_entry, reconcile

router = APIRouter()
logger = logging.getLogger(__name__)


def _prefer() -> Field:
    return Field(settings.RECONCILE_PREFER)


def _public(record: dict) -> FuelRecordPublic:
    return FuelRecordPublic(**record, efficiency=FuelAnalyzer.record_efficiency(record))


@router.get("/", response_model=List[FuelRecordPublic])
def list_fuel_records(month: Optional[str] = None, user_id: str = Depends(get_current_user_id)):
    """
    Fuel records of one month (YYYY-MM, defaults to the current month), newest first.
    """
    start_date, end_date = resolve_month(month)
    records = dynamo.list_fuel_records(user_id, start_date, end_date)
    if records is None:
        raise HTTPException(status_code=500, detail="Failed to load fuel records")
    return [_public(r) for r in records]


@router.get("/{record_id}", response_model=FuelRecordPublic)
def get_fuel_record(record_id: str, user_id: str = Depends(get_current_user_id)):
    record = dynamo.get_fuel_record(user_id, record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Fuel record not found")
    return _public(record)


@router.post("/", response_model=FuelRecordPublic, status_code=status.HTTP_201_CREATED)
def create_fuel_record(entry: FuelRecordCreate, user_id: str = Depends(get_current_user_id)):
    try:
        price, volume, cost = complete_entry(
            entry.price_per_liter, entry.fuel_amount, entry.total_cost, prefer=_prefer()
        )
    except EntryValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    record = FuelRecordInDB(
        user_id=user_id,
        date=entry.date.isoformat(),
        # Entries are stamped with the time they were logged
        time=entry.time or datetime.now().strftime("%H:%M"),
        region=entry.region,
        station=entry.station,
        price_per_liter=price,
        fuel_amount=volume,
        distance=entry.distance,
        total_cost=cost,
    )
    if not dynamo.put_fuel_record(record.model_dump()):
        raise HTTPException(status_code=500, detail="Failed to save fuel record")

    logger.info(f"Created fuel record {record.record_id} for user {user_id}")
    return _public(record.model_dump())


@router.put("/{record_id}", response_model=FuelRecordPublic)
def update_fuel_record(
    record_id: str,
    entry: FuelRecordUpdate,
    user_id: str = Depends(get_current_user_id),
):
    stored = dynamo.get_fuel_record(user_id, record_id)
    if not stored:
        raise HTTPException(status_code=404, detail="Fuel record not found")

    draft = FuelRecordDraft.begin(stored, prefer=_prefer())
    changes = entry.model_dump()
    changes["date"] = entry.date.isoformat()
    # Only linked fields the client actually changed count as edits
    for key in ("price_per_liter", "fuel_amount", "total_cost"):
        if changes[key] is None or changes[key] == stored.get(key):
            changes.pop(key)
    draft.update(**changes)

    try:
        row = draft.commit()
    except EntryValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    updated = dynamo.replace_fuel_record(FuelRecordInDB(**row).model_dump())
    if not updated:
        raise HTTPException(status_code=404, detail="Fuel record not found")

    logger.info(f"Updated fuel record {record_id} for user {user_id}")
    return _public(updated)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_fuel_record(record_id: str, user_id: str = Depends(get_current_user_id)):
    deleted = dynamo.delete_fuel_record(user_id, record_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Fuel record not found")
    logger.info(f"Deleted fuel record {record_id} for user {user_id}")
    return None


@router.post("/reconcile", response_model=ReconcileResponse)
def reconcile_entry(request: ReconcileRequest, user_id: str = Depends(get_current_user_id)):
    """
    Recompute the linked price / volume / cost fields after one of them was
    edited on the entry form. Nothing is stored.
    """
    state = FormState(price=request.price, volume=request.volume, cost=request.cost)
    new_state = reconcile(Field(request.field), request.value, state)
    return ReconcileResponse(price=new_state.price, volume=new_state.volume, cost=new_state.cost)
