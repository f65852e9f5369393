import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.deps import resolve_month
from app.core.security import get_current_user_id
from app.db import dynamo
from app.models.toll import TollRecordCreate, TollRecordInDB, TollRecordPublic
from app.utils.drafts import RecordDraft

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[TollRecordPublic])
def list_toll_records(month: Optional[str] = None, user_id: str = Depends(get_current_user_id)):
    """
    Toll payments of one month (YYYY-MM, defaults to the current month), newest first.
    """
    start_date, end_date = resolve_month(month)
    records = dynamo.list_toll_records(user_id, start_date, end_date)
    if records is None:
        raise HTTPException(status_code=500, detail="Failed to load toll records")
    return [TollRecordPublic(**r) for r in records]


@router.post("/", response_model=TollRecordPublic, status_code=status.HTTP_201_CREATED)
def create_toll_record(entry: TollRecordCreate, user_id: str = Depends(get_current_user_id)):
    record = TollRecordInDB(
        user_id=user_id,
        date=entry.date.isoformat(),
        section=entry.section,
        amount=entry.amount,
    )
    if not dynamo.put_toll_record(record.model_dump()):
        raise HTTPException(status_code=500, detail="Failed to save toll record")

    logger.info(f"Created toll record {record.record_id} for user {user_id}")
    return TollRecordPublic(**record.model_dump())


@router.put("/{record_id}", response_model=TollRecordPublic)
def update_toll_record(
    record_id: str,
    entry: TollRecordCreate,
    user_id: str = Depends(get_current_user_id),
):
    stored = dynamo.get_toll_record(user_id, record_id)
    if not stored:
        raise HTTPException(status_code=404, detail="Toll record not found")

    draft = RecordDraft.begin(stored)
    draft.update(date=entry.date.isoformat(), section=entry.section, amount=entry.amount)
    updated = dynamo.replace_toll_record(TollRecordInDB(**draft.commit()).model_dump())
    if not updated:
        raise HTTPException(status_code=404, detail="Toll record not found")

    logger.info(f"Updated toll record {record_id} for user {user_id}")
    return TollRecordPublic(**updated)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_toll_record(record_id: str, user_id: str = Depends(get_current_user_id)):
    deleted = dynamo.delete_toll_record(user_id, record_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Toll record not found")
    logger.info(f"Deleted toll record {record_id} for user {user_id}")
    return None
