from pydantic import BaseModel, Field
from typing import Optional
from uuid import uuid4
from datetime import date, datetime


class TollRecordCreate(BaseModel):
    date: date
    section: Optional[str] = ""
    amount: int = Field(ge=0)


class TollRecordInDB(BaseModel):
    user_id: str
    record_id: str = Field(default_factory=lambda: str(uuid4()))
    date: str
    section: Optional[str] = ""
    amount: int
    created_at: str = Field(default_factory=lambda: datetime.utcnow().isoformat())


class TollRecordPublic(BaseModel):
    record_id: str
    date: str
    section: Optional[str] = ""
    amount: int
    created_at: Optional[str] = None
