from pydantic import BaseModel, Field
from typing import Optional, Union
from uuid import uuid4
from datetime import date, datetime

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class FuelRecordCreate(BaseModel):
    """
    A fill-up as submitted by the entry form. Either fuel_amount or
    total_cost may be left out; the missing one is derived from the price.
    """
    date: date
    time: Optional[str] = Field(default=None, pattern=TIME_PATTERN)
    region: Optional[str] = ""
    station: Optional[str] = ""
    price_per_liter: float = Field(gt=0)
    fuel_amount: Optional[float] = Field(default=None, ge=0)
    total_cost: Optional[float] = Field(default=None, ge=0)
    distance: int = Field(default=0, ge=0)


class FuelRecordUpdate(FuelRecordCreate):
    """Full-row replacement; every field is sent again."""


class FuelRecordInDB(BaseModel):
    user_id: str
    record_id: str = Field(default_factory=lambda: str(uuid4()))
    date: str
    time: Optional[str] = None
    region: Optional[str] = ""
    station: Optional[str] = ""
    price_per_liter: int
    fuel_amount: float
    distance: int = 0
    total_cost: int
    created_at: str = Field(default_factory=lambda: datetime.utcnow().isoformat())


class FuelRecordPublic(BaseModel):
    record_id: str
    date: str
    time: Optional[str] = None
    region: Optional[str] = ""
    station: Optional[str] = ""
    price_per_liter: int
    fuel_amount: float
    distance: int = 0
    total_cost: int
    efficiency: Optional[str] = None
    created_at: Optional[str] = None


class ReconcileRequest(BaseModel):
    """One edit of a linked field on the entry form."""
    field: str = Field(pattern=r"^(price|volume|cost)$")
    value: Optional[Union[float, str]] = None
    price: Optional[float] = None
    volume: Optional[float] = None
    cost: Optional[float] = None


class ReconcileResponse(BaseModel):
    price: Optional[float] = None
    volume: Optional[float] = None
    cost: Optional[float] = None
