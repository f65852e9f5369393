from pydantic import BaseModel, Field


class BudgetUpdate(BaseModel):
    budget: int = Field(ge=0)


class BudgetPublic(BaseModel):
    month: str
    budget: int


class MemoUpdate(BaseModel):
    memo: str = ""


class MemoPublic(BaseModel):
    memo: str
