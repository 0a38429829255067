"""
API Schemas

Request and response bodies for every endpoint. Request models declare
the field-level constraints and are checked before any database access.
Response models read straight from the ORM rows (``from_attributes``).
"""

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from config import MAX_AMOUNT, CategoryType, Frequency


def money_field(default=..., **kwargs):
    """A non-negative, finite amount that fits a decimal(10,2) column."""
    return Field(default, ge=0, le=MAX_AMOUNT, allow_inf_nan=False, **kwargs)


# ----------------------------------------------------------------------------
# Auth
# ----------------------------------------------------------------------------
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserRegister(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=8)
    password_confirmation: Optional[str] = None

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password_confirmation is not None and self.password_confirmation != self.password:
            raise ValueError("The password confirmation does not match.")
        return self


class UserOut(BaseModel):
    id: int
    name: str
    email: EmailStr

    class Config:
        from_attributes = True


# ----------------------------------------------------------------------------
# Incomes
# ----------------------------------------------------------------------------
class IncomeIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="e.g. Job 1, Spouse's Salary")
    amount: float = money_field()
    frequency: Frequency


class IncomeOut(IncomeIn):
    id: int

    class Config:
        from_attributes = True


class IncomeList(BaseModel):
    incomes: List[IncomeOut]
    total_income: float = Field(..., alias="totalIncome")

    class Config:
        populate_by_name = True


# ----------------------------------------------------------------------------
# Categories
# ----------------------------------------------------------------------------
class CategoryIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: CategoryType = "spending"


class CategoryOut(CategoryIn):
    id: int

    class Config:
        from_attributes = True


# ----------------------------------------------------------------------------
# Allocations
# ----------------------------------------------------------------------------
class AllocationIn(BaseModel):
    income_id: int
    category_id: int
    percentage_allocated: Optional[float] = Field(None, ge=0, le=100, allow_inf_nan=False)
    amount_allocated: Optional[float] = money_field(None)


class AllocationOut(AllocationIn):
    id: int
    category: CategoryOut
    income: IncomeOut

    class Config:
        from_attributes = True


# ----------------------------------------------------------------------------
# Goals
# ----------------------------------------------------------------------------
class GoalIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    target_amount: float = money_field()
    current_amount: float = money_field(0.0)
    target_date: Optional[date] = None


class GoalOut(GoalIn):
    id: int

    class Config:
        from_attributes = True


# ----------------------------------------------------------------------------
# Dashboard
# ----------------------------------------------------------------------------
class CategoryTotalOut(BaseModel):
    category_id: int
    name: str
    type: CategoryType
    amount: float


class BudgetSummaryOut(BaseModel):
    total_income: float = Field(..., alias="totalIncome")
    total_allocated: float = Field(..., alias="totalAllocated")
    unallocated: float
    by_category: List[CategoryTotalOut] = Field(..., alias="byCategory")
    by_type: Dict[str, float] = Field(..., alias="byType")
    incomes: List[IncomeOut]

    class Config:
        populate_by_name = True
