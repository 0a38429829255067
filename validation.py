"""
Allocation validation.

An allocation splits an income into a category either by percentage of
that income or by a fixed amount. Exactly one of the two must be given,
and both the income and the category must belong to the acting user.
The same rules apply on create and on update, so an update may switch
an allocation from one mode to the other.
"""

import enum
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from errors import ValidationError, ValidationKind
from models import CategoryModel, IncomeModel, UserModel
from schemas import AllocationIn


class AllocationMode(str, enum.Enum):
    PERCENTAGE = "percentage"
    AMOUNT = "amount"


def check_allocation_mode(percentage: Optional[float], amount: Optional[float]) -> AllocationMode:
    """Return the allocation mode, or raise ValidationError if the pair is invalid."""
    if percentage is not None and amount is not None:
        raise ValidationError(
            ValidationKind.CONFLICTING_ALLOCATION_MODE,
            "Cannot allocate by both percentage and amount.",
        )
    if percentage is None and amount is None:
        raise ValidationError(
            ValidationKind.MISSING_ALLOCATION_MODE,
            "Either percentage or amount must be allocated.",
        )
    if percentage is not None:
        if not 0 <= percentage <= 100:
            raise ValidationError(
                ValidationKind.OUT_OF_RANGE,
                "The percentage allocated must be between 0 and 100.",
                field="percentage_allocated",
            )
        return AllocationMode.PERCENTAGE
    if amount < 0:
        raise ValidationError(
            ValidationKind.OUT_OF_RANGE,
            "The amount allocated must be at least 0.",
            field="amount_allocated",
        )
    return AllocationMode.AMOUNT


async def _require_owned(db: AsyncSession, model, row_id: int, user: UserModel, field: str):
    row = await db.get(model, row_id)
    if row is None or row.user_id != user.id:
        raise ValidationError(
            ValidationKind.UNKNOWN_REFERENCE,
            f"The selected {field.replace('_', ' ')} is invalid.",
            field=field,
        )
    return row


async def validate_allocation(db: AsyncSession, user: UserModel, payload: AllocationIn) -> dict:
    """Validate an allocation payload for ``user`` and return the columns to persist."""
    await _require_owned(db, IncomeModel, payload.income_id, user, "income_id")
    await _require_owned(db, CategoryModel, payload.category_id, user, "category_id")
    mode = check_allocation_mode(payload.percentage_allocated, payload.amount_allocated)

    return {
        "income_id": payload.income_id,
        "category_id": payload.category_id,
        "percentage_allocated": payload.percentage_allocated if mode is AllocationMode.PERCENTAGE else None,
        "amount_allocated": payload.amount_allocated if mode is AllocationMode.AMOUNT else None,
    }
