from dataclasses import asdict

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from budget import summarize
from database import get_db
from models import AllocationModel, UserModel
from routes_allocations import WITH_RELATIONS
from routes_incomes import list_user_incomes
from schemas import BudgetSummaryOut, CategoryTotalOut, IncomeOut
from security import get_current_user

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=BudgetSummaryOut)
async def dashboard(db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    incomes = await list_user_incomes(db, current_user)
    result = await db.execute(
        select(AllocationModel)
        .where(AllocationModel.user_id == current_user.id)
        .options(*WITH_RELATIONS)
        .order_by(AllocationModel.id)
    )
    summary = summarize(incomes, result.scalars().all())

    return BudgetSummaryOut(
        total_income=summary.total_income,
        total_allocated=summary.total_allocated,
        unallocated=summary.unallocated,
        by_category=[CategoryTotalOut(**asdict(entry)) for entry in summary.by_category],
        by_type=summary.by_type,
        incomes=[IncomeOut.model_validate(i) for i in incomes],
    )
