import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from database import commit, get_db
from models import IncomeModel, UserModel
from schemas import IncomeIn, IncomeList, IncomeOut
from security import get_current_user, get_owned

logger = logging.getLogger(__name__)

router = APIRouter(tags=["incomes"])


async def list_user_incomes(db: AsyncSession, user: UserModel) -> List[IncomeModel]:
    result = await db.execute(
        select(IncomeModel).where(IncomeModel.user_id == user.id).order_by(IncomeModel.id)
    )
    return list(result.scalars().all())


# ----------------------------------------------------------------------------
# Incomes
# ----------------------------------------------------------------------------
@router.post("/incomes", response_model=IncomeOut, status_code=status.HTTP_201_CREATED)
async def create_income(payload: IncomeIn, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    income = IncomeModel(
        user_id=current_user.id,
        name=payload.name,
        amount=payload.amount,
        frequency=payload.frequency,
    )
    db.add(income)
    await commit(db)
    logger.info("User %s added income %s", current_user.id, income.id)
    return income

@router.get("/incomes", response_model=List[IncomeOut])
async def list_incomes(db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    return await list_user_incomes(db, current_user)

@router.get("/user/incomes", response_model=IncomeList)
async def user_incomes(db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    incomes = await list_user_incomes(db, current_user)
    return IncomeList(
        incomes=[IncomeOut.model_validate(i) for i in incomes],
        total_income=sum(i.amount for i in incomes),
    )

@router.get("/incomes/{income_id}", response_model=IncomeOut)
async def show_income(income_id: int, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    return await get_owned(db, IncomeModel, income_id, current_user)

@router.put("/incomes/{income_id}", response_model=IncomeOut)
async def update_income(income_id: int, payload: IncomeIn, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    income = await get_owned(db, IncomeModel, income_id, current_user, "update")
    income.name = payload.name
    income.amount = payload.amount
    income.frequency = payload.frequency
    await commit(db)
    logger.info("User %s updated income %s", current_user.id, income.id)
    return income

@router.delete("/incomes/{income_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_income(income_id: int, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    income = await get_owned(db, IncomeModel, income_id, current_user, "delete")
    await db.delete(income)
    await commit(db)
    logger.info("User %s deleted income %s", current_user.id, income_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
