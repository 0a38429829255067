import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import select

from database import commit, get_db
from models import AllocationModel, UserModel
from schemas import AllocationIn, AllocationOut
from security import get_current_user, get_owned
from validation import validate_allocation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/allocations", tags=["allocations"])

WITH_RELATIONS = (
    selectinload(AllocationModel.category),
    selectinload(AllocationModel.income),
)


async def load_allocation(db: AsyncSession, allocation_id: int) -> AllocationModel:
    # populate_existing so a changed income_id/category_id is reflected in the relations
    return await db.get(AllocationModel, allocation_id, options=list(WITH_RELATIONS), populate_existing=True)


# ----------------------------------------------------------------------------
# Allocations
# ----------------------------------------------------------------------------
@router.get("", response_model=List[AllocationOut])
async def list_allocations(db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    result = await db.execute(
        select(AllocationModel)
        .where(AllocationModel.user_id == current_user.id)
        .options(*WITH_RELATIONS)
        .order_by(AllocationModel.id)
    )
    return result.scalars().all()

@router.post("", response_model=AllocationOut, status_code=status.HTTP_201_CREATED)
async def create_allocation(payload: AllocationIn, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    values = await validate_allocation(db, current_user, payload)
    allocation = AllocationModel(user_id=current_user.id, **values)
    db.add(allocation)
    await commit(db)
    logger.info("User %s added allocation %s", current_user.id, allocation.id)
    return await load_allocation(db, allocation.id)

@router.get("/{allocation_id}", response_model=AllocationOut)
async def show_allocation(allocation_id: int, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    return await get_owned(db, AllocationModel, allocation_id, current_user, options=WITH_RELATIONS)

@router.put("/{allocation_id}", response_model=AllocationOut)
async def update_allocation(allocation_id: int, payload: AllocationIn, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    allocation = await get_owned(db, AllocationModel, allocation_id, current_user, "update")
    values = await validate_allocation(db, current_user, payload)
    for key, value in values.items():
        setattr(allocation, key, value)
    await commit(db)
    logger.info("User %s updated allocation %s", current_user.id, allocation.id)
    return await load_allocation(db, allocation.id)

@router.delete("/{allocation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_allocation(allocation_id: int, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    allocation = await get_owned(db, AllocationModel, allocation_id, current_user, "delete")
    await db.delete(allocation)
    await commit(db)
    logger.info("User %s deleted allocation %s", current_user.id, allocation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
