import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from database import commit, get_db
from models import GoalModel, UserModel
from schemas import GoalIn, GoalOut
from security import get_current_user, get_owned

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/goals", tags=["goals"])


# ----------------------------------------------------------------------------
# Savings goals
# ----------------------------------------------------------------------------
@router.get("", response_model=List[GoalOut])
async def list_goals(db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    result = await db.execute(
        select(GoalModel).where(GoalModel.user_id == current_user.id).order_by(GoalModel.target_date, GoalModel.id)
    )
    return result.scalars().all()

@router.post("", response_model=GoalOut, status_code=status.HTTP_201_CREATED)
async def create_goal(payload: GoalIn, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    goal = GoalModel(user_id=current_user.id, **payload.model_dump())
    db.add(goal)
    await commit(db)
    logger.info("User %s added goal %s", current_user.id, goal.id)
    return goal

@router.get("/{goal_id}", response_model=GoalOut)
async def show_goal(goal_id: int, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    return await get_owned(db, GoalModel, goal_id, current_user)

@router.put("/{goal_id}", response_model=GoalOut)
async def update_goal(goal_id: int, payload: GoalIn, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    goal = await get_owned(db, GoalModel, goal_id, current_user, "update")
    for key, value in payload.model_dump().items():
        setattr(goal, key, value)
    await commit(db)
    logger.info("User %s updated goal %s", current_user.id, goal.id)
    return goal

@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal(goal_id: int, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    goal = await get_owned(db, GoalModel, goal_id, current_user, "delete")
    await db.delete(goal)
    await commit(db)
    logger.info("User %s deleted goal %s", current_user.id, goal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
