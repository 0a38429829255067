import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from database import commit, get_db
from errors import ValidationError, ValidationKind
from models import CategoryModel, UserModel
from schemas import CategoryIn, CategoryOut
from security import get_current_user, get_owned

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])


async def ensure_unique_name(db: AsyncSession, user: UserModel, name: str, exclude_id: Optional[int] = None) -> None:
    query = select(CategoryModel.id).where(CategoryModel.user_id == user.id, CategoryModel.name == name)
    if exclude_id is not None:
        query = query.where(CategoryModel.id != exclude_id)
    if (await db.execute(query)).first() is not None:
        raise ValidationError(ValidationKind.DUPLICATE, "The name has already been taken.", field="name")


# ----------------------------------------------------------------------------
# Categories
# ----------------------------------------------------------------------------
@router.get("", response_model=List[CategoryOut])
async def list_categories(db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    result = await db.execute(
        select(CategoryModel).where(CategoryModel.user_id == current_user.id).order_by(CategoryModel.id)
    )
    return result.scalars().all()

@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
async def create_category(payload: CategoryIn, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    await ensure_unique_name(db, current_user, payload.name)
    category = CategoryModel(user_id=current_user.id, name=payload.name, type=payload.type)
    db.add(category)
    await commit(db)
    logger.info("User %s added category %s", current_user.id, category.id)
    return category

@router.get("/{category_id}", response_model=CategoryOut)
async def show_category(category_id: int, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    return await get_owned(db, CategoryModel, category_id, current_user)

@router.put("/{category_id}", response_model=CategoryOut)
async def update_category(category_id: int, payload: CategoryIn, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    category = await get_owned(db, CategoryModel, category_id, current_user, "update")
    await ensure_unique_name(db, current_user, payload.name, exclude_id=category.id)
    category.name = payload.name
    category.type = payload.type
    await commit(db)
    logger.info("User %s updated category %s", current_user.id, category.id)
    return category

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: int, db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    category = await get_owned(db, CategoryModel, category_id, current_user, "delete")
    await db.delete(category)
    await commit(db)
    logger.info("User %s deleted category %s", current_user.id, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
