import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from database import commit, get_db
from errors import ValidationError, ValidationKind
from models import UserModel
from schemas import Token, UserOut, UserRegister
from security import create_access_token, get_current_user, get_password_hash, verify_password
from seeding import seed_default_categories

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


# ----------------------------------------------------------------------------
# Auth routes
# ----------------------------------------------------------------------------
@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register(payload: UserRegister, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(UserModel).where(UserModel.email == payload.email))
    existing = result.scalar_one_or_none()
    if existing:
        raise ValidationError(ValidationKind.DUPLICATE, "The email has already been taken.", field="email")

    user = UserModel(
        name=payload.name,
        email=payload.email,
        password_hash=get_password_hash(payload.password),
    )
    db.add(user)
    await db.flush()
    # Same transaction as the user row: no account without its starter categories
    await seed_default_categories(db, user.id)
    await commit(db)
    logger.info("Registered user %s", user.id)
    return user

@router.post("/login", response_model=Token)
async def login(form_data: OAuth2PasswordRequestForm = Depends(), db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(UserModel).where(UserModel.email == form_data.username.lower()))
    user = result.scalar_one_or_none()
    if not user or not verify_password(form_data.password, user.password_hash):
        raise HTTPException(status_code=400, detail="Incorrect email or password")

    access_token = create_access_token({"sub": str(user.id)})
    return {"access_token": access_token, "token_type": "bearer"}

@router.get("/me", response_model=UserOut)
async def me(current_user: UserModel = Depends(get_current_user)):
    return current_user

@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(db: AsyncSession = Depends(get_db), current_user: UserModel = Depends(get_current_user)):
    # Incomes, categories, allocations and goals go with it (ON DELETE CASCADE)
    user_id = current_user.id
    await db.delete(current_user)
    await commit(db)
    logger.info("Deleted user %s", user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
