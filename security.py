import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from config import ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, SECRET_KEY
from database import get_db
from errors import AuthorizationError, NotFoundError
from models import UserModel

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


# ----------------------------------------------------------------------------
# Auth helpers
# ----------------------------------------------------------------------------

def verify_password(plain_password: str, password_hash: str) -> bool:
    return pwd_context.verify(plain_password, password_hash)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt

async def get_current_user(token: str = Depends(oauth2_scheme), db: AsyncSession = Depends(get_db)) -> UserModel:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        user_id: Optional[str] = payload.get("sub")
        if user_id is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    user = await db.get(UserModel, int(user_id))
    if user is None:
        raise credentials_exception
    return user


# ----------------------------------------------------------------------------
# Ownership
# ----------------------------------------------------------------------------

def authorize_owner(user: UserModel, row, action: str) -> None:
    """Raise AuthorizationError unless ``user`` owns ``row``."""
    if row.user_id != user.id:
        logger.warning(
            "User %s denied %s on %s %s owned by user %s",
            user.id, action, type(row).__name__, row.id, row.user_id,
        )
        raise AuthorizationError()


async def get_owned(db: AsyncSession, model, row_id: int, user: UserModel, action: str = "view", options=()):
    """Fetch a row by id, 404 if missing, 403 if another user owns it."""
    row = await db.get(model, row_id, options=list(options), populate_existing=bool(options))
    if row is None:
        label = model.__name__.replace("Model", "")
        raise NotFoundError(f"{label} not found.")
    authorize_owner(user, row, action)
    return row
