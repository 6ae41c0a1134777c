# taskexchange/routers/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from taskexchange.database import JsonDatabase, get_db
from taskexchange.models.user import User
from taskexchange.schemas.user import UserCreate, UserLogin, UserResponse, Token
from taskexchange.utils.password import hash_password, verify_password
from taskexchange.core.security import create_access_token
from taskexchange.core.auth import get_current_user
from taskexchange.services.users import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _issue_token(user: User) -> Token:
    access_token = create_access_token({"sub": str(user.id), "email": user.email})
    return Token(
        access_token=access_token,
        token_type="bearer",
        user=UserResponse.from_user(user)
    )


@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
def signup(user_in: UserCreate, db: JsonDatabase = Depends(get_db)):
    user = UserService(db).create_user(
        name=user_in.name,
        email=user_in.email,
        password_hash=hash_password(user_in.password),
    )
    return _issue_token(user)


@router.post("/login", response_model=Token)
def login(user_in: UserLogin, db: JsonDatabase = Depends(get_db)):
    user = UserService(db).find_user_by_email(user_in.email)

    if not user or not verify_password(user_in.password, user.password_hash):
        logger.info("Failed login for %s", user_in.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _issue_token(user)


@router.get("/me", response_model=UserResponse)
def read_users_me(current_user: User = Depends(get_current_user)):
    return UserResponse.from_user(current_user)
