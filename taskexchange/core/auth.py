# taskexchange/core/auth.py
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from taskexchange.config import settings
from taskexchange.core.exceptions import NotFoundError
from taskexchange.database import JsonDatabase, get_db
from taskexchange.models.user import User
from taskexchange.services.users import UserService

reusable_oauth2 = HTTPBearer()


def get_current_user(
    db: JsonDatabase = Depends(get_db),
    token: HTTPAuthorizationCredentials = Depends(reusable_oauth2)
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(
            token.credentials,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
        user_id = payload.get("sub")
        if user_id is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    try:
        return UserService(db).get_user(int(user_id))
    except (NotFoundError, ValueError):
        raise credentials_exception


def get_current_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    if not current_user.is_admin:
        raise HTTPException(403, "Admin access required")
    return current_user
