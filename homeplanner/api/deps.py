"""
FastAPI dependencies (DB session, token service, authentication)
"""
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from homeplanner.application.ownership import resolve_current_user_id
from homeplanner.application.users import GetCurrentUserUseCase
from homeplanner.auth import TokenService
from homeplanner.config import Settings, get_settings
from homeplanner.infrastructure.db.models import User
from homeplanner.infrastructure.db.session import get_db as _get_db


# Re-export get_db for routers
get_db = _get_db

# auto_error=False: a missing header must answer 401, not 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService.from_settings(settings)


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    return credentials.credentials.strip() or None


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """
    User behind the bearer token

    Raises:
        UnauthorizedError(401): missing/invalid/expired token or deleted user

    Usage:
        @router.get("/me")
        def me(user: User = Depends(get_current_user)):
            ...
    """
    return GetCurrentUserUseCase(db, tokens).execute(_bearer_token(credentials))


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """Id of the user behind the bearer token (see get_current_user)"""
    return resolve_current_user_id(db, tokens, _bearer_token(credentials))
