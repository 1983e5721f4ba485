"""
Authentication routes (register, login, current user)
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from homeplanner.api.deps import get_db, get_token_service, get_current_user
from homeplanner.api.schemas import CamelModel
from homeplanner.application.users import RegisterUserUseCase, LoginUseCase, AuthResult
from homeplanner.auth import TokenService
from homeplanner.infrastructure.db.models import User


router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


# === Request/Response models ===

class RegisterRequest(CamelModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class UserResponse(CamelModel):
    id: str
    name: str
    email: str


class AuthResponse(CamelModel):
    token: str
    user: UserResponse


def _user_response(user: User) -> UserResponse:
    return UserResponse(id=user.id, name=user.name, email=user.email)


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(token=result.token, user=_user_response(result.user))


# === Endpoints ===

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    req: RegisterRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Register a new user"""
    result = RegisterUserUseCase(db, tokens).execute(
        name=req.name,
        email=req.email,
        password=req.password,
    )
    return _auth_response(result)


@router.post("/login", response_model=AuthResponse)
def login(
    req: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """Exchange email and password for a bearer token"""
    result = LoginUseCase(db, tokens).execute(email=req.email, password=req.password)
    return _auth_response(result)


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(get_current_user)):
    """Current user"""
    return _user_response(user)
