"""
User use cases - registration, login, current user
"""
import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from homeplanner.auth import TokenService, hash_password, verify_password, get_user_by_email
from homeplanner.errors import ValidationError, ConflictError, UnauthorizedError
from homeplanner.infrastructure.db.models import User
from homeplanner.utils.validation import clean_text

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


@dataclass
class AuthResult:
    token: str
    user: User


class RegisterUserUseCase:
    """Use case: Register a new user and sign them in"""

    def __init__(self, db: Session, tokens: TokenService):
        self.db = db
        self.tokens = tokens

    def execute(self, name: str, email: str, password: str) -> AuthResult:
        name = clean_text(name)
        email = clean_text(email).lower()
        password = clean_text(password)

        if not name or not email or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError("name, email and password (min 8 chars) are required.")

        if get_user_by_email(self.db, email):
            raise ConflictError("Email already in use.")

        user = User(name=name, email=email, password_hash=hash_password(password))
        self.db.add(user)
        self.db.commit()
        logger.info("Registered user id=%s", user.id)

        return AuthResult(token=self.tokens.issue(user.id, user.email), user=user)


class LoginUseCase:
    """Use case: Exchange email + password for a bearer token"""

    def __init__(self, db: Session, tokens: TokenService):
        self.db = db
        self.tokens = tokens

    def execute(self, email: str, password: str) -> AuthResult:
        email = clean_text(email).lower()
        password = clean_text(password)
        if not email or not password:
            raise ValidationError("email and password are required.")

        user = get_user_by_email(self.db, email)
        # Same message for unknown email and wrong password
        if not user or not verify_password(password, user.password_hash):
            raise UnauthorizedError("Invalid email or password.")

        return AuthResult(token=self.tokens.issue(user.id, user.email), user=user)


class GetCurrentUserUseCase:
    """Use case: Resolve the user behind a bearer token"""

    def __init__(self, db: Session, tokens: TokenService):
        self.db = db
        self.tokens = tokens

    def execute(self, token: str | None) -> User:
        if not token:
            raise UnauthorizedError("Unauthorized.")
        user_id = self.tokens.subject(token)
        user = self.db.get(User, user_id)
        if not user:
            raise UnauthorizedError("Unauthorized.")
        return user
