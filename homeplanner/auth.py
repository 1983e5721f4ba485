"""
Password hashing and bearer token signing
"""
from datetime import datetime, timedelta, timezone

import jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from homeplanner.config import Settings
from homeplanner.errors import UnauthorizedError
from homeplanner.infrastructure.db.models import User

# pbkdf2_sha256: salted, slow, no native deps
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

TOKEN_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).first()


class TokenService:
    """
    Issues and verifies signed bearer tokens (subject = user id)
    """

    def __init__(self, secret: str, ttl: timedelta = timedelta(days=7)):
        self.secret = secret
        self.ttl = ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(settings.jwt_secret, timedelta(days=settings.TOKEN_TTL_DAYS))

    def issue(self, user_id: str, email: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "email": email,
            "iat": now,
            "exp": now + self.ttl,
        }
        return jwt.encode(payload, self.secret, algorithm=TOKEN_ALGORITHM)

    def subject(self, token: str) -> str:
        """
        Verify signature and expiry, return the user id

        Raises:
            UnauthorizedError: token is malformed, tampered with or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except jwt.PyJWTError as exc:
            raise UnauthorizedError("Unauthorized.") from exc
        return payload["sub"]
