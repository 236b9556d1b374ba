"""
Credential hashing and signed access tokens.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict
import logging

import jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from quizroom.core.config import Settings
from quizroom.core.errors import Unauthorized
from quizroom.models.orm import Role

logger = logging.getLogger(__name__)


class Identity(BaseModel):
    """Decoded, signature-verified claims of an access token."""
    id: int
    username: str
    role: Role


class PasswordHasher:
    def __init__(self, rounds: int = 10):
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self.context.verify(password, password_hash)
        except ValueError:
            # Malformed stored hash
            logger.warning("Unverifiable password hash encountered")
            return False


class TokenService:
    """Issues and verifies HS256 JWTs asserting (user id, username, role)."""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl_minutes: int = 60):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = timedelta(minutes=ttl_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.SECRET_KEY.get_secret_value(),
            settings.ALGORITHM,
            settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )

    def issue(self, identity: Identity, ttl: timedelta | None = None) -> str:
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "sub": str(identity.id),
            "username": identity.username,
            "role": identity.role.value,
            "iat": int(now.timestamp()),
            "exp": int((now + (ttl if ttl is not None else self.ttl)).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise Unauthorized("Token expired")
        except jwt.PyJWTError:
            raise Unauthorized("Invalid token")
        try:
            return Identity(id=int(payload["sub"]), username=payload["username"], role=Role(payload["role"]))
        except (KeyError, TypeError, ValueError):
            raise Unauthorized("Invalid token")
