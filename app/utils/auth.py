"""
Authentication utilities for JWT token management and password hashing.
Provides JWT token generation, validation, and role-based claims.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext
from app.config import settings
import uuid


# Password hashing context, cost factor fixed by configuration
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds
)

ACCESS_TOKEN_TYPE = "access"


class TokenPayload:
    """Identity and role claims carried by a verified token."""

    def __init__(self, user_id: uuid.UUID, email: str, role: str, exp: datetime):
        self.user_id = user_id
        self.email = email
        self.role = role
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """Create TokenPayload from a decoded claim set."""
        return cls(
            user_id=uuid.UUID(data["sub"]),
            email=data["email"],
            role=data["role"],
            exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc)
        )

    def __repr__(self) -> str:
        return f"<TokenPayload(user_id={self.user_id}, role={self.role})>"


def create_access_token(
    user_id: uuid.UUID,
    email: str,
    role: str,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed JWT carrying the user's identity and role.

    Args:
        user_id: User's UUID
        email: User's email address
        role: User's role value
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    if expires_delta is not None:
        expire = now + expires_delta
    else:
        expire = now + timedelta(days=settings.access_token_expire_days)

    to_encode = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "exp": expire,
        "iat": now,
        "type": ACCESS_TOKEN_TYPE
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def verify_token(token: str) -> TokenPayload:
    """
    Verify signature and expiry of a JWT and return its claims.

    Every failure raises the same JWTError type so callers cannot tell an
    expired token from a tampered or malformed one.

    Raises:
        JWTError: If the token is invalid for any reason
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        raise
    except Exception as e:
        raise JWTError(f"Token validation error: {e}")

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise JWTError("Invalid token type")

    if not payload.get("sub") or not payload.get("email") or not payload.get("role"):
        raise JWTError("Invalid token payload")

    try:
        return TokenPayload.from_dict(payload)
    except (KeyError, ValueError, TypeError) as e:
        raise JWTError(f"Invalid token payload: {e}")


def _truncate_password(password: str) -> str:
    """bcrypt only looks at the first 72 bytes of a password."""
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > 72:
        return password_bytes[:72].decode("utf-8", errors="ignore")
    return password


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt.

    Raises:
        ValueError: If password is empty
    """
    if not password:
        raise ValueError("Password is required")

    return pwd_context.hash(_truncate_password(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    if not plain_password or not hashed_password:
        return False
    return pwd_context.verify(_truncate_password(plain_password), hashed_password)
