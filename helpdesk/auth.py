"""Authentication helpers: password hashing, JWT issue/verify and the auth gate.

The gate (`require_identity`) is attached to the protected router group. It
only establishes identity; it performs no role or permission checks.
"""

from __future__ import annotations

import logging
import os
import warnings
from datetime import datetime, timedelta, timezone
from typing import Optional

# Suppress specific deprecation warnings that come from third-party libs we depend on
# (passlib probing argon2-cffi, python-jose calling datetime.utcnow()).
warnings.filterwarnings("ignore", category=DeprecationWarning, message=r".*argon2.*")
warnings.filterwarnings("ignore", category=DeprecationWarning, message=r".*datetime\.datetime\.utcnow.*")

from email_validator import EmailNotValidError, validate_email
from fastapi import Depends, Request, status
from fastapi.security import APIKeyHeader
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError
from sqlalchemy.orm import Session

from helpdesk import models
from helpdesk.errors import api_error
from helpdesk.schemas import TokenClaims

logger = logging.getLogger(__name__)

# Config from environment with sensible defaults for dev
SECRET_KEY = os.getenv("JWT_SECRET", "change-this-secret-in-production")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(24 * 60)))

# bcrypt stays verifiable for hashes imported from the previous system ($2b$10$...)
pwd_context = CryptContext(schemes=["argon2", "bcrypt"], deprecated="auto", bcrypt__rounds=10)

authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Access token, either raw or prefixed with `Bearer `",
)


class AuthenticationError(Exception):
    """Raised when a request cannot be tied to a valid identity."""

    reason = "invalid"


class TokenMissingError(AuthenticationError):
    reason = "missing"


class TokenInvalidError(AuthenticationError):
    reason = "invalid"


class TokenExpiredError(AuthenticationError):
    reason = "expired"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def claims_for_user(user: models.UtilizadorModel) -> TokenClaims:
    return TokenClaims(
        id=user.cod,
        email=user.email,
        tipo_utilizador=user.tipo_utilizador,
        foto=user.foto_perfil,
        empresa=user.empresa,
        funcao=user.funcao,
    )


def create_access_token(claims: TokenClaims, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = claims.model_dump(by_alias=True)
    now = datetime.now(timezone.utc)
    if expires_delta is not None:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"sub": claims.id, "exp": expire, "iat": now})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: Optional[str]) -> TokenClaims:
    """Verify signature and expiry of `token` and return its claim set.

    Raises `TokenMissingError`, `TokenExpiredError` or `TokenInvalidError`.
    """
    if not token:
        raise TokenMissingError("no token supplied")
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError as exc:
        raise TokenExpiredError(str(exc)) from exc
    except JWTError as exc:
        raise TokenInvalidError(str(exc)) from exc

    try:
        return TokenClaims.model_validate(payload)
    except ValidationError as exc:
        raise TokenInvalidError("token is missing identity claims") from exc


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an Authorization header value, with or without `Bearer `."""
    if not authorization:
        return None
    value = authorization.strip()
    if value[:7].lower() == "bearer ":
        value = value[7:].strip()
    return value or None


def normalize_email(email: str) -> str:
    """Return `email` in the form stored at registration (`EmailStr` lowercases the domain).

    Values that are not valid addresses are returned unchanged.
    """
    try:
        return validate_email(email, check_deliverability=False).normalized
    except EmailNotValidError:
        return email


def authenticate_user(db: Session, email: str, password: str) -> Optional[models.UtilizadorModel]:
    email = normalize_email(email)
    user = db.query(models.UtilizadorModel).filter(models.UtilizadorModel.email == email).first()
    if not user:
        # Spend the same hashing time as a real check so unknown emails are not distinguishable
        pwd_context.dummy_verify()
        return None
    if not verify_password(password, user.senha):
        return None
    return user


def require_identity(request: Request, authorization: Optional[str] = Depends(authorization_header)) -> TokenClaims:
    """Dependency for the protected route group: returns the caller's claims or raises 401.

    The decoded claims are also attached to `request.state.identity`.
    """
    try:
        claims = decode_access_token(extract_token(authorization))
    except AuthenticationError as exc:
        logger.info("Rejected %s %s: %s token (%s)", request.method, request.url.path, exc.reason, exc)
        raise api_error(
            status.HTTP_401_UNAUTHORIZED,
            "not_authenticated",
            "Invalid or missing credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    request.state.identity = claims
    return claims


__all__ = [
    "AuthenticationError",
    "TokenMissingError",
    "TokenInvalidError",
    "TokenExpiredError",
    "verify_password",
    "get_password_hash",
    "claims_for_user",
    "create_access_token",
    "decode_access_token",
    "extract_token",
    "normalize_email",
    "authenticate_user",
    "require_identity",
]
