import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader
from jose import JWTError, jwt

from config import Settings, get_settings
from profile_store import is_object_id

logger = logging.getLogger(__name__)


AUTH_TOKEN_HEADER = "x-auth-token"
JWT_ALGORITHM = "HS256"
auth_token_header = APIKeyHeader(name=AUTH_TOKEN_HEADER, auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str


def create_access_token(user_id: str, secret: str, expires_in_seconds: int = 360000) -> str:
    expire = datetime.now(timezone.utc) + timedelta(seconds=expires_in_seconds)
    return jwt.encode({"user": {"id": user_id}, "exp": expire}, secret, algorithm=JWT_ALGORITHM)


def get_current_user(
    token: str | None = Security(auth_token_header),
    settings: Settings = Depends(get_settings),
) -> AuthenticatedUser:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token, authorization denied",
        )

    if not settings.jwt_secret:
        logger.error("JWT_SECRET is not configured; rejecting authenticated request")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is not valid",
        )

    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[JWT_ALGORITHM])
        user_id = str(payload["user"]["id"])
    except (JWTError, KeyError, TypeError) as exc:
        logger.warning("Rejected auth token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is not valid",
        ) from exc

    if not is_object_id(user_id):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is not valid",
        )
    return AuthenticatedUser(id=user_id)
