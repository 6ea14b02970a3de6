"""Request dependencies: bearer-token principals, role gates and the sensor key."""

from __future__ import annotations

import hmac
import logging
from typing import Callable, Optional

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config import settings
from ..db.supabase import require_client
from ..errors import StorageUnavailableError, UnauthorizedError
from ..models.domain import USER_ROLES, Principal

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def resolve_principal(token: str) -> Principal:
    """Look up the user behind an access token issued by Supabase Auth.

    The role is read from the user's ``app_metadata`` (server-controlled) and
    falls back to ``citizen``.
    """
    client = require_client()
    try:
        response = client.auth.get_user(token)
    except Exception as e:
        logger.info(f"Rejected access token: {e}")
        raise UnauthorizedError("Invalid token") from e

    user = getattr(response, "user", None)
    if user is None:
        raise UnauthorizedError("Invalid token")
    app_metadata = getattr(user, "app_metadata", None) or {}
    user_metadata = getattr(user, "user_metadata", None) or {}
    role = app_metadata.get("role") or "citizen"
    if role not in USER_ROLES:
        raise UnauthorizedError("Invalid token")
    return Principal(id=str(user.id), role=role, name=user_metadata.get("name"), claims=dict(app_metadata))


def get_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    try:
        return resolve_principal(credentials.credentials)
    except UnauthorizedError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    except StorageUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc


def require_roles(*roles: str) -> Callable[..., Principal]:
    """Dependency that admits only principals holding one of ``roles``."""

    def _check(principal: Principal = Depends(get_principal)) -> Principal:
        if roles and principal.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return principal

    return _check


def verify_sensor_key(x_sensor_key: Optional[str] = Header(default=None, alias="X-Sensor-Key")) -> None:
    if not x_sensor_key or not hmac.compare_digest(x_sensor_key, settings.sensor_key):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
