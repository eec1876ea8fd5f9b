"""Bearer-token authentication and role gates.

Tokens are HS256 JWTs issued by the login service with ``id`` and ``role``
claims. This module only verifies them and resolves the calling actor.
"""

import logging
from dataclasses import dataclass

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from desk.config import settings
from desk.models.enums import UserRole

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of a request."""

    user_id: int
    role: UserRole


def decode_token(token: str) -> Actor:
    """Verify ``token`` and return the actor it names.

    Raises:
        HTTPException: 401 if the token is invalid, expired or lacks claims.
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.InvalidTokenError as exc:
        logger.debug("Rejected token: %s", exc)
        raise HTTPException(status_code=401, detail="Invalid token") from exc

    try:
        return Actor(user_id=int(payload["id"]), role=UserRole(payload["role"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Actor:
    """Dependency resolving the bearer token to an Actor."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return decode_token(credentials.credentials)


async def require_tenant(actor: Actor = Depends(get_current_actor)) -> Actor:
    if actor.role is not UserRole.TENANT:
        raise HTTPException(
            status_code=403, detail="Only tenants can perform this action"
        )
    return actor


async def require_manager(actor: Actor = Depends(get_current_actor)) -> Actor:
    if not actor.role.is_staff:
        raise HTTPException(
            status_code=403, detail="Only managers can perform this action"
        )
    return actor
