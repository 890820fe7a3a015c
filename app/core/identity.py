"""
Who is calling. Sign-in, sign-up and sign-out live in the external identity
provider; this service only needs the current user's id for each request.
"""
import logging
from dataclasses import dataclass
from typing import Protocol

from fastapi import Depends, HTTPException, Request, status

from app.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionContext:
    user_id: str


class IdentityProvider(Protocol):
    def current_user_id(self, request: Request) -> str | None: ...


class HeaderIdentityProvider:
    """
    Reads the user id from a header set by a trusted gateway that already
    authenticated the request. Never expose this without that gateway.
    """

    def __init__(self, user_id_header: str = "X-User-ID") -> None:
        self.user_id_header = user_id_header

    def current_user_id(self, request: Request) -> str | None:
        user_id = request.headers.get(self.user_id_header, "").strip()
        return user_id or None


identity_provider: IdentityProvider = HeaderIdentityProvider(settings.USER_ID_HEADER)


def get_identity_provider() -> IdentityProvider:
    return identity_provider


def optional_session(
    request: Request, provider: IdentityProvider = Depends(get_identity_provider)
) -> SessionContext | None:
    user_id = provider.current_user_id(request)
    return SessionContext(user_id=user_id) if user_id else None


def require_session(
    session: SessionContext | None = Depends(optional_session),
) -> SessionContext:
    if session is None:
        # clients send the user to the login page on 401
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Login required"
        )
    return session
