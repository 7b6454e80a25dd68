"""
Session Gate - Authentication state for the bridge

A SessionState is created once per bridge and handed by reference to the
BackendClient. It is written only by SessionGate.login/logout and by the client
when the backend rejects the held token.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from models.session import UserInfo
from services.errors import AuthenticationRequired, BackendError, LoginError

if TYPE_CHECKING:
    from services.backend_client import BackendClient

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS_MESSAGE = "Please enter both username and password"
INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
CONNECTION_FAILED_MESSAGE = "Connection failed. Please check if auth server is reachable."


def _as_text(value: Any) -> str | None:
    """Backend fields are opaque; keep them as text, empty as None"""
    if value is None or value == "":
        return None
    return str(value)


class SessionState:
    """Token and user identity; both present or both absent"""

    def __init__(self):
        self._auth_token: str | None = None
        self._user_info: UserInfo | None = None

    @property
    def auth_token(self) -> str | None:
        return self._auth_token

    @property
    def user_info(self) -> UserInfo | None:
        return self._user_info

    @property
    def is_authenticated(self) -> bool:
        return self._auth_token is not None

    def establish(self, token: str, user_info: UserInfo):
        if not token or user_info is None:
            raise ValueError("A session needs both a token and user info")
        self._auth_token = token
        self._user_info = user_info

    def clear(self):
        self._auth_token = None
        self._user_info = None

    def require(self):
        """Raise AuthenticationRequired unless logged in"""
        if not self.is_authenticated:
            raise AuthenticationRequired()


class SessionGate:
    """Login/logout transitions on top of a SessionState"""

    def __init__(self, client: "BackendClient"):
        self.client = client

    @property
    def state(self) -> SessionState:
        return self.client.session

    async def login(self, username: str, password: str) -> UserInfo:
        """Authenticate against the backend; raises LoginError on any refusal"""
        if not username or not password:
            raise LoginError(MISSING_CREDENTIALS_MESSAGE)

        logger.info("[SessionGate] Attempting login for: %s", username)
        try:
            result = await self.client.login(username, password)
        except BackendError as e:
            logger.error("[SessionGate] Login error: %s", e)
            raise LoginError(CONNECTION_FAILED_MESSAGE) from e

        message = _as_text(result.message)
        if not result.success:
            logger.info("[SessionGate] Login failed: %s", message)
            raise LoginError(message or INVALID_CREDENTIALS_MESSAGE)

        token = _as_text(result.token) or _as_text(result.access_token)
        if not token:
            if result.user_id is None:
                logger.warning("[SessionGate] Login reply carried neither token nor user id")
                raise LoginError(INVALID_CREDENTIALS_MESSAGE)
            token = f"user_{result.user_id}"
        user_info = UserInfo(
            id=result.user_id,
            email=_as_text(result.email),
            conversation_id=result.conversation_id,
        )
        self.state.establish(token, user_info)
        logger.info("[SessionGate] Login successful for: %s", username)
        return user_info

    def logout(self):
        self.state.clear()
        logger.info("[SessionGate] Logged out")
