"""
Backend Client - Authenticated requests to the remote inference backend

Two endpoints serve prompts: the general-purpose chat endpoint and the
completion endpoint. Chat and hover errors propagate to the caller; completion
requests fall back once to the chat endpoint and then degrade to an empty reply.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable

import aiohttp
from pydantic import ValidationError

from models.session import LoginResult
from services.errors import (
    AuthenticationFailed,
    AuthenticationRequired,
    BackendError,
    HttpFailure,
    NetworkFailure,
)
from services.session import SessionState

logger = logging.getLogger(__name__)

CHAT_ENDPOINT = "/query_aatma"
COMPLETION_ENDPOINT = "/query_completion"
LOGIN_ENDPOINT = "/api/login"
USER_AGENT = "DevAlley-Bridge"

# (url, payload, headers) -> (status, reason, body text)
Transport = Callable[[str, dict[str, Any], dict[str, str]], Awaitable[tuple[int, str, str]]]


class AiohttpTransport:
    """Default transport: one aiohttp session per request"""

    def __init__(self, timeout_seconds: int = 60):
        self.timeout_seconds = timeout_seconds

    async def __call__(
        self, url: str, payload: dict[str, Any], headers: dict[str, str]
    ) -> tuple[int, str, str]:
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(url, json=payload, headers=headers) as response:
                return response.status, response.reason or "", await response.text()


class BackendClient:
    """Client for the chat/completion backend, bound to one session"""

    def __init__(
        self,
        config: dict[str, Any],
        session: SessionState,
        transport: Transport | None = None,
    ):
        cfg = config.get("backend", {})
        self.base_url = cfg.get("baseUrl", "").rstrip("/")
        self.completion_timeout = cfg.get("completionTimeout", 5000)
        self.session = session
        self.transport = transport or AiohttpTransport(cfg.get("requestTimeoutSeconds", 60))

    # ========== Low-level ==========

    def _headers(self) -> dict[str, str]:
        """Common headers, with credentials when a token is held"""
        headers = {"Content-Type": "application/json", "User-Agent": USER_AGENT}
        token = self.session.auth_token
        if token:
            headers["Authorization"] = f"Bearer {token}"
            headers["X-Auth-Token"] = token
        return headers

    async def _post(
        self, endpoint: str, payload: dict[str, Any], headers: dict[str, str]
    ) -> tuple[int, str, str]:
        """POST through the transport, mapping transport errors to NetworkFailure"""
        url = f"{self.base_url}{endpoint}"
        try:
            return await self.transport(url, payload, headers)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            logger.warning("[BackendClient] Request to %s failed: %s", endpoint, e)
            raise NetworkFailure(f"Backend unreachable: {e}") from e

    @staticmethod
    def _decode(endpoint: str, status: int, body: str) -> dict[str, Any]:
        try:
            data = json.loads(body) if body else {}
        except json.JSONDecodeError as e:
            raise HttpFailure(status, f"invalid JSON from {endpoint}") from e
        if not isinstance(data, dict):
            raise HttpFailure(status, f"unexpected payload from {endpoint}")
        return data

    async def send(self, endpoint: str, payload: dict[str, Any]) -> str:
        """Issue an authenticated call and return the reply text"""
        self.session.require()

        status, reason, body = await self._post(endpoint, payload, self._headers())

        if status in (401, 403):
            logger.warning("[BackendClient] %s rejected credentials (HTTP %d)", endpoint, status)
            self.session.clear()
            raise AuthenticationFailed()
        if not 200 <= status < 300:
            logger.warning("[BackendClient] %s returned HTTP %d: %s", endpoint, status, reason)
            raise HttpFailure(status, reason)

        response = self._decode(endpoint, status, body).get("response")
        if response is None:
            return ""
        return response if isinstance(response, str) else str(response)

    # ========== Endpoints ==========

    async def login(self, username: str, password: str) -> LoginResult:
        """Submit credentials; no session is required or consulted"""
        headers = {"Content-Type": "application/json"}
        status, reason, body = await self._post(
            LOGIN_ENDPOINT, {"username": username, "password": password}, headers
        )
        if not 200 <= status < 300:
            raise HttpFailure(status, reason)
        try:
            return LoginResult.model_validate(self._decode(LOGIN_ENDPOINT, status, body))
        except ValidationError as e:
            raise HttpFailure(status, f"malformed reply from {LOGIN_ENDPOINT}") from e

    async def query_chat(self, message: str) -> str:
        """Chat query; errors propagate"""
        logger.info("[BackendClient] Chat request (%d chars)", len(message))
        return await self.send(CHAT_ENDPOINT, {"message": message})

    async def query_completion(self, prompt: str) -> str:
        """Completion query with one fallback to the chat endpoint; never raises BackendError
        except AuthenticationRequired, which is checked before any network call."""
        self.session.require()

        try:
            return await self.send(
                COMPLETION_ENDPOINT,
                {"message": prompt, "type": "completion", "timeout": self.completion_timeout},
            )
        except BackendError as e:
            logger.warning("[BackendClient] Completion request failed, trying fallback: %s", e)

        try:
            return await self.send(CHAT_ENDPOINT, {"message": prompt})
        except BackendError as e:
            logger.warning("[BackendClient] Fallback request also failed: %s", e)
            return ""

    async def explain(self, prompt: str) -> str:
        """Hover explanation from the completion endpoint; errors propagate, no fallback"""
        logger.info("[BackendClient] Hover request (%d chars)", len(prompt))
        return await self.send(
            COMPLETION_ENDPOINT,
            {"message": prompt, "type": "completion", "timeout": self.completion_timeout},
        )
