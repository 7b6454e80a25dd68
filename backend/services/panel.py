"""
Panel Controller - Message protocol between the chat panel and the bridge

Inbound messages arrive one at a time through handle(); replies are queued as
PanelEvents and drained by the SSE endpoint (or directly by tests).
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Protocol

from models.panel import InboundType, OutboundType, PanelEvent, PanelMessage
from services.backend_client import BackendClient
from services.errors import AuthenticationFailed, AuthenticationRequired, BackendError, LoginError
from services.formatter import format_response
from services.session import SessionGate

logger = logging.getLogger(__name__)

AUTH_REQUIRED_MESSAGE = "Authentication required. Please login first."
MAX_QUEUED_EVENTS = 100


class EditorActions(Protocol):
    """Editor-side effects requested from the panel's code block buttons"""

    async def copy(self, text: str) -> None: ...

    async def insert(self, text: str) -> None: ...


class QueuedEditorActions:
    """Forward copy/insert to the editor plugin as editorAction events"""

    def __init__(self, controller: "PanelController"):
        self.controller = controller

    async def copy(self, text: str) -> None:
        await self.controller.post(PanelEvent(type=OutboundType.EDITOR_ACTION, action="copy", text=text))

    async def insert(self, text: str) -> None:
        await self.controller.post(PanelEvent(type=OutboundType.EDITOR_ACTION, action="insert", text=text))


class PanelController:
    """Dispatch inbound panel messages and queue the outbound replies"""

    def __init__(
        self,
        gate: SessionGate,
        client: BackendClient,
        editor: EditorActions | None = None,
        max_queued: int = MAX_QUEUED_EVENTS,
    ):
        self.gate = gate
        self.client = client
        self.editor = editor or QueuedEditorActions(self)
        self.events: asyncio.Queue[PanelEvent] = asyncio.Queue(maxsize=max_queued)

    async def post(self, event: PanelEvent):
        """Queue an event; with no reader attached the oldest event is dropped"""
        if self.events.full():
            dropped = self.events.get_nowait()
            logger.debug("[PanelController] Queue full, dropping %s event", dropped.type)
        self.events.put_nowait(event)

    def drain(self) -> list[PanelEvent]:
        """Pop every queued event without waiting"""
        drained = []
        while not self.events.empty():
            drained.append(self.events.get_nowait())
        return drained

    async def stream(self) -> AsyncIterator[PanelEvent]:
        """Yield outbound events as they are posted"""
        while True:
            yield await self.events.get()

    async def handle(self, message: PanelMessage):
        try:
            kind = InboundType(message.type)
        except ValueError:
            logger.warning("[PanelController] Ignoring unknown message type: %s", message.type)
            return

        if kind == InboundType.LOGIN:
            await self._handle_login(message)
        elif kind == InboundType.SEND:
            await self._handle_send(message.text or "")
        elif kind == InboundType.COPY:
            await self.editor.copy(message.text or "")
        elif kind == InboundType.INSERT:
            await self.editor.insert(message.text or "")
        elif kind == InboundType.LOGOUT:
            self.gate.logout()
            await self.post(PanelEvent(type=OutboundType.SHOW_LOGIN))

    async def _handle_login(self, message: PanelMessage):
        try:
            user = await self.gate.login(message.username or "", message.password or "")
        except LoginError as e:
            await self.post(PanelEvent(type=OutboundType.LOGIN_ERROR, message=str(e)))
            return
        await self.post(PanelEvent(type=OutboundType.LOGIN_SUCCESS, user=user))

    async def _handle_send(self, text: str):
        if not self.gate.state.is_authenticated:
            await self._prompt_login(AUTH_REQUIRED_MESSAGE)
            return

        try:
            reply = await self.client.query_chat(text)
        except (AuthenticationRequired, AuthenticationFailed) as e:
            await self._prompt_login(str(e))
            return
        except BackendError as e:
            logger.error("[PanelController] Chat request failed: %s", e)
            await self.post(PanelEvent(type=OutboundType.ERROR, text=f"Backend error: {e}"))
            return

        await self.post(PanelEvent(type=OutboundType.ASSISTANT, text=format_response(reply)))

    async def _prompt_login(self, message: str):
        await self.post(PanelEvent(type=OutboundType.ERROR, text=message))
        await self.post(PanelEvent(type=OutboundType.SHOW_LOGIN))
