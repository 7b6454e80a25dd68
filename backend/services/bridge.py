"""
Bridge - The per-process set of session, client, gate and panel controller
"""

from __future__ import annotations

from typing import Any

from fastapi import Request

from services.backend_client import BackendClient, Transport
from services.panel import EditorActions, PanelController
from services.session import SessionGate, SessionState


class Bridge:
    """Wires one SessionState through the client, gate and panel"""

    def __init__(
        self,
        config: dict[str, Any],
        transport: Transport | None = None,
        editor: EditorActions | None = None,
    ):
        self.session = SessionState()
        self.client = BackendClient(config, self.session, transport)
        self.gate = SessionGate(self.client)
        self.panel = PanelController(self.gate, self.client, editor)

    def apply_config(self, config: dict[str, Any]):
        """Pick up backend settings changed at runtime"""
        cfg = config.get("backend", {})
        self.client.base_url = cfg.get("baseUrl", self.client.base_url).rstrip("/")
        self.client.completion_timeout = cfg.get("completionTimeout", self.client.completion_timeout)


def get_bridge(request: Request) -> Bridge:
    """FastAPI dependency returning the app's Bridge"""
    return request.app.state.bridge
