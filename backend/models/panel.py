"""Chat panel message protocol models"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from .session import UserInfo


class InboundType(str, Enum):
    """Messages the panel sends to the bridge"""

    LOGIN = "login"
    SEND = "send"
    COPY = "copy"
    INSERT = "insert"
    LOGOUT = "logout"


class OutboundType(str, Enum):
    """Messages the bridge posts to the panel"""

    LOGIN_SUCCESS = "loginSuccess"
    LOGIN_ERROR = "loginError"
    SHOW_LOGIN = "showLogin"
    ASSISTANT = "assistant"
    ERROR = "error"
    EDITOR_ACTION = "editorAction"  # copy/insert forwarded to the editor plugin


class PanelMessage(BaseModel):
    """Inbound panel message; type is kept as a string so unknown kinds can be ignored"""

    type: str
    username: str | None = None
    password: str | None = None
    text: str | None = None


class PanelEvent(BaseModel):
    """Outbound panel message"""

    type: OutboundType
    user: UserInfo | None = None
    message: str | None = None
    text: str | None = None
    action: str | None = None  # "copy" or "insert" for editorAction events
