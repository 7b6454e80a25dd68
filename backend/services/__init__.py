"""Services module - Business logic layer"""

from .backend_client import AiohttpTransport, BackendClient
from .bridge import Bridge
from .config_manager import ConfigManager
from .formatter import format_reply, format_response
from .panel import PanelController
from .session import SessionGate, SessionState
from .suggestion_parser import parse_suggestions

__all__ = [
    "AiohttpTransport",
    "BackendClient",
    "Bridge",
    "ConfigManager",
    "format_reply",
    "format_response",
    "PanelController",
    "SessionGate",
    "SessionState",
    "parse_suggestions",
]
