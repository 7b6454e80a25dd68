"""Routers module - FastAPI route handlers"""

from . import auth, chat, completion, config, hover, panel

__all__ = ["auth", "chat", "completion", "config", "hover", "panel"]
