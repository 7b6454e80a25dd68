"""Models module - Pydantic data models"""

from .chat import (
    ChatRequest,
    ChatResponse,
    CodeBlock,
    CodeBlockToken,
    InlineCodeToken,
    SegmentedText,
)
from .completion import (
    CompletionItem,
    CompletionRequest,
    CompletionResponse,
    GenerateCodeRequest,
    GenerateCodeResponse,
    HoverRequest,
    HoverResponse,
    InlineCompletionRequest,
    InlineCompletionResponse,
    Suggestion,
    SuggestionKind,
)
from .panel import InboundType, OutboundType, PanelEvent, PanelMessage
from .session import LoginRequest, LoginResponse, LoginResult, SessionStatus, UserInfo

__all__ = [
    # Chat models
    "ChatRequest",
    "ChatResponse",
    "CodeBlock",
    "CodeBlockToken",
    "InlineCodeToken",
    "SegmentedText",
    # Completion models
    "CompletionItem",
    "CompletionRequest",
    "CompletionResponse",
    "GenerateCodeRequest",
    "GenerateCodeResponse",
    "HoverRequest",
    "HoverResponse",
    "InlineCompletionRequest",
    "InlineCompletionResponse",
    "Suggestion",
    "SuggestionKind",
    # Panel models
    "InboundType",
    "OutboundType",
    "PanelEvent",
    "PanelMessage",
    # Session models
    "LoginRequest",
    "LoginResponse",
    "LoginResult",
    "SessionStatus",
    "UserInfo",
]
