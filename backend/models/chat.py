"""Chat mode data models"""

from __future__ import annotations

from pydantic import BaseModel


class ChatRequest(BaseModel):
    """Request for chat message"""

    message: str


class CodeBlock(BaseModel):
    """Extracted code block from response"""

    language: str
    code: str
    dom_id: str | None = None  # Element id the copy/insert buttons target


class ChatResponse(BaseModel):
    """Response for chat message"""

    content: str  # Raw reply text from the backend
    html: str  # Rendered markup for the chat panel
    code_blocks: list[CodeBlock] = []


class CodeBlockToken(BaseModel):
    """Fenced code region lifted out of a reply for one formatting pass"""

    placeholder: str
    language: str
    content: str
    dom_id: str


class InlineCodeToken(BaseModel):
    """Inline code span lifted out of a reply for one formatting pass"""

    placeholder: str
    content: str


class SegmentedText(BaseModel):
    """Reply text with code regions replaced by placeholders"""

    text: str
    nonce: str  # Shared by every placeholder minted in this pass
    code_blocks: list[CodeBlockToken] = []
    inline_codes: list[InlineCodeToken] = []
