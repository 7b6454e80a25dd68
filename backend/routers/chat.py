"""Chat mode API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from models.chat import ChatRequest, ChatResponse
from services.bridge import Bridge, get_bridge
from services.formatter import format_reply

router = APIRouter()


@router.post("/message", response_model=ChatResponse)
async def chat_message(request: ChatRequest, bridge: Bridge = Depends(get_bridge)) -> ChatResponse:
    """Send a chat message and get the rendered reply"""
    response_content = await bridge.client.query_chat(request.message)
    html, code_blocks = format_reply(response_content)

    return ChatResponse(
        content=response_content,
        html=html,
        code_blocks=code_blocks,
    )
