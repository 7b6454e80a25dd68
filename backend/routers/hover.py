"""Hover explanation endpoint"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from models.completion import HoverRequest, HoverResponse
from services.bridge import Bridge, get_bridge
from services.formatter import format_response

logger = logging.getLogger(__name__)

router = APIRouter()

MIN_WORD_LENGTH = 3


def build_hover_prompt(request: HoverRequest) -> str:
    return f"""Explain this {request.language} code element: "{request.word}"

Context:
{request.context_text}

Provide a brief explanation of what this is and how it's used. Keep it concise."""


@router.post("", response_model=HoverResponse)
async def explain_symbol(request: HoverRequest, bridge: Bridge = Depends(get_bridge)) -> HoverResponse:
    """Explain the word under the cursor; empty response when there is nothing to show"""
    if len(request.word) < MIN_WORD_LENGTH or not bridge.session.is_authenticated:
        return HoverResponse()

    response = await bridge.client.explain(build_hover_prompt(request))

    if not response.strip():
        logger.info("[Hover] Empty explanation for: %s", request.word)
        return HoverResponse()

    markdown = f"**{request.word}** (DevAlley AI)\n\n{response}"
    return HoverResponse(markdown=markdown, html=format_response(markdown))
