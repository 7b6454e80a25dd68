"""Completion API endpoints

Completions must never interrupt editing: every failure here ends in an empty
result rather than an error response. Code generation is user-initiated and
does report a missing session.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from models.completion import (
    CompletionItem,
    CompletionRequest,
    CompletionResponse,
    GenerateCodeRequest,
    GenerateCodeResponse,
    InlineCompletionRequest,
    InlineCompletionResponse,
    Suggestion,
    SuggestionKind,
)
from services.bridge import Bridge, get_bridge
from services.config_manager import ConfigManager
from services.errors import BackendError
from services.suggestion_parser import parse_suggestions

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_DETAIL = "DevAlley AI suggestion"
MIN_WORD_LENGTH = 2


def build_completion_prompt(request: CompletionRequest, max_suggestions: int) -> str:
    """Build prompt asking for a JSON array of completions"""
    return f"""Provide {max_suggestions} code completions for the following context:

Language: {request.language}
File: {request.file_name}
Context:
{request.context_text}

Current word being typed: "{request.current_word}"
Current line: "{request.current_line}"

Please provide completions as JSON array with format:
[{{"text": "completion", "detail": "description", "kind": "function|variable|class|method|property|snippet"}}]

Only return the JSON array, no other text."""


def build_inline_prompt(request: InlineCompletionRequest) -> str:
    """Build prompt for a single continuation at the cursor"""
    return f"""Complete this {request.language} code:

Context:
{request.text_before_cursor}|CURSOR|{request.text_after_cursor}

Provide a single completion that continues from the cursor position. Only return the completion text, nothing else."""


def build_generate_prompt(request: GenerateCodeRequest) -> str:
    if request.selection:
        return f"Generate code based on this comment or description: {request.selection}"
    return request.description


def to_completion_item(suggestion: Suggestion, index: int) -> CompletionItem:
    """Editor-facing item; index fixes the sort order to the backend's ranking"""
    return CompletionItem(
        label=suggestion.text,
        kind=SuggestionKind.from_raw(suggestion.kind),
        detail=suggestion.detail or DEFAULT_DETAIL,
        documentation=suggestion.documentation,
        insert_text=suggestion.insert_text or suggestion.text,
        sort_text=f"0{index:02d}",
        filter_text=suggestion.text,
    )


@router.post("/suggestions", response_model=CompletionResponse)
async def completion_suggestions(
    request: CompletionRequest, bridge: Bridge = Depends(get_bridge)
) -> CompletionResponse:
    """Completion list for the cursor position"""
    config_manager = ConfigManager.get_instance()
    if not config_manager.completions_enabled() or not bridge.session.is_authenticated:
        return CompletionResponse()

    # Short words only complete on explicit invocation
    if len(request.current_word) < MIN_WORD_LENGTH and not request.explicit:
        return CompletionResponse()

    max_suggestions = config_manager.max_suggestions()
    prompt = build_completion_prompt(request, max_suggestions)

    try:
        response = await bridge.client.query_completion(prompt)
    except BackendError as e:
        logger.info("[Completion] Skipping suggestions: %s", e)
        return CompletionResponse()

    suggestions = parse_suggestions(response)[:max_suggestions]
    return CompletionResponse(
        suggestions=[to_completion_item(s, i) for i, s in enumerate(suggestions)]
    )


@router.post("/inline", response_model=InlineCompletionResponse)
async def inline_completion(
    request: InlineCompletionRequest, bridge: Bridge = Depends(get_bridge)
) -> InlineCompletionResponse:
    """Single ghost-text continuation"""
    if not ConfigManager.get_instance().completions_enabled() or not bridge.session.is_authenticated:
        return InlineCompletionResponse()

    try:
        response = await bridge.client.query_completion(build_inline_prompt(request))
    except BackendError as e:
        logger.info("[Completion] Skipping inline completion: %s", e)
        return InlineCompletionResponse()

    return InlineCompletionResponse(completion=response.strip())


@router.post("/generate", response_model=GenerateCodeResponse)
async def generate_code(
    request: GenerateCodeRequest, bridge: Bridge = Depends(get_bridge)
) -> GenerateCodeResponse:
    """Generate code from the selected comment or a typed description"""
    prompt = build_generate_prompt(request)
    if not prompt.strip():
        raise HTTPException(status_code=400, detail="Nothing to generate from")

    # Raises AuthenticationRequired (401) before any network call when logged out
    code = await bridge.client.query_completion(prompt)
    return GenerateCodeResponse(code=code)
