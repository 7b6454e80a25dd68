"""
Text Segmenter - Lift fenced code blocks and inline code spans out of reply text

Each formatting pass gets its own random nonce, so placeholders can't be
produced by (or collide with) anything in the reply itself. Placeholders are
made of letters and digits only, which keeps them opaque to the markup rules.
"""

from __future__ import annotations

import re
import secrets

from models.chat import CodeBlockToken, InlineCodeToken, SegmentedText

CODE_BLOCK_PREFIX = "DACODE"
INLINE_CODE_PREFIX = "DAINLINE"

FENCE_PATTERN = re.compile(r"```(\w*)\s*([\s\S]*?)```")
INLINE_PATTERN = re.compile(r"`([^`\n]+)`")


def new_nonce(text: str) -> str:
    """Random hex nonce guaranteed not to occur in text"""
    while True:
        nonce = secrets.token_hex(6)
        if nonce not in text:
            return nonce


def make_placeholder(prefix: str, nonce: str, index: int) -> str:
    return f"{prefix}{nonce}N{index}Z"


def placeholder_pattern(nonce: str) -> re.Pattern[str]:
    """Pattern matching any placeholder minted with this nonce"""
    prefixes = f"{CODE_BLOCK_PREFIX}|{INLINE_CODE_PREFIX}"
    return re.compile(rf"({prefixes}){re.escape(nonce)}N(\d+)Z")


def segment(raw: str, nonce: str | None = None) -> SegmentedText:
    """Replace fenced regions, then inline spans, with placeholders"""
    nonce = nonce or new_nonce(raw)
    code_blocks: list[CodeBlockToken] = []
    inline_codes: list[InlineCodeToken] = []

    def _lift_block(match: re.Match[str]) -> str:
        index = len(code_blocks)
        placeholder = make_placeholder(CODE_BLOCK_PREFIX, nonce, index)
        code_blocks.append(
            CodeBlockToken(
                placeholder=placeholder,
                language=(match.group(1) or "text").lower(),
                content=match.group(2).strip(),
                dom_id=f"code_{nonce}_{index}",
            )
        )
        return placeholder

    def _lift_inline(match: re.Match[str]) -> str:
        placeholder = make_placeholder(INLINE_CODE_PREFIX, nonce, len(inline_codes))
        inline_codes.append(InlineCodeToken(placeholder=placeholder, content=match.group(1)))
        return placeholder

    # Fences must go first so their backticks are never read as inline spans
    stripped = FENCE_PATTERN.sub(_lift_block, raw)
    stripped = INLINE_PATTERN.sub(_lift_inline, stripped)

    return SegmentedText(
        text=stripped, nonce=nonce, code_blocks=code_blocks, inline_codes=inline_codes
    )
