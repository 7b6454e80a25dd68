"""
Response Formatter - Turn raw backend replies into chat panel markup

format_response() runs the full pass: segment the reply, escape the
placeholder-bearing prose, apply the markup rules to it, then restore the
escaped code. Nothing from the reply reaches the output unescaped.
"""

from __future__ import annotations

import html
import logging
import re

from models.chat import CodeBlock, CodeBlockToken, SegmentedText
from services.markup import transform
from services.segmenter import CODE_BLOCK_PREFIX, placeholder_pattern, segment

logger = logging.getLogger(__name__)


def escape_html(text: str) -> str:
    """Neutralize <, >, & and both quote characters"""
    return html.escape(text, quote=True)


def render_inline_code(content: str) -> str:
    return f'<span class="inline-code">{escape_html(content)}</span>'


def render_code_block(block: CodeBlockToken) -> str:
    """Code block with a language header and copy/insert controls"""
    return (
        '<div class="code-block">'
        '<div class="code-header">'
        f'<span class="code-language">{escape_html(block.language.upper())}</span>'
        '<div class="code-actions">'
        f"<button class=\"code-action-btn\" onclick=\"copyCode('{block.dom_id}')\" "
        'title="Copy code">Copy</button>'
        f"<button class=\"code-action-btn\" onclick=\"insertCode('{block.dom_id}')\" "
        'title="Insert">Insert</button>'
        "</div>"
        "</div>"
        f'<div class="code-content" id="{block.dom_id}">{escape_html(block.content)}</div>'
        "</div>"
    )


def restore(markup: str, segmented: SegmentedText) -> str:
    """Swap every placeholder in markup for its rendered code, in one pass"""
    blocks = {token.placeholder: token for token in segmented.code_blocks}
    inlines = {token.placeholder: token.content for token in segmented.inline_codes}
    consumed: set[str] = set()

    def _render(match: re.Match[str]) -> str:
        placeholder = match.group(0)
        if placeholder in consumed:
            return placeholder
        consumed.add(placeholder)
        if match.group(1) == CODE_BLOCK_PREFIX:
            return render_code_block(blocks[placeholder])
        return render_inline_code(inlines[placeholder])

    restored = placeholder_pattern(segmented.nonce).sub(_render, markup)

    missing = (set(blocks) | set(inlines)) - consumed
    if missing:
        logger.warning("[Formatter] %d placeholder(s) lost during markup pass", len(missing))
    return restored


def format_reply(raw: str) -> tuple[str, list[CodeBlock]]:
    """Render a raw reply and list its code blocks, from a single segmentation pass"""
    segmented = segment(raw)
    markup = restore(transform(escape_html(segmented.text)), segmented)
    code_blocks = [
        CodeBlock(language=token.language, code=token.content, dom_id=token.dom_id)
        for token in segmented.code_blocks
    ]
    return markup, code_blocks


def format_response(raw: str) -> str:
    """Render a raw reply as chat panel HTML"""
    return format_reply(raw)[0]
