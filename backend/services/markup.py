"""
Markup Transformer - Ordered markdown-to-HTML rules for segmented reply text

The rules run in the order of MARKUP_RULES and the order is load-bearing:
bold must run before italic, and list grouping must run after both kinds of
list item have been tagged. Input is expected to be HTML-escaped already,
with its code regions replaced by placeholders; placeholders are plain
alphanumerics and pass through escaping and every rule untouched.
"""

from __future__ import annotations

import re
from typing import Callable

Rule = Callable[[str], str]

_H3 = re.compile(r"^### (.*)$", re.MULTILINE)
_H2 = re.compile(r"^## (.*)$", re.MULTILINE)
_H1 = re.compile(r"^# (.*)$", re.MULTILINE)
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"\*([^*\n]+)\*")
_BULLET_ITEM = re.compile(r"^[ \t]*[-*+] (.*)$", re.MULTILINE)
_NUMBERED_ITEM = re.compile(r"^[ \t]*\d+\. (.*)$", re.MULTILINE)
_LIST_RUN = re.compile(r"<li>.*?</li>(?:\s*<li>.*?</li>)*")
_LIST_ITEM = re.compile(r"<li>.*?</li>")
_BLOCKQUOTE = re.compile(r"^&gt; (.*)$", re.MULTILINE)
_RULE_LINE = re.compile(r"^[-*]{3,}$", re.MULTILINE)
_EMPTY_PARAGRAPH = re.compile(r"<p>\s*</p>")


def render_headings(text: str) -> str:
    # Deepest first so "### x" is never read as "# ## x"
    text = _H3.sub(r"<h3>\1</h3>", text)
    text = _H2.sub(r"<h2>\1</h2>", text)
    return _H1.sub(r"<h1>\1</h1>", text)


def render_bold(text: str) -> str:
    return _BOLD.sub(r"<strong>\1</strong>", text)


def render_italic(text: str) -> str:
    return _ITALIC.sub(r"<em>\1</em>", text)


def render_list_items(text: str) -> str:
    text = _BULLET_ITEM.sub(r"<li>\1</li>", text)
    return _NUMBERED_ITEM.sub(r"<li>\1</li>", text)


def group_list_items(text: str) -> str:
    """Wrap each maximal run of <li> tags in a single <ul>"""

    def _wrap(match: re.Match[str]) -> str:
        return "<ul>" + "".join(_LIST_ITEM.findall(match.group(0))) + "</ul>"

    return _LIST_RUN.sub(_wrap, text)


def render_blockquotes(text: str) -> str:
    return _BLOCKQUOTE.sub(r"<blockquote>\1</blockquote>", text)


def render_horizontal_rules(text: str) -> str:
    return _RULE_LINE.sub("<hr>", text)


def fold_paragraphs(text: str) -> str:
    text = "<p>" + text.replace("\n\n", "</p><p>") + "</p>"
    text = text.replace("\n", "<br>")
    return _EMPTY_PARAGRAPH.sub("", text)


MARKUP_RULES: tuple[Rule, ...] = (
    render_headings,
    render_bold,
    render_italic,
    render_list_items,
    group_list_items,
    render_blockquotes,
    render_horizontal_rules,
    fold_paragraphs,
)


def transform(text: str, rules: tuple[Rule, ...] = MARKUP_RULES) -> str:
    """Apply the markup rules to text in order"""
    for rule in rules:
        text = rule(text)
    return text
