"""Completion and hover data models"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, model_validator


class SuggestionKind(str, Enum):
    """Closed set of completion kinds understood by the editor"""

    FUNCTION = "function"
    METHOD = "method"
    VARIABLE = "variable"
    CLASS = "class"
    PROPERTY = "property"
    SNIPPET = "snippet"
    KEYWORD = "keyword"
    MODULE = "module"
    INTERFACE = "interface"
    TEXT = "text"

    @classmethod
    def from_raw(cls, value: Any) -> "SuggestionKind":
        """Map a backend-supplied kind to a member, case-insensitively"""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.TEXT


class Suggestion(BaseModel):
    """A normalized completion candidate"""

    text: str = ""
    kind: str = "text"  # As reported; normalized with SuggestionKind.from_raw
    detail: str = ""
    documentation: str = ""
    insert_text: str | None = None

    @model_validator(mode="after")
    def _default_insert_text(self) -> "Suggestion":
        if self.insert_text is None:
            self.insert_text = self.text
        return self


class CompletionRequest(BaseModel):
    """Document context around the cursor for a completion request"""

    language: str = "plaintext"
    file_name: str = ""
    context_text: str = ""
    current_word: str = ""
    current_line: str = ""
    explicit: bool = False  # True when the user invoked completion by hand


class CompletionItem(BaseModel):
    """Editor-facing completion item"""

    label: str
    kind: SuggestionKind
    detail: str
    documentation: str = ""
    insert_text: str
    sort_text: str
    filter_text: str


class CompletionResponse(BaseModel):
    """Response with completion items"""

    suggestions: list[CompletionItem] = []


class InlineCompletionRequest(BaseModel):
    """Request for a single inline (ghost text) completion"""

    language: str = "plaintext"
    text_before_cursor: str = ""
    text_after_cursor: str = ""


class InlineCompletionResponse(BaseModel):
    """Inline completion text, empty when nothing was produced"""

    completion: str = ""


class GenerateCodeRequest(BaseModel):
    """Request to generate code from a description or selected comment"""

    description: str = ""
    selection: str | None = None


class GenerateCodeResponse(BaseModel):
    """Generated code to insert or replace the selection with"""

    code: str = ""


class HoverRequest(BaseModel):
    """Request to explain the code element under the cursor"""

    language: str = "plaintext"
    word: str
    context_text: str = ""


class HoverResponse(BaseModel):
    """Hover card content; markdown is None when there is nothing to show"""

    markdown: str | None = None
    html: str | None = None
