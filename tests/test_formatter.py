from __future__ import annotations

import html
import re

from services import segmenter
from services.formatter import escape_html, format_reply, format_response, restore
from services.segmenter import segment

CODE_CONTENT = re.compile(r'<div class="code-content" id="[^"]+">(.*?)</div>', re.DOTALL)
INLINE_CONTENT = re.compile(r'<span class="inline-code">(.*?)</span>')


def test_escape_neutralizes_markup_and_quotes() -> None:
    assert escape_html("<a href=\"x\">&'") == "&lt;a href=&quot;x&quot;&gt;&amp;&#x27;"


def test_plain_text_is_unchanged_apart_from_wrapping() -> None:
    assert format_response("hello world") == "<p>hello world</p>"


def test_inline_code_is_escaped_not_raw_inserted() -> None:
    out = format_response("Use `<b>` here")

    assert '<span class="inline-code">&lt;b&gt;</span>' in out
    assert "<b>" not in out


def test_code_block_is_escaped_and_skips_markdown_rules() -> None:
    out = format_response("```Python\nif a < b: print('**x**')\n# not a heading\n```")

    assert '<span class="code-language">PYTHON</span>' in out
    assert "copyCode(" in out and "insertCode(" in out
    assert "if a &lt; b: print(&#x27;**x**&#x27;)" in out
    assert "<strong>" not in out
    assert "<h1>" not in out


def test_no_placeholder_leaks() -> None:
    out = format_response("# Title\n`a` **b** `c`\n```js\nx\n```\n- `d`")

    assert "DACODE" not in out
    assert "DAINLINE" not in out


def test_round_trip_preserves_code_content() -> None:
    raw = "one `in<1>` two\n```py\n  a = '<&>'\n\n  b = 2  \n```\nthree `in 2`\n```\n```"
    segmented = segment(raw)
    # Identity markup pass
    out = restore(segmented.text, segmented)

    assert [html.unescape(c) for c in CODE_CONTENT.findall(out)] == ["a = '<&>'\n\n  b = 2", ""]
    assert [html.unescape(c) for c in INLINE_CONTENT.findall(out)] == ["in<1>", "in 2"]


def test_blocks_keep_left_to_right_order() -> None:
    out = format_response("```\nAAA\n```\nmid\n```\nBBB\n```\nend\n```\nCCC\n```")

    assert out.index("AAA") < out.index("BBB") < out.index("CCC")
    assert CODE_CONTENT.findall(out) == ["AAA", "BBB", "CCC"]


def test_literal_placeholder_text_in_reply_is_left_alone(monkeypatch) -> None:
    candidates = iter(["abc", "def"])
    monkeypatch.setattr(segmenter.secrets, "token_hex", lambda n: next(candidates))

    out = format_response("DACODEabcN0Z\n```\nreal\n```")

    assert out.startswith("<p>DACODEabcN0Z<br>")
    assert CODE_CONTENT.findall(out) == ["real"]


def test_format_reply_lists_blocks_matching_rendered_ids() -> None:
    markup, blocks = format_reply("```sh\nls -la\n```\n```\nplain\n```")

    assert [(b.language, b.code) for b in blocks] == [("sh", "ls -la"), ("text", "plain")]
    for block in blocks:
        assert f'id="{block.dom_id}"' in markup
        assert f"copyCode('{block.dom_id}')" in markup


def test_rerender_is_stable_apart_from_dom_ids() -> None:
    raw = "## Result\n```python\nprint(1)\n```\nDone `ok`."

    def normalize(markup: str) -> str:
        return re.sub(r"code_[0-9a-f]+_", "code_X_", markup)

    first, second = format_response(raw), format_response(raw)
    assert normalize(first) == normalize(second)
    assert first != second


def test_html_in_prose_is_escaped() -> None:
    out = format_response('hi <img src=x onerror="alert(1)"> there\n<script>alert(2)</script>')

    assert "<img" not in out
    assert "<script>" not in out
    assert "&lt;img src=x onerror=&quot;alert(1)&quot;&gt;" in out
    assert "&lt;script&gt;alert(2)&lt;/script&gt;" in out


def test_blockquote_survives_escaping() -> None:
    assert format_response("> quoted **text**") == (
        "<p><blockquote>quoted <strong>text</strong></blockquote></p>"
    )
