from __future__ import annotations

import asyncio

from models.panel import OutboundType, PanelMessage
from services.bridge import Bridge
from services.panel import AUTH_REQUIRED_MESSAGE, PanelController
from tests.fakes import TEST_CONFIG, FakeTransport

LOGIN_OK = (200, {"success": True, "token": "tok", "user_id": 9, "email": "dev@example.com"})


class RecordingEditor:
    def __init__(self):
        self.copied: list[str] = []
        self.inserted: list[str] = []

    async def copy(self, text: str) -> None:
        self.copied.append(text)

    async def insert(self, text: str) -> None:
        self.inserted.append(text)


def run(bridge: Bridge, *messages: dict):
    async def _run():
        for message in messages:
            await bridge.panel.handle(PanelMessage(**message))
        return bridge.panel.drain()

    return asyncio.run(_run())


def test_send_while_logged_out_prompts_login(transport) -> None:
    bridge = Bridge(TEST_CONFIG, transport)

    events = run(bridge, {"type": "send", "text": "hi"})

    assert [e.type for e in events] == [OutboundType.ERROR, OutboundType.SHOW_LOGIN]
    assert events[0].text == AUTH_REQUIRED_MESSAGE
    assert transport.calls == []


def test_login_then_send_posts_formatted_reply(transport) -> None:
    transport.on("/api/login", LOGIN_OK)
    transport.on("/query_aatma", (200, {"response": "**Done**\n```py\nx = 1 < 2\n```"}))
    bridge = Bridge(TEST_CONFIG, transport)

    events = run(
        bridge,
        {"type": "login", "username": "me", "password": "pw"},
        {"type": "send", "text": "hi"},
    )

    assert [e.type for e in events] == [OutboundType.LOGIN_SUCCESS, OutboundType.ASSISTANT]
    assert events[0].user.id == 9
    assert "<strong>Done</strong>" in events[1].text
    assert "x = 1 &lt; 2" in events[1].text


def test_login_error_is_reported(transport) -> None:
    transport.on("/api/login", (200, {"success": False, "message": "Nope"}))
    bridge = Bridge(TEST_CONFIG, transport)

    events = run(bridge, {"type": "login", "username": "me", "password": "pw"})

    assert [(e.type, e.message) for e in events] == [(OutboundType.LOGIN_ERROR, "Nope")]


def test_rejected_token_logs_out_and_prompts_login(transport) -> None:
    transport.on("/api/login", LOGIN_OK)
    transport.on("/query_aatma", (401, "expired"))
    bridge = Bridge(TEST_CONFIG, transport)

    events = run(
        bridge,
        {"type": "login", "username": "me", "password": "pw"},
        {"type": "send", "text": "hi"},
    )

    assert [e.type for e in events] == [
        OutboundType.LOGIN_SUCCESS,
        OutboundType.ERROR,
        OutboundType.SHOW_LOGIN,
    ]
    assert not bridge.session.is_authenticated


def test_backend_failure_shows_error(transport) -> None:
    transport.on("/api/login", LOGIN_OK)
    transport.on("/query_aatma", (500, "boom"))
    bridge = Bridge(TEST_CONFIG, transport)

    events = run(
        bridge,
        {"type": "login", "username": "me", "password": "pw"},
        {"type": "send", "text": "hi"},
    )

    assert events[-1].type == OutboundType.ERROR
    assert events[-1].text == "Backend error: HTTP 500: Internal Server Error"
    assert bridge.session.is_authenticated


def test_copy_and_insert_default_to_editor_action_events(transport) -> None:
    bridge = Bridge(TEST_CONFIG, transport)

    events = run(bridge, {"type": "copy", "text": "a"}, {"type": "insert", "text": "b"})

    assert [(e.type, e.action, e.text) for e in events] == [
        (OutboundType.EDITOR_ACTION, "copy", "a"),
        (OutboundType.EDITOR_ACTION, "insert", "b"),
    ]


def test_copy_and_insert_reach_custom_editor(transport) -> None:
    editor = RecordingEditor()
    bridge = Bridge(TEST_CONFIG, transport, editor)

    events = run(bridge, {"type": "copy", "text": "a"}, {"type": "insert", "text": "b"})

    assert events == []
    assert editor.copied == ["a"]
    assert editor.inserted == ["b"]


def test_logout_clears_session(transport) -> None:
    transport.on("/api/login", LOGIN_OK)
    bridge = Bridge(TEST_CONFIG, transport)

    events = run(
        bridge,
        {"type": "login", "username": "me", "password": "pw"},
        {"type": "logout"},
    )

    assert [e.type for e in events] == [OutboundType.LOGIN_SUCCESS, OutboundType.SHOW_LOGIN]
    assert not bridge.session.is_authenticated


def test_unknown_message_is_ignored(transport) -> None:
    bridge = Bridge(TEST_CONFIG, transport)

    assert run(bridge, {"type": "dance"}) == []


def test_stream_yields_posted_events(transport) -> None:
    bridge = Bridge(TEST_CONFIG, transport)

    async def _run():
        await bridge.panel.handle(PanelMessage(type="logout"))
        stream = bridge.panel.stream()
        return await asyncio.wait_for(stream.__anext__(), timeout=1)

    assert asyncio.run(_run()).type == OutboundType.SHOW_LOGIN


def test_unread_events_are_capped_oldest_first(transport) -> None:
    bridge = Bridge(TEST_CONFIG, transport)
    panel = PanelController(bridge.gate, bridge.client, max_queued=3)

    async def _run():
        for text in "abcde":
            await panel.handle(PanelMessage(type="copy", text=text))
        return panel.drain()

    assert [e.text for e in asyncio.run(_run())] == ["c", "d", "e"]
