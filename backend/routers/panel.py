"""Chat panel protocol endpoints"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sse_starlette.sse import EventSourceResponse

from models.panel import PanelMessage
from services.bridge import Bridge, get_bridge

router = APIRouter()


@router.post("/message")
async def panel_message(message: PanelMessage, bridge: Bridge = Depends(get_bridge)) -> dict:
    """Handle one inbound panel message; replies go out on /events"""
    await bridge.panel.handle(message)
    return {"status": "accepted"}


@router.get("/events")
async def panel_events(bridge: Bridge = Depends(get_bridge)):
    """Outbound panel messages as server-sent events"""

    async def event_generator():
        async for event in bridge.panel.stream():
            yield {"event": "message", "data": event.model_dump_json(exclude_none=True)}

    return EventSourceResponse(event_generator())
