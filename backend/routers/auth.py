"""Session API endpoints"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from models.session import LoginRequest, LoginResponse, SessionStatus
from services.bridge import Bridge, get_bridge

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, bridge: Bridge = Depends(get_bridge)) -> LoginResponse:
    """Log in against the backend; refusals surface as 401 with the reason"""
    user = await bridge.gate.login(request.username, request.password)
    return LoginResponse(user=user)


@router.post("/logout")
async def logout(bridge: Bridge = Depends(get_bridge)) -> dict:
    """Drop the session"""
    bridge.gate.logout()
    return {"success": True}


@router.get("/status", response_model=SessionStatus)
async def status(bridge: Bridge = Depends(get_bridge)) -> SessionStatus:
    """Current authentication state"""
    return SessionStatus(
        authenticated=bridge.session.is_authenticated,
        user=bridge.session.user_info,
    )
