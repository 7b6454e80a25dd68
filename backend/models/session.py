"""Session and login data models"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Credentials submitted by the user"""

    username: str = ""
    password: str = ""


class LoginResult(BaseModel):
    """Reply of the backend /api/login endpoint"""

    success: bool = False
    message: Any = None
    user_id: Any = None
    email: Any = None
    conversation_id: Any = None
    token: Any = None
    access_token: Any = None


class UserInfo(BaseModel):
    """Identity of the logged-in user"""

    id: Any = None
    email: str | None = None
    conversation_id: Any = None


class SessionStatus(BaseModel):
    """Response for session status queries"""

    authenticated: bool
    user: UserInfo | None = None


class LoginResponse(BaseModel):
    """Response for a successful login"""

    success: bool = True
    user: UserInfo
