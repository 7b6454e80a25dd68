"""
Error taxonomy for the backend request layer and session gate
"""

from __future__ import annotations


class BackendError(Exception):
    """Base class for failures talking to the inference backend"""


class AuthenticationRequired(BackendError):
    """A protected operation was attempted without a session"""

    def __init__(self, message: str = "Authentication required. Please log in first."):
        super().__init__(message)


class AuthenticationFailed(BackendError):
    """The backend rejected the held credential (401/403)"""

    def __init__(self, message: str = "Authentication failed. Please log in again."):
        super().__init__(message)


class HttpFailure(BackendError):
    """Non-success HTTP status other than an auth rejection"""

    def __init__(self, status: int, reason: str = ""):
        self.status = status
        self.reason = reason
        super().__init__(f"HTTP {status}: {reason}".rstrip(": "))


class NetworkFailure(BackendError):
    """Transport-level error reaching the backend"""


class LoginError(Exception):
    """Login was refused; the message is shown to the user as-is"""
