"""Errors raised by the backend API client."""
from typing import Any, Dict, Optional

# Flags the backend may attach to a rejected request
HAS_VACATIONS = "hasVacations"
CANNOT_DELETE_SELF = "cannotDeleteSelf"
KNOWN_FLAGS = (HAS_VACATIONS, CANNOT_DELETE_SELF)


class ApiError(Exception):
    """
    A backend operation did not succeed.

    Any non-success status collapses to the operation's generic message.
    Structured business-rule flags found in the response body are kept in
    `flags` so the caller can branch on them.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        flags: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.flags = flags or {}

    @property
    def has_vacations(self) -> bool:
        return bool(self.flags.get(HAS_VACATIONS))

    @property
    def cannot_delete_self(self) -> bool:
        return bool(self.flags.get(CANNOT_DELETE_SELF))

    def __repr__(self) -> str:
        return f"<ApiError(message='{self.message}', status_code={self.status_code}, flags={self.flags})>"


class NotAuthenticatedError(ApiError):
    """An authenticated operation was called without a session."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, status_code=401)


def extract_flags(body: Any) -> Dict[str, Any]:
    """
    Pick the recognised flags out of a JSON error body.

    Flags are looked up at the top level and inside a `detail` object.
    """
    if not isinstance(body, dict):
        return {}
    sources = [body]
    if isinstance(body.get("detail"), dict):
        sources.append(body["detail"])
    flags = {}
    for source in sources:
        for flag in KNOWN_FLAGS:
            if flag in source:
                flags[flag] = source[flag]
    return flags
