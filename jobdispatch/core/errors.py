"""Error types for the job dispatch domain.

Services raise these exceptions instead of building HTTP responses. Each error
carries the HTTP status it maps to and optional extra fields that are merged
into the JSON error body by the registered exception handler.
"""

from __future__ import annotations

from typing import Any, Optional


class DispatchError(Exception):
    """Base error for all job dispatch exceptions."""

    status_code: int = 400

    def __init__(self, detail: str, *, extra: Optional[dict[str, Any]] = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.extra = extra or {}


class InvalidRequestError(DispatchError):
    """Raised when a request is well-formed but cannot be honoured."""

    status_code = 400


class InvalidTransitionError(InvalidRequestError):
    """Raised when a job card status change is not allowed from its current status."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(
            f"Cannot change job card status from '{current}' to '{requested}'",
            extra={"current_status": current, "requested_status": requested},
        )


class AuthenticationError(DispatchError):
    """Raised when credentials or bearer tokens are missing or invalid."""

    status_code = 401


class PermissionDeniedError(DispatchError):
    """Raised when the caller is authenticated but not allowed to act."""

    status_code = 403


class NotFoundError(DispatchError):
    """Raised when a requested record does not exist or is not visible to the caller."""

    status_code = 404


class ConflictError(DispatchError):
    """Raised when a write would violate a uniqueness or state constraint."""

    status_code = 409
