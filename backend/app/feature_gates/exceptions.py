"""Errors raised when premium gates, quota checks or action parsing reject a request."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from fastapi import HTTPException, status


@dataclass
class FeatureGateError(Exception):
    """Represents an actionable gating failure surfaced to API callers."""

    code: str
    message: str
    status_code: int = status.HTTP_403_FORBIDDEN
    detail: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        base_detail: Dict[str, Any] = {"error": self.code, "message": self.message}
        if self.detail:
            base_detail.update(self.detail)
        object.__setattr__(self, "_payload", base_detail)
        super().__init__(self.message)

    @property
    def payload(self) -> Mapping[str, Any]:
        """Serialized representation suitable for JSON responses."""

        return self._payload

    def to_http_exception(self) -> HTTPException:
        """Convert the domain error into a FastAPI HTTPException."""

        return HTTPException(status_code=self.status_code, detail=dict(self.payload))


class InvalidActionError(FeatureGateError):
    """Raised when a quota check is requested for an unknown action."""

    def __init__(self, action: object) -> None:
        message = "Action is required." if not action else f"Invalid action: {action!r}."
        super().__init__(
            code="invalid_action",
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"action": action},
        )
        self.action = action
