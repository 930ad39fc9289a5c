"""DTOs shared by the application services and command handlers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ActionResult(BaseModel):
    """Outcome of a user action, with the reply to show them."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str = ""

    @classmethod
    def ok(cls, message: str = "") -> ActionResult:
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, message: str) -> ActionResult:
        return cls(success=False, message=message)
