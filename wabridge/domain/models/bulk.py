"""
Bulk dispatch models.

A bulk request is an ordered list of SendRequest items. Dispatching it yields
a BulkResult whose two sequences partition the input indices: every index
lands in exactly one of ``results`` or ``errors``, and each sequence keeps
the input order.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from wabridge.core.config.settings import settings
from wabridge.domain.enums import RecipientKind


class SendRequest(BaseModel):
    """One item of a bulk send."""

    model_config = ConfigDict(frozen=True)

    jid: str = Field(..., min_length=1, description="Recipient number or jid")
    type: RecipientKind = Field(
        RecipientKind.INDIVIDUAL, description="Resolve as individual (number) or group"
    )
    delay: int = Field(
        default_factory=lambda: settings.bulk_default_delay_ms,
        ge=0,
        description="Milliseconds to wait before sending this item (ignored for the first item)",
    )
    message: dict[str, Any] = Field(..., min_length=1, description="Message content")
    options: dict[str, Any] | None = Field(None, description="Client send options")


class DispatchOutcome(BaseModel):
    """Per-item outcome, identified by the item's position in the request."""

    index: int = Field(..., ge=0)


class DispatchSuccess(DispatchOutcome):
    result: Any = None


class DispatchFailure(DispatchOutcome):
    error: str


class BulkResult(BaseModel):
    """Aggregated outcome of one bulk dispatch."""

    results: list[DispatchSuccess] = Field(default_factory=list)
    errors: list[DispatchFailure] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results) + len(self.errors)

    def all_failed(self) -> bool:
        """True when there was at least one item and none of them succeeded."""
        return self.total != 0 and len(self.errors) == self.total
