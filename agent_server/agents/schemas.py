"""
Pydantic models for routing and dispatch outcomes.

Failures of the completion service never surface as exceptions past the
router or dispatcher; they are reported as explicit degraded variants so
callers can log them while still returning a string to the user.
"""
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .registry import AgentDefinition


class RoutingResult(BaseModel):
    """Label produced by the router (not yet resolved against the registry)."""

    label: str
    degraded: bool = False
    reason: Optional[str] = None


class CompletedResponse(BaseModel):
    """The agent produced a response."""

    kind: Literal["ok"] = "ok"
    text: str


class DegradedResponse(BaseModel):
    """The completion service failed; text is a fixed fallback."""

    kind: Literal["degraded"] = "degraded"
    text: str
    reason: str


AgentOutcome = Union[CompletedResponse, DegradedResponse]


class DispatchResult(BaseModel):
    """Agent chosen for a label and what it produced."""

    agent: AgentDefinition
    outcome: AgentOutcome = Field(..., discriminator="kind")
    did_fallback: bool = False

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def response(self) -> str:
        return self.outcome.text

    @property
    def degraded(self) -> bool:
        return isinstance(self.outcome, DegradedResponse)


class ToolOutcome(BaseModel):
    """Final response after the tool selection engine has run."""

    response: str
    tool_name: Optional[str] = None
    error: Optional[str] = None
