"""
Agents module.

Registry of specialized agents, the router that picks one, the dispatcher
that runs it, and the tool selection engine that may rewrite its answer.
"""
from .registry import (
    DEFAULT_LABEL,
    ROUTER_AGENT,
    AgentDefinition,
    AgentRegistry,
    RoutingLabel,
    build_default_registry,
)
from .schemas import (
    AgentOutcome,
    CompletedResponse,
    DegradedResponse,
    DispatchResult,
    RoutingResult,
    ToolOutcome,
)
from .router import AgentRouter
from .dispatcher import APOLOGY_RESPONSE, AgentDispatcher
from .tool_selection import ToolSelector, extract_math_expression

__all__ = [
    "DEFAULT_LABEL",
    "ROUTER_AGENT",
    "AgentDefinition",
    "AgentRegistry",
    "RoutingLabel",
    "build_default_registry",
    "AgentOutcome",
    "CompletedResponse",
    "DegradedResponse",
    "DispatchResult",
    "RoutingResult",
    "ToolOutcome",
    "AgentRouter",
    "APOLOGY_RESPONSE",
    "AgentDispatcher",
    "ToolSelector",
    "extract_math_expression",
]
