"""
Agent registry.

Holds one immutable AgentDefinition per label. Built once at startup and
shared read-only by every request; it is never mutated afterwards.
"""
import logging
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..tools import ToolDescriptor, calculator_tool, text_formatter_tool, word_count_tool
from . import prompts

logger = logging.getLogger(__name__)


class RoutingLabel(str, Enum):
    """Closed set of labels the router is asked to produce."""
    MATH = "math"
    PROGRAMMING = "programming"
    GENERAL = "general"


DEFAULT_LABEL = RoutingLabel.GENERAL.value
ROUTER_AGENT = "router"


class AgentDefinition(BaseModel):
    """Configuration for one specialized agent."""

    name: str
    description: str = ""
    instructions: str
    model: str
    temperature: float = Field(..., ge=0.0, le=1.0)
    tools: Tuple[ToolDescriptor, ...] = ()
    routable: bool = True

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def tool_names(self) -> List[str]:
        return [tool.name for tool in self.tools]

    def has_tool(self, name: str) -> bool:
        return any(tool.name == name for tool in self.tools)

    def get_tool(self, name: str) -> Optional[ToolDescriptor]:
        return next((tool for tool in self.tools if tool.name == name), None)


class AgentRegistry(Mapping[str, AgentDefinition]):
    """Read-only label -> AgentDefinition mapping with a default agent."""

    def __init__(self, agents: List[AgentDefinition], default_agent: str = DEFAULT_LABEL):
        by_name: Dict[str, AgentDefinition] = {}
        for agent in agents:
            if agent.name in by_name:
                raise ValueError(f"Duplicate agent name: {agent.name}")
            by_name[agent.name] = agent

        if default_agent not in by_name:
            raise ValueError(f"Default agent '{default_agent}' is not registered")
        if not by_name[default_agent].routable:
            raise ValueError(f"Default agent '{default_agent}' must be routable")

        self._agents = MappingProxyType(by_name)
        self._default = default_agent

    def __getitem__(self, name: str) -> AgentDefinition:
        return self._agents[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._agents)

    def __len__(self) -> int:
        return len(self._agents)

    @property
    def default_agent(self) -> AgentDefinition:
        return self._agents[self._default]

    def routable_names(self) -> List[str]:
        """Names of agents a routing label may resolve to."""
        return [name for name, agent in self._agents.items() if agent.routable]

    def resolve(self, label: str) -> Tuple[AgentDefinition, bool]:
        """
        Resolve a routing label to an agent.

        Returns:
            (agent, did_fallback). Unknown or non-routable labels resolve to
            the default agent with did_fallback=True.
        """
        agent = self._agents.get(label)
        if agent is not None and agent.routable:
            return agent, False
        return self.default_agent, True


def build_default_registry(settings) -> AgentRegistry:
    """Create the router, math, programming and general agents."""
    agents = [
        AgentDefinition(
            name=ROUTER_AGENT,
            description="Routes requests to appropriate specialized agents",
            instructions=prompts.ROUTER_INSTRUCTIONS,
            model=settings.router_model,
            temperature=0.1,
            routable=False,
        ),
        AgentDefinition(
            name=RoutingLabel.MATH.value,
            description="Handles mathematical calculations and problems",
            instructions=prompts.MATH_INSTRUCTIONS,
            model=settings.math_model,
            temperature=0.1,
            tools=(calculator_tool,),
        ),
        AgentDefinition(
            name=RoutingLabel.PROGRAMMING.value,
            description="Handles software development and coding questions",
            instructions=prompts.PROGRAMMING_INSTRUCTIONS,
            model=settings.programming_model,
            temperature=0.3,
            tools=(text_formatter_tool, word_count_tool),
        ),
        AgentDefinition(
            name=RoutingLabel.GENERAL.value,
            description="Handles general knowledge and Q&A",
            instructions=prompts.GENERAL_INSTRUCTIONS,
            model=settings.general_model,
            temperature=0.7,
            tools=(word_count_tool, text_formatter_tool),
        ),
    ]
    registry = AgentRegistry(agents)
    logger.info(f"Agent registry initialized with agents: {list(registry)}")
    return registry
