"""
Request pipeline.

validate -> sanitize -> route -> dispatch -> tool selection -> output check
-> history. Every path ends in a string response; policy violations, service
failures, tool errors and unknown routes are all absorbed here.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from .agents import AgentDispatcher, AgentRegistry, AgentRouter, ToolSelector
from .completion import CompletionService
from .guardrails import Guardrails, ValidationAction, ValidationOutcome
from .memory import ConversationEntry, ConversationHistory

logger = logging.getLogger(__name__)

BLOCKED_RESPONSE = "Your input was blocked by our safety filters."


class PipelineResult(BaseModel):
    """Everything known about one processed message."""

    input: str
    sanitized_input: str = ""
    blocked: bool = False
    validation: ValidationOutcome
    route_label: Optional[str] = None
    agent_label: Optional[str] = None
    response: str
    tool_name: Optional[str] = None
    degraded: bool = False
    output_warning: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class AgentPipeline:
    """Wires guardrails, router, dispatcher and tool selection together."""

    def __init__(
        self,
        registry: AgentRegistry,
        service: CompletionService,
        guardrails: Optional[Guardrails] = None,
        truncate_long_input: bool = False,
    ):
        self.registry = registry
        self.guardrails = guardrails or Guardrails()
        self.router = AgentRouter(registry, service)
        self.dispatcher = AgentDispatcher(registry, service)
        self.tool_selector = ToolSelector()
        self.truncate_long_input = truncate_long_input

    def _check_input(self, raw_input: str):
        """Validate input, truncating once if allowed. Returns (outcome, text)."""
        validation = self.guardrails.validate_input(raw_input)
        if validation.action == ValidationAction.TRUNCATE and self.truncate_long_input:
            text = self.guardrails.truncate_input(raw_input)
            logger.info(f"Input truncated to {len(text)} characters")
            return self.guardrails.validate_input(text), text
        return validation, raw_input

    async def process(
        self,
        raw_input: str,
        history: Optional[ConversationHistory] = None,
    ) -> PipelineResult:
        """
        Process one user message end to end.

        Blocked input never reaches the completion service and is not
        recorded in history.
        """
        validation, text = self._check_input(raw_input)
        if not validation.valid:
            logger.info(f"Input blocked: {validation.reason}")
            return PipelineResult(
                input=raw_input,
                blocked=True,
                validation=validation,
                response=BLOCKED_RESPONSE,
            )

        sanitized = self.guardrails.sanitize_input(text)

        routing = await self.router.route(sanitized)
        dispatch = await self.dispatcher.dispatch(routing.label, sanitized)
        agent = dispatch.agent

        tool_outcome = self.tool_selector.maybe_apply_tool(agent, sanitized, dispatch.response)
        if tool_outcome.tool_name:
            logger.info(f"Tool {tool_outcome.tool_name} applied for {agent.name} agent")

        output_check = self.guardrails.validate_output(tool_outcome.response, agent.name)
        output_warning = None
        if not output_check.valid:
            output_warning = output_check.reason
            logger.warning(f"Output validation warning: {output_check.reason}")

        result = PipelineResult(
            input=raw_input,
            sanitized_input=sanitized,
            validation=validation,
            route_label=routing.label,
            agent_label=agent.name,
            response=tool_outcome.response,
            tool_name=tool_outcome.tool_name,
            degraded=routing.degraded or dispatch.degraded,
            output_warning=output_warning,
        )

        if history is not None:
            history.append(
                ConversationEntry(
                    input=raw_input,
                    agent_label=agent.name,
                    route_label=routing.label,
                    response=result.response,
                    timestamp=result.timestamp,
                )
            )

        return result
