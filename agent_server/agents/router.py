"""
Agent router.

Single completion call with the router agent's instructions; the trimmed,
lower-cased reply is the routing label. No validation happens here: labels
outside the closed set are passed through and resolved by the dispatcher.
"""
import logging

from ..completion import CompletionService, ServiceError
from .prompts import render_turn
from .registry import DEFAULT_LABEL, ROUTER_AGENT, AgentRegistry
from .schemas import RoutingResult

logger = logging.getLogger(__name__)


class AgentRouter:
    """Classifies user input into a routing label via the completion service."""

    def __init__(self, registry: AgentRegistry, service: CompletionService):
        self.agent = registry[ROUTER_AGENT]
        self.service = service

    def _render_prompt(self, user_input: str) -> str:
        return render_turn(self.agent.instructions, user_input)

    async def route(self, user_input: str) -> RoutingResult:
        """
        Route sanitized user input.

        On service failure the default label is returned with degraded=True;
        nothing is raised to the caller and nothing is retried.
        """
        prompt = self._render_prompt(user_input)
        try:
            raw_output = await self.service.complete(
                self.agent.model, self.agent.temperature, prompt
            )
        except ServiceError as exc:
            logger.error(f"Routing failed, defaulting to '{DEFAULT_LABEL}': {exc}", exc_info=True)
            return RoutingResult(label=DEFAULT_LABEL, degraded=True, reason=str(exc))

        label = raw_output.strip().lower()
        logger.info(f"Router decision: {label!r}")
        return RoutingResult(label=label)
