"""
Agent dispatcher.

Resolves a routing label against the registry (unknown labels go to the
default agent) and runs one completion with the chosen agent's settings.
"""
import logging

from ..completion import CompletionService, ServiceError
from .prompts import render_turn
from .registry import AgentRegistry
from .schemas import CompletedResponse, DegradedResponse, DispatchResult

logger = logging.getLogger(__name__)

APOLOGY_RESPONSE = "I apologize, but I encountered an error processing your request."


class AgentDispatcher:
    """Runs the agent selected by a routing label."""

    def __init__(self, registry: AgentRegistry, service: CompletionService):
        self.registry = registry
        self.service = service

    async def dispatch(self, label: str, user_input: str) -> DispatchResult:
        """
        Dispatch sanitized input to the agent for `label`.

        Never raises on service failure: the outcome is a DegradedResponse
        carrying the fixed apology text.
        """
        agent, did_fallback = self.registry.resolve(label)
        if did_fallback:
            logger.warning(f"Unknown agent: {label!r}, using {agent.name} agent")

        logger.info(f"Processing with {agent.name} agent")
        prompt = render_turn(agent.instructions, user_input)
        try:
            text = await self.service.complete(agent.model, agent.temperature, prompt)
        except ServiceError as exc:
            logger.error(f"Error with {agent.name} agent: {exc}", exc_info=True)
            return DispatchResult(
                agent=agent,
                outcome=DegradedResponse(text=APOLOGY_RESPONSE, reason=str(exc)),
                did_fallback=did_fallback,
            )

        return DispatchResult(
            agent=agent,
            outcome=CompletedResponse(text=text),
            did_fallback=did_fallback,
        )
