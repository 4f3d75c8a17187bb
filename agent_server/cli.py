"""
Interactive command-line assistant.

Commands: /trace, /history, /quit. The conversation history lives for the
duration of the process only.
"""
import asyncio
import logging
from typing import Callable, Optional

from .agents import build_default_registry
from .completion import CompletionService, OllamaCompletionService
from .config import settings
from .guardrails import Guardrails
from .memory import ConversationHistory
from .pipeline import AgentPipeline, PipelineResult

logger = logging.getLogger(__name__)

RESPONSE_PREVIEW = 100


class AgentCLI:
    """Single-session interactive surface over the agent pipeline."""

    def __init__(
        self,
        pipeline: AgentPipeline,
        output: Callable[[str], None] = print,
    ):
        self.pipeline = pipeline
        self.history = ConversationHistory()
        self.tracing_enabled = True
        self.output = output

    def toggle_tracing(self) -> None:
        self.tracing_enabled = not self.tracing_enabled
        self.output(f"Tracing {'enabled' if self.tracing_enabled else 'disabled'}")

    def format_history(self) -> str:
        lines = ["Conversation History:"]
        for index, entry in enumerate(self.history.entries(), start=1):
            preview = entry.response[:RESPONSE_PREVIEW]
            if len(entry.response) > RESPONSE_PREVIEW:
                preview += "..."
            lines.append(f"{index}. [{entry.agent_label.upper()}] {entry.input}")
            lines.append(f"   Response: {preview}")
        return "\n".join(lines)

    def _trace(self, result: PipelineResult) -> None:
        if not self.tracing_enabled:
            return
        if result.blocked:
            self.output(f"Input blocked: {result.validation.reason}")
            return
        self.output(f"Router decision: {result.route_label}")
        if result.route_label != result.agent_label:
            self.output(f"Unknown agent: {result.route_label}, using {result.agent_label} agent")
        if result.tool_name:
            self.output(f"Tool used: {result.tool_name}")
        if result.output_warning:
            self.output(f"Output validation warning: {result.output_warning}")

    async def process_input(self, user_input: str) -> str:
        result = await self.pipeline.process(user_input, history=self.history)
        self._trace(result)
        return result.response

    async def handle_line(self, line: str) -> bool:
        """Handle one line of input. Returns False when the session should end."""
        command = line.strip().lower()
        if command == "/quit":
            self.output("Goodbye!")
            return False
        if command == "/trace":
            self.toggle_tracing()
            return True
        if command == "/history":
            self.output(self.format_history())
            return True
        if line.strip():
            response = await self.process_input(line)
            self.output(f"\nAssistant: {response}\n")
        return True

    async def run(self, read_line: Callable[[str], str] = input) -> None:
        self.output("Multi-Agent CLI Assistant Started!")
        self.output("Commands: /trace, /history, /quit")
        self.output("Agents: Math, Programming, General Knowledge\n")

        while True:
            try:
                line = await asyncio.to_thread(read_line, "You: ")
            except EOFError:
                break
            if not await self.handle_line(line):
                break


def build_cli(service: Optional[CompletionService] = None) -> AgentCLI:
    """Create a CLI wired to the configured backend."""
    registry = build_default_registry(settings)
    if service is None:
        service = OllamaCompletionService(
            base_url=settings.llm_base_url,
            max_tokens=settings.llm_max_tokens,
        )
    pipeline = AgentPipeline(
        registry=registry,
        service=service,
        guardrails=Guardrails(max_input_length=settings.max_input_length),
        truncate_long_input=settings.truncate_long_input,
    )
    return AgentCLI(pipeline)


def main() -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(build_cli().run())


if __name__ == "__main__":
    main()
