"""
Tool selection engine.

Decides, from keywords in the user's message, whether one of the agent's
tools should replace the generated response. Selection is heuristic and
order-sensitive: calculator, then word counter, then text formatter. At most
one tool runs per turn; when none applies the agent's response is returned
unchanged.
"""
import logging
import re
from typing import Dict, Optional, Tuple

from ..tools import FORMATTERS, ToolError
from .registry import AgentDefinition
from .schemas import ToolOutcome

logger = logging.getLogger(__name__)

# Gate: any of these means the turn may be tool-relevant
TOOL_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "calculate": ("calculate", "math", "compute", "+", "-", "*", "/", "sqrt"),
    "count_words": ("count", "words", "characters", "analyze text"),
    "format_text": ("format", "uppercase", "lowercase", "title", "reverse"),
}

# Per-tool triggers checked once the gate has passed
CALCULATOR_TRIGGERS: Tuple[str, ...] = ("calculate", "+", "-", "*", "/", "sqrt")
WORD_COUNT_TRIGGERS: Tuple[str, ...] = ("count", "words", "analyze")
FORMAT_NAMES: Tuple[str, ...] = tuple(FORMATTERS)

# Single binary operation only; "2 + 3 * 4" yields "2 + 3". ASCII digits only,
# matching what the calculator accepts.
MATH_EXPRESSION = re.compile(r"([0-9]+(?:\.[0-9]+)?\s*[+\-*/]\s*[0-9]+(?:\.[0-9]+)?)")
WORD_COUNT_PHRASES = re.compile(r"count words?|analyze", re.IGNORECASE)


def extract_math_expression(text: str) -> Optional[str]:
    """Return the first `number operator number` substring, if any."""
    match = MATH_EXPRESSION.search(text)
    return match.group(1) if match else None


def _contains_any(text: str, keywords: Tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


class ToolSelector:
    """Heuristic tool invocation for a single agent turn."""

    def should_use_tool(self, user_input: str) -> bool:
        lowered = user_input.lower()
        return any(_contains_any(lowered, keywords) for keywords in TOOL_KEYWORDS.values())

    def maybe_apply_tool(
        self,
        agent: AgentDefinition,
        user_input: str,
        raw_response: str,
    ) -> ToolOutcome:
        """
        Possibly rewrite the agent's response using one of its tools.

        Tool errors are embedded in the returned response, never raised.
        """
        if not agent.tools or not self.should_use_tool(user_input):
            return ToolOutcome(response=raw_response)

        lowered = user_input.lower()

        calculator = agent.get_tool("calculate")
        if calculator and _contains_any(lowered, CALCULATOR_TRIGGERS):
            expression = extract_math_expression(user_input)
            if expression:
                result = calculator.invoke(expression=expression)
                if isinstance(result, ToolError):
                    logger.warning(f"Calculator failed on {expression!r}: {result.error}")
                    return ToolOutcome(
                        response=f"I couldn't calculate {expression}: {result.error}",
                        tool_name=calculator.name,
                        error=result.error,
                    )
                return ToolOutcome(
                    response=f"I'll calculate that for you: {expression} = {result.result}",
                    tool_name=calculator.name,
                )
            logger.debug("Calculator keywords present but no expression found")

        word_counter = agent.get_tool("count_words")
        if word_counter and _contains_any(lowered, WORD_COUNT_TRIGGERS):
            text = WORD_COUNT_PHRASES.sub("", user_input).strip()
            if text:
                result = word_counter.invoke(text=text)
                if isinstance(result, ToolError):
                    return ToolOutcome(
                        response=f"I couldn't analyze that text: {result.error}",
                        tool_name=word_counter.name,
                        error=result.error,
                    )
                return ToolOutcome(
                    response=(
                        f"Text analysis: {result.words} words, "
                        f"{result.characters} characters, {result.lines} lines"
                    ),
                    tool_name=word_counter.name,
                )

        formatter = agent.get_tool("format_text")
        if formatter:
            fmt = next((name for name in FORMAT_NAMES if name in lowered), None)
            if fmt:
                text = re.sub(re.escape(fmt), "", user_input, flags=re.IGNORECASE).strip()
                if text:
                    result = formatter.invoke(text=text, format=fmt)
                    if isinstance(result, ToolError):
                        return ToolOutcome(
                            response=f"I couldn't format that text: {result.error}",
                            tool_name=formatter.name,
                            error=result.error,
                        )
                    return ToolOutcome(
                        response=f"Formatted text ({fmt}): {result.formatted}",
                        tool_name=formatter.name,
                    )

        return ToolOutcome(response=raw_response)
