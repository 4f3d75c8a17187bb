"""
Deterministic tools available to agents.

Tools are pure functions with a static description; agents declare which
subset they may use, and the tool selection engine decides when to call them.
"""
from typing import Dict, List, Optional

from .base import ToolDescriptor, ToolError, ToolOutput
from .calculator import CalculationResult, calculate, calculator_tool
from .text_formatter import FORMATTERS, FormattedText, format_text, text_formatter_tool
from .word_counter import WordCountResult, count_words, word_count_tool

TOOLS: Dict[str, ToolDescriptor] = {
    tool.name: tool
    for tool in (calculator_tool, word_count_tool, text_formatter_tool)
}


def get_tool(name: str) -> Optional[ToolDescriptor]:
    """Get a tool by name."""
    return TOOLS.get(name)


def list_tools() -> List[Dict[str, str]]:
    """Return available tools with brief descriptions."""
    return [{"name": tool.name, "description": tool.description} for tool in TOOLS.values()]


__all__ = [
    "ToolDescriptor",
    "ToolError",
    "ToolOutput",
    "CalculationResult",
    "WordCountResult",
    "FormattedText",
    "FORMATTERS",
    "calculate",
    "count_words",
    "format_text",
    "calculator_tool",
    "word_count_tool",
    "text_formatter_tool",
    "TOOLS",
    "get_tool",
    "list_tools",
]
