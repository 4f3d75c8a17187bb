"""
Text formatter tool: uppercase, lowercase, title case and reverse.
"""
import re
from typing import Callable, Dict, Union

from pydantic import BaseModel

from .base import ToolDescriptor, ToolError

_TITLE_WORD = re.compile(r"\w\S*")


class FormattedText(BaseModel):
    """Result of a formatting operation."""
    original: str
    formatted: str
    format: str


def _title(text: str) -> str:
    # Each run starting at a word character: first char upper, rest lower
    return _TITLE_WORD.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text)


FORMATTERS: Dict[str, Callable[[str], str]] = {
    "uppercase": str.upper,
    "lowercase": str.lower,
    "title": _title,
    "reverse": lambda text: text[::-1],
}


def format_text(text: str, format: str) -> Union[FormattedText, ToolError]:
    """Apply a named format to text."""
    formatter = FORMATTERS.get(format)
    if formatter is None:
        return ToolError(error="Invalid format type", original_input=text)
    return FormattedText(original=text, formatted=formatter(text), format=format)


text_formatter_tool = ToolDescriptor(
    name="format_text",
    description="Format text in various ways (uppercase, lowercase, title case, reverse)",
    parameters={
        "type": "object",
        "properties": {
            "text": {
                "type": "string",
                "description": "Text to format",
            },
            "format": {
                "type": "string",
                "enum": list(FORMATTERS),
                "description": "Format type to apply",
            },
        },
        "required": ["text", "format"],
    },
    function=format_text,
)
