"""
Word counter tool: counts words, characters and lines in text.
"""
from pydantic import BaseModel

from .base import ToolDescriptor

_PREVIEW_LENGTH = 50


class WordCountResult(BaseModel):
    """Text statistics."""
    words: int
    characters: int
    characters_no_spaces: int
    lines: int
    text: str  # preview of the analyzed text


def count_words(text: str) -> WordCountResult:
    """Count whitespace-delimited words, characters and newline-delimited lines."""
    preview = text[:_PREVIEW_LENGTH] + ("..." if len(text) > _PREVIEW_LENGTH else "")
    return WordCountResult(
        words=len(text.split()),
        characters=len(text),
        characters_no_spaces=len("".join(text.split())),
        lines=len(text.split("\n")),
        text=preview,
    )


word_count_tool = ToolDescriptor(
    name="count_words",
    description="Count words, characters, and lines in text",
    parameters={
        "type": "object",
        "properties": {
            "text": {
                "type": "string",
                "description": "Text to analyze",
            },
        },
        "required": ["text"],
    },
    function=count_words,
)
