"""
Base types for deterministic agent tools.
All tools are described by a ToolDescriptor and return either a result
model or a ToolError; they never raise on bad input.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Union

from pydantic import BaseModel


class ToolError(BaseModel):
    """Error returned by a tool that could not handle its input."""
    error: str
    original_input: str


ToolOutput = Union[BaseModel, ToolError]


@dataclass(frozen=True)
class ToolDescriptor:
    """Immutable description of a tool and the function that implements it."""
    name: str
    description: str
    parameters: Dict[str, Any]
    function: Callable[..., ToolOutput] = field(repr=False, compare=False)

    @property
    def required(self) -> List[str]:
        """Names of required parameters."""
        return list(self.parameters.get("required", []))

    def invoke(self, **arguments: Any) -> ToolOutput:
        """
        Call the tool with keyword arguments.

        Missing required arguments produce a ToolError rather than a TypeError.
        """
        missing = [name for name in self.required if name not in arguments]
        if missing:
            return ToolError(
                error=f"Missing required argument(s): {', '.join(missing)}",
                original_input=str(arguments),
            )
        return self.function(**arguments)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters,
        }
