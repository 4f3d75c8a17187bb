"""
Input/output guardrails.

Stateless policy checks applied before routing (input) and after generation
(output). Input checks gate the pipeline; output checks are advisory and
only ever produce a warning.
"""
import logging
import re
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_MAX_INPUT_LENGTH = 1000

_ANGLE_BRACKETS = re.compile(r"[<>]")
_SCRIPT_SCHEME = re.compile(r"(?:java|vb)script:", re.IGNORECASE)


class ValidationAction(str, Enum):
    """What the caller should do with the checked text."""
    ALLOW = "allow"
    BLOCK = "block"
    TRUNCATE = "truncate"


class ValidationOutcome(BaseModel):
    """Result of a single guardrail check."""
    valid: bool
    reason: str
    action: ValidationAction = ValidationAction.ALLOW
    suggested_action: Optional[str] = None  # output checks only, e.g. "redirect"


class Guardrails:
    """Input validation, sanitization and output scope checks."""

    # Prompt-injection markers
    BLOCKED_PATTERNS: Tuple[str, ...] = (
        "hack",
        "exploit",
        "bypass",
        "jailbreak",
        "ignore instructions",
        "pretend",
        "roleplay",
        "act as",
        "simulate",
    )

    INAPPROPRIATE_CONTENT: Tuple[str, ...] = (
        "violence",
        "harmful",
        "illegal",
        "dangerous",
    )

    # Phrases that suggest an agent answered outside its declared scope
    SCOPE_VIOLATIONS: Dict[str, Tuple[str, ...]] = {
        "router": ("sorry", "i can help", "here is the answer"),
        "math": ("i am not", "cannot help with", "outside my expertise"),
        "programming": ("i am not", "cannot help with", "outside my expertise"),
        "general": (),
    }

    def __init__(self, max_input_length: int = DEFAULT_MAX_INPUT_LENGTH):
        self.max_input_length = max_input_length

    def validate_input(self, text: str) -> ValidationOutcome:
        """
        Check raw user input against the input policy.

        Checks run in order (blocked patterns, inappropriate content, length,
        emptiness) and the first failure wins. This never modifies the text.
        """
        lowered = text.lower()

        for pattern in self.BLOCKED_PATTERNS:
            if pattern in lowered:
                return ValidationOutcome(
                    valid=False,
                    reason=f'Input contains blocked pattern: "{pattern}"',
                    action=ValidationAction.BLOCK,
                )

        for content in self.INAPPROPRIATE_CONTENT:
            if content in lowered:
                return ValidationOutcome(
                    valid=False,
                    reason=f'Input contains inappropriate content: "{content}"',
                    action=ValidationAction.BLOCK,
                )

        if len(text) > self.max_input_length:
            return ValidationOutcome(
                valid=False,
                reason=f"Input too long (max {self.max_input_length} characters)",
                action=ValidationAction.TRUNCATE,
            )

        if not text.strip():
            return ValidationOutcome(
                valid=False,
                reason="Empty input not allowed",
                action=ValidationAction.BLOCK,
            )

        return ValidationOutcome(
            valid=True,
            reason="Input passed all validation checks",
            action=ValidationAction.ALLOW,
        )

    def sanitize_input(self, text: str) -> str:
        """Strip angle brackets and script-scheme prefixes, then trim."""
        cleaned = _ANGLE_BRACKETS.sub("", text)
        # Removing one scheme can expose another ("javajavascript:script:")
        while _SCRIPT_SCHEME.search(cleaned):
            cleaned = _SCRIPT_SCHEME.sub("", cleaned)
        return cleaned.strip()

    def truncate_input(self, text: str) -> str:
        """Cut text down to the maximum allowed length."""
        return text[: self.max_input_length]

    def scope_phrases(self, agent_label: str) -> List[str]:
        """Scope-violation phrases for an agent (empty for unknown agents)."""
        return list(self.SCOPE_VIOLATIONS.get(agent_label, ()))

    def validate_output(self, text: str, agent_label: str) -> ValidationOutcome:
        """
        Check whether an agent's response stays within its scope.

        Advisory only: the outcome never blocks the response, callers may log it.
        """
        lowered = text.lower()
        for phrase in self.scope_phrases(agent_label):
            if phrase in lowered:
                return ValidationOutcome(
                    valid=False,
                    reason=f'Agent exceeded scope: contains "{phrase}"',
                    action=ValidationAction.ALLOW,
                    suggested_action="redirect",
                )

        return ValidationOutcome(valid=True, reason="Output within expected scope")
