"""Outcome types threaded through each explanation step."""
from dataclasses import dataclass

GENERIC_FAILURE = "Failed to get explanation"
UPSTREAM_FAILURE = "Claude API error"
MISSING_API_KEY = "ANTHROPIC_API_KEY not configured"
METHOD_NOT_ALLOWED = "Method not allowed"


@dataclass(frozen=True)
class Explained:
    """The model's reply text."""

    explanation: str


@dataclass(frozen=True)
class Failed:
    """A failure already mapped to the status and message the caller sees."""

    status_code: int
    error: str

    @classmethod
    def generic(cls) -> "Failed":
        return cls(500, GENERIC_FAILURE)


ExplainResult = Explained | Failed
