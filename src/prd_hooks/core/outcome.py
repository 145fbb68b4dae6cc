"""
Result types shared by both hooks.

Hook functions return a ``HookOutcome`` plus the console lines to print; the
mapping to a process exit code happens only in the CLI entry points.
"""
# [CTX:PBI-1:1-1:OUTCOME]

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class HookOutcome(Enum):
    """Outcome of a single hook run."""
    SUCCESS = "success"                    # Checks passed
    NOT_APPLICABLE = "not_applicable"      # Nothing to check
    ADVISORY = "advisory"                  # Mismatch reported, run not failed
    VALIDATION_ERROR = "validation_error"  # Document violates required shape
    IO_ERROR = "io_error"                  # Document missing or unparseable

    @property
    def exit_code(self) -> int:
        """Process exit code for this outcome."""
        if self in (HookOutcome.VALIDATION_ERROR, HookOutcome.IO_ERROR):
            return 1
        return 0


@dataclass
class ValidationFailure:
    """
    First schema violation found in a document.

    Attributes:
        field: Name of the offending field (``<root>`` for the document itself)
        message: Human-readable description of the problem
        story_index: 1-based position of the story, None for document-level failures
        story_id: The story's id when known
    """
    field: str
    message: str
    story_index: int | None = None
    story_id: Any = None

    def describe(self, filename: str = "prd.json") -> str:
        """Render the failure as a console diagnostic."""
        if self.story_index is None:
            return f"❌ Error: {self.message.format(filename=filename)}"
        if self.story_id is None:
            return f"❌ Error: Story {self.story_index} {self.message}"
        return f"❌ Error: Story {self.story_index} ({self.story_id}): {self.message}"


@dataclass
class HookResult:
    """
    Outcome of a hook run together with what it wants printed.

    Attributes:
        outcome: Result classification
        stdout: Lines for standard output
        stderr: Lines for standard error
        failure: Validation failure, when the outcome is VALIDATION_ERROR
    """
    outcome: HookOutcome
    stdout: list[str] = field(default_factory=list)
    stderr: list[str] = field(default_factory=list)
    failure: ValidationFailure | None = None

    @property
    def exit_code(self) -> int:
        return self.outcome.exit_code
