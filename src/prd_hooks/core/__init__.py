"""Core types shared by the workflow hooks."""

from prd_hooks.core.config import (
    CommitMessageConfig,
    DocumentConfig,
    HooksConfig,
    get_default_config,
    load_config,
    validate_config,
)
from prd_hooks.core.errors import (
    CommitHistoryError,
    ConfigValidationError,
    DocumentFormatError,
    DocumentNotFoundError,
    DocumentReadError,
    HookError,
    NoCommitHistoryError,
)
from prd_hooks.core.history import CommitHistory, FileCommitMessage, GitCommitHistory
from prd_hooks.core.outcome import HookOutcome, HookResult, ValidationFailure
from prd_hooks.core.prd import load_document, validate_document, validate_story

__all__ = [
    # config
    "CommitMessageConfig",
    "DocumentConfig",
    "HooksConfig",
    "get_default_config",
    "load_config",
    "validate_config",
    # errors
    "CommitHistoryError",
    "ConfigValidationError",
    "DocumentFormatError",
    "DocumentNotFoundError",
    "DocumentReadError",
    "HookError",
    "NoCommitHistoryError",
    # history
    "CommitHistory",
    "FileCommitMessage",
    "GitCommitHistory",
    # outcome
    "HookOutcome",
    "HookResult",
    "ValidationFailure",
    # prd
    "load_document",
    "validate_document",
    "validate_story",
]
