"""
Exception types raised by the hook core.

Schema violations are not exceptions; they are returned as
``ValidationFailure`` values (see ``outcome``).
"""
# [CTX:PBI-1:1-1:ERR]


class HookError(Exception):
    """Base class for all hook errors."""


class ConfigValidationError(HookError):
    """Raised when hook configuration cannot be loaded or is invalid."""


class DocumentNotFoundError(HookError):
    """Raised when the document path does not exist."""

    def __init__(self, path):
        super().__init__(f"document not found: {path}")
        self.path = path


class DocumentFormatError(HookError):
    """Raised when the document cannot be decoded or parsed as JSON."""

    def __init__(self, path, detail: str):
        super().__init__(f"invalid JSON in {path}: {detail}")
        self.path = path
        self.detail = detail


class CommitHistoryError(HookError):
    """Raised when the latest commit message cannot be retrieved."""


class NoCommitHistoryError(CommitHistoryError):
    """Raised when there is no repository or the repository has no commits."""


class DocumentReadError(HookError):
    """Raised when the document exists but cannot be read (directory, permissions)."""

    def __init__(self, path, detail: str):
        super().__init__(f"could not read {path}: {detail}")
        self.path = path
        self.detail = detail
