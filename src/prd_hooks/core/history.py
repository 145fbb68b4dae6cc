"""
Commit history sources.

This module defines the abstraction the commit message checker reads from,
with one implementation backed by ``git log`` and one backed by a
``commit-msg`` hook message file.
"""
# [CTX:PBI-1:1-2:HISTORY]

import logging
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from .errors import CommitHistoryError, NoCommitHistoryError

logger = logging.getLogger(__name__)

# git stderr fragments meaning "there is nothing to read yet"
_NO_HISTORY_MARKERS = (
    "not a git repository",
    "does not have any commits",
    "bad default revision",
    "unknown revision",
)


class CommitHistory(ABC):
    """Read-only access to the most recent commit message."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short description of where messages come from, used in telemetry."""
        pass

    @abstractmethod
    def latest_message(self) -> str:
        """
        Return the full text of the most recent commit message.

        Raises:
            NoCommitHistoryError: If there is no repository or no commits
            CommitHistoryError: If the message cannot be retrieved otherwise
        """
        pass


class GitCommitHistory(CommitHistory):
    """Reads the latest commit message with ``git log -1``."""

    def __init__(self, cwd: str | Path | None = None, git: str = "git"):
        self.cwd = cwd
        self.git = git

    @property
    def name(self) -> str:
        return "git"

    def latest_message(self) -> str:
        cmd = [self.git, "log", "-1", "--pretty=%B"]
        try:
            proc = subprocess.run(
                cmd,
                cwd=self.cwd,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise CommitHistoryError(f"could not run {self.git}: {e}") from e

        if proc.returncode != 0:
            stderr = proc.stderr.strip()
            if any(marker in stderr for marker in _NO_HISTORY_MARKERS):
                raise NoCommitHistoryError(stderr)
            raise CommitHistoryError(
                f"git log exited with {proc.returncode}: {stderr}"
            )

        return proc.stdout


class FileCommitMessage(CommitHistory):
    """
    Reads a commit message from a file, as passed to a ``commit-msg`` hook.

    Lines starting with ``#`` are git's template comments and are dropped.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    @property
    def name(self) -> str:
        return str(self.path)

    def latest_message(self) -> str:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise NoCommitHistoryError(f"message file not found: {self.path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise CommitHistoryError(f"could not read {self.path}: {e}") from e

        lines = [line for line in text.splitlines() if not line.startswith("#")]
        return "\n".join(lines)
