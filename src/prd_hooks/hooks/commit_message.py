"""
Commit message format checker.
[CTX:PBI-1:1-2:COMMIT]

Checks the first line of the latest commit message against the configured
pattern (``feat: [US-<n>] - <title>`` by default). The check is advisory:
a mismatch prints a warning but never fails the calling workflow, and a
repository without history is silently skipped.
"""
import logging
import sys
import time

from prd_hooks.core.config import CommitMessageConfig, load_config
from prd_hooks.core.errors import (
    CommitHistoryError,
    ConfigValidationError,
    NoCommitHistoryError,
)
from prd_hooks.core.history import CommitHistory, FileCommitMessage, GitCommitHistory
from prd_hooks.core.outcome import HookOutcome, HookResult
from prd_hooks.core.telemetry import create_event, get_recorder
from prd_hooks.hooks._cli import base_parser, configure_logging, emit

logger = logging.getLogger(__name__)

HOOK_NAME = "commit_message"
SUCCESS_LINE = "✓ Commit message format is valid"


def first_line(message: str) -> str:
    """Return the first line of a commit message exactly as written."""
    lines = message.splitlines()
    return lines[0] if lines else ""


def matches_format(line: str, config: CommitMessageConfig | None = None) -> bool:
    """Check a subject line against the configured pattern, anchored to the whole line."""
    config = config or CommitMessageConfig()
    return config.compiled().fullmatch(line) is not None


def warning_lines(line: str, config: CommitMessageConfig) -> list[str]:
    return [
        "⚠️  Warning: Commit message doesn't match expected format",
        f"   Expected: {config.expected_format}",
        f"   Got: {line}",
    ]


def check_commit_message(
    history: CommitHistory,
    config: CommitMessageConfig | None = None,
) -> HookResult:
    """
    Check the latest commit message.

    Args:
        history: Where to read the latest message from
        config: Pattern and expected-format text

    Returns:
        HookResult with SUCCESS, ADVISORY or NOT_APPLICABLE; never a failing outcome
    """
    config = config or CommitMessageConfig()
    start = time.perf_counter()

    try:
        message = history.latest_message()
    except NoCommitHistoryError as e:
        logger.debug("No commit history to check: %s", e)
        result = HookResult(HookOutcome.NOT_APPLICABLE)
    except CommitHistoryError as e:
        logger.debug("Could not read commit history, skipping check: %s", e)
        result = HookResult(HookOutcome.NOT_APPLICABLE)
    else:
        line = first_line(message)
        if matches_format(line, config):
            result = HookResult(HookOutcome.SUCCESS, stdout=[SUCCESS_LINE])
        else:
            logger.debug("Subject %r does not match %s", line, config.pattern)
            result = HookResult(HookOutcome.ADVISORY, stdout=warning_lines(line, config))

    elapsed_ms = (time.perf_counter() - start) * 1000
    get_recorder().record(
        create_event(HOOK_NAME, history.name, result.outcome, elapsed_ms=elapsed_ms)
    )
    return result


def main(argv: list[str] | None = None) -> int:
    """Entry point for ``check-commit-message``; always returns 0."""
    parser = base_parser(
        "check-commit-message",
        "Warn when the latest commit message does not follow the story format.",
    )
    parser.add_argument(
        "--message-file",
        metavar="PATH",
        help="read the message from a commit-msg hook file instead of git history",
    )
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.config)
    except ConfigValidationError as e:
        print(f"⚠️  Warning: {e}", file=sys.stderr)
        return 0

    if args.message_file:
        history = FileCommitMessage(args.message_file)
    else:
        history = GitCommitHistory()

    emit(check_commit_message(history, config.commit_message))
    return 0


if __name__ == "__main__":
    sys.exit(main())
