"""
Unit tests for the commit message checker.
[CTX:PBI-1:1-2:TESTS]

Tests verify:
- Subject-line extraction and full-line pattern matching
- Advisory behaviour: mismatches warn but never fail
- Missing history is a silent no-op
- CLI wiring for --message-file
"""
import pytest

from prd_hooks.core.config import CommitMessageConfig
from prd_hooks.core.errors import CommitHistoryError, NoCommitHistoryError
from prd_hooks.core.history import CommitHistory
from prd_hooks.core.outcome import HookOutcome
from prd_hooks.hooks.commit_message import (
    SUCCESS_LINE,
    check_commit_message,
    first_line,
    main,
    matches_format,
)


class FakeHistory(CommitHistory):
    """In-memory commit history for tests."""

    def __init__(self, message=None, error=None):
        self.message = message
        self.error = error

    @property
    def name(self):
        return "fake"

    def latest_message(self):
        if self.error is not None:
            raise self.error
        return self.message


class TestFirstLine:
    """Tests for subject-line extraction."""

    def test_multi_line_message(self):
        assert first_line("feat: [US-1] - Title\n\nBody text\n") == "feat: [US-1] - Title"

    def test_trailing_whitespace_kept(self):
        assert first_line("feat: [US-1] - Title   \n") == "feat: [US-1] - Title   "

    def test_leading_blank_line_is_the_first_line(self):
        assert first_line("\nfeat: [US-1] - Title") == ""

    def test_spaces_after_separator_match(self):
        """Whitespace after the separator satisfies the title part of the pattern."""
        assert matches_format(first_line("feat: [US-1] -  \n"))

    def test_empty_message(self):
        assert first_line("") == ""


class TestMatchesFormat:
    """Tests for the default story commit pattern."""

    @pytest.mark.parametrize("line", [
        "feat: [US-001] - Add cart summary",
        "feat: [US-7] - x",
        "feat: [US-12345] - Story with [brackets] and: colons",
    ])
    def test_matching(self, line):
        assert matches_format(line)

    @pytest.mark.parametrize("line", [
        "fix: [US-001] - Wrong type",
        "feat: [US-] - Missing number",
        "feat: [US-ABC] - Letters",
        "feat: [US-\u0661\u0662] - Arabic-Indic digits",
        "feat: [US-\uff11] - Fullwidth digit",
        "feat: [US-001] - ",
        "feat: [US-001] -Title",
        "feat: [US-001]- Title",
        "Feat: [US-001] - Capitalised",
        " feat: [US-001] - Leading space",
        "",
    ])
    def test_not_matching(self, line):
        assert not matches_format(line)

    def test_custom_pattern_is_anchored(self):
        config = CommitMessageConfig(pattern=r"chore: .+")
        assert matches_format("chore: bump deps", config)
        assert not matches_format("wip chore: bump deps", config)


class TestCheckCommitMessage:
    """Tests for check_commit_message outcomes."""

    def test_valid_message(self):
        result = check_commit_message(FakeHistory("feat: [US-003] - Checkout page\n\nDetails"))

        assert result.outcome == HookOutcome.SUCCESS
        assert result.exit_code == 0
        assert result.stdout == [SUCCESS_LINE]

    def test_invalid_message_warns_without_failing(self):
        result = check_commit_message(FakeHistory("wip stuff\n"))

        assert result.outcome == HookOutcome.ADVISORY
        assert result.exit_code == 0
        assert len(result.stdout) > 1
        assert "Expected: feat: [US-XXX] - Story Title" in result.stdout[1]
        assert result.stdout[-1].endswith("Got: wip stuff")

    def test_only_first_line_is_matched(self):
        result = check_commit_message(FakeHistory("update\n\nfeat: [US-1] - Title"))
        assert result.outcome == HookOutcome.ADVISORY

    @pytest.mark.parametrize("error", [
        NoCommitHistoryError("fatal: not a git repository"),
        CommitHistoryError("could not run git"),
    ])
    def test_missing_history_is_silent(self, error):
        result = check_commit_message(FakeHistory(error=error))

        assert result.outcome == HookOutcome.NOT_APPLICABLE
        assert result.exit_code == 0
        assert result.stdout == [] and result.stderr == []

    def test_custom_expected_format_in_warning(self):
        config = CommitMessageConfig(pattern=r"chore: .+", expected_format="chore: <summary>")

        result = check_commit_message(FakeHistory("feat: [US-1] - Title"), config)

        assert "Expected: chore: <summary>" in result.stdout[1]

    def test_records_telemetry(self, recorder):
        check_commit_message(FakeHistory("nope"))

        events = recorder.get_events()
        assert len(events) == 1
        assert events[0].hook == "commit_message"
        assert events[0].target == "fake"
        assert events[0].outcome == "advisory"


class TestMain:
    """Tests for the check-commit-message entry point."""

    def test_message_file_valid(self, tmp_path, capsys):
        msg = tmp_path / "COMMIT_EDITMSG"
        msg.write_text("feat: [US-010] - Search\n# Please enter the commit message\n", encoding="utf-8")

        code = main(["--message-file", str(msg), "--config", str(tmp_path / "none.yml")])

        assert code == 0
        assert SUCCESS_LINE in capsys.readouterr().out

    def test_message_file_invalid_still_exits_0(self, tmp_path, capsys):
        msg = tmp_path / "COMMIT_EDITMSG"
        msg.write_text("quick fix\n", encoding="utf-8")

        code = main(["--message-file", str(msg), "--config", str(tmp_path / "none.yml")])

        out = capsys.readouterr().out
        assert code == 0
        assert "Warning" in out
        assert "Got: quick fix" in out

    def test_missing_message_file_is_silent(self, tmp_path, capsys):
        code = main(["--message-file", str(tmp_path / "absent"), "--config", str(tmp_path / "none.yml")])

        captured = capsys.readouterr()
        assert code == 0
        assert captured.out == "" and captured.err == ""

    def test_bad_config_never_fails(self, tmp_path, capsys):
        config_path = tmp_path / "hooks.yml"
        config_path.write_text("commit_message:\n  pattern: '('\n", encoding="utf-8")

        code = main(["--config", str(config_path)])

        assert code == 0
        assert "not a valid regex" in capsys.readouterr().err

    def test_unreadable_config_never_fails(self, tmp_path, capsys):
        config_path = tmp_path / "hooks.yml"
        config_path.write_bytes(b"commit_message:\n  expected_format: 'caf\xe9'\n")

        code = main(["--config", str(config_path)])

        assert code == 0
        assert "Could not read" in capsys.readouterr().err
