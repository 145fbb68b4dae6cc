"""
prd.json loading and shape validation.

A prd.json document describes a project, the branch it is built on and an
ordered list of user stories. Validation is a fixed sequence of checks that
stops at the first violation; the violation is returned as a
``ValidationFailure`` rather than raised.
"""
# [CTX:PBI-1:1-3:PRD]

import json
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

from .errors import DocumentFormatError, DocumentNotFoundError, DocumentReadError
from .outcome import ValidationFailure

logger = logging.getLogger(__name__)

REQUIRED_DOCUMENT_FIELDS = ("project", "branchName", "userStories")
REQUIRED_STORY_TEXT_FIELDS = ("title", "description", "acceptanceCriteria")

# A story check returns a (field, problem) pair on failure, None otherwise
StoryCheck = Callable[[dict[str, Any]], tuple[str, str] | None]


def is_missing(value: Any) -> bool:
    """A field counts as missing when absent, null or the empty string."""
    return value is None or value == ""


def is_number(value: Any) -> bool:
    """JSON numbers only; booleans are not numbers here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _reject_constant(name: str) -> Any:
    """NaN and Infinity are not JSON."""
    raise ValueError(f"{name} is not a valid JSON value")


def load_document(path: str | Path) -> Any:
    """
    Read a UTF-8 JSON document.

    Raises:
        DocumentNotFoundError: If the path does not exist
        DocumentReadError: If the path exists but cannot be read
        DocumentFormatError: If the content is not valid UTF-8 JSON
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise DocumentNotFoundError(path) from e
    except OSError as e:
        raise DocumentReadError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise DocumentFormatError(path, f"not UTF-8 encoded ({e.reason})") from e

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise DocumentFormatError(path, str(e)) from e


def _check_required(field_name: str) -> StoryCheck:
    def check(story):
        if is_missing(story.get(field_name)):
            return field_name, f"missing required field '{field_name}'"
        return None
    return check


def _check_criteria_is_list(story):
    if not isinstance(story["acceptanceCriteria"], list):
        return "acceptanceCriteria", "'acceptanceCriteria' must be an array"
    return None


def _check_criteria_not_empty(story):
    if len(story["acceptanceCriteria"]) == 0:
        return "acceptanceCriteria", "'acceptanceCriteria' must not be empty"
    return None


def _check_passes(story):
    if not isinstance(story.get("passes"), bool):
        return "passes", "'passes' must be a boolean"
    return None


def _check_priority(story):
    if not is_number(story.get("priority")):
        return "priority", "'priority' must be a number"
    return None


def _check_notes(story):
    if "notes" in story and not isinstance(story["notes"], str):
        return "notes", "'notes' must be a string"
    return None


# Order matters: each check may assume the ones before it passed.
STORY_CHECKS: tuple[StoryCheck, ...] = (
    *(_check_required(name) for name in REQUIRED_STORY_TEXT_FIELDS),
    _check_criteria_is_list,
    _check_criteria_not_empty,
    _check_passes,
    _check_priority,
    _check_notes,
)


def validate_story(story: Any, index: int) -> ValidationFailure | None:
    """
    Validate one story.

    Args:
        story: The decoded story value
        index: 1-based position of the story in ``userStories``

    Returns:
        The first failure found, or None if the story is valid
    """
    if not isinstance(story, dict):
        return ValidationFailure(
            field="userStories", message="must be an object", story_index=index
        )

    if is_missing(story.get("id")):
        return ValidationFailure(
            field="id", message="missing required field 'id'", story_index=index
        )

    story_id = story["id"]
    for check in STORY_CHECKS:
        problem = check(story)
        if problem is not None:
            field_name, message = problem
            return ValidationFailure(
                field=field_name,
                message=message,
                story_index=index,
                story_id=story_id,
            )
    return None


def iter_stories(document: dict[str, Any]) -> Iterator[tuple[int, Any]]:
    """Yield ``(position, story)`` pairs numbered from 1."""
    return enumerate(document["userStories"], start=1)


def validate_document(document: Any) -> ValidationFailure | None:
    """
    Validate a decoded prd.json document.

    Checks run in a fixed order and the first violation ends validation;
    later fields and stories are not examined.

    Returns:
        The first failure found, or None if the document is valid
    """
    if not isinstance(document, dict):
        return ValidationFailure(
            field="<root>", message="{filename} must contain a JSON object"
        )

    for field_name in REQUIRED_DOCUMENT_FIELDS:
        if is_missing(document.get(field_name)):
            return ValidationFailure(
                field=field_name,
                message=f"{{filename}} missing required field '{field_name}'",
            )

    if not isinstance(document["userStories"], list):
        return ValidationFailure(
            field="userStories", message="'userStories' must be an array"
        )

    for index, story in iter_stories(document):
        failure = validate_story(story, index)
        if failure is not None:
            logger.debug(
                "Story %d failed on field %s", failure.story_index, failure.field
            )
            return failure

    return None
