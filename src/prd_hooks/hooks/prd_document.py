"""
prd.json document validator.
[CTX:PBI-1:1-3:PRD]

Validates the document named by ``$PRD_FILE_PATH`` or the first argument.
Any other file name is ignored so the hook can be wired to every file write.
Exit code 0 means valid or not applicable, 1 means invalid or unreadable.
"""
import logging
import os
import sys
import time
from collections.abc import Mapping
from pathlib import Path

from prd_hooks.core.config import (
    DEFAULT_DOCUMENT_FILENAME,
    DEFAULT_PATH_ENV_VAR,
    DocumentConfig,
    load_config,
)
from prd_hooks.core.errors import (
    ConfigValidationError,
    DocumentFormatError,
    DocumentNotFoundError,
    DocumentReadError,
)
from prd_hooks.core.outcome import HookOutcome, HookResult
from prd_hooks.core.prd import load_document, validate_document
from prd_hooks.core.telemetry import create_event, get_recorder
from prd_hooks.hooks._cli import base_parser, configure_logging, emit

logger = logging.getLogger(__name__)

HOOK_NAME = "prd_document"


def resolve_document_path(
    environ: Mapping[str, str],
    arg_path: str | None,
    env_var: str = DEFAULT_PATH_ENV_VAR,
) -> str | None:
    """The environment variable wins over the argument; empty values count as unset."""
    return environ.get(env_var) or arg_path or None


def is_applicable(path: str | None, filename: str = DEFAULT_DOCUMENT_FILENAME) -> bool:
    """True when the final path segment is the document file name."""
    if not path:
        return False
    return Path(path).name == filename


def validate_prd_file(path: str | None, config: DocumentConfig | None = None) -> HookResult:
    """
    Validate the document at ``path``.

    Args:
        path: Resolved document path, or None when nothing was supplied
        config: Expected file name

    Returns:
        HookResult; NOT_APPLICABLE for any other file, IO_ERROR when the file is
        missing, unreadable or not JSON, VALIDATION_ERROR on the first schema violation
    """
    config = config or DocumentConfig()
    start = time.perf_counter()
    filename = config.filename
    failure = None

    if not is_applicable(path, filename):
        logger.debug("Skipping %r, not a %s file", path, filename)
        result = HookResult(HookOutcome.NOT_APPLICABLE)
    else:
        try:
            document = load_document(path)
        except DocumentNotFoundError:
            result = HookResult(
                HookOutcome.IO_ERROR,
                stderr=[f"❌ Error: {filename} not found at {path}"],
            )
        except DocumentReadError as e:
            result = HookResult(
                HookOutcome.IO_ERROR,
                stderr=[f"❌ Error: {filename} could not be read at {path}: {e.detail}"],
            )
        except DocumentFormatError as e:
            result = HookResult(
                HookOutcome.IO_ERROR,
                stderr=[f"❌ Error: {filename} is not valid JSON: {e.detail}"],
            )
        else:
            failure = validate_document(document)
            if failure is not None:
                result = HookResult(
                    HookOutcome.VALIDATION_ERROR,
                    stderr=[failure.describe(filename)],
                    failure=failure,
                )
            else:
                count = len(document["userStories"])
                result = HookResult(
                    HookOutcome.SUCCESS,
                    stdout=[f"✓ {filename} is valid ({count} user stories)"],
                )

    elapsed_ms = (time.perf_counter() - start) * 1000
    get_recorder().record(
        create_event(
            HOOK_NAME,
            str(path or ""),
            result.outcome,
            field=failure.field if failure else None,
            story_index=failure.story_index if failure else None,
            elapsed_ms=elapsed_ms,
        )
    )
    return result


def main(argv: list[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    """Entry point for ``validate-prd``."""
    environ = os.environ if environ is None else environ
    parser = base_parser("validate-prd", "Validate the shape of a prd.json document.")
    parser.add_argument("path", nargs="?", help="document path (used when the env var is unset)")
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(args.config, environ=environ)
    except ConfigValidationError as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        return 1

    path = resolve_document_path(environ, args.path, config.document.path_env_var)
    return emit(validate_prd_file(path, config.document))


if __name__ == "__main__":
    sys.exit(main())
