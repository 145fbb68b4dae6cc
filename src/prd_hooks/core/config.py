"""
Configuration module for the workflow hooks.

This module provides configuration loading and validation for the commit
message format and the prd.json document location.
"""
# [CTX:PBI-1:1-1:CFG]

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigValidationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PRD_HOOKS_CONFIG"

DEFAULT_COMMIT_PATTERN = r"^feat: \[US-[0-9]+\] - .+$"
DEFAULT_EXPECTED_FORMAT = "feat: [US-XXX] - Story Title"
DEFAULT_DOCUMENT_FILENAME = "prd.json"
DEFAULT_PATH_ENV_VAR = "PRD_FILE_PATH"


@dataclass
class CommitMessageConfig:
    """Configuration for the commit message checker."""

    pattern: str = DEFAULT_COMMIT_PATTERN
    expected_format: str = DEFAULT_EXPECTED_FORMAT

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CommitMessageConfig":
        """Create CommitMessageConfig from dictionary."""
        return cls(
            pattern=data.get("pattern", DEFAULT_COMMIT_PATTERN),
            expected_format=data.get("expected_format", DEFAULT_EXPECTED_FORMAT),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"pattern": self.pattern, "expected_format": self.expected_format}

    def compiled(self) -> re.Pattern:
        """Return the compiled commit message pattern."""
        return re.compile(self.pattern)


@dataclass
class DocumentConfig:
    """Configuration for the prd.json document validator."""

    filename: str = DEFAULT_DOCUMENT_FILENAME
    path_env_var: str = DEFAULT_PATH_ENV_VAR

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DocumentConfig":
        """Create DocumentConfig from dictionary."""
        return cls(
            filename=data.get("filename", DEFAULT_DOCUMENT_FILENAME),
            path_env_var=data.get("path_env_var", DEFAULT_PATH_ENV_VAR),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"filename": self.filename, "path_env_var": self.path_env_var}


@dataclass
class HooksConfig:
    """Configuration for both hooks."""

    commit_message: CommitMessageConfig = field(default_factory=CommitMessageConfig)
    document: DocumentConfig = field(default_factory=DocumentConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HooksConfig":
        """Create HooksConfig from dictionary."""
        return cls(
            commit_message=CommitMessageConfig.from_dict(data.get("commit_message") or {}),
            document=DocumentConfig.from_dict(data.get("document") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "commit_message": self.commit_message.to_dict(),
            "document": self.document.to_dict(),
        }


def get_default_config() -> HooksConfig:
    """Return the built-in configuration."""
    return HooksConfig()


def default_config_path(environ: dict[str, str] | None = None) -> Path:
    """
    Locate the config file.

    The ``PRD_HOOKS_CONFIG`` environment variable wins; otherwise
    ``config/hooks.yml`` at the repository root is used.
    """
    environ = os.environ if environ is None else environ
    override = environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path(__file__).parents[3] / "config" / "hooks.yml"


def load_config(
    config_path: str | Path | None = None,
    environ: dict[str, str] | None = None,
) -> HooksConfig:
    """
    Load hook configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default location.
        environ: Environment used to resolve the default location.

    Returns:
        HooksConfig with both hook sections

    Raises:
        ConfigValidationError: If the file cannot be read, is invalid YAML or
            fails validation
    """
    if config_path is None:
        config_path = default_config_path(environ)
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        logger.debug("Config file %s not found, using defaults", config_path)
        return get_default_config()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigValidationError(f"Could not read {config_path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in {config_path}: {e}") from e

    if not data:
        return get_default_config()

    validate_config(data)
    logger.debug("Loaded hook configuration from %s", config_path)
    return HooksConfig.from_dict(data)


def validate_config(data: Any) -> None:
    """
    Validate raw configuration data.

    Args:
        data: Parsed YAML content

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if not isinstance(data, dict):
        raise ConfigValidationError("Config must be a dictionary")

    unknown = set(data) - {"commit_message", "document"}
    if unknown:
        raise ConfigValidationError(
            f"Unknown config sections: {', '.join(sorted(unknown))}"
        )

    commit = data.get("commit_message") or {}
    if not isinstance(commit, dict):
        raise ConfigValidationError("'commit_message' must be a dictionary")
    for key in ("pattern", "expected_format"):
        if key in commit and not isinstance(commit[key], str):
            raise ConfigValidationError(f"commit_message.{key} must be a string")
    if "pattern" in commit:
        try:
            re.compile(commit["pattern"])
        except re.error as e:
            raise ConfigValidationError(
                f"commit_message.pattern is not a valid regex: {e}"
            ) from e

    document = data.get("document") or {}
    if not isinstance(document, dict):
        raise ConfigValidationError("'document' must be a dictionary")
    for key in ("filename", "path_env_var"):
        if key in document and (not isinstance(document[key], str) or not document[key]):
            raise ConfigValidationError(f"document.{key} must be a non-empty string")
    filename = document.get("filename", DEFAULT_DOCUMENT_FILENAME)
    if "/" in filename or "\\" in filename:
        raise ConfigValidationError("document.filename must be a bare file name")
