"""Command-line hooks."""

from prd_hooks.hooks.commit_message import check_commit_message
from prd_hooks.hooks.prd_document import validate_prd_file

__all__ = ["check_commit_message", "validate_prd_file"]
