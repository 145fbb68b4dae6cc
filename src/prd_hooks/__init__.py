"""Workflow validation hooks for commit messages and prd.json documents."""

__version__ = "0.1.0"
