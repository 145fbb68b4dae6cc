"""Shared fixtures for hook tests."""
import copy
import json

import pytest

from prd_hooks.core.telemetry import TelemetryRecorder, set_recorder

VALID_DOCUMENT = {
    "project": "storefront",
    "branchName": "ralph/checkout-flow",
    "userStories": [
        {
            "id": "US-001",
            "title": "Add cart summary",
            "description": "As a shopper I want to see my cart total.",
            "acceptanceCriteria": ["Total is shown", "Typecheck passes"],
            "passes": False,
            "priority": 1,
        },
        {
            "id": "US-002",
            "title": "Apply discount code",
            "description": "As a shopper I want to enter a discount code.",
            "acceptanceCriteria": ["Code field validates input"],
            "passes": True,
            "priority": 2,
            "notes": "Blocked on pricing API until sprint 4",
        },
    ],
}


@pytest.fixture(autouse=True)
def recorder():
    """Give every test its own telemetry recorder."""
    rec = TelemetryRecorder()
    set_recorder(rec)
    yield rec


@pytest.fixture
def valid_document():
    """A fresh deep copy of a valid prd.json document."""
    return copy.deepcopy(VALID_DOCUMENT)


@pytest.fixture
def write_prd(tmp_path):
    """Write a document (dict or raw text) to ``<tmp>/prd.json`` and return the path."""
    def _write(content, name="prd.json"):
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content, indent=2), encoding="utf-8")
        return path
    return _write
