"""Shared test fixtures for gsh-script.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "gsh"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def sample_script() -> str:
    """A small script touching declarations, control flow and pipes."""
    return (
        "model claude {\n"
        '  provider: "anthropic"\n'
        "  temperature: 0.2\n"
        "}\n"
        "agent Writer {\n"
        "  model: claude\n"
        "  tools: [fs.read_file]\n"
        "}\n"
        'draft = "an outline" | Writer\n'
        "if (draft != null) {\n"
        "  print(draft)\n"
        "}\n"
    )
