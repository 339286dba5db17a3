"""Global pytest configuration.

Conditionally registers the fixture plugin `tests.algorithms.sample_graphs`.
Avoid importing the plugin directly to let pytest apply assertion rewriting.
"""

from __future__ import annotations

from importlib.util import find_spec

import pytest

# Register plugin if available without importing it here. Pytest will import it
# with assertion rewriting enabled, avoiding PytestAssertRewriteWarning.
pytest_plugins: list[str] = []
if find_spec("tests.algorithms.sample_graphs") is not None:
    pytest_plugins = ["tests.algorithms.sample_graphs"]


@pytest.fixture(autouse=True)
def _no_log_level_override(monkeypatch):
    """Keep a WGRAPH_LOG_LEVEL from the shell out of the tests."""
    monkeypatch.delenv("WGRAPH_LOG_LEVEL", raising=False)
