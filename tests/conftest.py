from __future__ import annotations

import sys
from pathlib import Path

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))
# Shared stub adapters live next to the tests.
sys.path.insert(0, str(Path(__file__).resolve().parent))

import pytest  # noqa: E402


@pytest.fixture(autouse=True)
def _no_timeout_override(monkeypatch):
    """Keep a developer's KAFKACLI_HTTP_TIMEOUT out of the tests."""
    monkeypatch.delenv("KAFKACLI_HTTP_TIMEOUT", raising=False)
