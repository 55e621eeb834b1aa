"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Clears feed-related environment variables so tests never hit real sheets.
"""

import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from labsite.config import FEED_URL_ENV_VARS  # noqa: E402

_ENV_VARS = (
    *FEED_URL_ENV_VARS.values(),
    "REQUEST_TIMEOUT",
    "MAX_FEED_REQUESTS_PER_SECOND",
    "LAB_NAME",
    "LAB_DESCRIPTION",
)


@pytest.fixture(autouse=True)
def _clean_feed_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    yield
