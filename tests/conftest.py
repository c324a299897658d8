import os
import sys
from unittest import mock

import pytest

# Insert project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import header_fuzz  # noqa: E402


@pytest.fixture
def wordlist(tmp_path):
    """Write the given lines to a wordlist file and return its path."""
    def _make(lines, name="words.txt"):
        p = tmp_path / name
        p.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return str(p)
    return _make


@pytest.fixture
def fake_session():
    """Session whose HEAD returns ``status`` (int) or raises (exception)."""
    def _make(status):
        session = mock.MagicMock()
        if isinstance(status, BaseException):
            session.head.side_effect = status
        else:
            session.head.return_value = mock.MagicMock(status_code=status)
        return session
    return _make


@pytest.fixture(autouse=True)
def _no_color():
    header_fuzz.USE_COLOR = False
    yield
    header_fuzz.USE_COLOR = False
