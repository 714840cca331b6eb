"""
Pytest configuration for the oilpriceapi project.

This file makes sure the src/ layout is importable as `oilpriceapi`
when running tests, and provides a scripted fake transport.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Dict, List

import pytest

# Project root directory (one level above tests/)
ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"

# Add src/ to sys.path so `import oilpriceapi` works
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


def fake_response(status: int = 200, payload: Any = None, text: str | None = None, headers: Dict[str, str] | None = None, reason: str = "") -> Any:
    if text is None:
        text = json.dumps(payload) if payload is not None else ""
    return SimpleNamespace(status_code=status, reason=reason, text=text, headers=headers or {})


class FakeTransport:
    """Stands in for requests.request, replaying scripted outcomes in order.

    An outcome is either a response object or an exception to raise.
    """

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes)
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, method: str, url: str, **kwargs: Any) -> Any:
        self.calls.append({"method": method, "url": url, **kwargs})
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def make_response():
    return fake_response


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture
def sleeps() -> List[float]:
    return []
