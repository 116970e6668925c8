"""Test configuration ensuring the project source tree is importable."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import pytest

ROOT = Path(__file__).resolve().parent.parent

TESTS = ROOT / "tests"

root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)
if str(TESTS) not in sys.path:
    sys.path.insert(1, str(TESTS))


@dataclass
class FakeCookie:
    name: str
    value: str


@dataclass
class FakeResponse:
    status_code: int = 200
    content: bytes = b""
    cookies: List[FakeCookie] = field(default_factory=list)


class FakeRequester:
    """Stand-in for the requests module: replays queued responses and records calls."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def requester():
    return FakeRequester()
