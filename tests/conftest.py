"""Pytest configuration shared by the finance_core tests.

Budget stores resolve per-user files under ``finance_core.config.DATA_DIR``.
An autouse fixture points it at a per-test temporary directory so tests never
touch real user data.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Union

import pytest

from finance_core import config


class StubCompletion:
    """Minimal ``TextCompletion`` returning a canned reply or raising an error."""

    def __init__(self, reply: Union[str, Exception, Callable[[str], str]] = '') -> None:
        self.reply = reply
        self.prompts: List[str] = []

    def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if isinstance(self.reply, Exception):
            raise self.reply
        if callable(self.reply):
            return self.reply(prompt)
        return self.reply


@pytest.fixture(autouse=True)
def _isolate_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    data_dir = tmp_path / 'user_data'
    monkeypatch.setattr(config, 'DATA_DIR', data_dir)
    return data_dir


@pytest.fixture
def stub_completion() -> Callable[..., StubCompletion]:
    def _make(reply: Optional[Union[str, Exception, Callable[[str], str]]] = '') -> StubCompletion:
        return StubCompletion(reply)
    return _make
