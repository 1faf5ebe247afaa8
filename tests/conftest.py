"""Pytest configuration for all tests."""

import os
from typing import Dict, Optional

import pytest


@pytest.fixture(autouse=True)
def clean_action_env(monkeypatch):
    """Keep the runner's own variables from leaking into tests."""
    for name in list(os.environ):
        if name.startswith(("INPUT_", "GITHUB_", "COMMIT_STATUS_")):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def input_source():
    """Factory for input sources that return "" for unknown names."""

    def factory(values: Dict[str, str]):
        def get_input(name: str) -> str:
            return values.get(name, "")

        return get_input

    return factory


@pytest.fixture
def env_reader():
    """Factory for environment readers backed by a dict."""

    def factory(values: Dict[str, str]):
        def get_env(name: str) -> Optional[str]:
            return values.get(name)

        return get_env

    return factory


@pytest.fixture
def no_sleep():
    """Async sleep replacement that records requested delays."""

    delays = []

    async def sleep(delay: float) -> None:
        delays.append(delay)

    sleep.delays = delays
    return sleep
