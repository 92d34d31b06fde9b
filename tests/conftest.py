"""Shared fixtures."""

import pytest

from tests.fakes import ScriptedPrompt


@pytest.fixture
def prompt() -> ScriptedPrompt:
    """Prompt that never answers."""
    return ScriptedPrompt()


@pytest.fixture
def env() -> dict[str, str]:
    """Empty environment overlay."""
    return {}
