"""Interactive prompt interface."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class PromptUI(Protocol):
    """Asks the user for values the resolvers could not infer.

    Both calls may suspend indefinitely; ``None`` means the user gave no
    answer.
    """

    async def ask_text(self, prompt: str, placeholder: str) -> str | None:
        """Ask for free-form text."""
        ...

    async def ask_choice(self, options: Sequence[str], placeholder: str) -> str | None:
        """Ask the user to pick one of ``options``."""
        ...
