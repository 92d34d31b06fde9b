"""Terminal implementation of the prompt interface using rich."""

import asyncio
import logging
from collections.abc import Sequence

from rich.console import Console
from rich.prompt import Prompt

logger = logging.getLogger(__name__)


class ConsolePrompt:
    """Prompts on the terminal.

    rich prompts block on stdin, so each question runs in a worker thread to
    keep the event loop free.
    """

    def __init__(self, console: Console | None = None):
        self._console = console or Console()

    def _ask(self, text: str) -> str | None:
        try:
            answer = Prompt.ask(text, console=self._console, default="", show_default=False)
        except (EOFError, KeyboardInterrupt):
            self._console.print()
            return None
        answer = answer.strip()
        return answer or None

    async def ask_text(self, prompt: str, placeholder: str) -> str | None:
        """Ask for free-form text; empty input means no answer."""
        return await asyncio.to_thread(self._ask, f"{prompt} [dim]({placeholder})[/dim]")

    async def ask_choice(self, options: Sequence[str], placeholder: str) -> str | None:
        """Show a numbered list and accept a number or the option itself."""
        if not options:
            return None

        self._console.print(placeholder)
        for index, option in enumerate(options, start=1):
            self._console.print(f"  [cyan]{index}[/cyan]. {option}")

        answer = await asyncio.to_thread(self._ask, "Select")
        if answer is None:
            return None
        if answer in options:
            return answer
        if answer.isdigit() and 1 <= int(answer) <= len(options):
            return options[int(answer) - 1]

        logger.debug(f"Ignoring invalid selection {answer!r}")
        return None
