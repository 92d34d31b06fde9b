"""Interactive fallback prompts."""

from debugport.prompt.base import PromptUI
from debugport.prompt.console import ConsolePrompt

__all__ = ["ConsolePrompt", "PromptUI"]
