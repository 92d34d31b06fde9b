"""Port resolution models.

This module defines the value objects shared by every runtime resolver and
debug provider.
"""

from enum import Enum

from pydantic import BaseModel, Field


class DebugRuntime(str, Enum):
    """Supported debug runtimes."""

    JAVA = "java"
    NODE = "node"
    PYTHON = "python"


class PortInfo(BaseModel):
    """Ports resolved for a debug session.

    Created empty at the start of a resolution call and filled in as each
    stage succeeds. ``app`` is only set once ``debug`` is known.
    """

    debug: str | None = Field(default=None, description="Port the debugger attaches to")
    app: str | None = Field(default=None, description="Port the application serves on")

    @property
    def is_resolved(self) -> bool:
        """Check if a debug port was found."""
        return self.debug is not None
