"""Launch-argument parser interface."""

import re
from typing import Protocol, runtime_checkable


@runtime_checkable
class DockerParser(Protocol):
    """Read-only queries over a parsed Dockerfile."""

    def search_launch_args(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        """Search the container launch command for ``pattern``.

        Values of ENV variables the command references are searched too.
        Only the first match is returned.
        """
        ...

    def get_exposed_ports(self) -> list[str]:
        """Get EXPOSE entries in declaration order.

        Each entry is either a literal port number or a variable reference
        such as ``$PORT`` or ``${PORT}``.
        """
        ...
