"""Abstract base class for debug providers.

A debug provider couples a runtime's port resolver with the debugger that
attaches to the resolved port.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Protocol

from debugport.core.exceptions import InvalidPortError
from debugport.models.ports import DebugRuntime
from debugport.resolvers.base import DockerResolver

logger = logging.getLogger(__name__)


def port_number(port: str) -> int:
    """Convert a resolved port to the number an attach configuration needs.

    Raises:
        InvalidPortError: If ``port`` is not a number in 1-65535, e.g. an
            unexpanded ``${DEBUG_PORT}`` reference
    """
    port = port.strip()
    if not (port.isascii() and port.isdigit()) or not 0 < int(port) < 65536:
        raise InvalidPortError(port)
    return int(port)


class SessionLauncher(Protocol):
    """Starts a debugger session from an attach configuration."""

    async def __call__(self, config: dict[str, Any]) -> bool: ...


class DebugProvider(ABC):
    """Abstract base class for per-runtime debug providers."""

    def __init__(self, docker_resolver: DockerResolver):
        self._docker_resolver = docker_resolver

    @property
    @abstractmethod
    def runtime(self) -> DebugRuntime:
        """The runtime this provider handles."""
        ...

    @property
    @abstractmethod
    def debugger_type(self) -> str:
        """Debugger type used in the attach configuration."""
        ...

    @property
    def docker_resolver(self) -> DockerResolver:
        """The port resolver for this runtime."""
        return self._docker_resolver

    async def is_debugger_installed(self) -> bool:
        """Check if the debugger client is available.

        The host environment owns debugger installation, so this is True
        unless a provider knows better.
        """
        return True

    @abstractmethod
    def build_attach_config(
        self,
        workspace_folder: str,
        session_name: str,
        port: str,
        host: str = "localhost",
    ) -> dict[str, Any]:
        """Build the attach configuration for a resolved debug port.

        Args:
            workspace_folder: Local project root
            session_name: Display name of the session
            port: Resolved debug port
            host: Host the debug port is reachable on

        Returns:
            Attach configuration understood by the debugger client
        """
        ...

    async def start_debugging(
        self,
        launcher: SessionLauncher,
        workspace_folder: str,
        session_name: str,
        port: str,
    ) -> bool:
        """Attach a debugger session through ``launcher``.

        Raises:
            InvalidPortError: If ``port`` is not numeric; the launcher is not called
        """
        config = self.build_attach_config(workspace_folder, session_name, port)
        logger.info(f"Starting {self.debugger_type} session '{session_name}' on port {port}")
        return await launcher(config)
