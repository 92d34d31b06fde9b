"""Exception hierarchy for debugport.

Port resolution itself never raises for missing information; these errors
cover misuse of the registry and failures of the concrete collaborators.
"""

from typing import Any


class DebugPortError(Exception):
    """Base exception for debugport operations."""

    def __init__(
        self,
        message: str,
        code: str = "DEBUGPORT_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class DockerfileNotFoundError(DebugPortError):
    """Dockerfile does not exist."""

    def __init__(self, path: str):
        super().__init__(
            f"Dockerfile '{path}' not found",
            code="DOCKERFILE_NOT_FOUND",
            details={"path": path},
        )


class UnsupportedRuntimeError(DebugPortError):
    """Raised when no debug provider is registered for a runtime."""

    def __init__(self, runtime: str, supported: list[str] | None = None):
        super().__init__(
            f"Debug runtime '{runtime}' is not supported",
            code="UNSUPPORTED_RUNTIME",
            details={"runtime": runtime, "supported": supported or []},
        )


class ExecChannelError(DebugPortError):
    """Command execution through an exec channel failed."""

    def __init__(self, command: str, exit_code: int, stderr: str):
        super().__init__(
            f"Command failed with exit code {exit_code}: {stderr[:200]}",
            code="EXEC_ERROR",
            details={"command": command, "exit_code": exit_code, "stderr": stderr},
        )


class InvalidPortError(DebugPortError):
    """Debug port is not a usable port number."""

    def __init__(self, port: str):
        super().__init__(
            f"Debug port '{port}' is not a port number",
            code="INVALID_PORT",
            details={"port": port},
        )
