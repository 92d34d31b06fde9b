"""Python (debugpy) debug provider."""

from typing import Any

from debugport.models.ports import DebugRuntime
from debugport.providers.base import DebugProvider, port_number
from debugport.resolvers.base import DockerResolver
from debugport.resolvers.python import PythonDockerResolver


class PythonDebugProvider(DebugProvider):
    """Attaches a debugpy client.

    Sources are assumed to live under ``remote_root`` in the container.
    """

    def __init__(self, docker_resolver: DockerResolver | None = None, remote_root: str = "/app"):
        super().__init__(docker_resolver or PythonDockerResolver())
        self.remote_root = remote_root

    @property
    def runtime(self) -> DebugRuntime:
        return DebugRuntime.PYTHON

    @property
    def debugger_type(self) -> str:
        return "debugpy"

    def build_attach_config(
        self,
        workspace_folder: str,
        session_name: str,
        port: str,
        host: str = "localhost",
    ) -> dict[str, Any]:
        return {
            "type": self.debugger_type,
            "request": "attach",
            "name": session_name,
            "connect": {"host": host, "port": port_number(port)},
            "pathMappings": [{"localRoot": workspace_folder, "remoteRoot": self.remote_root}],
        }
