"""Node.js debug provider."""

from typing import Any

from debugport.models.ports import DebugRuntime
from debugport.providers.base import DebugProvider, port_number
from debugport.resolvers.base import DockerResolver
from debugport.resolvers.node import NodeDockerResolver


class NodeDebugProvider(DebugProvider):
    """Attaches the Node.js inspector client."""

    def __init__(self, docker_resolver: DockerResolver | None = None):
        super().__init__(docker_resolver or NodeDockerResolver())

    @property
    def runtime(self) -> DebugRuntime:
        return DebugRuntime.NODE

    @property
    def debugger_type(self) -> str:
        return "node"

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
            "address": host,
            "port": port_number(port),
            "localRoot": workspace_folder,
            "remoteRoot": "/",
        }
