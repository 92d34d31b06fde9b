"""Java debug provider."""

import os
from typing import Any

from debugport.models.ports import DebugRuntime
from debugport.providers.base import DebugProvider, port_number
from debugport.resolvers.base import DockerResolver
from debugport.resolvers.java import JavaDockerResolver


class JavaDebugProvider(DebugProvider):
    """Attaches the Java debugger to a JDWP port."""

    def __init__(self, docker_resolver: DockerResolver | None = None):
        super().__init__(docker_resolver or JavaDockerResolver())

    @property
    def runtime(self) -> DebugRuntime:
        return DebugRuntime.JAVA

    @property
    def debugger_type(self) -> str:
        return "java"

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
            "hostName": host,
            "port": port_number(port),
            "projectName": os.path.basename(os.path.normpath(workspace_folder)),
        }
