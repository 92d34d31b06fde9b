"""Docker resolver interface and shared resolution steps.

Every runtime resolver implements :class:`DockerResolver`. The helpers here
hold the stages that do not depend on flag syntax: prompting for a debug
port, picking the app port from EXPOSE entries and scanning a container's
process list.
"""

import logging
import re
from collections.abc import Callable, MutableMapping, Sequence
from typing import Protocol, runtime_checkable

from debugport.containers.base import ExecChannel
from debugport.containers.models import ProcessTable
from debugport.dockerfile.base import DockerParser
from debugport.models.ports import PortInfo
from debugport.prompt.base import PromptUI

logger = logging.getLogger(__name__)

VARIABLE_REF_RE = re.compile(r"\$\{?(\w+)\}?")

APP_PORT_PLACEHOLDER = "Please select the app port exposed at Dockerfile"


@runtime_checkable
class DockerResolver(Protocol):
    """Resolves debug and app ports for one runtime."""

    def is_supported_image(self, base_image: str) -> bool:
        """Check if the resolver handles containers built from ``base_image``."""
        ...

    async def resolve_ports_from_file(
        self,
        parser: DockerParser,
        env: MutableMapping[str, str],
        prompt: PromptUI,
    ) -> PortInfo:
        """Resolve ports from a Dockerfile before the container is launched.

        Args:
            parser: Parsed Dockerfile
            env: Environment overlay; receives defaults for variables the
                resolver had to pin to a concrete value
            prompt: Fallback for values that cannot be inferred

        Returns:
            PortInfo; ``debug`` is None if the user gave no port
        """
        ...

    async def resolve_ports_from_container(
        self,
        exec_channel: ExecChannel,
        pod: str,
        container: str | None,
        prompt: PromptUI,
    ) -> PortInfo:
        """Resolve the debug port from the processes of a running container.

        ``app`` is never resolved on this path.
        """
        ...


def port_from_address(address: str) -> str:
    """Return the port of ``port`` or ``host:port``."""
    return address.split(":")[-1]


async def ask_debug_port(prompt: PromptUI, source: str, default_port: str) -> str | None:
    """Ask the user for the debug port.

    Args:
        prompt: Prompt collaborator
        source: What exposes the port ("Dockerfile" or "container")
        default_port: Example shown to the user

    Returns:
        Trimmed port, or None for empty or cancelled input
    """
    logger.debug(f"Debug port not found in {source}, asking user")
    answer = await prompt.ask_text(
        f"Please specify debug port exposed by the {source} (e.g. {default_port})",
        default_port,
    )
    if not answer:
        return None
    return answer.strip() or None


async def resolve_app_port(
    parser: DockerParser,
    port_info: PortInfo,
    env: MutableMapping[str, str],
    prompt: PromptUI,
    reserved_ports: Sequence[str],
    default_app_port: str,
) -> None:
    """Pick the app port from the exposed ports.

    The debug port and ``reserved_ports`` are excluded. One candidate is taken
    as is, several are offered to the user. A variable reference such as
    ``${PORT}`` is pinned to ``default_app_port`` through ``env``.
    """
    exposed = parser.get_exposed_ports()
    if not port_info.debug or not exposed:
        return

    excludes = {*reserved_ports, port_info.debug}
    candidates = [port for port in exposed if port not in excludes]
    if len(candidates) == 1:
        port_info.app = candidates[0]
    elif len(candidates) > 1:
        port_info.app = await prompt.ask_choice(candidates, APP_PORT_PLACEHOLDER) or None

    if port_info.app:
        match = VARIABLE_REF_RE.search(port_info.app)
        if match:
            env[match.group(1)] = default_app_port
            port_info.app = default_app_port


def build_process_list_command(pod: str, container: str | None) -> str:
    """Build the exec command listing all processes of a pod container."""
    if container:
        return f"exec {pod} -c {container} -- ps -ef"
    return f"exec {pod} -- ps -ef"


async def find_debug_port_in_container(
    exec_channel: ExecChannel,
    pod: str,
    container: str | None,
    pattern: re.Pattern[str],
    extract_port: Callable[[re.Match[str]], str | None],
) -> str | None:
    """Scan the process list of a container for a debug flag.

    Args:
        exec_channel: Channel used to run ``ps -ef``
        pod: Pod name
        container: Container within the pod, or None for the default one
        pattern: Full command-line pattern anchored at the launcher
        extract_port: Maps a pattern match to the debug port

    Returns:
        Port from the first matching process, or None
    """
    result = await exec_channel.invoke(build_process_list_command(pod, container))
    if not result.success:
        logger.warning(f"Failed to list processes in {pod}: {result.stderr.strip()}")
        return None

    for command in ProcessTable.from_ps_output(result.stdout).commands:
        match = pattern.search(command)
        if match:
            logger.debug(f"Debug flags found in process: {command}")
            return extract_port(match)

    return None
