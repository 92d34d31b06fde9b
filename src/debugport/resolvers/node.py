"""Node.js port resolver.

Handles the inspector flags (``--inspect``, ``--inspect-brk``) and the legacy
debugger flags (``--debug``, ``--debug-brk``). Without an explicit address the
runtime defaults apply: 9229 for the inspector, 5858 for the legacy debugger.
"""

import logging
import re
from collections.abc import MutableMapping

from debugport.containers.base import ExecChannel
from debugport.dockerfile.base import DockerParser
from debugport.models.ports import PortInfo
from debugport.prompt.base import PromptUI
from debugport.resolvers.base import (
    ask_debug_port,
    find_debug_port_in_container,
    port_from_address,
    resolve_app_port,
)

logger = logging.getLogger(__name__)

DEFAULT_INSPECT_PORT = "9229"
DEFAULT_LEGACY_DEBUG_PORT = "5858"
DEFAULT_NODE_APP_PORT = "9000"

NODE_RESERVED_PORTS = (DEFAULT_INSPECT_PORT, DEFAULT_LEGACY_DEBUG_PORT)
NODE_IMAGE_IDENTIFIERS = ("node",)

NODE_DEBUG_OPTS_RE = re.compile(r"(?P<prefix>--)?(?P<flag>debug|inspect)(?:-brk)?(?P<address>=\S*)?")
FULL_NODE_DEBUG_OPTS_RE = re.compile(
    r"node(js)?\s+.*?(?P<prefix>--)?(?P<flag>debug|inspect)(?:-brk)?(?P<address>=\S*)?",
    re.IGNORECASE,
)


def _port_from_match(match: re.Match[str]) -> str | None:
    address = match.group("address")
    if not address:
        if match.group("flag").lower() == "inspect":
            return DEFAULT_INSPECT_PORT
        return DEFAULT_LEGACY_DEBUG_PORT
    return port_from_address(address[1:]) or None


class NodeDockerResolver:
    """Port resolver for Node.js images."""

    def is_supported_image(self, base_image: str) -> bool:
        """Check for node base images."""
        return any(identifier in base_image for identifier in NODE_IMAGE_IDENTIFIERS)

    async def resolve_ports_from_file(
        self,
        parser: DockerParser,
        env: MutableMapping[str, str],
        prompt: PromptUI,
    ) -> PortInfo:
        """Resolve ports from node debug flags in the launch command."""
        port_info = PortInfo()

        match = parser.search_launch_args(NODE_DEBUG_OPTS_RE)
        if match:
            port_info.debug = _port_from_match(match)

        if not port_info.debug:
            port_info.debug = await ask_debug_port(prompt, "Dockerfile", DEFAULT_INSPECT_PORT)
        if not port_info.debug:
            return port_info

        await resolve_app_port(
            parser,
            port_info,
            env,
            prompt,
            reserved_ports=NODE_RESERVED_PORTS,
            default_app_port=DEFAULT_NODE_APP_PORT,
        )
        logger.info(f"Resolved Node.js ports: debug={port_info.debug} app={port_info.app}")
        return port_info

    async def resolve_ports_from_container(
        self,
        exec_channel: ExecChannel,
        pod: str,
        container: str | None,
        prompt: PromptUI,
    ) -> PortInfo:
        """Find the inspector or legacy debug port of a running node process."""
        port_info = PortInfo()
        port_info.debug = await find_debug_port_in_container(
            exec_channel,
            pod,
            container,
            FULL_NODE_DEBUG_OPTS_RE,
            _port_from_match,
        )

        if not port_info.debug:
            port_info.debug = await ask_debug_port(prompt, "container", DEFAULT_INSPECT_PORT)

        logger.info(f"Resolved Node.js debug port in {pod}: {port_info.debug}")
        return port_info
