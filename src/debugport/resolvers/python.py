"""Python (debugpy / ptvsd) port resolver.

Matches debug servers started as a module::

    python -m debugpy --listen 0.0.0.0:5678 app.py
    python -m ptvsd --host 0.0.0.0 --port 5678 app.py
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

DEFAULT_DEBUGPY_PORT = "5678"
DEFAULT_PYTHON_APP_PORT = "9000"

PYTHON_RESERVED_PORTS = (DEFAULT_DEBUGPY_PORT,)
PYTHON_IMAGE_IDENTIFIERS = ("python",)

PYTHON_DEBUG_OPTS_RE = re.compile(
    r"-m\s+(?P<module>debugpy|ptvsd)\s+.*?--(?:listen|port)\s+(?P<address>\S+)",
)
FULL_PYTHON_DEBUG_OPTS_RE = re.compile(
    r"^(?:\S*/)?python[\d.]*\s+.*-m\s+(?P<module>debugpy|ptvsd)\s+.*?--(?:listen|port)\s+(?P<address>\S+)",
    re.IGNORECASE,
)


def _port_from_match(match: re.Match[str]) -> str:
    return port_from_address(match.group("address"))


class PythonDockerResolver:
    """Port resolver for Python images."""

    def is_supported_image(self, base_image: str) -> bool:
        """Check for python base images."""
        return any(identifier in base_image for identifier in PYTHON_IMAGE_IDENTIFIERS)

    async def resolve_ports_from_file(
        self,
        parser: DockerParser,
        env: MutableMapping[str, str],
        prompt: PromptUI,
    ) -> PortInfo:
        """Resolve ports from debugpy or ptvsd flags in the launch command."""
        port_info = PortInfo()

        match = parser.search_launch_args(PYTHON_DEBUG_OPTS_RE)
        if match:
            port_info.debug = _port_from_match(match)

        if not port_info.debug:
            port_info.debug = await ask_debug_port(prompt, "Dockerfile", DEFAULT_DEBUGPY_PORT)
        if not port_info.debug:
            return port_info

        await resolve_app_port(
            parser,
            port_info,
            env,
            prompt,
            reserved_ports=PYTHON_RESERVED_PORTS,
            default_app_port=DEFAULT_PYTHON_APP_PORT,
        )
        logger.info(f"Resolved Python ports: debug={port_info.debug} app={port_info.app}")
        return port_info

    async def resolve_ports_from_container(
        self,
        exec_channel: ExecChannel,
        pod: str,
        container: str | None,
        prompt: PromptUI,
    ) -> PortInfo:
        """Find the debugpy or ptvsd listen port of a running python process."""
        port_info = PortInfo()
        port_info.debug = await find_debug_port_in_container(
            exec_channel,
            pod,
            container,
            FULL_PYTHON_DEBUG_OPTS_RE,
            _port_from_match,
        )

        if not port_info.debug:
            port_info.debug = await ask_debug_port(prompt, "container", DEFAULT_DEBUGPY_PORT)

        logger.info(f"Resolved Python debug port in {pod}: {port_info.debug}")
        return port_info
