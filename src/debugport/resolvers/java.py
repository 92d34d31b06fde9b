"""Java (JDWP) port resolver.

Recognizes both agent flag spellings::

    -agentlib:jdwp=transport=dt_socket,server=y,suspend=y,address=5005
    -Xrunjdwp:transport=dt_socket,server=y,address=*:5005

When the launch command only references ``$JAVA_OPTS``, the default agent
flags are injected through that variable.
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

DEFAULT_JAVA_DEBUG_PORT = "5005"
DEFAULT_JAVA_APP_PORT = "9000"
DEFAULT_JAVA_DEBUG_OPTS = (
    f"-agentlib:jdwp=transport=dt_socket,server=y,suspend=y,address={DEFAULT_JAVA_DEBUG_PORT},quiet=y"
)

JAVA_OPTS_VARIABLE = "JAVA_OPTS"
JAVA_IMAGE_IDENTIFIERS = ("java", "openjdk", "oracle")

JAVA_DEBUG_OPTS_RE = re.compile(
    r"(?P<agent>-agentlib|-Xrunjdwp):\S*(?P<address>address=[^\s,]+)",
    re.IGNORECASE,
)
FULL_JAVA_DEBUG_OPTS_RE = re.compile(
    r"^(?:\S*/)?java\s+.*(?P<agent>-agentlib|-Xrunjdwp):\S*(?P<address>address=[^\s,]+)\S*",
    re.IGNORECASE,
)
JAVA_OPTS_SENTINEL_RE = re.compile(r"\$\{?JAVA_OPTS\}?")


def _port_from_match(match: re.Match[str]) -> str:
    return port_from_address(match.group("address").split("=", 1)[1])


class JavaDockerResolver:
    """Port resolver for JVM based images."""

    def is_supported_image(self, base_image: str) -> bool:
        """Check for JVM base images (java, openjdk, oracle)."""
        return any(identifier in base_image for identifier in JAVA_IMAGE_IDENTIFIERS)

    async def resolve_ports_from_file(
        self,
        parser: DockerParser,
        env: MutableMapping[str, str],
        prompt: PromptUI,
    ) -> PortInfo:
        """Resolve ports from JDWP flags in the launch command.

        If the command only references ``$JAVA_OPTS``, default agent flags are
        written into ``env`` and the debug port is 5005.
        """
        port_info = PortInfo()

        match = parser.search_launch_args(JAVA_DEBUG_OPTS_RE)
        if match:
            port_info.debug = _port_from_match(match)
        elif parser.search_launch_args(JAVA_OPTS_SENTINEL_RE):
            logger.debug(f"Injecting default debug flags through ${JAVA_OPTS_VARIABLE}")
            env[JAVA_OPTS_VARIABLE] = DEFAULT_JAVA_DEBUG_OPTS
            port_info.debug = DEFAULT_JAVA_DEBUG_PORT

        if not port_info.debug:
            port_info.debug = await ask_debug_port(prompt, "Dockerfile", DEFAULT_JAVA_DEBUG_PORT)
        if not port_info.debug:
            return port_info

        await resolve_app_port(
            parser,
            port_info,
            env,
            prompt,
            reserved_ports=(),
            default_app_port=DEFAULT_JAVA_APP_PORT,
        )
        logger.info(f"Resolved Java ports: debug={port_info.debug} app={port_info.app}")
        return port_info

    async def resolve_ports_from_container(
        self,
        exec_channel: ExecChannel,
        pod: str,
        container: str | None,
        prompt: PromptUI,
    ) -> PortInfo:
        """Find the JDWP address in the running JVM's command line.

        Falls back to the prompt when no java process carries agent flags.
        """
        port_info = PortInfo()
        port_info.debug = await find_debug_port_in_container(
            exec_channel,
            pod,
            container,
            FULL_JAVA_DEBUG_OPTS_RE,
            _port_from_match,
        )

        if not port_info.debug:
            port_info.debug = await ask_debug_port(prompt, "container", DEFAULT_JAVA_DEBUG_PORT)

        logger.info(f"Resolved Java debug port in {pod}: {port_info.debug}")
        return port_info
