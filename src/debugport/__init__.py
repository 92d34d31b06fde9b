"""Debug port resolution for containerized applications.

Given a Dockerfile or a running Kubernetes container, work out which port a
remote debugger should attach to and which port serves the application.

Supported runtimes:
- Java (JDWP agent)
- Node.js (inspector / legacy debugger)
- Python (debugpy / ptvsd)
"""

from debugport.models.ports import DebugRuntime, PortInfo
from debugport.providers.factory import (
    create_provider,
    get_provider_for_image,
    get_supported_runtimes,
)

__version__ = "0.1.0"

__all__ = [
    "DebugRuntime",
    "PortInfo",
    "create_provider",
    "get_provider_for_image",
    "get_supported_runtimes",
]
