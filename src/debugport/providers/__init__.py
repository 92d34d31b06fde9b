"""Debug providers.

Each provider pairs a runtime's port resolver with the attach configuration
for its debugger client.
"""

from debugport.providers.base import DebugProvider, SessionLauncher
from debugport.providers.factory import (
    create_provider,
    get_provider_for_image,
    get_supported_runtimes,
    is_runtime_supported,
)

__all__ = [
    "DebugProvider",
    "SessionLauncher",
    "create_provider",
    "get_provider_for_image",
    "get_supported_runtimes",
    "is_runtime_supported",
]
