"""Debug provider factory.

This module provides factory functions for creating debug providers by
runtime id, and for selecting the provider that handles a base image.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from debugport.core.exceptions import UnsupportedRuntimeError
from debugport.models.ports import DebugRuntime
from debugport.providers.base import DebugProvider

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=DebugProvider)


# Registry of debug providers; insertion order is the image matching precedence
_PROVIDER_REGISTRY: dict[DebugRuntime, type[DebugProvider]] = {}


def register_provider(
    runtime: DebugRuntime,
) -> Callable[[type[T]], type[T]]:
    """Decorator to register a debug provider class.

    Usage:
        @register_provider(DebugRuntime.NODE)
        class NodeDebugProvider(DebugProvider):
            ...
    """

    def decorator(cls: type[T]) -> type[T]:
        _PROVIDER_REGISTRY[runtime] = cls
        return cls

    return decorator


def create_provider(runtime: str | DebugRuntime) -> DebugProvider:
    """Create a debug provider.

    Args:
        runtime: Runtime id (java, node, python)

    Returns:
        Debug provider instance

    Raises:
        UnsupportedRuntimeError: If runtime is not supported
    """
    if isinstance(runtime, str):
        try:
            runtime_enum = DebugRuntime(runtime.lower())
        except ValueError:
            raise UnsupportedRuntimeError(runtime, get_supported_runtimes())
    else:
        runtime_enum = runtime

    provider_class = _PROVIDER_REGISTRY.get(runtime_enum)
    if provider_class is None:
        raise UnsupportedRuntimeError(runtime_enum.value, get_supported_runtimes())

    return provider_class()


def get_provider_for_image(base_image: str) -> DebugProvider | None:
    """Find the provider whose resolver supports a base image.

    Providers are tried in registration order; the first match wins.

    Args:
        base_image: Base image of the Dockerfile or container (e.g. openjdk:17)

    Returns:
        Matching provider, or None if no runtime recognizes the image
    """
    image = base_image.lower()
    for provider_class in _PROVIDER_REGISTRY.values():
        provider = provider_class()
        if provider.docker_resolver.is_supported_image(image):
            logger.debug(f"Image {base_image} handled by {provider.runtime.value} provider")
            return provider

    logger.debug(f"No debug provider supports image {base_image}")
    return None


def get_supported_runtimes() -> list[str]:
    """Get list of supported runtime identifiers.

    Returns:
        List of runtime strings that have registered providers
    """
    return [rt.value for rt in _PROVIDER_REGISTRY]


def is_runtime_supported(runtime: str) -> bool:
    """Check if a runtime is supported.

    Args:
        runtime: Runtime identifier

    Returns:
        True if a provider is registered for the runtime
    """
    try:
        runtime_enum = DebugRuntime(runtime.lower())
        return runtime_enum in _PROVIDER_REGISTRY
    except ValueError:
        return False


# =============================================================================
# Auto-register providers on import
# =============================================================================


def _register_builtin_providers() -> None:
    """Register built-in debug providers in matching precedence order."""
    # pylint: disable=import-outside-toplevel
    from debugport.providers.java import JavaDebugProvider
    from debugport.providers.node import NodeDebugProvider
    from debugport.providers.python import PythonDebugProvider

    register_provider(DebugRuntime.JAVA)(JavaDebugProvider)
    register_provider(DebugRuntime.NODE)(NodeDebugProvider)
    register_provider(DebugRuntime.PYTHON)(PythonDebugProvider)


_register_builtin_providers()
