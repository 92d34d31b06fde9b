"""Configuration for debugport.

Settings are read from ``DEBUGPORT_*`` environment variables or a local
``.env`` file.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DebugPortSettings(BaseSettings):
    """Settings for the concrete collaborators (kubectl channel)."""

    model_config = SettingsConfigDict(
        env_prefix="DEBUGPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    kubectl_path: str = Field(default="kubectl", description="kubectl executable")
    kubectl_context: str | None = Field(default=None, description="Kubernetes context")
    kubeconfig: str | None = Field(default=None, description="Path to kubeconfig file")
    namespace: str | None = Field(default=None, description="Namespace for exec commands")
    exec_timeout: float = Field(default=30.0, gt=0, description="kubectl timeout in seconds")


@lru_cache
def get_settings() -> DebugPortSettings:
    """Get the process-wide settings instance."""
    return DebugPortSettings()
