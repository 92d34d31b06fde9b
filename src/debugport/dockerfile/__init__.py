"""Dockerfile launch-argument parsing."""

from debugport.dockerfile.base import DockerParser
from debugport.dockerfile.parser import DockerfileParser

__all__ = ["DockerParser", "DockerfileParser"]
