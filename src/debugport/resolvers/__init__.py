"""Per-runtime port resolvers."""

from debugport.resolvers.base import DockerResolver
from debugport.resolvers.java import JavaDockerResolver
from debugport.resolvers.node import NodeDockerResolver
from debugport.resolvers.python import PythonDockerResolver

__all__ = [
    "DockerResolver",
    "JavaDockerResolver",
    "NodeDockerResolver",
    "PythonDockerResolver",
]
