"""Container exec support.

This package provides the exec channel interface used to list processes in
running containers, and a kubectl implementation of it.
"""

from debugport.containers.base import ExecChannel
from debugport.containers.kubernetes import Kubectl
from debugport.containers.models import ExecResult, ProcessTable

__all__ = [
    "ExecChannel",
    "ExecResult",
    "Kubectl",
    "ProcessTable",
]
