"""Exec channel interface.

An exec channel runs a command against a container orchestrator (for
example ``kubectl exec``) and returns its output. Resolvers only depend on
this protocol, so tests can script the output of a process listing.
"""

from typing import Protocol, runtime_checkable

from debugport.containers.models import ExecResult


@runtime_checkable
class ExecChannel(Protocol):
    """Runs orchestrator commands such as ``exec <pod> -- ps -ef``."""

    async def invoke(self, command: str) -> ExecResult:
        """Run a command and wait for its full output.

        Args:
            command: Command arguments for the orchestrator CLI, without the
                CLI executable itself

        Returns:
            ExecResult with stdout, stderr and exit code. A non-zero exit code
            means no information is available; it is not an error.
        """
        ...
