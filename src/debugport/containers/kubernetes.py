"""Kubernetes exec channel.

This module provides the kubectl implementation of the exec channel, used to
inspect processes running inside pods.
"""

import asyncio
import logging
import shlex
import shutil

from debugport.containers.models import ExecResult
from debugport.core.config import DebugPortSettings, get_settings
from debugport.core.exceptions import ExecChannelError

logger = logging.getLogger(__name__)


class Kubectl:
    """Exec channel backed by the kubectl CLI.

    Commands are passed without the ``kubectl`` prefix, e.g.
    ``exec my-pod -c app -- ps -ef``.
    """

    def __init__(self, settings: DebugPortSettings | None = None):
        """Initialize the channel.

        Args:
            settings: kubectl location, context, kubeconfig, namespace and
                timeout (default: settings from the environment)
        """
        self._settings = settings or get_settings()

    @property
    def cli_command(self) -> str:
        """The CLI command for Kubernetes."""
        return self._settings.kubectl_path

    def _build_base_args(self) -> list[str]:
        """Build base kubectl arguments."""
        args = []
        if self._settings.kubectl_context:
            args.extend(["--context", self._settings.kubectl_context])
        if self._settings.kubeconfig:
            args.extend(["--kubeconfig", self._settings.kubeconfig])
        if self._settings.namespace:
            args.extend(["--namespace", self._settings.namespace])
        return args

    async def is_available(self) -> bool:
        """Check if kubectl is available."""
        if not shutil.which(self.cli_command):
            return False

        result = await self.invoke("version --client --output=json")
        return result.success

    async def invoke(self, command: str, check: bool = False) -> ExecResult:
        """Run a kubectl command.

        Args:
            command: kubectl arguments as a single string
            check: Raise exception on non-zero exit

        Returns:
            ExecResult with stdout, stderr, exit code

        Raises:
            ExecChannelError: If ``check`` is set and the command failed
        """
        cmd = [self.cli_command, *self._build_base_args(), *shlex.split(command)]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            result = ExecResult(exit_code=-1, stdout="", stderr=str(e))
        else:
            try:
                stdout_bytes, stderr_bytes = await asyncio.wait_for(
                    proc.communicate(),
                    timeout=self._settings.exec_timeout,
                )
            except asyncio.TimeoutError:
                proc.kill()
                await proc.wait()
                result = ExecResult(
                    exit_code=-1,
                    stdout="",
                    stderr="Command timed out",
                    timed_out=True,
                )
            else:
                result = ExecResult(
                    exit_code=proc.returncode or 0,
                    stdout=stdout_bytes.decode("utf-8", errors="replace"),
                    stderr=stderr_bytes.decode("utf-8", errors="replace"),
                )

        if check and not result.success:
            raise ExecChannelError(
                command=" ".join(cmd),
                exit_code=result.exit_code,
                stderr=result.stderr,
            )

        return result
