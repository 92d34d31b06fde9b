"""Container exec models.

Data models for command execution results and process listings.
"""

from dataclasses import dataclass, field


@dataclass
class ExecResult:
    """Result of executing a command in a container."""

    exit_code: int
    stdout: str
    stderr: str = ""
    timed_out: bool = False

    @property
    def success(self) -> bool:
        """Check if command succeeded."""
        return self.exit_code == 0 and not self.timed_out


@dataclass
class ProcessTable:
    """Command lines parsed from ``ps -ef`` output.

    The header row decides how many columns a data row must have; the command
    is everything from the last header column onward, since it may contain
    whitespace itself::

        UID        PID  PPID  C STIME TTY          TIME CMD
        root         1     0  0 05:49 ?        00:00:00 node --inspect=9229 index.js
        root        17     0  0 06:44 pts/0    00:00:00 bash
    """

    columns: int = 0
    commands: list[str] = field(default_factory=list)

    @classmethod
    def from_ps_output(cls, output: str) -> "ProcessTable":
        """Parse ``ps -ef`` style output.

        Rows with fewer tokens than the header (blank trailing lines,
        truncated rows) are skipped.
        """
        lines = output.split("\n")
        header = lines[0].split() if lines else []
        if not header:
            return cls()

        columns = len(header)
        commands: list[str] = []
        for line in lines[1:]:
            tokens = line.split()
            if len(tokens) < columns:
                continue
            commands.append(" ".join(tokens[columns - 1 :]))

        return cls(columns=columns, commands=commands)
