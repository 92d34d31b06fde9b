"""Dockerfile parser.

Extracts the instructions port resolution cares about: the base image, ENV
assignments, EXPOSE entries and the ENTRYPOINT/CMD launch command.
"""

import json
import logging
import re
import shlex
from dataclasses import dataclass, field, replace
from pathlib import Path

from debugport.core.exceptions import DockerfileNotFoundError

logger = logging.getLogger(__name__)

_INSTRUCTION_RE = re.compile(r"^(?P<instruction>[A-Za-z]+)\s+(?P<args>.*)$")
_STAGE_ALIAS_RE = re.compile(r"\s+AS\s+(?P<alias>\S+)$", re.IGNORECASE)
_VARIABLE_REF_RE = re.compile(r"\$\{?(\w+)\}?")


def _parse_command(args: str) -> str:
    """Flatten an ENTRYPOINT/CMD argument into a command line.

    Exec form (JSON array) is joined with spaces; anything that is not a valid
    JSON array is shell form and kept verbatim.
    """
    if args.startswith("["):
        try:
            parts = json.loads(args)
        except json.JSONDecodeError:
            return args
        if isinstance(parts, list):
            return " ".join(str(part) for part in parts)
    return args


def _parse_env(args: str) -> list[tuple[str, str]]:
    """Parse ENV arguments in either ``K=V ...`` or ``K V`` form."""
    first = args.split(None, 1)[0]
    if "=" not in first:
        parts = args.split(None, 1)
        return [(parts[0], parts[1] if len(parts) > 1 else "")]

    try:
        tokens = shlex.split(args)
    except ValueError:
        tokens = args.split()

    pairs = []
    for token in tokens:
        key, sep, value = token.partition("=")
        if sep:
            pairs.append((key, value))
    return pairs


@dataclass
class _Stage:
    """Instructions in effect for one build stage."""

    base_image: str
    env: list[tuple[str, str]] = field(default_factory=list)
    exposed_ports: list[str] = field(default_factory=list)
    entrypoint: str | None = None
    cmd: str | None = None

    def derive(self) -> "_Stage":
        """Start a stage built FROM this one."""
        return replace(self, env=list(self.env), exposed_ports=list(self.exposed_ports))


class DockerfileParser:
    """Parsed view of a Dockerfile.

    Continuation lines are joined, comments and blank lines dropped. Only the
    final build stage counts, since that is what the image runs; a stage
    built FROM an earlier stage alias inherits that stage's ENV, EXPOSE,
    ENTRYPOINT and CMD.
    """

    def __init__(self, content: str):
        self.content = content
        self.base_images: list[str] = []
        self.env: list[tuple[str, str]] = []
        self.exposed_ports: list[str] = []
        self.entrypoint: str | None = None
        self.cmd: str | None = None
        self._parse()

    @classmethod
    def from_path(cls, path: str | Path) -> "DockerfileParser":
        """Read and parse a Dockerfile.

        Raises:
            DockerfileNotFoundError: If the file does not exist
        """
        dockerfile = Path(path)
        if not dockerfile.is_file():
            raise DockerfileNotFoundError(str(dockerfile))
        logger.debug(f"Parsing {dockerfile}")
        return cls(dockerfile.read_text(encoding="utf-8"))

    def _logical_lines(self) -> list[str]:
        lines = []
        continued = ""
        for raw_line in self.content.splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue

            if line.endswith("\\"):
                continued += line[:-1].strip() + " "
                continue

            lines.append(continued + line)
            continued = ""

        # Dangling continuation at end of file
        if continued.strip():
            lines.append(continued.strip())
        return lines

    def _instructions(self) -> list[tuple[str, str]]:
        instructions = []
        for line in self._logical_lines():
            match = _INSTRUCTION_RE.match(line)
            if match:
                instructions.append((match.group("instruction").upper(), match.group("args").strip()))
        return instructions

    def _parse(self) -> None:
        stages: dict[str, _Stage] = {}
        stage = _Stage(base_image="")
        for instruction, args in self._instructions():
            if instruction == "FROM":
                alias_match = _STAGE_ALIAS_RE.search(args)
                image = _STAGE_ALIAS_RE.sub("", args)
                image = " ".join(t for t in image.split() if not t.startswith("--"))
                parent = stages.get(image.lower())
                stage = parent.derive() if parent else _Stage(base_image=image)
                if alias_match:
                    stages[alias_match.group("alias").lower()] = stage
                if stage.base_image:
                    self.base_images.append(stage.base_image)
            elif instruction == "ENV":
                stage.env.extend(_parse_env(args))
            elif instruction == "EXPOSE":
                for port in args.split():
                    port = port.split("/")[0]
                    if port and port not in stage.exposed_ports:
                        stage.exposed_ports.append(port)
            elif instruction == "ENTRYPOINT":
                stage.entrypoint = _parse_command(args)
            elif instruction == "CMD":
                stage.cmd = _parse_command(args)

        self.env = stage.env
        self.exposed_ports = stage.exposed_ports
        self.entrypoint = stage.entrypoint
        self.cmd = stage.cmd

    def get_base_image(self) -> str | None:
        """Get the base image of the final build stage."""
        return self.base_images[-1] if self.base_images else None

    def get_exposed_ports(self) -> list[str]:
        """Get exposed ports with protocol suffixes stripped."""
        return list(self.exposed_ports)

    def get_launch_args(self) -> str:
        """Get the launch command: ENTRYPOINT followed by CMD."""
        return " ".join(part for part in (self.entrypoint, self.cmd) if part).strip()

    def get_launch_variables(self) -> list[str]:
        """Get names of variables the launch command references, in order."""
        names: list[str] = []
        for name in _VARIABLE_REF_RE.findall(self.get_launch_args()):
            if name not in names:
                names.append(name)
        return names

    def search_launch_args(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        """Search the launch command for ``pattern``.

        When the command itself does not match, the ENV values of the
        variables it references (``$NAME`` or ``${NAME}``) are searched in
        reference order. Unreferenced ENV values are ignored.

        Returns:
            The first match, or None
        """
        match = pattern.search(self.get_launch_args())
        if match:
            return match

        env = dict(self.env)
        for name in self.get_launch_variables():
            value = env.get(name)
            if not value:
                continue
            match = pattern.search(value)
            if match:
                logger.debug(f"Launch flags found in ${name}")
                return match

        return None
