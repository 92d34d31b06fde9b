"""Tests for the Dockerfile parser."""

import pytest

from debugport.core.exceptions import DockerfileNotFoundError
from debugport.dockerfile.base import DockerParser
from debugport.dockerfile.parser import DockerfileParser
from debugport.resolvers.java import JAVA_DEBUG_OPTS_RE, JavaDockerResolver
from debugport.resolvers.node import NODE_DEBUG_OPTS_RE, NodeDockerResolver

JAVA_DOCKERFILE = """\
# Build stage
FROM maven:3.9-eclipse-temurin-17 AS build
WORKDIR /src
COPY . .
RUN mvn -q package

FROM openjdk:17-jdk-slim
COPY --from=build /src/target/app.jar /app.jar
EXPOSE 8080/tcp 5005
EXPOSE 8080
CMD java \\
    -agentlib:jdwp=transport=dt_socket,server=y,suspend=n,address=*:5005 \\
    -jar /app.jar
"""


class TestDockerfileParser:
    """Tests for instruction extraction."""

    def test_implements_protocol(self):
        """Test that the parser satisfies the DockerParser protocol."""
        assert isinstance(DockerfileParser(""), DockerParser)

    def test_multi_stage_base_image(self):
        """Test that the final stage's base image wins."""
        parser = DockerfileParser(JAVA_DOCKERFILE)
        assert parser.get_base_image() == "openjdk:17-jdk-slim"
        assert parser.base_images == ["maven:3.9-eclipse-temurin-17", "openjdk:17-jdk-slim"]

    def test_platform_flag_stripped(self):
        """Test that FROM flags are not part of the image."""
        parser = DockerfileParser("FROM --platform=linux/amd64 node:18-alpine AS runtime\n")
        assert parser.get_base_image() == "node:18-alpine"

    def test_no_base_image(self):
        """Test an empty Dockerfile."""
        assert DockerfileParser("").get_base_image() is None

    def test_exposed_ports(self):
        """Test protocol suffixes and duplicates are dropped."""
        parser = DockerfileParser(JAVA_DOCKERFILE)
        assert parser.get_exposed_ports() == ["8080", "5005"]

    def test_exposed_port_variables(self):
        """Test that variable references are kept verbatim."""
        parser = DockerfileParser("FROM node:18\nexpose $PORT ${DEBUG_PORT}/tcp 3000\n")
        assert parser.get_exposed_ports() == ["$PORT", "${DEBUG_PORT}", "3000"]

    def test_continuation_lines(self):
        """Test that continued CMD lines form one command."""
        parser = DockerfileParser(JAVA_DOCKERFILE)
        assert parser.get_launch_args() == (
            "java -agentlib:jdwp=transport=dt_socket,server=y,suspend=n,address=*:5005 -jar /app.jar"
        )

    def test_exec_form_entrypoint_and_cmd(self):
        """Test that exec form arrays are joined after the entrypoint."""
        parser = DockerfileParser(
            'FROM node:18\nENTRYPOINT ["node"]\nCMD ["--inspect=0.0.0.0:9229", "index.js"]\n'
        )
        assert parser.get_launch_args() == "node --inspect=0.0.0.0:9229 index.js"

    def test_last_cmd_wins(self):
        """Test that only the last CMD is used."""
        parser = DockerfileParser("FROM node:18\nCMD node --debug a.js\nCMD node b.js\n")
        assert parser.get_launch_args() == "node b.js"

    def test_invalid_exec_form_kept_verbatim(self):
        """Test that malformed JSON falls back to shell form."""
        parser = DockerfileParser("FROM node:18\nCMD [node, index.js\n")
        assert parser.get_launch_args() == "[node, index.js"

    def test_env_forms(self):
        """Test both ENV syntaxes."""
        parser = DockerfileParser(
            "FROM node:18\n"
            'ENV APP_ENV=prod JAVA_OPTS="-Xmx512m -Dfile.encoding=UTF-8"\n'
            "ENV NODE_OPTIONS --inspect=0.0.0.0:9229 --max-old-space-size=512\n"
        )
        assert parser.env == [
            ("APP_ENV", "prod"),
            ("JAVA_OPTS", "-Xmx512m -Dfile.encoding=UTF-8"),
            ("NODE_OPTIONS", "--inspect=0.0.0.0:9229 --max-old-space-size=512"),
        ]

    def test_env_reset_per_stage(self):
        """Test that ENV from an earlier build stage does not reach the final stage."""
        parser = DockerfileParser(
            "FROM maven:3.9 AS build\n"
            "ENV MAVEN_OPTS=-Xmx1g\n"
            "EXPOSE 9999\n"
            "CMD mvn package\n"
            "FROM openjdk:17\n"
            "EXPOSE 8080\n"
        )
        assert parser.env == []
        assert parser.get_exposed_ports() == ["8080"]
        assert parser.get_launch_args() == ""

    def test_stage_inherits_from_alias(self):
        """Test that a stage built FROM an alias keeps that stage's instructions."""
        parser = DockerfileParser(
            "FROM node:18 AS base\n"
            "ENV NODE_OPTIONS=--inspect=0.0.0.0:9229\n"
            "EXPOSE 3000\n"
            "CMD node $NODE_OPTIONS server.js\n"
            "FROM base AS release\n"
            "ENV NODE_ENV=production\n"
        )
        assert parser.get_base_image() == "node:18"
        assert parser.env == [("NODE_OPTIONS", "--inspect=0.0.0.0:9229"), ("NODE_ENV", "production")]
        assert parser.get_exposed_ports() == ["3000"]
        assert parser.get_launch_args() == "node $NODE_OPTIONS server.js"

    def test_launch_variables(self):
        """Test that referenced variables are listed once, in order."""
        parser = DockerfileParser("FROM openjdk:17\nCMD java $JAVA_OPTS ${APP_OPTS} -jar app.jar $JAVA_OPTS\n")
        assert parser.get_launch_variables() == ["JAVA_OPTS", "APP_OPTS"]

    def test_comments_and_blank_lines_ignored(self):
        """Test that comments never count as instructions."""
        parser = DockerfileParser("# CMD node --inspect a.js\n\nFROM node:18\n  # EXPOSE 1234\n")
        assert parser.get_launch_args() == ""
        assert parser.get_exposed_ports() == []


class TestSearchLaunchArgs:
    """Tests for launch argument search."""

    def test_search_launch_command(self):
        """Test a match in the launch command."""
        parser = DockerfileParser(JAVA_DOCKERFILE)
        match = parser.search_launch_args(JAVA_DEBUG_OPTS_RE)
        assert match is not None
        assert match.group("address") == "address=*:5005"

    def test_search_env_values(self):
        """Test that referenced ENV values are searched after the launch command."""
        parser = DockerfileParser(
            "FROM node:18\nENV NODE_OPTIONS=--inspect=0.0.0.0:9230\nCMD node ${NODE_OPTIONS} index.js\n"
        )
        match = parser.search_launch_args(NODE_DEBUG_OPTS_RE)
        assert match is not None
        assert match.group("address") == "=0.0.0.0:9230"

    def test_no_match(self):
        """Test that a missing flag gives None."""
        parser = DockerfileParser("FROM openjdk:17\nCMD java -jar app.jar\n")
        assert parser.search_launch_args(JAVA_DEBUG_OPTS_RE) is None

    def test_unreferenced_env_ignored(self):
        """Test that ENV values the launch command never uses are not searched."""
        parser = DockerfileParser(
            "FROM node:18\nENV NODE_OPTIONS=--inspect=0.0.0.0:9230\nCMD npm start\n"
        )
        assert parser.search_launch_args(NODE_DEBUG_OPTS_RE) is None

    def test_last_env_assignment_searched(self):
        """Test that a redefined variable is searched with its final value."""
        parser = DockerfileParser(
            "FROM openjdk:17\n"
            "ENV JAVA_OPTS=-agentlib:jdwp=transport=dt_socket,address=8000\n"
            "ENV JAVA_OPTS=-Xmx512m\n"
            "CMD java $JAVA_OPTS -jar app.jar\n"
        )
        assert parser.search_launch_args(JAVA_DEBUG_OPTS_RE) is None

    @pytest.mark.asyncio
    async def test_unrelated_env_value_does_not_resolve(self, env, prompt):
        """Test that a log level of debug is not taken for the legacy debugger flag."""
        parser = DockerfileParser(
            "FROM node:18\nENV LOG_LEVEL=debug\nEXPOSE 3000\nCMD [\"node\",\"server.js\"]\n"
        )

        port_info = await NodeDockerResolver().resolve_ports_from_file(parser, env, prompt)

        assert port_info.debug is None
        assert port_info.app is None
        assert len(prompt.text_calls) == 1

    @pytest.mark.asyncio
    async def test_builder_stage_env_does_not_resolve(self, env, prompt):
        """Test that agent flags set in a builder stage do not leak into the final image."""
        parser = DockerfileParser(
            "FROM maven:3.9 AS build\n"
            'ENV MAVEN_OPTS="-agentlib:jdwp=transport=dt_socket,server=y,address=8000"\n'
            "RUN mvn package\n"
            "FROM openjdk:17\n"
            "EXPOSE 8080\n"
            "CMD java $MAVEN_OPTS -jar app.jar\n"
        )

        assert parser.search_launch_args(JAVA_DEBUG_OPTS_RE) is None

        port_info = await JavaDockerResolver().resolve_ports_from_file(parser, env, prompt)

        assert port_info.debug is None
        assert len(prompt.text_calls) == 1

    @pytest.mark.asyncio
    async def test_java_opts_defined_in_env(self, prompt):
        """Test resolving agent flags carried by an ENV instruction."""
        parser = DockerfileParser(
            "FROM openjdk:17\n"
            'ENV JAVA_OPTS="-agentlib:jdwp=transport=dt_socket,server=y,address=8000"\n'
            "EXPOSE 8000 8080\n"
            "CMD java $JAVA_OPTS -jar app.jar\n"
        )
        env: dict[str, str] = {}

        port_info = await JavaDockerResolver().resolve_ports_from_file(parser, env, prompt)

        assert port_info.debug == "8000"
        assert port_info.app == "8080"
        assert env == {}


class TestDockerfileFromPath:
    """Tests for reading Dockerfiles from disk."""

    def test_from_path(self, tmp_path):
        """Test parsing a file."""
        dockerfile = tmp_path / "Dockerfile"
        dockerfile.write_text(JAVA_DOCKERFILE, encoding="utf-8")

        parser = DockerfileParser.from_path(dockerfile)

        assert parser.get_base_image() == "openjdk:17-jdk-slim"

    def test_missing_file(self, tmp_path):
        """Test the error for a missing Dockerfile."""
        with pytest.raises(DockerfileNotFoundError) as exc_info:
            DockerfileParser.from_path(tmp_path / "Dockerfile")

        assert exc_info.value.code == "DOCKERFILE_NOT_FOUND"
        assert exc_info.value.details["path"].endswith("Dockerfile")
