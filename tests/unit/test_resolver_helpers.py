"""Tests for the resolution steps shared by all runtimes."""

import pytest

from debugport.models.ports import PortInfo
from debugport.resolvers.base import (
    DockerResolver,
    ask_debug_port,
    build_process_list_command,
    port_from_address,
    resolve_app_port,
)
from debugport.resolvers.java import JavaDockerResolver
from debugport.resolvers.node import NodeDockerResolver
from debugport.resolvers.python import PythonDockerResolver
from tests.fakes import FakeDockerParser, ScriptedPrompt


class TestPortFromAddress:
    """Tests for address parsing."""

    @pytest.mark.parametrize(
        "address,port",
        [("5005", "5005"), ("*:5005", "5005"), ("0.0.0.0:9229", "9229"), ("[::1]:9229", "9229")],
    )
    def test_trailing_segment(self, address, port):
        """Test that the last colon-delimited segment is the port."""
        assert port_from_address(address) == port


class TestProcessListCommand:
    """Tests for the exec command."""

    def test_without_container(self):
        assert build_process_list_command("web-0", None) == "exec web-0 -- ps -ef"

    def test_with_container(self):
        assert build_process_list_command("web-0", "sidecar") == "exec web-0 -c sidecar -- ps -ef"


class TestAskDebugPort:
    """Tests for the debug port prompt."""

    @pytest.mark.asyncio
    async def test_answer_trimmed(self):
        """Test that the answer is trimmed."""
        prompt = ScriptedPrompt(text_answers=["\t9229\n"])
        assert await ask_debug_port(prompt, "container", "9229") == "9229"

    @pytest.mark.asyncio
    async def test_whitespace_is_no_answer(self):
        """Test that a blank answer is unresolved."""
        prompt = ScriptedPrompt(text_answers=["   "])
        assert await ask_debug_port(prompt, "container", "9229") is None


class TestResolveAppPort:
    """Tests for app port disambiguation."""

    @pytest.mark.asyncio
    async def test_no_exposed_ports(self, env, prompt):
        """Test that nothing happens without EXPOSE entries."""
        port_info = PortInfo(debug="5005")

        await resolve_app_port(FakeDockerParser(), port_info, env, prompt, (), "9000")

        assert port_info.app is None
        assert prompt.choice_calls == []

    @pytest.mark.asyncio
    async def test_requires_debug_port(self, env, prompt):
        """Test that the app port is not resolved before the debug port."""
        port_info = PortInfo()

        await resolve_app_port(FakeDockerParser("", ["8080"]), port_info, env, prompt, (), "9000")

        assert port_info.app is None

    @pytest.mark.asyncio
    async def test_preserves_declaration_order(self, env):
        """Test that candidates are offered in EXPOSE order."""
        prompt = ScriptedPrompt(choice_answers=["7000"])
        port_info = PortInfo(debug="5005")

        await resolve_app_port(
            FakeDockerParser("", ["8443", "5005", "9229", "7000"]),
            port_info,
            env,
            prompt,
            ("9229",),
            "9000",
        )

        assert prompt.choice_calls[0][0] == ["8443", "7000"]
        assert port_info.app == "7000"
        assert env == {}


class TestResolverInterface:
    """Tests for the public resolver surface."""

    @pytest.mark.parametrize("resolver_type", [JavaDockerResolver, NodeDockerResolver, PythonDockerResolver])
    def test_public_methods_documented(self, resolver_type):
        """Test that every DockerResolver method carries its own docstring."""
        resolver = resolver_type()
        assert isinstance(resolver, DockerResolver)
        for name in ("is_supported_image", "resolve_ports_from_file", "resolve_ports_from_container"):
            assert getattr(resolver_type, name).__doc__, f"{resolver_type.__name__}.{name}"
