"""Unit tests for the output and input capabilities."""

import asyncio

import pytest

from toolup.io import CapturingOutputHandler, ScriptedInputProvider


class TestCapturingOutputHandler:
    """Test the capturing output handler."""

    @pytest.mark.asyncio
    async def test_records_lines_in_order(self):
        handler = CapturingOutputHandler()

        await handler.handle_output_line("a\n")
        await handler.handle_output_line("b\n")

        assert handler.lines == ["a\n", "b\n"]
        assert handler.text == "a\nb\n"

    @pytest.mark.asyncio
    async def test_concurrent_deliveries_stay_whole(self):
        handler = CapturingOutputHandler()
        units = [f"unit {i}\n" for i in range(50)]

        await asyncio.gather(*(handler.handle_output_line(unit) for unit in units))

        assert sorted(handler.lines) == sorted(units)

    @pytest.mark.asyncio
    async def test_clear(self):
        handler = CapturingOutputHandler()
        await handler.handle_output_line("x")

        handler.clear()

        assert handler.lines == []


class TestScriptedInputProvider:
    """Test the scripted input provider."""

    @pytest.mark.asyncio
    async def test_returns_lines_then_none(self):
        provider = ScriptedInputProvider(["first", ""])

        assert await provider.read_line() == "first"
        assert await provider.read_line() == ""
        assert await provider.read_line() is None
        assert await provider.read_line() is None
        assert provider.reads == 4

    @pytest.mark.asyncio
    async def test_remaining(self):
        provider = ScriptedInputProvider(iter(["a", "b"]))

        await provider.read_line()

        assert provider.remaining == 1
