"""Tests for the MCP server payload helpers and tool registration."""

from __future__ import annotations

import asyncio

import pytest

from states_shuffler.parsers import parse_state_text
from states_shuffler.server import format_payload, parse_payload


class TestPayloads:
    def test_parse_payload(self, west_europe_text: str):
        payload = parse_payload(west_europe_text + "STATE_Z = {\n    id = nope\n}\n")

        assert [r["name"] for r in payload["regions"]] == ["STATE_ILE_DE_FRANCE", "STATE_NORMANDY", "STATE_Z"]
        assert "port" not in payload["regions"][0]
        assert payload["skipped"][0]["reason"].startswith("id is not an integer")

    def test_format_payload_round_trip(self, west_europe_text: str):
        regions = parse_payload(west_europe_text)["regions"]
        text = format_payload(regions)["text"]
        assert parse_state_text(text) == parse_state_text(west_europe_text)


class TestBuildServer:
    def test_registers_tools(self):
        pytest.importorskip("mcp")
        from states_shuffler.server import build_server

        server = build_server()
        tools = asyncio.run(server.list_tools())
        names = {tool.name for tool in tools}
        assert {"parse_state_regions_tool", "format_state_regions_tool"} <= names
