from __future__ import annotations

import logging
import os
from typing import List, Optional

from states_shuffler.formatter import format_state_regions
from states_shuffler.models import Region
from states_shuffler.parsers import DEFAULT_BLOCK_PREFIX, SkippedLine, parse_state_text

LOG_LEVEL = os.environ.get("STATES_SHUFFLER_LOG_LEVEL", "INFO").upper()

try:
    from mcp.server.fastmcp import FastMCP
except ImportError as exc:  # pragma: no cover - dependency is optional at import time
    FastMCP = None
    _IMPORT_ERROR = exc
else:
    _IMPORT_ERROR = None


def _require_server() -> "FastMCP":
    if FastMCP is None:
        raise SystemExit(
            "The mcp package is required to run the server. "
            "Install it with `pip install states-shuffler[server]`."
        ) from _IMPORT_ERROR
    return FastMCP("states-shuffler")


def _validate_required(name: str, value: Optional[str]) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"Missing required field: {name}")


def parse_payload(text: str, block_prefix: str = DEFAULT_BLOCK_PREFIX) -> dict:
    skipped: List[SkippedLine] = []
    regions = parse_state_text(text, diagnostics=skipped, block_prefix=block_prefix)
    return {
        "regions": [region.to_document() for region in regions],
        "skipped": [{"line": s.line_number, "text": s.text, "reason": s.reason} for s in skipped],
    }


def format_payload(regions: List[dict]) -> dict:
    models = [Region.from_document(record) for record in regions]
    return {"text": format_state_regions(models)}


def build_server() -> "FastMCP":
    server = _require_server()

    @server.tool(
            description="Parse Victoria 3 state region script text into JSON region records."
    )
    def parse_state_regions_tool(text: str, blockPrefix: str = DEFAULT_BLOCK_PREFIX) -> dict:
        _validate_required("text", text)
        return parse_payload(text, block_prefix=blockPrefix)

    @server.tool(
            description="Format JSON region records back into Victoria 3 state region script text."
    )
    def format_state_regions_tool(regions: List[dict]) -> dict:
        return format_payload(regions)

    return server


def main() -> None:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    server = build_server()
    server.run()


if __name__ == "__main__":
    main()
