"""
State region parser interface.

Usage:
    from states_shuffler.parsers import parse_state_file, parse_state_regions

    regions = parse_state_file("map_data/state_regions/00_west_europe.txt")

    # Collect skipped lines while parsing
    skipped = []
    regions = parse_state_regions(text.splitlines(), diagnostics=skipped)
"""

from __future__ import annotations

from states_shuffler.parsers.state_parser import (
    DEFAULT_BLOCK_PREFIX,
    ParseError,
    SkippedLine,
    StateRegionParser,
    SubBlock,
    extract_quoted,
    parse_state_file,
    parse_state_regions,
    parse_state_text,
)

__all__ = [
    # Main interface
    "parse_state_regions",
    "parse_state_text",
    "parse_state_file",
    "ParseError",
    # Parser internals (for direct use)
    "StateRegionParser",
    "SubBlock",
    "SkippedLine",
    "DEFAULT_BLOCK_PREFIX",
    "extract_quoted",
]
