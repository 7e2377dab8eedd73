"""
State region text parser.

Victoria 3 keeps its map regions in brace-delimited script files under
``map_data/state_regions``. Each file holds a sequence of blocks like::

    STATE_SVEALAND = {
        id = 1
        subsistence_building = "building_subsistence_farms"
        provinces = { "x1D8D26" "x20E0C0" }
        traits = { "state_trait_scandinavian_forests" }
        city = "x46AC9C"
        arable_land = 40
        arable_resources = { "bg_wheat_farms" "bg_livestock_ranches" }
        capped_resources = {
            bg_iron_mining = 24
            bg_logging = 18
        }
        resource = {
            type = "bg_gold_fields"
            undiscovered_amount = 2
        }
    }

The parser is a single-pass line scanner. It recognises a fixed vocabulary
of sub-blocks and is deliberately lenient: lines that fail to match, unknown
field names and unparsable integers are skipped without aborting the parse.
Callers that want to see what was skipped can pass a ``diagnostics`` list.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from states_shuffler.models import Region, Resource

LOG = logging.getLogger("parsers.state_regions")

DEFAULT_BLOCK_PREFIX = "STATE_"

_BOM = "\ufeff"

# key = value, key = "value"
_KEY_VALUE_PATTERN = re.compile(r'^(\w+)\s*=\s*"?([^"{}\s][^"{}\n]*)"?$')
# key = {   (possibly followed by inline content)
_BLOCK_START_PATTERN = re.compile(r"^(\w+)\s*=\s*{")
# "item"
_QUOTED_PATTERN = re.compile(r'"([^"]*)"')
_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

_INT_FIELDS = frozenset({"id", "arable_land", "naval_exit_id"})
_STR_FIELDS = frozenset({"subsistence_building", "city", "port", "farm", "mine", "wood"})


class ParseError(Exception):
    """Raised when the underlying line stream cannot be read."""

    def __init__(self, message: str, source: Optional[str] = None, regions: Optional[List[Region]] = None):
        super().__init__(message)
        self.source = source
        # Regions finalized before the failure.
        self.regions: List[Region] = regions or []


class SubBlock(str, Enum):
    """Nested block currently open inside a region."""

    NONE = ""
    PROVINCES = "provinces"
    TRAITS = "traits"
    IMPASSABLE = "impassable"
    PRIME_LAND = "prime_land"
    ARABLE_RESOURCES = "arable_resources"
    CAPPED_RESOURCES = "capped_resources"
    RESOURCE = "resource"
    OTHER = "other"  # unrecognised key = { ... }

    @classmethod
    def from_key(cls, key: str) -> "SubBlock":
        try:
            block = cls(key)
        except ValueError:
            return cls.OTHER
        return cls.OTHER if block is cls.NONE else block

    @property
    def is_list(self) -> bool:
        return self in _LIST_BLOCKS


_LIST_BLOCKS = frozenset(
    {
        SubBlock.PROVINCES,
        SubBlock.TRAITS,
        SubBlock.IMPASSABLE,
        SubBlock.PRIME_LAND,
        SubBlock.ARABLE_RESOURCES,
    }
)


@dataclass
class SkippedLine:
    """A line the parser dropped or only partially understood."""

    line_number: int
    text: str
    reason: str


@dataclass
class _ParserState:
    region: Optional[Dict[str, Any]] = None
    block: SubBlock = SubBlock.NONE
    items: List[str] = field(default_factory=list)
    capped: Dict[str, int] = field(default_factory=dict)

    @property
    def in_region(self) -> bool:
        return self.region is not None


def extract_quoted(text: str) -> List[str]:
    """Return the contents of every double-quoted substring, left to right."""
    return _QUOTED_PATTERN.findall(text)


def _to_int(value: str) -> Optional[int]:
    value = value.strip()
    if not _INTEGER_PATTERN.match(value):
        return None
    return int(value)


class StateRegionParser:
    """
    Line-at-a-time parser for state region files.

    Feed lines with :meth:`feed` and call :meth:`finish` at end of input, or
    use :meth:`parse` for a whole stream. One instance per stream.
    """

    def __init__(
        self,
        block_prefix: str = DEFAULT_BLOCK_PREFIX,
        diagnostics: Optional[List[SkippedLine]] = None,
    ) -> None:
        self.block_prefix = block_prefix
        self.diagnostics = diagnostics
        self.regions: List[Region] = []
        self._state = _ParserState()
        self._line_number = 0

    def parse(self, lines: Iterable[str], source: Optional[str] = None) -> List[Region]:
        try:
            for raw in lines:
                self.feed(raw)
        except (OSError, UnicodeDecodeError) as exc:
            where = source or "<stream>"
            raise ParseError(
                f"Failed to read {where} after line {self._line_number}: {exc}",
                source=source,
                regions=list(self.regions),
            ) from exc
        return self.finish()

    def feed(self, raw: str) -> None:
        self._line_number += 1
        line = raw[1:] if raw.startswith(_BOM) else raw
        line = line.strip()

        if not line or line.startswith("#"):
            return

        state = self._state

        if line.startswith(self.block_prefix):
            self._start_region(line)
            return

        if not state.in_region:
            self._skip(line, "outside region")
            return

        if line == "}":
            self._close_block()
            return

        match = _KEY_VALUE_PATTERN.match(line)
        if match:
            self._assign(match.group(1), match.group(2), line)
            return

        match = _BLOCK_START_PATTERN.match(line)
        if match:
            self._open_block(match.group(1), line)
            return

        if state.block is not SubBlock.NONE:
            state.items.extend(extract_quoted(line))
            return

        self._skip(line, "unrecognised line")

    def finish(self) -> List[Region]:
        """Finalize a region left open at end of input and return all regions."""
        if self._state.in_region:
            self._finalize_region()
            self._state = _ParserState()
        return self.regions

    # -- transitions ---------------------------------------------------------

    def _start_region(self, line: str) -> None:
        if self._state.in_region:
            self._finalize_region()

        name = line.split("=", 1)[0].strip()
        self._state = _ParserState(region={"name": name})
        LOG.debug("Region %s starts at line %d", name, self._line_number)

    def _finalize_region(self) -> None:
        state = self._state
        region = state.region
        if region is None:
            return
        if not region["name"]:
            self._skip("", "region without a name discarded")
            return

        capped = region.setdefault("capped_resources", {})
        capped.update(state.capped)
        state.capped = {}
        try:
            self.regions.append(Region(**region))
        except ValidationError as exc:
            self._skip(region["name"], f"region discarded: {exc.errors()[0]['msg']}")

    def _close_block(self) -> None:
        state = self._state
        block = state.block
        region = state.region
        assert region is not None

        if block is SubBlock.NONE:
            self._finalize_region()
            self._state = _ParserState()
            return

        if block is SubBlock.CAPPED_RESOURCES:
            region.setdefault("capped_resources", {}).update(state.capped)
            state.capped = {}
        elif block.is_list:
            region[block.value] = state.items
        elif block is SubBlock.RESOURCE:
            if len(state.items) >= 2:
                amount = _to_int(state.items[1])
                if amount is None:
                    self._skip(state.items[1], "resource amount is not an integer")
                try:
                    region["resource"] = Resource(type=state.items[0], undiscovered_amount=amount or 0)
                except ValidationError:
                    self._skip(state.items[0], "resource type cannot be written back")
            else:
                self._skip("}", "resource block needs a type and an amount")

        state.items = []
        state.block = SubBlock.NONE

    def _assign(self, key: str, value: str, line: str) -> None:
        state = self._state
        region = state.region
        assert region is not None

        if state.block is SubBlock.CAPPED_RESOURCES:
            amount = _to_int(value)
            if amount is None:
                self._skip(line, "capped resource value is not an integer")
                return
            state.capped[key] = amount
        elif state.block is SubBlock.RESOURCE:
            state.items.append(value)
        elif state.block is SubBlock.NONE:
            if key in _INT_FIELDS:
                number = _to_int(value)
                if number is None:
                    self._skip(line, f"{key} is not an integer, using 0")
                region[key] = number or 0
            elif key in _STR_FIELDS:
                region[key] = value
            else:
                self._skip(line, f"unknown field {key}")
        else:
            self._skip(line, f"assignment inside {state.block.value} block")

    def _open_block(self, key: str, line: str) -> None:
        state = self._state
        region = state.region
        assert region is not None

        block = SubBlock.from_key(key)
        state.block = block
        state.items = []

        if "}" not in line:
            return

        # Single-line block: key = { "a" "b" }
        start = line.index("{") + 1
        end = line.find("}", start)
        content = line[start:end] if end >= start else ""
        if block.is_list:
            region[block.value] = extract_quoted(content)
        else:
            self._skip(line, f"single-line {key} block ignored")
        state.block = SubBlock.NONE

    def _skip(self, line: str, reason: str) -> None:
        LOG.debug("Line %d skipped (%s): %s", self._line_number, reason, line)
        if self.diagnostics is not None:
            self.diagnostics.append(SkippedLine(self._line_number, line, reason))


def parse_state_regions(
    lines: Iterable[str],
    diagnostics: Optional[List[SkippedLine]] = None,
    block_prefix: str = DEFAULT_BLOCK_PREFIX,
    source: Optional[str] = None,
) -> List[Region]:
    """
    Parse state region blocks from a line stream.

    Args:
        lines: Any iterable of text lines (open file, ``str.splitlines()``)
        diagnostics: Optional list collecting skipped lines
        block_prefix: Token that opens a region block
        source: Name used in error messages

    Returns:
        Regions in source order

    Raises:
        ParseError: If reading the stream fails
    """
    parser = StateRegionParser(block_prefix=block_prefix, diagnostics=diagnostics)
    return parser.parse(lines, source=source)


def parse_state_text(text: str, **kwargs: Any) -> List[Region]:
    return parse_state_regions(text.splitlines(), **kwargs)


def parse_state_file(
    path: Path | str,
    diagnostics: Optional[List[SkippedLine]] = None,
    block_prefix: str = DEFAULT_BLOCK_PREFIX,
) -> List[Region]:
    """
    Parse a state region file.

    Raises:
        ParseError: If the file cannot be opened or read as UTF-8
    """
    path = Path(path)
    try:
        handle = path.open("r", encoding="utf-8")
    except OSError as exc:
        raise ParseError(f"Cannot open {path}: {exc}", source=str(path)) from exc

    with handle:
        regions = parse_state_regions(handle, diagnostics=diagnostics, block_prefix=block_prefix, source=str(path))

    LOG.debug("Parsed %d regions from %s", len(regions), path)
    return regions
