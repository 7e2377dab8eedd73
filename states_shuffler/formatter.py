"""
State region text formatter.

Writes regions back into the game's script format. Field order is fixed and
optional fields are suppressed when empty, so output is not a byte-for-byte
inverse of the parsed file, but it is always valid parser input.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from states_shuffler.models import Region

INDENT = "    "


def _quote(value: str) -> str:
    return f'"{value}"'


def _list_line(key: str, items: Sequence[str]) -> str:
    quoted = " ".join(_quote(item) for item in items)
    return f"{INDENT}{key} = {{ {quoted} }}"


def format_state_region(region: Region) -> str:
    """Format a single region block, without the trailing blank line."""
    lines: List[str] = [f"{region.name} = {{"]
    lines.append(f"{INDENT}id = {region.id}")
    lines.append(f"{INDENT}subsistence_building = {_quote(region.subsistence_building)}")
    lines.append(_list_line("provinces", region.provinces))
    if region.impassable:
        lines.append(_list_line("impassable", region.impassable))
    if region.prime_land:
        lines.append(_list_line("prime_land", region.prime_land))
    lines.append(_list_line("traits", region.traits))

    lines.append(f"{INDENT}city = {_quote(region.city)}")
    if region.port:
        lines.append(f"{INDENT}port = {_quote(region.port)}")
    lines.append(f"{INDENT}farm = {_quote(region.farm)}")
    if region.mine:
        lines.append(f"{INDENT}mine = {_quote(region.mine)}")
    if region.wood:
        lines.append(f"{INDENT}wood = {_quote(region.wood)}")

    lines.append(f"{INDENT}arable_land = {region.arable_land}")
    lines.append(_list_line("arable_resources", region.arable_resources))

    lines.append(f"{INDENT}capped_resources = {{")
    for name, cap in region.capped_resources.items():
        lines.append(f"{INDENT}{INDENT}{name} = {cap}")
    lines.append(f"{INDENT}}}")

    if region.resource is not None:
        lines.append(f"{INDENT}resource = {{")
        lines.append(f"{INDENT}{INDENT}type = {_quote(region.resource.type)}")
        lines.append(f"{INDENT}{INDENT}undiscovered_amount = {region.resource.undiscovered_amount}")
        lines.append(f"{INDENT}}}")

    # 0 doubles as "no naval exit"
    if region.naval_exit_id != 0:
        lines.append(f"{INDENT}naval_exit_id = {region.naval_exit_id}")

    lines.append("}")
    return "\n".join(lines)


def format_state_regions(regions: Iterable[Region]) -> str:
    """Format regions as script text, one block per region separated by a blank line."""
    return "".join(format_state_region(region) + "\n\n" for region in regions)
