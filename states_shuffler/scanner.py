"""
State region directory scanning.

Walks a ``map_data/state_regions`` directory, parses every region file and
groups the results by file name. A file that cannot be read is logged and
skipped; the rest of the directory is still processed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional

from states_shuffler.models import Region
from states_shuffler.parsers import DEFAULT_BLOCK_PREFIX, ParseError, SkippedLine, parse_state_file

LOG = logging.getLogger("scanner")

DEFAULT_SKIP_FILES = ("99_seas.txt",)


def iter_state_files(
    directory: Path | str,
    skip_files: Iterable[str] = DEFAULT_SKIP_FILES,
    pattern: str = "*.txt",
) -> Iterator[Path]:
    """
    Yield region files in a directory, sorted by name.

    Sub-directories and files named in ``skip_files`` are ignored.

    Raises:
        FileNotFoundError: If the directory does not exist
    """
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"State regions directory not found: {root}")

    skip = set(skip_files)
    for path in sorted(root.glob(pattern)):
        if not path.is_file():
            continue
        if path.name in skip:
            LOG.debug("Skipping %s", path.name)
            continue
        yield path


def scan_state_regions(
    directory: Path | str,
    skip_files: Iterable[str] = DEFAULT_SKIP_FILES,
    pattern: str = "*.txt",
    block_prefix: str = DEFAULT_BLOCK_PREFIX,
    keep_empty: bool = False,
    diagnostics: Optional[Dict[str, List[SkippedLine]]] = None,
) -> Dict[str, List[Region]]:
    """
    Parse every region file in a directory.

    Args:
        directory: Directory holding the region files
        skip_files: File names to leave out
        pattern: Glob for region files
        block_prefix: Token that opens a region block
        keep_empty: Keep files that produced no regions (as empty lists)
        diagnostics: Optional mapping filled with skipped lines per file

    Returns:
        Mapping of file name to the regions it defines, in file order

    Raises:
        FileNotFoundError: If the directory does not exist
    """
    groups: Dict[str, List[Region]] = {}
    failed = 0

    for path in iter_state_files(directory, skip_files, pattern):
        skipped: Optional[List[SkippedLine]] = [] if diagnostics is not None else None
        try:
            regions = parse_state_file(path, diagnostics=skipped, block_prefix=block_prefix)
        except ParseError as exc:
            LOG.error("Failed to parse %s: %s", path, exc)
            failed += 1
            continue

        if diagnostics is not None and skipped:
            diagnostics[path.name] = skipped

        if regions or keep_empty:
            groups[path.name] = regions

    total = sum(len(regions) for regions in groups.values())
    LOG.info(
        "Scanned %s: %d regions in %d files (%d failed)",
        directory,
        total,
        len(groups),
        failed,
    )
    return groups
