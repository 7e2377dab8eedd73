"""
JSON persistence for parsed state regions.

The document maps each source file name to the regions it defines::

    {
      "00_west_europe.txt": [
        {"name": "STATE_ILE_DE_FRANCE", "id": 12, ...},
        ...
      ]
    }

A bare list of regions (what the single-file tooling writes) is also
accepted on load and grouped under the document's file stem.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from pydantic import ValidationError

from states_shuffler.models import Region

LOG = logging.getLogger("storage.json_store")


class RegionStore:
    """Read/write a grouped region document on disk."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, groups: Mapping[str, Sequence[Region]]) -> None:
        """Write the grouped regions as indented JSON, creating parent directories."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {name: [region.to_document() for region in regions] for name, regions in groups.items()}

        with self._path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, ensure_ascii=False, indent=2)

        LOG.info(
            "Saved %d regions from %d files to %s",
            sum(len(regions) for regions in groups.values()),
            len(groups),
            self._path,
        )

    def load(self) -> Dict[str, List[Region]]:
        """
        Load the grouped regions.

        Raises:
            FileNotFoundError: If the document doesn't exist
            ValueError: If the document is not valid JSON or has the wrong shape
        """
        if not self._path.exists():
            raise FileNotFoundError(f"Region document not found: {self._path}")

        with self._path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid JSON in {self._path}: {exc}") from exc

        if isinstance(data, list):
            data = {self._path.stem: data}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid region document format: expected dict or list, got {type(data).__name__}")

        groups: Dict[str, List[Region]] = {}
        for name, records in data.items():
            if not isinstance(records, list):
                raise ValueError(f"Invalid region list for {name!r}: expected list, got {type(records).__name__}")
            groups[name] = self._records_to_regions(name, records)

        LOG.debug("Loaded %d groups from %s", len(groups), self._path)
        return groups

    def load_regions(self) -> List[Region]:
        """Load all regions, flattened in document order."""
        return [region for regions in self.load().values() for region in regions]

    @staticmethod
    def _records_to_regions(group: str, records: list) -> List[Region]:
        regions: List[Region] = []
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                LOG.warning("Skipping non-object record %d in %s", index, group)
                continue
            try:
                regions.append(Region.from_document(record))
            except ValidationError as exc:
                LOG.warning("Skipping invalid region record %d in %s: %s", index, group, exc)
        return regions
