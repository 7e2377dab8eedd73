"""Persistence for parsed state regions."""

from states_shuffler.storage.json_store import RegionStore

__all__ = ["RegionStore"]
