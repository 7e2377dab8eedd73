"""Configuration management for states-shuffler.

Loads settings from environment variables with sensible defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

ENV_PREFIX = "STATES_SHUFFLER_"


def _env(name: str, default: str) -> str:
    return os.getenv(ENV_PREFIX + name, default)


def _split_csv(value: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass
class ScanConfig:
    """Where state region files are read from."""
    input_dir: str = "state_regions"
    skip_files: Tuple[str, ...] = ("99_seas.txt",)  # seas hold no land regions
    pattern: str = "*.txt"
    block_prefix: str = "STATE_"

    def __post_init__(self) -> None:
        if not self.block_prefix:
            raise ValueError("block_prefix cannot be empty")

    @classmethod
    def from_env(cls) -> "ScanConfig":
        return cls(
            input_dir=_env("INPUT_DIR", "state_regions"),
            skip_files=_split_csv(_env("SKIP_FILES", "99_seas.txt")),
            pattern=_env("PATTERN", "*.txt"),
            block_prefix=_env("BLOCK_PREFIX", "STATE_"),
        )


@dataclass
class MutationConfig:
    """How capped resources are shuffled before writing modded files."""
    add_random: int = 50
    new_resource: str = "bg_oil_extraction"  # empty = don't add
    new_resource_value: int = 75  # 0 = random 10-100
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.add_random < 1:
            raise ValueError(f"add_random must be >= 1, got {self.add_random}")
        if self.new_resource_value < 0:
            raise ValueError(f"new_resource_value must be >= 0, got {self.new_resource_value}")

    @classmethod
    def from_env(cls) -> "MutationConfig":
        seed = _env("SEED", "")
        return cls(
            add_random=int(_env("ADD_RANDOM", "50")),
            new_resource=_env("NEW_RESOURCE", "bg_oil_extraction"),
            new_resource_value=int(_env("NEW_RESOURCE_VALUE", "75")),
            seed=int(seed) if seed else None,
        )


@dataclass
class AppConfig:
    """Top-level application configuration."""
    scan: ScanConfig = field(default_factory=ScanConfig)
    mutation: MutationConfig = field(default_factory=MutationConfig)
    output_json: str = "json/states.json"
    modded_dir: str = "modded"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            scan=ScanConfig.from_env(),
            mutation=MutationConfig.from_env(),
            output_json=_env("OUTPUT_JSON", "json/states.json"),
            modded_dir=_env("MODDED_DIR", "modded"),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
        )
