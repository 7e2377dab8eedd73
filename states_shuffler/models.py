from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

# Keys dropped from the persisted document when empty, absent or zero.
_OMIT_WHEN_EMPTY = ("impassable", "prime_land", "port", "mine", "wood", "resource", "naval_exit_id")


_CAP_NAME_PATTERN = re.compile(r"\w+")


def _check_single_line(field: str, value: str) -> None:
    if "".join(value.splitlines()) != value:
        raise ValueError(f"{field} cannot contain line breaks")


def _check_scalar(field: str, value: str) -> str:
    """Scalars are written as ``key = "value"``; reject what can't be read back."""
    _check_single_line(field, value)
    if value[:1].isspace():
        raise ValueError(f"{field} cannot start with whitespace")
    if any(ch in value for ch in '"{}'):
        raise ValueError(f"{field} cannot contain quotes or braces")
    return value


class Resource(BaseModel):
    type: str
    undiscovered_amount: int = 0

    @field_validator("type")
    @classmethod
    def _type_writable(cls, value: str) -> str:
        if not value:
            raise ValueError("type cannot be empty")
        return _check_scalar("type", value)


class Region(BaseModel):
    name: str
    id: int = 0
    subsistence_building: str = ""
    provinces: List[str] = Field(default_factory=list)
    impassable: List[str] = Field(default_factory=list)
    prime_land: List[str] = Field(default_factory=list)
    traits: List[str] = Field(default_factory=list)
    city: str = ""
    port: Optional[str] = None
    farm: str = ""
    mine: Optional[str] = None
    wood: Optional[str] = None
    arable_land: int = 0
    arable_resources: List[str] = Field(default_factory=list)
    capped_resources: Dict[str, int] = Field(default_factory=dict)
    resource: Optional[Resource] = None
    naval_exit_id: int = 0

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name cannot be empty")
        return value

    @field_validator("port", "mine", "wood")
    @classmethod
    def _empty_optional_is_absent(cls, value: Optional[str]) -> Optional[str]:
        # "" is never written out, so it can only come back as None
        return value or None

    @field_validator("subsistence_building", "city", "farm", "port", "mine", "wood")
    @classmethod
    def _scalar_writable(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
        if value:
            _check_scalar(info.field_name, value)
        return value

    @field_validator("provinces", "impassable", "prime_land", "traits", "arable_resources")
    @classmethod
    def _items_writable(cls, value: List[str], info: ValidationInfo) -> List[str]:
        for item in value:
            _check_single_line(info.field_name, item)
            if '"' in item or "}" in item:
                raise ValueError(f"{info.field_name} items cannot contain quotes or closing braces")
        return value

    @field_validator("capped_resources")
    @classmethod
    def _cap_names_are_identifiers(cls, value: Dict[str, int]) -> Dict[str, int]:
        for name in value:
            if not _CAP_NAME_PATTERN.fullmatch(name):
                raise ValueError(f"capped resource name {name!r} must be a single word")
        return value

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the interchange document, omitting empty optional fields."""
        payload = self.model_dump(mode="json")
        for key in _OMIT_WHEN_EMPTY:
            if not payload.get(key):
                payload.pop(key, None)
        return payload

    @classmethod
    def from_document(cls, record: Dict[str, Any]) -> "Region":
        data = dict(record)
        # Documents written by older tooling may carry nulls for list/map fields.
        for key in ("provinces", "impassable", "prime_land", "traits", "arable_resources"):
            if data.get(key) is None:
                data.pop(key, None)
        if data.get("capped_resources") is None:
            data.pop("capped_resources", None)
        return cls.model_validate(data)
