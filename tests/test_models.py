"""Tests for the region data model and its interchange document."""

import pytest
from pydantic import ValidationError

from states_shuffler.models import Region, Resource


class TestRegion:
    def test_defaults(self):
        region = Region(name="STATE_A")
        assert region.id == 0
        assert region.provinces == []
        assert region.capped_resources == {}
        assert region.port is None
        assert region.resource is None
        assert region.naval_exit_id == 0

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError, match="name"):
            Region(name="  ")

    def test_default_containers_not_shared(self):
        a = Region(name="STATE_A")
        b = Region(name="STATE_B")
        a.capped_resources["bg_logging"] = 1
        assert b.capped_resources == {}

    def test_empty_optional_scalars_become_none(self):
        region = Region(name="STATE_A", port="", mine="", wood="")
        assert region.port is None
        assert region.mine is None
        assert region.wood is None
        assert Region.from_document({"name": "STATE_A", "port": ""}).port is None

    def test_empty_resource_type_rejected(self):
        with pytest.raises(ValidationError, match="type"):
            Resource(type="")

    @pytest.mark.parametrize(
        "value",
        [" x1", "x1\nid = 3", 'x"1', "x{1", "x1}"],
    )
    def test_unwritable_scalars_rejected(self, value: str):
        with pytest.raises(ValidationError, match="city"):
            Region(name="STATE_A", city=value)
        with pytest.raises(ValidationError, match="type"):
            Resource(type=value)

    def test_unwritable_list_items_rejected(self):
        with pytest.raises(ValidationError, match="provinces"):
            Region(name="STATE_A", provinces=['x"1'])
        with pytest.raises(ValidationError, match="traits"):
            Region(name="STATE_A", traits=["a}"])
        with pytest.raises(ValidationError, match="prime_land"):
            Region(name="STATE_A", prime_land=["x1\r\nx2"])

    def test_capped_resource_names_must_be_single_words(self):
        with pytest.raises(ValidationError, match="capped resource name"):
            Region(name="STATE_A", capped_resources={"bg logging": 3})
        assert Region(name="STATE_A", capped_resources={"bg_logging": 3}).capped_resources == {"bg_logging": 3}

    def test_values_with_inner_spaces_accepted(self):
        region = Region(name="STATE_A", city="x1 x2", provinces=["", "a b"], resource=Resource(type="bg oil"))
        assert region.city == "x1 x2"
        assert region.provinces == ["", "a b"]


class TestToDocument:
    def test_optional_fields_omitted(self):
        doc = Region(name="STATE_A", id=3).to_document()

        assert doc["name"] == "STATE_A"
        assert doc["id"] == 3
        assert doc["provinces"] == []
        assert doc["traits"] == []
        assert doc["arable_resources"] == []
        assert doc["capped_resources"] == {}
        for key in ("impassable", "prime_land", "port", "mine", "wood", "resource", "naval_exit_id"):
            assert key not in doc

    def test_optional_fields_present_when_set(self):
        doc = Region(
            name="STATE_A",
            impassable=["x1"],
            port="x2",
            resource=Resource(type="bg_gold_fields", undiscovered_amount=2),
            naval_exit_id=3001,
        ).to_document()

        assert doc["impassable"] == ["x1"]
        assert doc["port"] == "x2"
        assert doc["resource"] == {"type": "bg_gold_fields", "undiscovered_amount": 2}
        assert doc["naval_exit_id"] == 3001

    def test_document_round_trip(self):
        region = Region(
            name="STATE_A",
            provinces=["x1", "x2"],
            capped_resources={"bg_logging": 4},
            resource=Resource(type="bg_oil_extraction", undiscovered_amount=9),
        )
        assert Region.from_document(region.to_document()) == region


class TestFromDocument:
    def test_null_lists_become_empty(self):
        region = Region.from_document(
            {"name": "STATE_A", "provinces": None, "traits": None, "arable_resources": None, "capped_resources": None}
        )
        assert region.provinces == []
        assert region.traits == []
        assert region.capped_resources == {}

    def test_missing_name_rejected(self):
        with pytest.raises(ValidationError):
            Region.from_document({"id": 1})
