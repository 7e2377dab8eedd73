"""
Shared test fixtures.

``west_europe_text`` mirrors the layout of the game's
``map_data/state_regions/00_west_europe.txt``: a BOM on the first line,
comments, multi-line and single-line lists, capped resources, a resource
block and a naval exit.
"""

import textwrap
from pathlib import Path

import pytest

WEST_EUROPE = "\ufeff" + textwrap.dedent(
    """\
    # West Europe
    STATE_ILE_DE_FRANCE = {
        id = 12
        subsistence_building = "building_subsistence_farms"
        provinces = {
            "x0A5A73" "x0B8D61"
            "x13D5CE"
        }
        prime_land = { "x0A5A73" }
        traits = { "state_trait_seine_river" }
        city = "x0A5A73"
        farm = "x13D5CE"
        mine = "x0B8D61"
        arable_land = 120
        arable_resources = { "bg_wheat_farms" "bg_livestock_ranches" "bg_vineyard_plantations" }
        capped_resources = {
            bg_iron_mining = 20
            bg_logging = 12
        }
    }

    STATE_NORMANDY = {
        id = 13
        subsistence_building = "building_subsistence_farms"
        provinces = { "x6B2E8F" "x7C3F90" }
        impassable = { "x7C3F90" }
        traits = { }
        city = "x6B2E8F"
        port = "x7C3F90"
        farm = "x6B2E8F"
        wood = "x6B2E8F"
        arable_land = 60
        arable_resources = { "bg_wheat_farms" }
        capped_resources = {
            bg_fishing = 8
        }
        resource = {
            type = "bg_oil_extraction"
            undiscovered_amount = 14
        }
        naval_exit_id = 3032
    }
    """
)


@pytest.fixture
def west_europe_text() -> str:
    return WEST_EUROPE


@pytest.fixture
def state_regions_dir(tmp_path: Path) -> Path:
    """A state_regions directory with two region files, the seas file and a sub-directory."""
    root = tmp_path / "state_regions"
    root.mkdir()
    (root / "00_west_europe.txt").write_text(WEST_EUROPE, encoding="utf-8")
    (root / "01_south_europe.txt").write_text(
        textwrap.dedent(
            """\
            STATE_LOMBARDY = {
                id = 40
                subsistence_building = "building_subsistence_farms"
                provinces = { "x1A2B3C" }
                traits = { "state_trait_po_river" }
                city = "x1A2B3C"
                farm = "x1A2B3C"
                arable_land = 80
                arable_resources = { "bg_rice_farms" }
                capped_resources = {
                    bg_logging = 5
                }
            }
            """
        ),
        encoding="utf-8",
    )
    (root / "99_seas.txt").write_text('STATE_SEA = {\n    id = 3032\n}\n', encoding="utf-8")
    (root / "notes").mkdir()
    (root / "readme.md").write_text("not a region file", encoding="utf-8")
    return root
