"""
states-shuffler: Victoria 3 state region parser and formatter.

Parses ``map_data/state_regions/*.txt`` into typed region records, stores
them as JSON, shuffles capped resources and writes the script format back.
"""

from states_shuffler.formatter import format_state_region, format_state_regions
from states_shuffler.models import Region, Resource
from states_shuffler.parsers import ParseError, parse_state_file, parse_state_regions, parse_state_text

__version__ = "0.1.0"

__all__ = [
    "Region",
    "Resource",
    "ParseError",
    "parse_state_regions",
    "parse_state_text",
    "parse_state_file",
    "format_state_region",
    "format_state_regions",
]
