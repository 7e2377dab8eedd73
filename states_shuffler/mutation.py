"""
Capped resource shuffling.

Bumps every capped resource of a region by a random amount and optionally
adds a new capped resource, before regions are written back as a mod.
"""

from __future__ import annotations

import logging
import random
import re
from typing import Iterable, Optional

from states_shuffler.config.settings import MutationConfig
from states_shuffler.models import Region

LOG = logging.getLogger("mutation")

RANDOM_NEW_RESOURCE_RANGE = (10, 100)
_RESOURCE_NAME_PATTERN = re.compile(r"\w+")


def modify_resources(
    region: Region,
    add_random: int,
    new_resource: Optional[str] = None,
    new_resource_value: int = 0,
    rng: Optional[random.Random] = None,
) -> Region:
    """
    Shuffle a region's capped resources in place.

    Every existing cap grows by a uniform random integer in ``[1, add_random]``.
    If ``new_resource`` is given it is set to ``new_resource_value``, or to a
    random value in 10-100 when that is 0. An existing cap of the same name is
    overwritten.

    Returns:
        The same region, for chaining
    """
    if add_random < 1:
        raise ValueError(f"add_random must be >= 1, got {add_random}")
    if new_resource and not _RESOURCE_NAME_PATTERN.fullmatch(new_resource):
        raise ValueError(f"new_resource must be a single word, got {new_resource!r}")
    rng = rng or random.Random()

    for name in region.capped_resources:
        region.capped_resources[name] += rng.randint(1, add_random)

    if new_resource:
        if new_resource_value == 0:
            new_resource_value = rng.randint(*RANDOM_NEW_RESOURCE_RANGE)
        region.capped_resources[new_resource] = new_resource_value

    return region


def shuffle_regions(
    regions: Iterable[Region],
    config: Optional[MutationConfig] = None,
    rng: Optional[random.Random] = None,
) -> int:
    """Apply :func:`modify_resources` to every region. Returns the number of regions touched."""
    config = config or MutationConfig()
    rng = rng or random.Random(config.seed)

    count = 0
    for region in regions:
        modify_resources(
            region,
            config.add_random,
            new_resource=config.new_resource or None,
            new_resource_value=config.new_resource_value,
            rng=rng,
        )
        count += 1

    LOG.info("Shuffled capped resources of %d regions (add_random=%d)", count, config.add_random)
    return count
