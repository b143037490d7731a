#!/usr/bin/python3

"""Block and biome types, and the registries mapping them to compact ids.

The blocks.definitions submodule defines the Block type and constants for the
blocks the element generators place. The blocks.biomes submodule does the same
for biomes and chooses biomes from OpenStreetMap-style tags.
"""

from blocks.biomes import (
    Biome,
    biome_from_id,
    biome_from_tags,
    biome_id,
)
from blocks.definitions import (
    AIR,
    AIR_ID,
    Block,
    BlockWithProperties,
    block_from_id,
    block_id,
    effective_properties,
    is_air,
)

__all__ = [
    'AIR',
    'AIR_ID',
    'Biome',
    'Block',
    'BlockWithProperties',
    'biome_from_id',
    'biome_from_tags',
    'biome_id',
    'block_from_id',
    'block_id',
    'effective_properties',
    'is_air',
]
