#!/usr/bin/python3

"""Read and write Anvil worlds: sections, chunks and region files.

The chunks.section submodule packs a section's blocks and biomes into the
palette format, chunks.chunk assembles sections into chunk compounds and
chunks.region stores chunks in r.<x>.<z>.mca region files. chunks.world
extracts the blocks and surface of a saved world.
"""

from chunks.chunk import (
    build_chunk,
    chunk_position,
    read_sections,
)
from chunks.common import (
    DATA_VERSION,
    MAX_Y,
    MIN_Y,
    ChunkFormatError,
    ChunkPos,
    RegionPos,
    chunk_of,
    region_of,
)
from chunks.nbt import (
    read_nbt,
    write_nbt,
)
from chunks.region import (
    RegionFile,
    encode_region,
    region_file_name,
    write_region,
)
from chunks.section import Section
from chunks.world import (
    BlockPoint,
    SurfacePoint,
    read_blocks,
    read_surface,
)

__all__ = [
    'BlockPoint',
    'DATA_VERSION',
    'MAX_Y',
    'MIN_Y',
    'ChunkFormatError',
    'ChunkPos',
    'RegionFile',
    'RegionPos',
    'Section',
    'SurfacePoint',
    'build_chunk',
    'chunk_of',
    'chunk_position',
    'encode_region',
    'read_blocks',
    'read_nbt',
    'read_sections',
    'region_file_name',
    'read_surface',
    'region_of',
    'write_nbt',
    'write_region',
]
