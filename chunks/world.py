#!/usr/bin/python3

"""Extract blocks from the region files of a saved world.

read_blocks generates every non-air block, read_surface the topmost non-air
block of every column. Both read the r.<x>.<z>.mca files of a region
directory in name order.
"""

import logging
import os
import re
from collections import namedtuple

from blocks.definitions import AIR_ID, block_from_id
from chunks.chunk import read_sections
from chunks.nbt import read_nbt
from chunks.region import RegionFile

logger = logging.getLogger(__name__)

BlockPoint = namedtuple('BlockPoint', 'x y z name')
SurfacePoint = namedtuple('SurfacePoint', 'x z y name')

_REGION_FILE_RE = re.compile(r'^r\.-?\d+\.-?\d+\.mca$')


def region_files(region_dir):
    """Return the paths of all region files in a directory, sorted by name."""
    return [os.path.join(region_dir, name)
            for name in sorted(os.listdir(region_dir))
            if _REGION_FILE_RE.match(name)]


def read_chunks(region_dir):
    """Generate (ChunkPos, {section_y: Section}) for every saved chunk."""
    for path in region_files(region_dir):
        logger.debug('Reading %s', path)
        for pos, data in RegionFile.open(path).chunks():
            yield pos, read_sections(read_nbt(data))


def _chunk_blocks(pos, sections):
    for section_y in sorted(sections):
        section = sections[section_y]
        for i, id_ in enumerate(section.block_ids):
            if id_ == AIR_ID:
                continue
            y, z, x = i >> 8, (i >> 4) & 15, i & 15
            yield BlockPoint(pos.x * 16 + x, section_y * 16 + y,
                             pos.z * 16 + z, block_from_id(id_).name)


def read_blocks(region_dir):
    """Generate a BlockPoint for every non-air block in the world."""
    for pos, sections in read_chunks(region_dir):
        yield from _chunk_blocks(pos, sections)


def _chunk_surface(pos, sections):
    for z in range(16):
        for x in range(16):
            for section_y in sorted(sections, reverse=True):
                section = sections[section_y]
                top = next((y for y in range(15, -1, -1)
                            if section.get_block(x, y, z) is not None), None)
                if top is not None:
                    yield SurfacePoint(
                        pos.x * 16 + x, pos.z * 16 + z, section_y * 16 + top,
                        section.get_block(x, top, z).name)
                    break


def read_surface(region_dir):
    """Generate a SurfacePoint for the topmost block of every column."""
    for pos, sections in read_chunks(region_dir):
        yield from _chunk_surface(pos, sections)
