#!/usr/bin/python3

"""Place blocks and biomes in a world and save them to its region files.

Coordinates come in two flavours. The plain methods (set_block, get_block,
check_for_block, fill_blocks, set_biome, ...) take a Y offset relative to the
ground at the block's column: y=0 is the ground level there, y=1 the block
above it. The *_absolute variants take world Y coordinates and ignore the
ground entirely.

Placing a block never silently replaces an existing one. Whether it may is
decided by the two optional override lists:

* If no (non-air) block exists at the position, the block is placed.
* Otherwise, with an override_whitelist, the block is placed only if the
  existing block is in the whitelist.
* Otherwise, with an override_blacklist, the block is placed only if the
  existing block is not in the blacklist. An empty blacklist therefore lets
  the block replace anything.
* Without either list, the existing block is kept and nothing happens.

Positions outside the editor's bounding box or the world's build height are
ignored. The set_* methods return whether the block was placed.

Chunks that already exist in the world directory are loaded the first time
they are touched, so existing blocks take part in the override rules and are
preserved when the world is saved.
"""

import logging
import os
from collections import defaultdict

from blocks.definitions import BlockWithProperties
from chunks.chunk import build_chunk, read_sections
from chunks.common import (DATA_VERSION, MAX_Y, MIN_Y, ChunkFormatError,
                           chunk_of, region_of)
from chunks.nbt import read_nbt, write_nbt
from chunks.region import RegionFile, region_file_name, write_region
from chunks.section import Section
from editor.ground import Ground

logger = logging.getLogger(__name__)


class WorldEditor:
    """Buffer edits to a world in memory until save() is called."""

    def __init__(self, world_dir, xzbbox=None, ground=None,
                 data_version=DATA_VERSION):
        """Initialise an editor for the world in directory world_dir.

        xzbbox restricts edits to a rectangle of columns (None allows all).
        ground resolves relative Y coordinates and defaults to flat ground.
        """
        self.world_dir = world_dir
        self.xzbbox = xzbbox
        self.ground = ground if ground is not None else Ground.flat()
        self.data_version = data_version
        self._chunks = {}
        self._modified = set()
        self._regions = {}

    @property
    def region_dir(self):
        return os.path.join(self.world_dir, 'region')

    def set_ground(self, ground):
        self.ground = ground

    def get_absolute_y(self, x, y_offset, z):
        """Return the world Y of an offset from the ground at (x, z)."""
        return self.ground.level(x, z) + y_offset

    # Chunk storage

    def _region(self, region_pos):
        try:
            return self._regions[region_pos]
        except KeyError:
            path = os.path.join(self.region_dir,
                                region_file_name(*region_pos))
            region = (RegionFile.open(path) if os.path.exists(path)
                      else None)
            self._regions[region_pos] = region
            return region

    def _chunk(self, chunk_pos, create):
        """Return the sections of a chunk, loading it from disk if it exists.

        If the chunk is neither loaded nor saved in the world, return None, or
        a new empty chunk if create is true.
        """
        try:
            return self._chunks[chunk_pos]
        except KeyError:
            pass
        sections = None
        region = self._region(region_of(*chunk_pos))
        if region is not None:
            data = region.read_chunk(*chunk_pos)
            if data is not None:
                sections = read_sections(read_nbt(data))
                logger.debug('Loaded chunk %s with %d sections', chunk_pos,
                             len(sections))
        if sections is None:
            if not create:
                return None
            sections = {}
        self._chunks[chunk_pos] = sections
        return sections

    def _section(self, x, y, z, create=False):
        """Return the Section holding the absolute position, or None."""
        chunk = self._chunk(chunk_of(x, z), create)
        if chunk is None:
            return None
        section = chunk.get(y >> 4)
        if create:
            if section is None:
                section = chunk[y >> 4] = Section()
            self._modified.add(chunk_of(x, z))
        return section

    def in_bounds(self, x, y, z):
        """Return whether an absolute position may be edited."""
        if not MIN_Y <= y <= MAX_Y:
            return False
        return self.xzbbox is None or self.xzbbox.contains(x, z)

    # Reading blocks

    def get_block_absolute(self, x, y, z):
        """Return the block at an absolute position, or None if it is air."""
        if not MIN_Y <= y <= MAX_Y:
            return None
        section = self._section(x, y, z)
        if section is None:
            return None
        return section.get_block(x & 15, y & 15, z & 15)

    def get_block(self, x, y, z):
        """Return the block at a ground-relative position, or None."""
        return self.get_block_absolute(x, self.get_absolute_y(x, y, z), z)

    def get_properties_absolute(self, x, y, z):
        """Return the properties of the block at an absolute position.

        Return None if there is no block or it has no properties.
        """
        if self.get_block_absolute(x, y, z) is None:
            return None
        return self._section(x, y, z).get_properties(x & 15, y & 15, z & 15)

    def block_at(self, x, y, z):
        """Return whether any block exists at a ground-relative position."""
        return self.get_block(x, y, z) is not None

    def check_for_block_absolute(self, x, y, z, whitelist=None):
        """Return whether the block at an absolute position is whitelisted.

        Without a whitelist, this is always false.
        """
        existing = self.get_block_absolute(x, y, z)
        return (existing is not None and whitelist is not None and
                existing in whitelist)

    def check_for_block(self, x, y, z, whitelist=None):
        """Return whether the block at a ground-relative position is
        whitelisted."""
        return self.check_for_block_absolute(
            x, self.get_absolute_y(x, y, z), z, whitelist)

    # Placing blocks

    def _may_place(self, x, y, z, override_whitelist, override_blacklist):
        if not self.in_bounds(x, y, z):
            logger.debug('Ignoring edit outside the world at (%d, %d, %d)',
                         x, y, z)
            return False
        existing = self.get_block_absolute(x, y, z)
        if existing is None:
            return True
        if override_whitelist is not None:
            return existing in override_whitelist
        if override_blacklist is not None:
            return existing not in override_blacklist
        return False

    def set_block_with_properties_absolute(self, block_with_properties, x, y,
                                           z, override_whitelist=None,
                                           override_blacklist=None):
        """Place a block with explicit properties at an absolute position.

        The properties are only attached if the block is actually placed.
        """
        if not self._may_place(x, y, z, override_whitelist,
                               override_blacklist):
            return False
        section = self._section(x, y, z, create=True)
        section.set_block_with_properties(x & 15, y & 15, z & 15,
                                          block_with_properties)
        return True

    def set_block_with_properties(self, block_with_properties, x, y, z,
                                  override_whitelist=None,
                                  override_blacklist=None):
        """Place a block with explicit properties at a ground-relative
        position."""
        return self.set_block_with_properties_absolute(
            block_with_properties, x, self.get_absolute_y(x, y, z), z,
            override_whitelist, override_blacklist)

    def set_block_absolute(self, block, x, y, z, override_whitelist=None,
                           override_blacklist=None):
        """Place a block with its default properties at an absolute
        position."""
        return self.set_block_with_properties_absolute(
            BlockWithProperties(block), x, y, z, override_whitelist,
            override_blacklist)

    def set_block(self, block, x, y, z, override_whitelist=None,
                  override_blacklist=None):
        """Place a block at a ground-relative position."""
        return self.set_block_absolute(
            block, x, self.get_absolute_y(x, y, z), z, override_whitelist,
            override_blacklist)

    def fill_blocks_absolute(self, block, x1, y1, z1, x2, y2, z2,
                             override_whitelist=None, override_blacklist=None):
        """Place a block in every position of an inclusive box.

        Return the number of blocks placed.
        """
        placed = 0
        for x in range(min(x1, x2), max(x1, x2) + 1):
            for z in range(min(z1, z2), max(z1, z2) + 1):
                for y in range(min(y1, y2), max(y1, y2) + 1):
                    placed += self.set_block_absolute(
                        block, x, y, z, override_whitelist,
                        override_blacklist)
        return placed

    def fill_blocks(self, block, x1, y1, z1, x2, y2, z2,
                    override_whitelist=None, override_blacklist=None):
        """Fill an inclusive box whose Y range is relative to the ground of
        each column. Return the number of blocks placed."""
        placed = 0
        for x in range(min(x1, x2), max(x1, x2) + 1):
            for z in range(min(z1, z2), max(z1, z2) + 1):
                for y in range(min(y1, y2), max(y1, y2) + 1):
                    placed += self.set_block(block, x, y, z,
                                             override_whitelist,
                                             override_blacklist)
        return placed

    # Biomes

    def set_biome_absolute(self, biome, x, y, z):
        """Set the biome of the 4*4*4 cell containing an absolute position."""
        if not self.in_bounds(x, y, z):
            return False
        self._section(x, y, z, create=True).set_biome(x & 15, y & 15, z & 15,
                                                      biome)
        return True

    def set_biome(self, biome, x, y, z):
        """Set the biome at a ground-relative position."""
        return self.set_biome_absolute(biome, x,
                                       self.get_absolute_y(x, y, z), z)

    def get_biome_absolute(self, x, y, z):
        """Return the biome at an absolute position (None if unset)."""
        if not MIN_Y <= y <= MAX_Y:
            return None
        section = self._section(x, y, z)
        if section is None:
            return None
        return section.get_biome(x & 15, y & 15, z & 15)

    # Saving

    def modified_chunks(self):
        """Return the positions of all chunks that were edited."""
        return sorted(self._modified)

    def save(self):
        """Write every edited chunk to the world's region files.

        Chunks already stored in a region file keep all their other data;
        chunks the editor did not touch are copied unchanged. Return the list
        of region files written.
        """
        os.makedirs(self.region_dir, exist_ok=True)
        by_region = defaultdict(list)
        for pos in self.modified_chunks():
            by_region[region_of(*pos)].append(pos)

        written = []
        for region_pos in sorted(by_region):
            path = os.path.join(self.region_dir,
                                region_file_name(*region_pos))
            region = self._region(region_pos)
            chunks = dict(region.chunks()) if region is not None else {}
            for pos in by_region[region_pos]:
                existing = chunks.get(pos)
                try:
                    compound = read_nbt(existing) if existing else None
                except ChunkFormatError as err:
                    logger.warning('Replacing unreadable chunk %s: %s',
                                   pos, err)
                    compound = None
                chunks[pos] = write_nbt(build_chunk(
                    pos.x, pos.z, self._chunks[pos], compound,
                    self.data_version))
            write_region(path, chunks)
            # Later reads must see what was just written.
            self._regions.pop(region_pos, None)
            written.append(path)
            logger.info('Saved %d chunks to %s', len(by_region[region_pos]),
                        path)
        return written
