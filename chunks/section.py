#!/usr/bin/python3

"""Hold the blocks and biomes of one 16*16*16 section and (de)serialise them.

A Section keeps one registry id per block and one per 4*4*4 biome cell. Blocks
placed with explicit properties additionally have those properties remembered
by block index. Fresh sections are all air with the plains biome.

to_nbt and from_nbt convert to and from the palette-based section compound
used by chunk format 1.18 and later: every distinct block state and biome
occurs once in a palette, and the per-block (or per-cell) palette indices are
packed into a long array. A palette with a single entry has no data array.
"""

from array import array

from nbtlib.tag import Byte, Compound, List, LongArray, String

from blocks.biomes import PLAINS, Biome, biome_from_id, biome_id
from blocks.definitions import (AIR, AIR_ID, block_by_name, block_from_id,
                                block_id, effective_properties, is_air)
from chunks.common import (BIOME_CELLS, SECTION_VOLUME, ChunkFormatError,
                           biome_index, bits_for_palette, pack_indices,
                           section_index, unpack_indices)
from chunks.nbt import compound_strings, string_compound, string_list

MIN_BLOCK_STATE_BITS = 4
PLAINS_ID = biome_id(PLAINS)


def _palette_key(name, properties):
    return name, None if not properties else tuple(sorted(properties.items()))


class Section:
    """The mutable contents of one section."""

    def __init__(self):
        """Initialise a new section filled with air and plains."""
        self.block_ids = array('I', [AIR_ID]) * SECTION_VOLUME
        self.properties = {}
        self.biome_ids = array('I', [PLAINS_ID]) * BIOME_CELLS

    @staticmethod
    def index(x, y, z):
        """Return the block index of local coordinates (each 0 to 15)."""
        return section_index(x, y, z)

    @staticmethod
    def biome_index(x, y, z):
        """Return the biome cell index of local block coordinates."""
        return biome_index(x, y, z)

    def set_block(self, x, y, z, block):
        """Place block with its default properties."""
        i = section_index(x, y, z)
        self.block_ids[i] = block_id(block)
        self.properties.pop(i, None)

    def set_block_with_properties(self, x, y, z, block_with_properties):
        """Place a block, recording its explicit properties if it has any."""
        block, properties = block_with_properties
        i = section_index(x, y, z)
        self.block_ids[i] = block_id(block)
        if properties is None:
            self.properties.pop(i, None)
        else:
            self.properties[i] = {str(k): str(v)
                                  for k, v in properties.items()}

    def get_block(self, x, y, z):
        """Return the block at local coordinates, or None if it is air."""
        block_id_ = self.block_ids[section_index(x, y, z)]
        return None if block_id_ == AIR_ID else block_from_id(block_id_)

    def get_properties(self, x, y, z):
        """Return the properties the block at (x, y, z) is written with."""
        i = section_index(x, y, z)
        return effective_properties(block_from_id(self.block_ids[i]),
                                    self.properties.get(i))

    def set_biome(self, x, y, z, biome):
        """Set the biome of the cell containing local coordinates (x, y, z)."""
        self.biome_ids[biome_index(x, y, z)] = biome_id(biome)

    def get_biome(self, x, y, z):
        """Return the biome of the cell containing (x, y, z)."""
        return biome_from_id(self.biome_ids[biome_index(x, y, z)])

    def is_empty(self):
        """Return whether the section holds nothing but air."""
        return all(i == AIR_ID for i in self.block_ids)

    def _block_palette(self):
        palette, lookup = [], {}

        def palette_index(block, properties):
            key = _palette_key(block.name, properties)
            try:
                return lookup[key]
            except KeyError:
                lookup[key] = len(palette)
                palette.append((block.name, properties))
                return lookup[key]

        palette_index(AIR, None)
        indices = []
        cached = {}  # registry id -> palette index for blocks w/o overrides
        for i, id_ in enumerate(self.block_ids):
            if i in self.properties:
                indices.append(palette_index(block_from_id(id_),
                                             self.properties[i]))
                continue
            try:
                indices.append(cached[id_])
            except KeyError:
                block = block_from_id(id_)
                cached[id_] = palette_index(block, block.default_properties())
                indices.append(cached[id_])
        return palette, indices

    def to_nbt(self, y):
        """Build the section compound for section height y."""
        palette, indices = self._block_palette()
        entries = []
        for name, properties in palette:
            entry = Compound({'Name': String(name)})
            if properties:
                entry['Properties'] = string_compound(properties)
            entries.append(entry)
        block_states = Compound({'palette': List[Compound](entries)})
        bits = bits_for_palette(len(palette), MIN_BLOCK_STATE_BITS)
        if bits:
            block_states['data'] = LongArray(pack_indices(indices, bits))

        biome_palette, biome_indices, biome_lookup = [], [], {}
        for id_ in self.biome_ids:
            if id_ not in biome_lookup:
                biome_lookup[id_] = len(biome_palette)
                biome_palette.append(biome_from_id(id_).name)
            biome_indices.append(biome_lookup[id_])
        biomes = Compound({'palette': string_list(biome_palette)})
        bits = bits_for_palette(len(biome_palette))
        if bits:
            biomes['data'] = LongArray(pack_indices(biome_indices, bits))

        return Compound({
            'Y': Byte(y),
            'block_states': block_states,
            'biomes': biomes,
        })

    @classmethod
    def from_nbt(cls, compound):
        """Decode a section compound. Return a new Section."""
        section = cls()
        block_states = compound.get('block_states')
        if block_states is not None:
            section._read_block_states(block_states)
        biomes = compound.get('biomes')
        if biomes is not None:
            palette = [biome_id(Biome.from_name(str(name)))
                       for name in biomes.get('palette', ())]
            if palette:
                bits = bits_for_palette(len(palette))
                data = [int(v) for v in biomes.get('data', ())]
                for i, p in enumerate(unpack_indices(data, bits,
                                                     BIOME_CELLS)):
                    if p >= len(palette):
                        raise ChunkFormatError('biome palette index {} out '
                                               'of range'.format(p))
                    section.biome_ids[i] = palette[p]
        return section

    def _read_block_states(self, block_states):
        palette = []
        for entry in block_states.get('palette', ()):
            block = block_by_name(str(entry.get('Name', AIR.name)))
            if is_air(block):
                palette.append((AIR_ID, None))
                continue
            properties = (compound_strings(entry['Properties'])
                          if 'Properties' in entry else None)
            if properties == block.default_properties():
                properties = None
            palette.append((block_id(block), properties))
        if not palette:
            return
        bits = bits_for_palette(len(palette), MIN_BLOCK_STATE_BITS)
        data = [int(v) for v in block_states.get('data', ())]
        for i, p in enumerate(unpack_indices(data, bits, SECTION_VOLUME)):
            if p >= len(palette):
                raise ChunkFormatError('block palette index {} out of range'
                                       .format(p))
            self.block_ids[i], properties = palette[p]
            if properties is not None:
                self.properties[i] = dict(properties)
