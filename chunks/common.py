#!/usr/bin/python3

"""Common utilities for chunks submodules.

A world is three-dimensional, with x and z spanning the horizontal plane and y
going up and down. It is cut into chunks of 16*16 blocks on the horizontal
plane, and each chunk into sections of 16 blocks vertically. Sections store
their blocks as indices into a palette, packed into 64-bit integers.
"""

from collections import namedtuple

SECTION_WIDTH = 16
SECTION_VOLUME = SECTION_WIDTH ** 3
BIOME_CELL_WIDTH = 4
BIOME_CELLS = (SECTION_WIDTH // BIOME_CELL_WIDTH) ** 3
MIN_Y, MAX_Y = -64, 319
MIN_SECTION_Y, MAX_SECTION_Y = MIN_Y >> 4, MAX_Y >> 4

# 1.20.1; chunks written with this version are upgraded by newer games.
DATA_VERSION = 3465

ChunkPos = namedtuple('ChunkPos', 'x z')
RegionPos = namedtuple('RegionPos', 'x z')


class ChunkFormatError(ValueError):
    """Raised when chunk, section or region data cannot be decoded."""


def section_index(x, y, z):
    """Return the index of a block in a section from its local coordinates."""
    return (y << 8) | (z << 4) | x


def biome_index(x, y, z):
    """Return the index of a biome cell from local block coordinates."""
    return ((y >> 2) << 4) | ((z >> 2) << 2) | (x >> 2)


def chunk_of(x, z):
    """Return the position of the chunk containing block column (x, z)."""
    return ChunkPos(x >> 4, z >> 4)


def region_of(chunk_x, chunk_z):
    """Return the position of the region file containing a chunk."""
    return RegionPos(chunk_x >> 5, chunk_z >> 5)


def extract_bits(n, n_bits, offset_from_lsb):
    """Extract a number of bits from an integer.

    Example:
    >>> bin(extract_bits(0b1101011001111010, n_bits=5, offset_from_lsb=7))
    '0b1100'

        0b1101011001111010 -> 0b01100
              ^^^^^<- 7 ->

    The bits marked with ^ will be extracted. The offset is counted from the
    LSB, with the LSB itself having the offset 0.
    """
    try:
        bitmask = (2**n_bits - 1) << offset_from_lsb
    except (TypeError, ValueError) as err:
        raise ValueError(err)
    return (n & bitmask) >> offset_from_lsb


def bits_for_palette(palette_len, minimum=0):
    """Return how many bits one index into a palette of palette_len takes.

    A palette with a single entry needs no data at all, so 0 is returned for
    it regardless of minimum. Block states use a minimum of 4 bits per entry,
    biomes have no minimum.
    """
    if palette_len <= 1:
        return 0
    return max(minimum, (palette_len - 1).bit_length())


def to_signed64(n):
    """Reinterpret an unsigned 64-bit integer as a signed one."""
    return n - (1 << 64) if n & (1 << 63) else n


def pack_indices(indices, bits):
    """Pack palette indices into a list of signed 64-bit integers.

    Indices are stored from the least significant bit upwards. An index never
    straddles two longs: the unused high bits of each long are left zero.
    """
    per_long = 64 // bits
    longs = []
    for start in range(0, len(indices), per_long):
        value = 0
        for offset, index in enumerate(indices[start:start + per_long]):
            value |= index << (offset * bits)
        longs.append(to_signed64(value))
    return longs


def unpack_indices(longs, bits, count):
    """Unpack count palette indices of the given width from packed longs."""
    if bits <= 0:
        return [0] * count
    per_long = 64 // bits
    needed = -(-count // per_long)
    if len(longs) < needed:
        raise ChunkFormatError('{} longs hold fewer than {} indices of {} '
                               'bits'.format(len(longs), count, bits))
    indices = []
    for i in range(count):
        value = longs[i // per_long] & 0xFFFFFFFFFFFFFFFF
        indices.append(extract_bits(value, bits, (i % per_long) * bits))
    return indices
