#!/usr/bin/python3

"""Read and write Anvil region files (r.<x>.<z>.mca).

A region file holds up to 32*32 chunks. It starts with a header of two 4 KiB
tables with one entry per chunk, indexed by (chunk_x & 31) + (chunk_z & 31)*32:

locations:
    A 3-byte big-endian offset of the chunk's first 4 KiB sector in the file,
    and a 1-byte count of the sectors the chunk occupies. Both are zero for
    chunks that are not present.

timestamps:
    The time the chunk was last saved, in seconds since the epoch.

Each chunk starts with a 4-byte big-endian length (counting the compression
byte and the payload), a 1-byte compression type and the compressed NBT
payload, and is padded to a whole number of sectors.
"""

import gzip
import logging
import time
import zlib
from os.path import basename
from struct import Struct

from chunks.common import ChunkFormatError, ChunkPos

logger = logging.getLogger(__name__)

SECTOR_SIZE = 4096
CHUNKS_PER_REGION = 32 * 32
COMPRESSION_GZIP, COMPRESSION_ZLIB, COMPRESSION_NONE = 1, 2, 3
_location_struct, _timestamp_struct, _chunk_header_struct = \
    map(Struct, ['>I', '>I', '>IB'])


def region_file_name(region_x, region_z):
    """Return the basename of the region file at the given region position."""
    return 'r.{}.{}.mca'.format(region_x, region_z)


def _table_index(chunk_x, chunk_z):
    return (chunk_x & 31) + (chunk_z & 31) * 32


def _decompress(compression, payload):
    if compression == COMPRESSION_ZLIB:
        return zlib.decompress(payload)
    if compression == COMPRESSION_GZIP:
        return gzip.decompress(payload)
    if compression == COMPRESSION_NONE:
        return payload
    raise ChunkFormatError('unknown chunk compression type {}'
                           .format(compression))


class RegionFile:
    """A region file loaded into memory for reading.

    region_x and region_z are used to turn the local chunk positions of the
    header into absolute chunk positions in chunks().
    """

    def __init__(self, data, region_x=0, region_z=0):
        """Initialise a region from the file's complete contents."""
        if len(data) < 2 * SECTOR_SIZE:
            raise ChunkFormatError('region header is {} bytes long, expected '
                                   'at least {}'.format(len(data),
                                                        2 * SECTOR_SIZE))
        self._data = data
        self.region_x, self.region_z = region_x, region_z

    @classmethod
    def open(cls, path):
        """Read the region file at path.

        The region position is parsed from the file name if it follows the
        r.<x>.<z>.mca convention.
        """
        with open(path, 'rb') as regionf:
            data = regionf.read()
        try:
            _, region_x, region_z, _ = basename(path).split('.')
            region_x, region_z = int(region_x), int(region_z)
        except ValueError:
            region_x = region_z = 0
        return cls(data, region_x, region_z)

    def _location(self, index):
        entry, = _location_struct.unpack_from(self._data,
                                              index * _location_struct.size)
        return entry >> 8, entry & 0xFF

    def timestamp(self, chunk_x, chunk_z):
        """Return the time the chunk was last saved (0 if it is missing)."""
        stamp, = _timestamp_struct.unpack_from(
            self._data, SECTOR_SIZE +
            _table_index(chunk_x, chunk_z) * _timestamp_struct.size)
        return stamp

    def read_chunk(self, chunk_x, chunk_z):
        """Return the decompressed NBT bytes of a chunk, or None if missing.

        Only the low five bits of the chunk coordinates are used, so both
        local and absolute chunk positions may be passed.
        """
        offset, sectors = self._location(_table_index(chunk_x, chunk_z))
        if offset == 0 or sectors == 0:
            return None
        start = offset * SECTOR_SIZE
        if start + _chunk_header_struct.size > len(self._data):
            raise ChunkFormatError('chunk ({}, {}) starts past the end of the '
                                   'file'.format(chunk_x, chunk_z))
        length, compression = _chunk_header_struct.unpack_from(self._data,
                                                               start)
        payload_start = start + _chunk_header_struct.size
        payload = self._data[payload_start:payload_start + length - 1]
        if len(payload) != length - 1:
            raise ChunkFormatError('chunk ({}, {}) is truncated'
                                   .format(chunk_x, chunk_z))
        try:
            return _decompress(compression, payload)
        except (zlib.error, OSError, EOFError) as err:
            raise ChunkFormatError('chunk ({}, {}) cannot be decompressed: {}'
                                   .format(chunk_x, chunk_z, err))

    def chunks(self):
        """Generate (ChunkPos, NBT bytes) for every chunk in the region."""
        for index in range(CHUNKS_PER_REGION):
            local_x, local_z = index % 32, index // 32
            data = self.read_chunk(local_x, local_z)
            if data is not None:
                yield ChunkPos(self.region_x * 32 + local_x,
                               self.region_z * 32 + local_z), data


def encode_region(chunks, timestamp=None):
    """Build the bytes of a region file.

    chunks maps chunk positions (absolute or local) to uncompressed NBT bytes.
    Chunks are compressed with zlib and laid out in index order.
    """
    if timestamp is None:
        timestamp = int(time.time())
    locations = bytearray(SECTOR_SIZE)
    timestamps = bytearray(SECTOR_SIZE)
    body = bytearray()
    by_index = {_table_index(x, z): data for (x, z), data in chunks.items()}
    for index in sorted(by_index):
        payload = zlib.compress(by_index[index])
        record = (_chunk_header_struct.pack(len(payload) + 1, COMPRESSION_ZLIB)
                  + payload)
        sectors = -(-len(record) // SECTOR_SIZE)
        if sectors > 0xFF:
            raise ChunkFormatError('chunk at index {} needs {} sectors, more '
                                   'than a region file can address'
                                   .format(index, sectors))
        offset = 2 + len(body) // SECTOR_SIZE
        _location_struct.pack_into(locations, index * _location_struct.size,
                                   offset << 8 | sectors)
        _timestamp_struct.pack_into(timestamps,
                                    index * _timestamp_struct.size, timestamp)
        body += record
        body += bytes(sectors * SECTOR_SIZE - len(record))
    return bytes(locations + timestamps + body)


def write_region(path, chunks, timestamp=None):
    """Write a complete region file holding chunks to path."""
    data = encode_region(chunks, timestamp)
    with open(path, 'wb') as regionf:
        regionf.write(data)
    logger.debug('Wrote %d chunks (%d bytes) to %s', len(chunks), len(data),
                 path)
