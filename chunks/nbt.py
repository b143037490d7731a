#!/usr/bin/python3

"""Read and write the named root compounds that chunks are stored as.

A chunk's payload in a region file is a single compound tag preceded by its
tag type and an (empty) name, which is the framing nbtlib.File reads and
writes. nbtlib reads missing bytes as zeros, so data is parsed from a buffer
that raises EOFError on short reads instead.
"""

from io import BytesIO

from nbtlib import File
from nbtlib.tag import Compound, List, String

from chunks.common import ChunkFormatError


class _ExactReader(BytesIO):
    def read(self, size=-1):
        data = super().read(size)
        if size is not None and 0 <= size != len(data):
            raise EOFError('NBT data ends after {} bytes'.format(self.tell()))
        return data


def read_nbt(data):
    """Parse bytes holding a named root compound. Return the compound."""
    try:
        return File.parse(_ExactReader(data))
    except (EOFError, KeyError, TypeError, ValueError) as err:
        raise ChunkFormatError('invalid NBT data: {}'.format(err))


def write_nbt(compound, name=''):
    """Serialise compound as a named root compound. Return the bytes."""
    buff = BytesIO()
    File(compound, root_name=name).write(buff)
    return buff.getvalue()


def string_compound(mapping):
    """Build a Compound of String tags from a mapping of str to str."""
    return Compound({str(k): String(str(v)) for k, v in mapping.items()})


def string_list(values):
    """Build a List of String tags."""
    return List[String]([String(v) for v in values])


def compound_strings(compound):
    """Convert a Compound of String tags back to a plain dict."""
    return {str(k): str(v) for k, v in compound.items()}
