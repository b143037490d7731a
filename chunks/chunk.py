#!/usr/bin/python3

"""Convert between chunk compounds and the sections they contain."""

from nbtlib.tag import Byte, Compound, Int, List, Long, String

from chunks.common import DATA_VERSION, MIN_SECTION_Y, ChunkFormatError
from chunks.section import Section


def read_sections(compound):
    """Decode the sections of a chunk compound into {section_y: Section}."""
    sections = {}
    for section_compound in compound.get('sections', ()):
        if 'Y' not in section_compound:
            raise ChunkFormatError('section without a Y value')
        sections[int(section_compound['Y'])] = Section.from_nbt(
            section_compound)
    return sections


def chunk_position(compound):
    """Return (chunk_x, chunk_z) as stored in a chunk compound."""
    try:
        return int(compound['xPos']), int(compound['zPos'])
    except KeyError as err:
        raise ChunkFormatError('chunk compound lacks {}'.format(err))


def build_chunk(chunk_x, chunk_z, sections, existing=None,
                data_version=DATA_VERSION):
    """Build the compound of a chunk holding the given sections.

    sections maps section heights to Section objects. If existing is the
    compound of the chunk already saved at this position, it is updated in
    place: sections with the same heights are replaced, all other sections and
    tags are kept.
    """
    if existing is None:
        compound = Compound({
            'DataVersion': Int(data_version),
            'xPos': Int(chunk_x),
            'zPos': Int(chunk_z),
            'yPos': Int(MIN_SECTION_Y),
            'Status': String('minecraft:full'),
            'LastUpdate': Long(0),
            'isLightOn': Byte(0),
            'block_entities': List[Compound](),
        })
        kept = []
    else:
        compound = existing
        kept = [s for s in compound.get('sections', ())
                if int(s.get('Y', MIN_SECTION_Y - 1)) not in sections]
        # The game relights chunks whose isLightOn is 0.
        compound['isLightOn'] = Byte(0)
    new = [sections[y].to_nbt(y) for y in sorted(sections)]
    compound['sections'] = List[Compound](
        sorted(kept + new, key=lambda s: int(s.get('Y', MIN_SECTION_Y - 1))))
    return compound
