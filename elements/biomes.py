#!/usr/bin/python3

"""Paint biomes chosen from an element's tags along the element."""

from blocks.biomes import biome_from_tags
from editor.geometry import bresenham_line

BIOME_KEYS = frozenset(('biome', 'natural', 'water', 'waterway', 'landuse',
                        'leisure'))


def has_biome_tags(tags):
    return not BIOME_KEYS.isdisjoint(tags)


def generate_biomes(editor, way):
    """Set the biome at ground level along a way with biome-related tags.

    A closed way (first node equal to the last) has its whole bounding
    rectangle painted. Return the biome used, or None if the way has no
    biome-related tags.
    """
    if not has_biome_tags(way.tags) or not way.nodes:
        return None
    biome = biome_from_tags(way.tags)
    nodes = way.nodes
    if len(nodes) > 2 and nodes[0].xz() == nodes[-1].xz():
        xs = [node.x for node in nodes]
        zs = [node.z for node in nodes]
        columns = ((x, z) for x in range(min(xs), max(xs) + 1)
                   for z in range(min(zs), max(zs) + 1))
    else:
        columns = [(nodes[0].x, nodes[0].z)] + [
            (x, z) for prev, cur in zip(nodes, nodes[1:])
            for x, _, z in bresenham_line(prev.x, 0, prev.z, cur.x, 0, cur.z)]
    for x, z in columns:
        editor.set_biome(biome, x, 0, z)
    return biome
