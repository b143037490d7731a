#!/usr/bin/python3

"""Turn processed map elements into blocks.

Each generator takes a WorldEditor and a node, way or relation and places the
blocks for that element if its tags match. process_elements runs every
generator over every element; coastline ways are collected and flooded
together once all ways are done.
"""

import logging

from elements.biomes import generate_biomes
from elements.common import (Elements, ProcessedMember, ProcessedNode,
                             ProcessedRelation, ProcessedWay, load_elements)
from elements.power import generate_power_lines, generate_power_node
from elements.railways import generate_railways, generate_roller_coaster
from elements.water_areas import (generate_coastlines,
                                  generate_water_area_from_way,
                                  generate_water_areas)
from elements.waterways import generate_waterways

logger = logging.getLogger(__name__)

__all__ = [
    'Elements',
    'ProcessedMember',
    'ProcessedNode',
    'ProcessedRelation',
    'ProcessedWay',
    'generate_coastlines',
    'generate_biomes',
    'generate_power_lines',
    'generate_power_node',
    'generate_railways',
    'generate_roller_coaster',
    'generate_water_area_from_way',
    'generate_water_areas',
    'generate_waterways',
    'load_elements',
    'process_elements',
]


def process_way(editor, way, scale=1.0):
    """Run the generator matching a way's tags."""
    tags = way.tags
    if 'railway' in tags:
        generate_railways(editor, way)
    if 'roller_coaster' in tags:
        generate_roller_coaster(editor, way)
    if 'power' in tags:
        generate_power_lines(editor, way)
    if 'waterway' in tags:
        generate_waterways(editor, way, scale)
    generate_water_area_from_way(editor, way)
    generate_biomes(editor, way)


def process_elements(editor, nodes, ways, relations=(), scale=1.0):
    """Generate the blocks for all nodes, ways and relations."""
    for node in nodes:
        if 'power' in node.tags:
            generate_power_node(editor, node)
    for i, way in enumerate(ways, 1):
        process_way(editor, way, scale)
        if i % 1000 == 0:
            logger.info('Processed %d of %d ways', i, len(ways))
    generate_coastlines(editor, [way.nodes for way in ways
                                 if way.tags.get('natural') == 'coastline'])
    for relation in relations:
        generate_water_areas(editor, relation)
    logger.info('Processed %d nodes, %d ways and %d relations', len(nodes),
                len(ways), len(relations))
