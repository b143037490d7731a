#!/usr/bin/python3

"""Dig water channels along waterways.

A channel is a square of water around every point on the way, as wide as the
waterway, with a dirt floor. Deep channels get a one block wide bank
around them, one block shallower than the channel. Crops and grass growing on
the surface are cleared.
"""

import logging
import math

from blocks.definitions import (AIR, CARROTS, DIRT, GRASS, POTATOES, WATER,
                                WHEAT)
from editor.geometry import bresenham_line

logger = logging.getLogger(__name__)

# (width in blocks, depth in blocks) at scale 1
WATERWAY_DIMENSIONS = {
    'river': (30, 4),
    'canal': (16, 3),
    'stream': (6, 2),
    'fairway': (12, 3),
    'flowline': (2, 1),
    'brook': (4, 2),
    'ditch': (4, 2),
    'drain': (4, 2),
}
DEFAULT_DIMENSIONS = (8, 2)
MAX_WIDTH = 5000

ALTERNATIVE_WIDTH_KEYS = (
    'riverbank:width',
    'riverbank_width',
    'est_width',
    'estimated_width',
    'avg_width',
    'average_width',
    'width:avg',
    'width:est',
)

SKIPPED_LAYERS = frozenset(('-1', '-2', '-3'))
VEGETATION = (GRASS, WHEAT, CARROTS, POTATOES)

FOOT = 0.3048


def parse_width_meters(value):
    """Parse a width like '30 m', '12ft' or '1,5 km' into metres.

    Widths without a unit are in metres. Return None if there is no number.
    """
    number, unit = [], []
    for c in value.strip():
        if c.isdigit() or c == '.':
            number.append(c)
        elif c == ',':
            number.append('.')
        elif not c.isspace():
            unit.append(c.lower())
    try:
        width = float(''.join(number))
    except ValueError:
        return None
    unit = ''.join(unit)
    if 'ft' in unit or 'foot' in unit or 'feet' in unit or "'" in unit:
        return width * FOOT
    if 'km' in unit:
        return width * 1000
    return width


def _round_half_away(value):
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def infer_width_from_tags(tags, default_width, scale):
    """Return a waterway's width in blocks.

    The `width' tag is preferred, then any of ALTERNATIVE_WIDTH_KEYS. If none
    holds a usable width, return default_width.
    """
    for key in ('width',) + ALTERNATIVE_WIDTH_KEYS:
        if key not in tags:
            continue
        meters = parse_width_meters(tags[key])
        if meters is not None:
            return max(_round_half_away(meters * scale), 1)
    return default_width


def waterway_dimensions(waterway):
    """Return the default (width, depth) in blocks of a kind of waterway."""
    return WATERWAY_DIMENSIONS.get(waterway, DEFAULT_DIMENSIONS)


def create_water_channel(editor, center_x, center_z, width, depth):
    """Dig a channel of the given width and depth centred on a column."""
    half_width = width // 2
    for x in range(center_x - half_width - 1, center_x + half_width + 2):
        for z in range(center_z - half_width - 1, center_z + half_width + 2):
            distance = max(abs(x - center_x), abs(z - center_z))
            if distance <= half_width:
                for y in range(1 - depth, 1):
                    editor.set_block(WATER, x, y, z)
                editor.set_block(DIRT, x, -depth, z)
            elif distance == half_width + 1 and depth > 1:
                slope_depth = max(depth - 1, 1)
                for y in range(1 - slope_depth, 1):
                    editor.set_block(WATER if y == 0 else AIR, x, y, z)
                editor.set_block(DIRT, x, -slope_depth, z)
            else:
                continue
            editor.set_block(AIR, x, 1, z, override_whitelist=VEGETATION)


def generate_waterways(editor, way, scale=1.0):
    """Dig a channel along a way tagged waterway=*."""
    waterway = way.tags.get('waterway')
    if waterway is None:
        return
    if way.tags.get('layer') in SKIPPED_LAYERS:
        return
    default_width, depth = waterway_dimensions(waterway)
    scaled_default = int(min(max(default_width * scale, 1), MAX_WIDTH))
    width = infer_width_from_tags(way.tags, scaled_default, scale)
    logger.debug('Waterway %d: %s, %d blocks wide, %d deep', way.id,
                 waterway, width, depth)

    for prev, cur in zip(way.nodes, way.nodes[1:]):
        for x, _, z in bresenham_line(prev.x, 0, prev.z, cur.x, 0, cur.z):
            create_water_channel(editor, x, z, width, depth)
