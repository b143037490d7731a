#!/usr/bin/python3

"""Generate power poles and the wires strung between them."""

from blocks.definitions import (CHAIN, OAK_FENCE, STONE_BRICKS,
                                BlockWithProperties)
from editor.geometry import bresenham_line

MAIN_LINE_HEIGHT = 10
MINOR_LINE_HEIGHT = 6

LINE_HEIGHTS = {'line': MAIN_LINE_HEIGHT, 'minor_line': MINOR_LINE_HEIGHT}
NODE_HEIGHTS = {'tower': MAIN_LINE_HEIGHT, 'pole': MINOR_LINE_HEIGHT}


def build_power_pole(editor, node, height):
    """Build a pole at a node and return the (x, y, z) of its top, or None.

    The pole stands on a stone brick base one block above the ground and
    reaches height blocks above the ground.
    """
    if height <= 0:
        return None
    stone_y = editor.get_absolute_y(node.x, 0, node.z) + 1
    editor.set_block_absolute(STONE_BRICKS, node.x, stone_y, node.z)
    if height <= 1:
        return node.x, stone_y, node.z

    top_y = editor.get_absolute_y(node.x, height, node.z)
    for y in range(stone_y + 1, top_y + 1):
        editor.set_block_absolute(OAK_FENCE, node.x, y, node.z)
    return node.x, top_y, node.z


def _axis(a, b):
    dx, dy, dz = (a[0] - b[0], a[1] - b[1], a[2] - b[2])
    if dx:
        return 'x'
    if dz:
        return 'z'
    if dy:
        return 'y'
    return None


def chain_axis(previous, current, next_):
    """Return the axis a chain link at current should lie along."""
    if previous is not None:
        axis = _axis(current, previous)
        if axis:
            return axis
    if next_ is not None:
        axis = _axis(next_, current)
        if axis:
            return axis
    return 'y'


def span_power_wires(editor, pole_tops):
    """Hang chains between consecutive pole tops, excluding the tops."""
    for start, end in zip(pole_tops, pole_tops[1:]):
        if start == end:
            continue
        line = bresenham_line(*start, *end)
        for i in range(1, len(line) - 1):
            x, y, z = line[i]
            axis = chain_axis(line[i - 1], line[i], line[i + 1])
            editor.set_block_with_properties_absolute(
                BlockWithProperties(CHAIN, {'axis': axis}), x, y, z)


def generate_power_lines(editor, way):
    """Build poles at every node of a power=line or power=minor_line way."""
    height = LINE_HEIGHTS.get(way.tags.get('power'))
    if height is None:
        return
    tops = [build_power_pole(editor, node, height) for node in way.nodes]
    span_power_wires(editor, [top for top in tops if top is not None])


def generate_power_node(editor, node):
    """Build a single power=tower or power=pole."""
    height = NODE_HEIGHTS.get(node.tags.get('power'))
    if height is not None:
        build_power_pole(editor, node, height)
