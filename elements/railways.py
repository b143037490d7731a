#!/usr/bin/python3

"""Generate railways and roller coasters along ways.

Rails follow the Bresenham line between consecutive way nodes. Diagonal steps
are split into two straight steps, since rails cannot connect diagonally. Each
rail's shape is chosen from its neighbours on the merged path, so curves and
slopes connect across node boundaries.
"""

from blocks.definitions import (AIR, GRAVEL, IRON_BLOCK, OAK_LOG,
                                POWERED_RAIL, RAIL, REDSTONE_BLOCK,
                                BlockWithProperties)
from editor.geometry import bresenham_line

SKIPPED_RAILWAYS = frozenset(('proposed', 'abandoned', 'subway',
                              'construction', 'razed', 'turntable'))

STRAIGHT_OR_ASCENDING = frozenset((
    'north_south', 'east_west', 'ascending_east', 'ascending_west',
    'ascending_north', 'ascending_south'))

_ASCENDING = {
    (1, 0): 'ascending_east',
    (-1, 0): 'ascending_west',
    (0, 1): 'ascending_south',
    (0, -1): 'ascending_north',
}

_CURVES = {
    ((-1, 0), (0, -1)): 'north_west',
    ((0, -1), (-1, 0)): 'north_west',
    ((1, 0), (0, -1)): 'north_east',
    ((0, -1), (1, 0)): 'north_east',
    ((-1, 0), (0, 1)): 'south_west',
    ((0, 1), (-1, 0)): 'south_west',
    ((1, 0), (0, 1)): 'south_east',
    ((0, 1), (1, 0)): 'south_east',
}

POWERED_RAIL_INTERVAL = 8
SLEEPER_INTERVAL = 4
COASTER_HEIGHT = 4
PILLAR_INTERVAL = 6


def smooth_diagonal_rails(points):
    """Insert a straight step between diagonally adjacent points."""
    smoothed = []
    for i, current in enumerate(points):
        smoothed.append(current)
        if i + 1 >= len(points):
            continue
        x1, y1, z1 = current
        x2, _, z2 = points[i + 1]
        if abs(x2 - x1) != 1 or abs(z2 - z1) != 1:
            continue
        if i > 0:
            # Keep going the way the line came from.
            vertical = points[i - 1][0] == x1
            smoothed.append((x1, y1, z2) if vertical else (x2, y1, z1))
        elif i + 2 < len(points):
            vertical = points[i + 2][0] == x2
            smoothed.append((x2, y1, z1) if vertical else (x1, y1, z2))
        else:
            smoothed.append((x2, y1, z1))
    return smoothed


def path_points(way):
    """Return the merged, smoothed (x, 0, z) points along a way's nodes."""
    points = []
    for prev, cur in zip(way.nodes, way.nodes[1:]):
        segment = smooth_diagonal_rails(
            bresenham_line(prev.x, 0, prev.z, cur.x, 0, cur.z))
        points.extend(segment[1:] if points else segment)
    return points


def rail_shape(current, current_y, prev=None, next_=None):
    """Choose the shape of the rail at column current.

    prev and next_ are ((x, z), rail_y) of the neighbouring rails, or None.
    A neighbour higher than this rail makes it ascend towards that neighbour.
    """
    x, z = current
    for neighbour in (prev, next_):
        if neighbour is not None:
            (nx, nz), ny = neighbour
            if ny > current_y and (nx - x, nz - z) in _ASCENDING:
                return _ASCENDING[nx - x, nz - z]

    if prev is not None and next_ is not None:
        (px, pz), _ = prev
        (nx, nz), _ = next_
        if px == nx:
            return 'north_south'
        if pz == nz:
            return 'east_west'
        from_prev, to_next = (px - x, pz - z), (nx - x, nz - z)
        if (from_prev, to_next) in _CURVES:
            return _CURVES[from_prev, to_next]
        return 'east_west' if abs(px - x) > abs(pz - z) else 'north_south'

    neighbour = prev if prev is not None else next_
    if neighbour is not None:
        (nx, nz), _ = neighbour
        if nx != x and nz == z:
            return 'east_west'
    return 'north_south'


def _level_corners(points, base_heights):
    for j in range(1, len(points) - 1):
        (px, _, pz), (cx, _, cz), (nx, _, nz) = points[j-1:j+2]
        if (cx - px, cz - pz) != (nx - cx, nz - cz):
            # A rail cannot turn and climb at once.
            base_heights[j + 1] = min(base_heights[j + 1], base_heights[j])
            base_heights[j - 1] = min(base_heights[j - 1], base_heights[j])


def _neighbour(points, heights, idx, offset):
    j = idx + offset
    if not 0 <= j < len(points):
        return None
    x, _, z = points[j]
    return (x, z), heights[j]


def generate_railways(editor, way):
    """Lay a ground-level railway along a way tagged railway=*."""
    railway = way.tags.get('railway')
    if railway is None or railway in SKIPPED_RAILWAYS:
        return
    if way.tags.get('subway') == 'yes' or way.tags.get('tunnel') == 'yes':
        return

    points = path_points(way)
    if not points:
        return
    base_heights = [editor.get_absolute_y(x, 0, z) for x, _, z in points]
    _level_corners(points, base_heights)
    rail_heights = [y + 1 for y in base_heights]

    for idx, (x, _, z) in enumerate(points):
        base_y = base_heights[idx]
        rail_y = base_y + 1
        editor.set_block_absolute(GRAVEL, x, base_y, z, override_blacklist=())
        editor.set_block_absolute(AIR, x, rail_y, z, override_blacklist=())
        editor.set_block_absolute(AIR, x, rail_y + 1, z,
                                  override_blacklist=())

        shape = rail_shape((x, z), rail_y,
                           _neighbour(points, rail_heights, idx, -1),
                           _neighbour(points, rail_heights, idx, 1))
        if (idx % POWERED_RAIL_INTERVAL == POWERED_RAIL_INTERVAL - 1 and
                shape in STRAIGHT_OR_ASCENDING):
            editor.set_block_absolute(REDSTONE_BLOCK, x, base_y, z,
                                      override_blacklist=())
            editor.set_block_with_properties_absolute(
                BlockWithProperties(POWERED_RAIL,
                                    {'shape': shape, 'powered': 'true'}),
                x, rail_y, z, override_blacklist=())
        else:
            editor.set_block_with_properties_absolute(
                BlockWithProperties(RAIL, {'shape': shape}),
                x, rail_y, z, override_blacklist=())
            if idx % SLEEPER_INTERVAL == 0:
                editor.set_block_absolute(OAK_LOG, x, base_y, z,
                                          override_blacklist=())


def generate_roller_coaster(editor, way):
    """Build an elevated track along a way tagged roller_coaster=track."""
    if way.tags.get('roller_coaster') != 'track':
        return
    if way.tags.get('indoor') == 'yes':
        return
    try:
        if int(way.tags.get('layer', '0')) < 0:
            return
    except ValueError:
        pass

    points = path_points(way)
    rail_y = COASTER_HEIGHT + 1
    rail_heights = [rail_y] * len(points)
    for idx, (x, _, z) in enumerate(points):
        editor.set_block(IRON_BLOCK, x, COASTER_HEIGHT, z)
        shape = rail_shape((x, z), rail_y,
                           _neighbour(points, rail_heights, idx, -1),
                           _neighbour(points, rail_heights, idx, 1))
        editor.set_block_with_properties(
            BlockWithProperties(RAIL, {'shape': shape}), x, rail_y, z)
        if x % PILLAR_INTERVAL == 0 and z % PILLAR_INTERVAL == 0:
            for y in range(1, COASTER_HEIGHT):
                editor.set_block(IRON_BLOCK, x, y, z)
