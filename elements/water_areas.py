#!/usr/bin/python3

"""Fill lakes, reservoirs, riverbanks and the sea with water.

A water area is either a closed way or a multipolygon relation whose outer
ways are joined into closed rings. Every column whose centre lies inside an
outer ring and not inside an inner ring is filled. The water surface is the
lowest ground level found along the outer rings; higher ground inside the
area is flooded up to its surface.

Outlines that cannot be closed are filled from barriers instead: their lines
are drawn into a grid over the editor's bounding box, lines leaving the box
are sealed along its border, and every column not reachable from the border
is flooded at the ground level. Coastlines work the same way but flood the
reachable side.
"""

import logging
import math
from collections import deque

from blocks.biomes import OCEAN, biome_from_tags
from blocks.definitions import WATER
from editor.geometry import bresenham_line
from editor.ground import round_half_away

logger = logging.getLogger(__name__)


def is_water_area(tags):
    """Return whether an area's tags describe a body of water."""
    return ('water' in tags or tags.get('natural') == 'water' or
            tags.get('waterway') == 'riverbank' or
            (tags.get('waterway') == 'river' and tags.get('area') == 'yes'))


def _underground(tags):
    try:
        return int(tags.get('layer', '0')) < 0
    except ValueError:
        return False


def is_closed(nodes):
    return len(nodes) > 3 and nodes[0].id == nodes[-1].id


def merge_rings(segments):
    """Join node lists sharing end nodes into closed rings.

    Return (rings, leftovers), where leftovers are the segments that could
    not be closed.
    """
    pending = [list(seg) for seg in segments if seg]
    rings, leftovers = [], []
    while pending:
        ring = pending.pop(0)
        while not is_closed(ring):
            for i, seg in enumerate(pending):
                if seg[0].id == ring[-1].id:
                    ring.extend(seg[1:])
                elif seg[-1].id == ring[-1].id:
                    ring.extend(reversed(seg[:-1]))
                elif seg[-1].id == ring[0].id:
                    ring[:0] = seg[:-1]
                elif seg[0].id == ring[0].id:
                    ring[:0] = reversed(seg[1:])
                else:
                    continue
                del pending[i]
                break
            else:
                break
        (rings if is_closed(ring) else leftovers).append(ring)
    return rings, leftovers


def _crossings(ring, zc):
    xs = []
    for a, b in zip(ring, ring[1:]):
        if (a.z <= zc) != (b.z <= zc):
            xs.append(a.x + (zc - a.z) * (b.x - a.x) / (b.z - a.z))
    return sorted(xs)


def ring_columns(ring, xzbbox=None):
    """Generate the (x, z) columns whose centres lie inside a closed ring.

    Columns outside xzbbox, if given, are skipped.
    """
    min_z = min(node.z for node in ring)
    max_z = max(node.z for node in ring)
    if xzbbox is not None:
        min_z, max_z = max(min_z, xzbbox.min_z), min(max_z, xzbbox.max_z)
    for z in range(min_z, max_z + 1):
        # Vertices are integers, so a row's centre line never meets one.
        xs = _crossings(ring, z + 0.5)
        for start, end in zip(xs[::2], xs[1::2]):
            first, stop = math.ceil(start - 0.5), math.ceil(end - 0.5)
            if xzbbox is not None:
                first = max(first, xzbbox.min_x)
                stop = min(stop, xzbbox.max_x + 1)
            for x in range(first, stop):
                yield x, z



def _flood_column(editor, x, z, water_level, biome):
    top = max(editor.ground.level(x, z), water_level)
    for y in range(water_level, top + 1):
        editor.set_block_absolute(WATER, x, y, z, override_blacklist=())
        editor.set_biome_absolute(biome, x, y, z)


def fill_water_area(editor, outers, inners, biome):
    """Flood the columns inside outers but outside inners.

    Return the number of columns filled.
    """
    columns = set()
    for ring in outers:
        columns.update(ring_columns(ring, editor.xzbbox))
    for ring in inners:
        columns.difference_update(ring_columns(ring, editor.xzbbox))
    if not columns:
        return 0

    water_level = editor.ground.min_level(node.xz() for ring in outers
                                          for node in ring)
    for x, z in columns:
        _flood_column(editor, x, z, water_level, biome)
    return len(columns)


class BarrierGrid:
    """A grid of flags, one per column of a bounding box."""

    def __init__(self, xzbbox):
        self.xzbbox = xzbbox
        self.width = xzbbox.max_x - xzbbox.min_x + 1
        self.height = xzbbox.max_z - xzbbox.min_z + 1
        self.cells = bytearray(self.width * self.height)

    def index(self, x, z):
        return (z - self.xzbbox.min_z) * self.width + x - self.xzbbox.min_x

    def column(self, i):
        return (self.xzbbox.min_x + i % self.width,
                self.xzbbox.min_z + i // self.width)

    def mark(self, x, z):
        if self.xzbbox.contains(x, z):
            self.cells[self.index(x, z)] = 1

    def border_indices(self):
        """Generate the index of every cell on the grid's edge."""
        last_row = (self.height - 1) * self.width
        for x in range(self.width):
            yield x
            yield last_row + x
        for z in range(1, self.height - 1):
            yield z * self.width
            yield z * self.width + self.width - 1

    def outside(self):
        """Return the flags of the unmarked cells reachable from the edge."""
        width, cells = self.width, self.cells
        outside = bytearray(len(cells))
        queue = deque(self.border_indices())
        while queue:
            i = queue.popleft()
            if outside[i] or cells[i]:
                continue
            outside[i] = 1
            x = i % width
            if x > 0:
                queue.append(i - 1)
            if x < width - 1:
                queue.append(i + 1)
            if i >= width:
                queue.append(i - width)
            if i + width < len(cells):
                queue.append(i + width)
        return outside


def _border_crossing(inside, outside, xzbbox):
    """Return the border column where the segment from inside to outside
    leaves xzbbox."""
    (ix, iz), (ox, oz) = inside, outside
    t = 1.0
    if ox < xzbbox.min_x:
        t = min(t, (xzbbox.min_x - ix) / (ox - ix))
    elif ox > xzbbox.max_x:
        t = min(t, (xzbbox.max_x - ix) / (ox - ix))
    if oz < xzbbox.min_z:
        t = min(t, (xzbbox.min_z - iz) / (oz - iz))
    elif oz > xzbbox.max_z:
        t = min(t, (xzbbox.max_z - iz) / (oz - iz))
    x = round_half_away(ix + (ox - ix) * t)
    z = round_half_away(iz + (oz - iz) * t)
    return (min(max(x, xzbbox.min_x), xzbbox.max_x),
            min(max(z, xzbbox.min_z), xzbbox.max_z))


def _perimeter_position(x, z, xzbbox):
    width = xzbbox.max_x - xzbbox.min_x
    height = xzbbox.max_z - xzbbox.min_z
    if z == xzbbox.min_z:
        return x - xzbbox.min_x
    if x == xzbbox.max_x:
        return width + z - xzbbox.min_z
    if z == xzbbox.max_z:
        return width + height + xzbbox.max_x - x
    return 2*width + height + xzbbox.max_z - z


def _perimeter_column(position, xzbbox):
    width = xzbbox.max_x - xzbbox.min_x
    height = xzbbox.max_z - xzbbox.min_z
    if position < width:
        return xzbbox.min_x + position, xzbbox.min_z
    position -= width
    if position < height:
        return xzbbox.max_x, xzbbox.min_z + position
    position -= height
    if position < width:
        return xzbbox.max_x - position, xzbbox.max_z
    return xzbbox.min_x, xzbbox.max_z - (position - width)


def seal_along_border(grid, start, end):
    """Mark the border columns on the shorter way from start to end.

    Return the number of columns newly marked.
    """
    xzbbox = grid.xzbbox
    perimeter = 2 * (grid.width + grid.height - 2)
    if perimeter == 0:
        grid.mark(*start)
        return 0
    first = _perimeter_position(start[0], start[1], xzbbox)
    last = _perimeter_position(end[0], end[1], xzbbox)
    forward, backward = (last - first) % perimeter, (first - last) % perimeter
    step, steps = (1, forward) if forward <= backward else (-1, backward)
    sealed = 0
    for n in range(steps + 1):
        i = grid.index(*_perimeter_column((first + step*n) % perimeter,
                                          xzbbox))
        if not grid.cells[i]:
            grid.cells[i] = 1
            sealed += 1
    return sealed


def rasterize_line(grid, nodes):
    """Mark the columns of a line of nodes, sealing it along the border
    wherever it leaves the grid's bounding box.

    Return the number of border columns marked as seals.
    """
    xzbbox = grid.xzbbox
    points = [node.xz() for node in nodes]
    crossings = []
    for a, b in zip(points, points[1:]):
        for x, _, z in bresenham_line(a.x, 0, a.z, b.x, 0, b.z):
            grid.mark(x, z)
        a_inside, b_inside = xzbbox.contains(*a), xzbbox.contains(*b)
        if a_inside and not b_inside:
            crossings.append(_border_crossing(a, b, xzbbox))
        elif b_inside and not a_inside:
            crossings.append(_border_crossing(b, a, xzbbox))
    if len(crossings) % 2:
        logger.debug('Line crosses the border %d times, not sealing it',
                     len(crossings))
        return 0
    return sum(seal_along_border(grid, start, end)
               for start, end in zip(crossings[::2], crossings[1::2]))


def fill_from_barriers(editor, lines, fill_outside, water_level, biome):
    """Flood the columns enclosed by lines of nodes, or those outside them.

    Lines are drawn as barriers over the editor's bounding box. Columns that
    cannot be reached from the box's edge without crossing a barrier are
    enclosed. With fill_outside, the reachable columns and the barriers are
    flooded instead. Return the number of columns filled.
    """
    if editor.xzbbox is None:
        logger.warning('Cannot fill open outlines without a bounding box')
        return 0
    grid = BarrierGrid(editor.xzbbox)
    seals = sum(rasterize_line(grid, nodes) for nodes in lines)
    logger.debug('Barrier fill of %d lines: %d seals added', len(lines),
                 seals)
    outside = grid.outside()
    filled = 0
    for i, (is_outside, is_barrier) in enumerate(zip(outside, grid.cells)):
        if bool(is_outside or is_barrier) != fill_outside:
            continue
        x, z = grid.column(i)
        _flood_column(editor, x, z, water_level, biome)
        filled += 1
    return filled


def generate_water_area_from_way(editor, way):
    """Fill a way tagged as water."""
    if not is_water_area(way.tags) or _underground(way.tags):
        return
    if not way.nodes:
        return
    biome = biome_from_tags(way.tags)
    if is_closed(way.nodes):
        filled = fill_water_area(editor, [way.nodes], [], biome)
    else:
        filled = fill_from_barriers(editor, [way.nodes], False,
                                    editor.ground.ground_level(), biome)
    logger.debug('Water area way %d: filled %d columns', way.id, filled)


def generate_water_areas(editor, relation):
    """Fill a multipolygon relation tagged as water."""
    if not is_water_area(relation.tags) or _underground(relation.tags):
        return
    outers, open_outers = merge_rings(m.way.nodes for m in relation.members
                                      if m.role == 'outer')
    inners, open_inners = merge_rings(m.way.nodes for m in relation.members
                                      if m.role == 'inner')
    biome = biome_from_tags(relation.tags)
    if open_outers or open_inners:
        logger.info('Relation %d has %d unclosed rings, filling from '
                    'barriers', relation.id,
                    len(open_outers) + len(open_inners))
        lines = outers + open_outers + inners + open_inners
        filled = fill_from_barriers(editor, lines, False,
                                    editor.ground.ground_level(), biome)
    else:
        filled = fill_water_area(editor, outers, inners, biome)
    logger.debug('Water area relation %d: filled %d columns', relation.id,
                 filled)


def generate_coastlines(editor, lines):
    """Flood the sea side of coastline ways.

    Everything not enclosed by the lines, the lines themselves included,
    becomes ocean at the ground level.
    """
    if not lines:
        return
    filled = fill_from_barriers(editor, lines, True,
                                editor.ground.ground_level(), OCEAN)
    logger.info('Filled %d sea columns from %d coastline ways', filled,
                len(lines))
