#!/usr/bin/python3

"""Top-down heightmaps of a world's surface or its elevation data.

A HeightmapDataSet holds at most one HeightmapPoint per (x, z) column; any
more are ignored. Points may additionally carry the name of the block at the
top of their column, which block colour maps use. Pass a data set to
visualise.colormap.write_png to render it.
"""

from collections import namedtuple

HeightmapPoint = namedtuple('HeightmapPoint', 'x z value')
Bounds = namedtuple('Bounds', 'x z width height min max range')


class HeightmapDataSet:
    """Hold heightmap data and normalise it on request."""

    def __init__(self, points, min_value=None, max_value=None, blocks=None):
        """Initialise a new heightmap's data.

        blocks optionally maps (x, z) to the name of the surface block there.
        """
        points = tuple(points)
        if not points:
            raise ValueError('a heightmap needs at least one point')
        x = min(pt.x for pt in points)
        z = min(pt.z for pt in points)
        w = max(pt.x for pt in points) - x + 1
        h = max(pt.z for pt in points) - z + 1
        min_val = (min(pt.value for pt in points)
                   if min_value is None else min_value)
        max_val = (max(pt.value for pt in points)
                   if max_value is None else max_value)
        self.bounds = Bounds(x, z, w, h, min_val, max_val, max_val - min_val)
        self.points = [HeightmapPoint(x, z, value) for x, z, value in points]
        self.blocks = dict(blocks or {})

    @classmethod
    def from_ground(cls, ground):
        """Build a heightmap of the levels of a Ground's elevation grid."""
        return cls(HeightmapPoint(x, z, level)
                   for x, z, level in ground.heightmap_points())

    @classmethod
    def from_surface(cls, surface_points, min_value=None, max_value=None):
        """Build a heightmap from chunks.world.SurfacePoints."""
        surface_points = tuple(surface_points)
        return cls((HeightmapPoint(pt.x, pt.z, pt.y) for pt in surface_points),
                   min_value, max_value,
                   {(pt.x, pt.z): pt.name for pt in surface_points})

    def data_transform(self, *, relative=False):
        """Generate points shifted to start at (0, 0).

        Values are shifted to start at 0, and scaled to lie between 0 and 1 if
        relative is true. Values outside min_value and max_value are clamped.
        """
        for x, z, value in self.points:
            value = min(max(value, self.bounds.min), self.bounds.max)
            value -= self.bounds.min
            if relative and self.bounds.range:
                value /= self.bounds.range
            yield HeightmapPoint(x - self.bounds.x, z - self.bounds.z, value)

    def by_coordinates(self, **transforms):
        """Index heightmap data by coordinates.

        Any keyword arguments are passed unchanged to self.data_transform.
        """
        data = self.data_transform(**transforms)
        return {(x, z): value for x, z, value in data}

    def block_at(self, x, z):
        """Return the surface block name at coordinates relative to the
        bounds, or None."""
        return self.blocks.get((x + self.bounds.x, z + self.bounds.z))
