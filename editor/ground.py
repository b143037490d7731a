#!/usr/bin/python3

"""The height of the ground, which relative Y coordinates are measured from.

Ground is either flat at a configured level or follows an elevation grid. The
grid holds raw elevations in metres; ElevationData.height_at scales them into
the world's Y range, never below the configured ground level.
"""

import math
from array import array

from chunks.common import MAX_Y

DEFAULT_GROUND_LEVEL = -62


def round_half_away(value):
    """Round to the nearest integer, with halves rounded away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class ElevationData:
    """A grid of raw elevations with the parameters to scale them."""

    def __init__(self, heights, width, height, min_height, height_range,
                 ground_level, scaled_range):
        """Initialise elevation data.

        heights is a flat, row-major sequence of width*height raw elevations
        (rows run along x, successive rows along z).
        """
        if len(heights) != width * height:
            raise ValueError('{} heights do not fill a {}x{} grid'
                             .format(len(heights), width, height))
        self.heights = array('h', heights)
        self.width, self.height = width, height
        self.min_height, self.height_range = min_height, height_range
        self.ground_level, self.scaled_range = ground_level, scaled_range

    def height_at(self, x, z):
        """Return the world Y level of grid cell (x, z)."""
        raw = self.heights[z * self.width + x]
        relative = ((raw - self.min_height) / self.height_range
                    if self.height_range else 0.0)
        scaled = round_half_away(self.ground_level +
                                 relative * self.scaled_range)
        return min(max(scaled, self.ground_level), MAX_Y)


class Ground:
    """Resolve the ground level of any block column."""

    def __init__(self, ground_level=DEFAULT_GROUND_LEVEL, elevation_data=None):
        """Initialise ground, following elevation_data if it is given."""
        self._ground_level = ground_level
        self.elevation_data = elevation_data

    @classmethod
    def flat(cls, ground_level=DEFAULT_GROUND_LEVEL):
        return cls(ground_level)

    @classmethod
    def from_heights(cls, ground_level, rows):
        """Build ground from rows of heights above ground_level.

        Each row runs along x; row i holds z = i. No scaling is applied, so a
        height of 3 puts the ground at ground_level + 3.
        """
        rows = [list(row) for row in rows]
        width = len(rows[0]) if rows else 0
        if any(len(row) != width for row in rows):
            raise ValueError('height rows must all have the same length')
        data = ElevationData([h for row in rows for h in row], width,
                             len(rows), min_height=0, height_range=1,
                             ground_level=ground_level, scaled_range=1.0)
        return cls(ground_level, data)

    @classmethod
    def from_elevation(cls, elevation_data):
        return cls(elevation_data.ground_level, elevation_data)

    @property
    def elevation_enabled(self):
        return (self.elevation_data is not None and
                len(self.elevation_data.heights) > 0)

    def ground_level(self):
        """Return the configured ground level, ignoring elevation."""
        return self._ground_level

    def level(self, x, z):
        """Return the ground level at block column (x, z)."""
        if not self.elevation_enabled:
            return self._ground_level
        data = self.elevation_data
        x_ratio = min(max(x / data.width, 0.0), 1.0)
        z_ratio = min(max(z / data.height, 0.0), 1.0)
        grid_x = min(round_half_away(x_ratio * (data.width - 1)),
                     data.width - 1)
        grid_z = min(round_half_away(z_ratio * (data.height - 1)),
                     data.height - 1)
        return data.height_at(grid_x, grid_z)

    def min_level(self, points):
        """Return the lowest ground level among XZ points (None if empty)."""
        if not self.elevation_enabled:
            return self._ground_level
        return min((self.level(x, z) for x, z in points), default=None)

    def max_level(self, points):
        """Return the highest ground level among XZ points (None if empty)."""
        if not self.elevation_enabled:
            return self._ground_level
        return max((self.level(x, z) for x, z in points), default=None)

    def heightmap_points(self):
        """Generate (x, z, level) for every cell of the elevation grid."""
        if not self.elevation_enabled:
            return
        data = self.elevation_data
        for z in range(data.height):
            for x in range(data.width):
                yield x, z, data.height_at(x, z)
