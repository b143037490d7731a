#!/usr/bin/python3

"""Visualise worlds as top-down heightmaps.

See the visualise.heightmap module for how to build heightmap data sets from
a saved world or from elevation data.

The colormap submodule holds color maps that turn heightmaps into pixels, and
write_png, which renders them to PNG files.
"""

from visualise.colormap import (
    BlockColorMap,
    ColorMap,
    GreyscaleColorMap,
    write_png,
)
from visualise.heightmap import (
    HeightmapDataSet,
    HeightmapPoint,
)

__all__ = [
    'HeightmapDataSet',
    'HeightmapPoint',
    'ColorMap',
    'GreyscaleColorMap',
    'BlockColorMap',
    'write_png',
]
