#!/usr/bin/python3

"""Edit the blocks and biomes of a world.

WorldEditor buffers block and biome changes and writes them to the world's
region files. Relative Y coordinates are resolved against a Ground, which is
either flat or follows elevation data fetched by editor.elevation.
"""

from editor.config import EditorConfig, load_config
from editor.geometry import LLBBox, XZBBox, XZPoint, bresenham_line
from editor.ground import DEFAULT_GROUND_LEVEL, ElevationData, Ground
from editor.logging_config import setup_logging
from editor.world import WorldEditor

__all__ = [
    'DEFAULT_GROUND_LEVEL',
    'EditorConfig',
    'ElevationData',
    'Ground',
    'LLBBox',
    'WorldEditor',
    'XZBBox',
    'XZPoint',
    'bresenham_line',
    'load_config',
    'setup_logging',
]
