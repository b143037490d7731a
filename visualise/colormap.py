#!/usr/bin/python3

"""Colormaps map heightmap data to colors for visualisation.

To use a colormap, call its color_heightmap method with a HeightmapDataSet, or
pass both to write_png.
"""

import logging
from abc import ABCMeta, abstractmethod
from array import array
from itertools import chain

import png

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


class ColorMap(metaclass=ABCMeta):
    """The base color map.

    Custom color maps should inherit from this class and override the
    color_heightmap(self, dataset) method.
    """

    @staticmethod
    def _parse_html_color(color):
        r"""Parse a color conforming to the regex #?[\da-f]{3,4}|[\da-f]{6,8}.

        The parsed color may be in one of the following formats, each with an
        optional hash ("#") character in front:
            ["#RRGGBB", "#RGB", "#RRGGBBAA", "#RGBA"].
        """
        color = color.strip().translate({ord('#'): None})
        try:
            cl = {8: 2, 6: 2, 4: 1, 3: 1}[len(color)]  # len of one component
        except KeyError:
            raise ValueError('invalid color: {!r}'.format(color))
        r, g, b, a = color[:cl], color[cl:2*cl], color[2*cl:3*cl], color[3*cl:]
        if cl == 1:
            r, g, b, a = map(lambda c: 2*c, (r, g, b, a))
        return int(r, 16), int(g, 16), int(b, 16), int(a, 16) if a else 255

    @abstractmethod
    def color_heightmap(self, dataset):
        """Transform heightmap data into pixel rows to write to a PNG file."""
        return NotImplemented


class GreyscaleColorMap(ColorMap):
    """The default colormap, shading higher columns lighter."""

    def color_heightmap(self, dataset):
        """Transform heightmap data into pixel rows to write to a PNG file."""
        coord_data = dataset.by_coordinates(relative=True)
        for z in range(dataset.bounds.height):
            yield array('B', map(round, chain.from_iterable(
                (*((255 * coord_data[(x, z)],) * 3), 255)
                if (x, z) in coord_data else TRANSPARENT
                for x in range(dataset.bounds.width)
            )))


class BlockColorMap(ColorMap):
    """A user-defined colormap mapping surface block names to colors.

    colors maps block names to HTML colors. Names without a namespace are
    taken to be in the minecraft namespace. The optional `default' key gives
    the color of unlisted blocks (transparent if missing). If shade is true,
    colors are darkened in proportion to the column's depth below the highest
    point.
    """

    def __init__(self, colors, shade=False):
        """Initialise a new color map."""
        self.default = self._parse_html_color(colors.get('default', '#0000'))
        self.colormap = {
            (k if ':' in k else 'minecraft:' + k): self._parse_html_color(c)
            for k, c in colors.items() if k != 'default'}
        self.shade = shade

    @classmethod
    def from_config(cls, parser):
        """Build a colormap from the [colors] section of a ConfigParser.

        An [options] section may set `shade' to a boolean.
        """
        if not parser.has_section('colors'):
            raise ValueError('color map has no [colors] section')
        shade = (parser.getboolean('options', 'shade', fallback=False)
                 if parser.has_section('options') else False)
        return cls(parser['colors'], shade)

    def color_of(self, name, value=1.0):
        r, g, b, a = self.colormap.get(name, self.default)
        if self.shade:
            factor = 0.5 + 0.5 * value
            r, g, b = (round(c * factor) for c in (r, g, b))
        return r, g, b, a

    def color_heightmap(self, dataset):
        """Transform heightmap data into pixel rows to write to a PNG file."""
        coord_data = dataset.by_coordinates(relative=True)
        for z in range(dataset.bounds.height):
            yield array('B', chain.from_iterable(
                self.color_of(dataset.block_at(x, z), coord_data[(x, z)])
                if (x, z) in coord_data else TRANSPARENT
                for x in range(dataset.bounds.width)
            ))


def write_png(pngfile, dataset, colormap=None):
    """Render a heightmap as an RGBA PNG image to a binary file object."""
    if colormap is None:
        colormap = GreyscaleColorMap()
    writer = png.Writer(width=dataset.bounds.width,
                        height=dataset.bounds.height, alpha=True,
                        greyscale=False)
    writer.write(pngfile, colormap.color_heightmap(dataset))
    logger.debug('Wrote a %dx%d heightmap', dataset.bounds.width,
                 dataset.bounds.height)
