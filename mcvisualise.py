#!/usr/bin/python3

"""Render the surface of a Minecraft world as a top-down PNG heightmap."""

import configparser
import os
import sys

from chunks.world import read_surface
from visualise import (BlockColorMap, GreyscaleColorMap, HeightmapDataSet,
                       write_png)


def handle_args(custom_args=None):
    """Parse and return the script's command-line arguments using argparse."""
    from argparse import ArgumentParser
    parser = ArgumentParser(description='Draw a heightmap of the surface of '
                                        'a Minecraft world.')
    add = parser.add_argument
    add('-w', '--world', metavar='DIR', required=True,
        help='The world directory to read.')
    add('-m', '--color-map', metavar='FILE',
        help='Use a color map stored in FILE to convert surface blocks to '
             'colors. A color map is an INI file with a [colors] section '
             'mapping block names to RGB colors, and an optional [options] '
             'section. By default, this script uses a simple greyscale color '
             'map of the surface height.')
    add('-0', '--min-value', metavar='MIN', type=int,
        help='The lowest Y level, used to calibrate the shading. If not '
             'given, uses the lowest surface block found.')
    add('-9', '--max-value', metavar='MAX', type=int,
        help='The highest Y level, used to calibrate the shading. If not '
             'given, uses the highest surface block found.')
    add('-o', '--output-file', metavar='FILE',
        help='The PNG file to write the heightmap to. If not given, prints '
             'the PNG file to stdout.')
    return parser.parse_args(custom_args)


def load_color_map(path):
    """Load a BlockColorMap from an INI file."""
    # Block names contain colons, so only "=" separates keys from values.
    parser = configparser.ConfigParser(
        delimiters=('=',), inline_comment_prefixes=('//',),
        interpolation=configparser.ExtendedInterpolation())
    with open(path, 'rt') as cm_file:
        parser.read_file(cm_file)
    return BlockColorMap.from_config(parser)


def main(custom_args=None):
    """The script's main entry point."""
    args = handle_args(custom_args)
    region_dir = os.path.join(args.world, 'region')
    try:
        colormap = (GreyscaleColorMap() if args.color_map is None
                    else load_color_map(args.color_map))
        data = HeightmapDataSet.from_surface(read_surface(region_dir),
                                             args.min_value, args.max_value)
    except (ValueError, configparser.Error) as err:
        print('Invalid input: {}'.format(err), file=sys.stderr)
        return 1
    except OSError as err:
        print('Cannot read input: {}'.format(err), file=sys.stderr)
        return 2

    try:
        with (open(args.output_file, 'wb') if args.output_file is not None
              else sys.stdout.buffer) as outfile:
            write_png(outfile, data, colormap)
    except OSError as err:
        print('Cannot write output: {}'.format(err), file=sys.stderr)
        return 2
    return 0


if __name__ == '__main__':
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
    except BrokenPipeError:
        sys.exit(0)
