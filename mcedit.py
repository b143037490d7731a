#!/usr/bin/python3

"""Generate blocks for map elements and save them into a Minecraft world."""

import configparser
import logging
import sys

from editor import Ground, WorldEditor, load_config, setup_logging
from editor.elevation import fetch_elevation_data
from elements import load_elements, process_elements

logger = logging.getLogger('editor.mcedit')


def handle_args(custom_args=None):
    """Parse and return the script's command-line arguments using argparse."""
    from argparse import ArgumentParser
    parser = ArgumentParser(description='Place blocks for processed map '
                                        'elements into a Minecraft world.')
    add = parser.add_argument
    add('-w', '--world', metavar='DIR', required=True,
        help='The world directory to edit. Region files are written to its '
             'region subdirectory, which is created if necessary.')
    add('-c', '--config', metavar='FILE',
        help='An INI file with [world] and [elevation] settings. Without one, '
             'the ground is flat at Y=-62 and edits are not restricted.')
    add('-v', '--verbose', action='count', default=0,
        help='Log more details. Pass twice for debugging output.')
    add('--log-file', metavar='FILE',
        help='Additionally write log messages to FILE.')
    add('--debug-elevation', metavar='PNG',
        help='Write a greyscale image of the elevation grid to PNG.')
    add('elements', metavar='ELEMENTS',
        help='The JSON file holding the nodes and ways to generate. If "-", '
             'reads from stdin.')
    return parser.parse_args(custom_args)


def build_ground(config):
    """Return the Ground described by an EditorConfig."""
    if not config.elevation_enabled:
        return Ground.flat(config.ground_level)
    data = fetch_elevation_data(config.geo_bbox, config.scale,
                                config.ground_level, config.tile_cache,
                                config.tile_url)
    return Ground.from_elevation(data)


def write_elevation_debug(path, ground):
    from visualise import HeightmapDataSet, write_png
    if not ground.elevation_enabled:
        logger.warning('Elevation is disabled, not writing %s', path)
        return
    with open(path, 'wb') as pngfile:
        write_png(pngfile, HeightmapDataSet.from_ground(ground))


def main(custom_args=None):
    """The script's main entry point."""
    args = handle_args(custom_args)
    level = (logging.WARNING, logging.INFO, logging.DEBUG)[min(args.verbose,
                                                               2)]
    setup_logging(level, args.log_file)

    try:
        config = load_config(args.config)
        with (open(args.elements, 'rt') if args.elements != '-'
              else sys.stdin) as elementsf:
            elements = load_elements(elementsf)
    except (ValueError, configparser.Error) as err:
        print('Invalid input: {}'.format(err), file=sys.stderr)
        return 1
    except OSError as err:
        print('Cannot read input: {}'.format(err), file=sys.stderr)
        return 2

    try:
        ground = build_ground(config)
        if args.debug_elevation:
            write_elevation_debug(args.debug_elevation, ground)
        editor = WorldEditor(args.world, config.bbox, ground,
                             config.data_version)
        process_elements(editor, elements.nodes, elements.ways,
                         elements.relations, config.scale)
        written = editor.save()
    except ValueError as err:
        print('Cannot generate world: {}'.format(err), file=sys.stderr)
        return 1
    except (OSError, RuntimeError) as err:
        print('Cannot write world: {}'.format(err), file=sys.stderr)
        return 2

    logger.info('Wrote %d region files', len(written))
    return 0


if __name__ == '__main__':
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
    except BrokenPipeError:
        sys.exit(0)
