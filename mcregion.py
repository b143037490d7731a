#!/usr/bin/python3

"""Extract the blocks or the surface of a Minecraft world's region files."""

import os
import sys

from chunks import BlockPoint, ChunkFormatError, SurfacePoint
from chunks.world import read_blocks, read_surface


def handle_args(custom_args=None):
    """Parse and return the script's command-line arguments using argparse."""
    from argparse import ArgumentParser
    parser = ArgumentParser(description="Extract information from a "
                                        "Minecraft world's region files.")
    add = parser.add_argument
    add('-w', '--world', metavar='DIR', required=True,
        help='The world directory to read. Its region subdirectory must '
             'exist.')
    add('-o', '--output-file', metavar='FILE',
        help='The CSV file to write to. Defaults to stdout.')
    add('-p', '--plane', metavar='PLANE',
        help='Only extract blocks from one horizontal plane. If passed an '
             'integer, blocks whose y coordinate is equal to PLANE are '
             'extracted. If given an integer preceded by "+" or "-", blocks '
             "at an offset of PLANE from the world's surface are extracted. "
             'Does nothing if surface points are extracted.')
    add('extract_data', choices=('blocks', 'surface'),
        help='The type of data to extract from the world.')
    return parser.parse_args(custom_args)


def plane_filter(plane, region_dir):
    """Return a predicate selecting the BlockPoints in plane."""
    if any(map(plane.startswith, '+-')):
        rel_offset = int(plane)
        offsets = {(pt.x, pt.z): pt.y + rel_offset
                   for pt in read_surface(region_dir)}
        return lambda b: b.y == offsets.get((b.x, b.z))
    y_coord = int(plane)
    return lambda b: b.y == y_coord


def main(custom_args=None):
    """The script's main entry point."""
    from csv import QUOTE_NONNUMERIC, DictWriter as CSVDictWriter

    args = handle_args(custom_args)
    region_dir = os.path.join(args.world, 'region')
    if not os.path.isdir(region_dir):
        print('{} has no region directory.'.format(args.world),
              file=sys.stderr)
        return 2

    data_type = {'surface': SurfacePoint, 'blocks': BlockPoint}[
        args.extract_data]
    data_reader = {'surface': read_surface, 'blocks': read_blocks}[
        args.extract_data]
    try:
        data = data_reader(region_dir)
        if args.plane and args.extract_data == 'blocks':
            data = filter(plane_filter(args.plane, region_dir), data)
        with (open(args.output_file, 'wt', newline='')
              if args.output_file is not None
              else sys.stdout) as csvfile:
            csvwriter = CSVDictWriter(csvfile, fieldnames=data_type._fields,
                                      quoting=QUOTE_NONNUMERIC)
            csvwriter.writeheader()
            csvwriter.writerows(map(data_type._asdict, data))
    except ChunkFormatError as err:
        print('Invalid region file: {}'.format(err), file=sys.stderr)
        return 1
    except ValueError as err:
        print('Invalid plane {!r}: {}'.format(args.plane, err),
              file=sys.stderr)
        return 1
    except OSError as err:
        print('Cannot read world: {}'.format(err), file=sys.stderr)
        return 2
    return 0


if __name__ == '__main__':
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
    except BrokenPipeError:
        sys.exit(0)     # We were piped into something that crashed.
