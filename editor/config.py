#!/usr/bin/python3

"""Load world editor settings from an INI file.

An example file:

    [world]
    name = paris
    ground_level = -62
    data_version = 3465
    // min_x, min_z, max_x, max_z; omit to allow edits anywhere
    bbox = 0, 0, 511, 511

    [elevation]
    enabled = yes
    // min_lat, min_lng, max_lat, max_lng
    bbox = 48.85, 2.29, 48.86, 2.30
    scale = 1.0
    tile_cache = ${world:name}-tiles

Values may refer to each other using ${section:key} interpolation. Every key is
optional; missing keys take the defaults from DEFAULTS.
"""

from collections import namedtuple
from configparser import ConfigParser, ExtendedInterpolation

from chunks.common import DATA_VERSION
from editor.elevation import TERRARIUM_URL
from editor.geometry import LLBBox, XZBBox
from editor.ground import DEFAULT_GROUND_LEVEL

EditorConfig = namedtuple('EditorConfig', 'ground_level data_version bbox '
                                          'elevation_enabled geo_bbox scale '
                                          'tile_cache tile_url')

DEFAULTS = EditorConfig(
    ground_level=DEFAULT_GROUND_LEVEL,
    data_version=DATA_VERSION,
    bbox=None,
    elevation_enabled=False,
    geo_bbox=None,
    scale=1.0,
    tile_cache='tile-cache',
    tile_url=TERRARIUM_URL,
)


def _parse_numbers(value, convert, count, key):
    parts = [p.strip() for p in value.split(',')]
    if len(parts) != count:
        raise ValueError('{} needs {} comma-separated numbers, got {!r}'
                         .format(key, count, value))
    return [convert(p) for p in parts]


def parse_config(parser):
    """Build an EditorConfig from a ConfigParser that has read a file.

    Raise ValueError if a value cannot be converted.
    """
    world = parser['world'] if parser.has_section('world') else {}
    elevation = (parser['elevation'] if parser.has_section('elevation')
                 else {})

    def get(section, key, convert, default):
        if key not in section:
            return default
        try:
            return convert(section[key])
        except ValueError as err:
            raise ValueError('invalid value for {}: {}'.format(key, err))

    bbox = get(world, 'bbox',
               lambda v: XZBBox(*_parse_numbers(v, int, 4, 'bbox')),
               DEFAULTS.bbox)
    geo_bbox = get(elevation, 'bbox',
                   lambda v: LLBBox(*_parse_numbers(v, float, 4, 'bbox')),
                   DEFAULTS.geo_bbox)
    enabled = get(elevation, 'enabled', _parse_bool,
                  DEFAULTS.elevation_enabled)
    if enabled and geo_bbox is None:
        raise ValueError('elevation is enabled but [elevation] has no bbox')
    scale = get(elevation, 'scale', float, DEFAULTS.scale)
    if scale <= 0:
        raise ValueError('scale must be positive, got {}'.format(scale))

    return EditorConfig(
        ground_level=get(world, 'ground_level', int, DEFAULTS.ground_level),
        data_version=get(world, 'data_version', int, DEFAULTS.data_version),
        bbox=bbox,
        elevation_enabled=enabled,
        geo_bbox=geo_bbox,
        scale=scale,
        tile_cache=get(elevation, 'tile_cache', str, DEFAULTS.tile_cache),
        tile_url=get(elevation, 'tile_url', str, DEFAULTS.tile_url),
    )


def _parse_bool(value):
    try:
        return ConfigParser.BOOLEAN_STATES[value.strip().lower()]
    except KeyError:
        raise ValueError('not a boolean: {!r}'.format(value))


def new_parser():
    return ConfigParser(comment_prefixes=('#', ';', '//'),
                        inline_comment_prefixes=('//',),
                        interpolation=ExtendedInterpolation())


def load_config(path=None):
    """Load the editor configuration from the INI file at path.

    With no path, return the defaults.
    """
    if path is None:
        return DEFAULTS
    parser = new_parser()
    with open(path, 'rt') as configf:
        parser.read_file(configf)
    return parse_config(parser)
