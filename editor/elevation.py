#!/usr/bin/python3

"""Fetch real-world elevation for a geographic bounding box.

Elevation comes from Terrarium tiles: 256*256 PNG images on a web-mercator tile
grid in which each pixel encodes a height in metres as

    (R * 256 + G + B / 256) - 32768

Tiles are downloaded once into a cache directory and read from there on later
runs. The tiles are resampled onto a grid with one cell per block of the
generated world, and the heights are scaled to fit into the world's Y range.
"""

import logging
import math
import os
import urllib.error
import urllib.request

import png

from chunks.common import MAX_Y
from editor.ground import ElevationData, round_half_away

logger = logging.getLogger(__name__)

TERRARIUM_URL = ('https://s3.amazonaws.com/elevation-tiles-prod/terrarium/'
                 '{z}/{x}/{y}.png')
TERRARIUM_OFFSET = 32768.0
TILE_SIZE = 256
MIN_ZOOM, MAX_ZOOM = 10, 15
BASE_HEIGHT_SCALE = 0.7
Y_RANGE_MARGIN = 0.9
EARTH_RADIUS = 6371000.0
MISSING = -32768


def geo_distance(a, b):
    """Return the (north-south, east-west) distance in metres between points.

    Both distances are measured along the box spanned by the two GeoPoints:
    the north-south one along a's meridian, the east-west one along the
    parallel halfway between them.
    """
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    d_lng = math.radians(b.lng - a.lng)
    north_south = EARTH_RADIUS * abs(lat2 - lat1)
    east_west = EARTH_RADIUS * abs(d_lng) * math.cos((lat1 + lat2) / 2)
    return north_south, east_west


def calculate_zoom_level(bbox):
    """Choose a tile zoom level for a bounding box, between 10 and 15."""
    max_diff = max(abs(bbox.max_lat - bbox.min_lat),
                   abs(bbox.max_lng - bbox.min_lng))
    if max_diff <= 0:
        return MAX_ZOOM
    zoom = int(-math.log2(max_diff) + 20)
    return min(max(zoom, MIN_ZOOM), MAX_ZOOM)


def lat_lng_to_tile(lat, lng, zoom):
    """Return the (x, y) of the tile containing a point at a zoom level."""
    lat_rad = math.radians(lat)
    n = 2 ** zoom
    x = math.floor((lng + 180) / 360 * n)
    y = math.floor((1 - math.asinh(math.tan(lat_rad)) / math.pi) / 2 * n)
    return x, y


def tile_coordinates(bbox, zoom):
    """Return every (x, y) tile overlapping the bounding box."""
    x1, y1 = lat_lng_to_tile(bbox.min_lat, bbox.min_lng, zoom)
    x2, y2 = lat_lng_to_tile(bbox.max_lat, bbox.max_lng, zoom)
    return [(x, y)
            for x in range(min(x1, x2), max(x1, x2) + 1)
            for y in range(min(y1, y2), max(y1, y2) + 1)]


def decode_terrarium(rgb):
    """Decode one Terrarium pixel into metres."""
    r, g, b = rgb
    return r * 256 + g + b / 256 - TERRARIUM_OFFSET


def read_tile(data):
    """Decode PNG bytes into rows of (R, G, B) tuples."""
    width, _, rows, _ = png.Reader(bytes=data).asRGB8()
    return [[tuple(row[3*x:3*x + 3]) for x in range(width)] for row in rows]


def download_tile(tile_x, tile_y, zoom, tile_path, url=TERRARIUM_URL,
                  timeout=30):
    """Download a tile to tile_path and return its bytes."""
    tile_url = url.format(z=zoom, x=tile_x, y=tile_y)
    logger.info('Fetching tile x=%d, y=%d, z=%d', tile_x, tile_y, zoom)
    try:
        with urllib.request.urlopen(tile_url, timeout=timeout) as resp:
            data = resp.read()
    except urllib.error.URLError as err:
        raise RuntimeError('failed to download elevation tile {}: {}'
                           .format(tile_url, err)) from err
    with open(tile_path, 'wb') as tilef:
        tilef.write(data)
    return data


def load_tile(tile_x, tile_y, zoom, cache_dir, url=TERRARIUM_URL):
    """Return the pixels of a tile, from the cache if possible."""
    tile_path = os.path.join(cache_dir, 'z{}_x{}_y{}.png'.format(
        zoom, tile_x, tile_y))
    if os.path.exists(tile_path):
        with open(tile_path, 'rb') as tilef:
            data = tilef.read()
        try:
            return read_tile(data)
        except png.Error as err:
            logger.warning('Cached tile %s is unreadable (%s), fetching it '
                           'again', tile_path, err)
    return read_tile(download_tile(tile_x, tile_y, zoom, tile_path, url))


def scale_heights(heights, width, height, scale, ground_level):
    """Fill gaps in a raw height grid and compute its scaling.

    Cells still holding MISSING become 0 m. The scale maps the grid's height
    range to blocks, shrunk if necessary so that the highest point stays below
    90% of the space between ground_level and the build limit.
    """
    heights = [0 if h == MISSING else h for h in heights]
    min_height = min(heights, default=0)
    height_range = max(heights, default=0) - min_height

    height_scale = BASE_HEIGHT_SCALE * math.sqrt(scale)
    scaled_range = height_range * height_scale
    max_allowed_range = (MAX_Y - ground_level) * Y_RANGE_MARGIN
    if scaled_range > max_allowed_range:
        height_scale *= max_allowed_range / scaled_range
        scaled_range = height_range * height_scale

    return ElevationData(heights, width, height, min_height, height_range,
                         ground_level, scaled_range)


def fetch_elevation_data(bbox, scale, ground_level, cache_dir='tile-cache',
                         url=TERRARIUM_URL):
    """Build ElevationData for a geographic bounding box.

    The grid has one cell per block of a world generated at the given scale
    (blocks per metre). Rows of the grid run west to east, successive rows
    north to south.
    """
    north_south, east_west = geo_distance(bbox.min(), bbox.max())
    grid_width = int(math.floor(east_west) * scale)
    grid_height = int(math.floor(north_south) * scale)
    if grid_width <= 0 or grid_height <= 0:
        raise ValueError('bounding box is too small for an elevation grid')

    zoom = calculate_zoom_level(bbox)
    os.makedirs(cache_dir, exist_ok=True)
    heights = [MISSING] * (grid_width * grid_height)
    lat_span = bbox.max_lat - bbox.min_lat
    lng_span = bbox.max_lng - bbox.min_lng
    n = 2 ** zoom

    for tile_x, tile_y in tile_coordinates(bbox, zoom):
        for y, row in enumerate(load_tile(tile_x, tile_y, zoom, cache_dir,
                                          url)):
            pixel_lat = math.degrees(math.atan(math.sinh(
                math.pi * (1 - 2 * (tile_y + y / TILE_SIZE) / n))))
            if not bbox.min_lat <= pixel_lat <= bbox.max_lat:
                continue
            rel_z = 1 - (pixel_lat - bbox.min_lat) / lat_span
            grid_z = round_half_away(rel_z * grid_height)
            if grid_z >= grid_height:
                continue
            for x, rgb in enumerate(row):
                pixel_lng = (tile_x + x / TILE_SIZE) / n * 360 - 180
                if not bbox.min_lng <= pixel_lng <= bbox.max_lng:
                    continue
                grid_x = round_half_away((pixel_lng - bbox.min_lng) /
                                         lng_span * grid_width)
                if grid_x >= grid_width:
                    continue
                heights[grid_z * grid_width + grid_x] = round_half_away(
                    decode_terrarium(rgb))

    logger.info('Built a %dx%d elevation grid from zoom %d tiles',
                grid_width, grid_height, zoom)
    return scale_heights(heights, grid_width, grid_height, scale,
                         ground_level)
