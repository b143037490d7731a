#!/usr/bin/python3

"""Biome types and how OpenStreetMap-style tags select them.

Biomes are stored per 4x4x4 cell of a section. Like blocks, they are kept as
compact ids; the first biomes of the registry have fixed ids (PLAINS is 0,
FOREST 1 and RIVER 2), which is what a freshly created section is filled with.
"""

from collections import namedtuple
from threading import Lock

from blocks.registry import Registry


class Biome(namedtuple('Biome', 'name')):
    """A namespaced biome type such as minecraft:plains."""

    __slots__ = ()
    _name_cache = {}
    _name_cache_lock = Lock()

    @classmethod
    def from_name(cls, name):
        """Return the (cached) biome called name."""
        with cls._name_cache_lock:
            try:
                return cls._name_cache[name]
            except KeyError:
                biome = cls._name_cache[name] = cls(name)
                return biome

    def __str__(self):
        return self.name


PLAINS = Biome('minecraft:plains')
FOREST = Biome('minecraft:forest')
RIVER = Biome('minecraft:river')
BEACH = Biome('minecraft:beach')
DESERT = Biome('minecraft:desert')
OCEAN = Biome('minecraft:ocean')
JUNGLE = Biome('minecraft:jungle')
SWAMP = Biome('minecraft:swamp')
TAIGA = Biome('minecraft:taiga')
SAVANNA = Biome('minecraft:savanna')
MOUNTAINS = Biome('minecraft:mountains')
SNOWY_TUNDRA = Biome('minecraft:snowy_tundra')
SNOWY_TAIGA = Biome('minecraft:snowy_taiga')
MUSHROOM_FIELDS = Biome('minecraft:mushroom_fields')

KNOWN_BIOMES = (PLAINS, FOREST, RIVER, BEACH, DESERT, OCEAN, JUNGLE, SWAMP,
                TAIGA, SAVANNA, MOUNTAINS, SNOWY_TUNDRA, SNOWY_TAIGA,
                MUSHROOM_FIELDS)

_registry = Registry(KNOWN_BIOMES)


def biome_id(biome):
    """Return the compact id of biome, registering it if necessary."""
    return _registry.id_of(biome)


def biome_from_id(id_):
    """Return the biome registered under id_. Raise KeyError if unknown."""
    return _registry.lookup(id_)


LANDUSE_BIOMES = {
    'forest': FOREST,
    'orchard': FOREST,
    **dict.fromkeys(('grass', 'meadow', 'greenfield', 'farmland', 'military',
                     'industrial', 'railway', 'commercial', 'residential',
                     'cemetery', 'traffic_island', 'construction',
                     'village_green'), PLAINS),
}

NATURAL_BIOMES = {
    'beach': BEACH, 'coastline': BEACH,
    'wetland': SWAMP, 'swamp': SWAMP, 'marsh': SWAMP,
    'wood': FOREST, 'tree': FOREST, 'woodland': FOREST,
    'scrub': SAVANNA, 'grassland': SAVANNA, 'heath': SAVANNA,
    'taiga': TAIGA,
    'fell': MOUNTAINS, 'bare_rock': MOUNTAINS, 'scree': MOUNTAINS,
    'rock': MOUNTAINS,
    'sand': DESERT,
    'glacier': SNOWY_TUNDRA, 'ice': SNOWY_TUNDRA,
}

LEISURE_BIOMES = {
    'park': PLAINS,
    'nature_reserve': FOREST,
    'pitch': PLAINS,
    'golf_course': PLAINS,
    'garden': PLAINS,
}


def _biome_from_water_tags(tags):
    if 'water' in tags:
        return {
            'river': RIVER, 'canal': RIVER, 'stream': RIVER,
            'lake': OCEAN, 'reservoir': OCEAN, 'lagoon': OCEAN, 'pond': OCEAN,
            'sea': OCEAN, 'ocean': OCEAN,
            'wetland': SWAMP, 'swamp': SWAMP,
        }.get(tags['water'], RIVER)
    if 'waterway' in tags:
        return SWAMP if tags['waterway'] == 'drain' else RIVER
    return None


def biome_from_tags(tags):
    """Choose a biome for an element from its tags.

    The first of these that yields a biome wins: an explicit `biome' tag
    naming a known biome, the `natural' tag (natural=water defers to the water
    hints), water hints from the `water' and `waterway' tags, then the
    `landuse' and `leisure' tags. Anything else is plains.
    """
    explicit = tags.get('biome')
    if explicit is not None:
        for biome in KNOWN_BIOMES:
            if biome.name == explicit:
                return biome

    natural = tags.get('natural')
    if natural is not None:
        if natural == 'water':
            water_biome = _biome_from_water_tags(tags)
            if water_biome is not None:
                return water_biome
        if natural in NATURAL_BIOMES:
            return NATURAL_BIOMES[natural]

    water_biome = _biome_from_water_tags(tags)
    if water_biome is not None:
        return water_biome

    if tags.get('landuse') in LANDUSE_BIOMES:
        return LANDUSE_BIOMES[tags['landuse']]
    if tags.get('leisure') in LEISURE_BIOMES:
        return LEISURE_BIOMES[tags['leisure']]
    return PLAINS
