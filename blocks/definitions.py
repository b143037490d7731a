#!/usr/bin/python3

"""Block types known to the world editor.

A Block is identified by its namespaced name and the block-state properties it
is placed with by default (for example the rotation of a sign). Blocks are
immutable and hashable, so they can be used in sets and as registry keys.

BlockWithProperties pairs a block with an explicit set of properties, such as
the shape of a rail or the `powered' flag of a powered rail. The explicit
properties replace the block's defaults when it is written to the world.
"""

from collections import namedtuple
from threading import Lock

from blocks.registry import Registry


class Block(namedtuple('Block', 'name properties')):
    """A namespaced block type with optional default properties.

    properties is either None or a sorted tuple of (key, value) string pairs.
    A dict may be passed to the constructor instead; it is converted.
    """

    __slots__ = ()
    _name_cache = {}
    _name_cache_lock = Lock()

    def __new__(cls, name, properties=None):
        if isinstance(properties, dict):
            properties = tuple(sorted(
                (str(k), str(v)) for k, v in properties.items()))
        return super().__new__(cls, name, properties or None)

    @classmethod
    def from_name(cls, name):
        """Return the (cached) block without default properties called name."""
        with cls._name_cache_lock:
            try:
                return cls._name_cache[name]
            except KeyError:
                block = cls._name_cache[name] = cls(name)
                return block

    def default_properties(self):
        """Return the default properties as a new dict, or None."""
        return None if self.properties is None else dict(self.properties)

    def __str__(self):
        return self.name


BlockWithProperties = namedtuple('BlockWithProperties', 'block properties',
                                 defaults=(None,))


def effective_properties(block, properties=None):
    """Return the properties a block is written with, or None.

    Explicit properties take precedence over the block's defaults.
    """
    if properties is not None:
        return {str(k): str(v) for k, v in properties.items()}
    return block.default_properties()


AIR = Block('minecraft:air')
ACACIA_PLANKS = Block('minecraft:acacia_planks')
ANDESITE = Block('minecraft:andesite')
BIRCH_LEAVES = Block('minecraft:birch_leaves')
BIRCH_LOG = Block('minecraft:birch_log')
BLACK_CONCRETE = Block('minecraft:black_concrete')
BLACKSTONE = Block('minecraft:blackstone')
BLUE_FLOWER = Block('minecraft:blue_orchid')
BLUE_TERRACOTTA = Block('minecraft:blue_terracotta')
BRICK = Block('minecraft:bricks')
CARROTS = Block('minecraft:carrots', {'age': 7})
CAULDRON = Block('minecraft:cauldron')
CHAIN = Block('minecraft:chain')
CHISELED_STONE_BRICKS = Block('minecraft:chiseled_stone_bricks')
COBBLESTONE = Block('minecraft:cobblestone')
COBBLESTONE_WALL = Block('minecraft:cobblestone_wall')
CRACKED_STONE_BRICKS = Block('minecraft:cracked_stone_bricks')
DIRT = Block('minecraft:dirt')
GLASS = Block('minecraft:glass')
GRASS = Block('minecraft:grass')
GRASS_BLOCK = Block('minecraft:grass_block')
GRAVEL = Block('minecraft:gravel')
IRON_BLOCK = Block('minecraft:iron_block')
OAK_FENCE = Block('minecraft:oak_fence')
OAK_LEAVES = Block('minecraft:oak_leaves')
OAK_LOG = Block('minecraft:oak_log')
OAK_PLANKS = Block('minecraft:oak_planks')
OAK_TRAPDOOR = Block('minecraft:oak_trapdoor')
POLISHED_BLACKSTONE_BRICKS = Block('minecraft:polished_blackstone_bricks')
POTATOES = Block('minecraft:potatoes', {'age': 7})
POWERED_RAIL = Block('minecraft:powered_rail')
RAIL = Block('minecraft:rail')
REDSTONE_BLOCK = Block('minecraft:redstone_block')
SAND = Block('minecraft:sand')
SIGN = Block('minecraft:oak_sign', {'rotation': 0, 'waterlogged': 'false'})
SMOOTH_STONE = Block('minecraft:smooth_stone')
STONE = Block('minecraft:stone')
STONE_BRICKS = Block('minecraft:stone_bricks')
WATER = Block('minecraft:water')
WHEAT = Block('minecraft:wheat', {'age': 7})
WHITE_CONCRETE = Block('minecraft:white_concrete')

BUILTIN_BLOCKS = (
    AIR, ACACIA_PLANKS, ANDESITE, BIRCH_LEAVES, BIRCH_LOG, BLACK_CONCRETE,
    BLACKSTONE, BLUE_FLOWER, BLUE_TERRACOTTA, BRICK, CARROTS, CAULDRON, CHAIN,
    CHISELED_STONE_BRICKS, COBBLESTONE, COBBLESTONE_WALL, CRACKED_STONE_BRICKS,
    DIRT, GLASS, GRASS, GRASS_BLOCK, GRAVEL, IRON_BLOCK, OAK_FENCE, OAK_LEAVES,
    OAK_LOG, OAK_PLANKS, OAK_TRAPDOOR, POLISHED_BLACKSTONE_BRICKS, POTATOES,
    POWERED_RAIL, RAIL, REDSTONE_BLOCK, SAND, SIGN, SMOOTH_STONE, STONE,
    STONE_BRICKS, WATER, WHEAT, WHITE_CONCRETE,
)

_blocks_by_name = {block.name: block for block in BUILTIN_BLOCKS}
_registry = Registry(BUILTIN_BLOCKS)
AIR_ID = _registry.id_of(AIR)


def block_id(block):
    """Return the compact id of block, registering it if necessary."""
    return _registry.id_of(block)


def block_from_id(id_):
    """Return the block registered under id_. Raise KeyError if unknown."""
    return _registry.lookup(id_)


def block_by_name(name):
    """Return the built-in block called name.

    Unknown names give the block without default properties.
    """
    try:
        return _blocks_by_name[name]
    except KeyError:
        return Block.from_name(name)


AIR_NAMES = frozenset(('minecraft:air', 'minecraft:cave_air',
                       'minecraft:void_air'))


def is_air(block):
    """Return whether block is one of the air blocks (or missing)."""
    return block is None or block.name in AIR_NAMES
