#!/usr/bin/python3

"""Test the elements module."""

import io
import json
import tempfile
import unittest

from blocks import biomes
from blocks.definitions import (CHAIN, DIRT, GRAVEL, IRON_BLOCK, OAK_FENCE,
                                OAK_LOG, POWERED_RAIL, RAIL, REDSTONE_BLOCK,
                                STONE, STONE_BRICKS, WATER, WHEAT)
from editor.geometry import XZBBox
from editor.ground import Ground
from editor.world import WorldEditor
from elements import (ProcessedMember, ProcessedNode, ProcessedRelation,
                      ProcessedWay, generate_biomes, generate_power_lines,
                      generate_power_node, generate_railways,
                      generate_roller_coaster, generate_water_area_from_way,
                      generate_water_areas, generate_waterways,
                      load_elements, process_elements)
from elements import power, railways, water_areas, waterways


def build_way(tags, points, way_id=1):
    nodes = [ProcessedNode(i, {}, x, z) for i, (x, z) in enumerate(points)]
    return ProcessedWay(way_id, nodes, tags)


def build_ring(tags, points, way_id=1):
    """Build a closed way through points, ending at its first node."""
    way = build_way(tags, points, way_id)
    return way._replace(nodes=way.nodes + [way.nodes[0]])


class EditorTestCase(unittest.TestCase):
    """Provide a fresh WorldEditor on flat ground at Y=-62."""

    ground = Ground.flat()
    bbox = None

    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.editor = WorldEditor(tmp.name, self.bbox, self.ground)


class LoadElementsTest(unittest.TestCase):
    """Test reading elements from JSON."""

    def test_load(self):
        """Test that nodes, ways and relations are read with their tags."""
        nodes, ways, relations = load_elements(io.StringIO(json.dumps({
            'nodes': [{'id': 1, 'x': 0, 'z': 0, 'tags': {'power': 'pole'}},
                      {'id': 2, 'x': 5, 'z': -3}],
            'ways': [{'id': 9, 'nodes': [1, 2], 'tags': {'layer': 1}}],
            'relations': [{'id': 4, 'tags': {'natural': 'water'},
                           'members': [{'role': 'outer', 'way': 9},
                                       {'role': 'label', 'way': 9}]}],
        })))
        self.assertEqual(nodes[0], ProcessedNode(1, {'power': 'pole'}, 0, 0))
        self.assertEqual(nodes[1].tags, {})
        self.assertEqual(nodes[1].xz(), (5, -3))
        self.assertEqual(ways, [ProcessedWay(9, nodes, {'layer': '1'})])
        self.assertEqual(relations, [ProcessedRelation(
            4, [ProcessedMember('outer', ways[0])], {'natural': 'water'})])

    def test_invalid(self):
        """Test that malformed documents raise ValueError."""
        documents = [
            'not json',
            '[]',
            '{"nodes": [{"id": 1, "x": 0}]}',
            '{"nodes": [{"id": 1, "x": 0, "z": 0}], '
            '"ways": [{"id": 2, "nodes": [1, 3]}]}',
            '{"ways": [{"nodes": []}]}',
            '{"relations": [{"id": 1, "members": [{"role": "outer", '
            '"way": 5}]}]}',
            '{"relations": [{"id": 1, "members": [{"role": "outer"}]}]}',
            '{"nodes": null}',
            '{"ways": {}}',
            '{"relations": "none"}',
        ]
        for document in documents:
            with self.subTest(document=document):
                with self.assertRaises(ValueError):
                    load_elements(io.StringIO(document))


class RailShapeTest(unittest.TestCase):
    """Test the rail path helpers."""

    def test_smoothing(self):
        """Test that diagonal steps get an intermediate rail."""
        self.assertEqual(
            railways.smooth_diagonal_rails([(0, 0, 0), (1, 0, 1)]),
            [(0, 0, 0), (1, 0, 0), (1, 0, 1)])
        # Coming in along z, the line keeps x until it has to turn.
        self.assertEqual(
            railways.smooth_diagonal_rails([(0, 0, 0), (0, 0, 1),
                                            (1, 0, 2)]),
            [(0, 0, 0), (0, 0, 1), (0, 0, 2), (1, 0, 2)])

    def test_shapes(self):
        """Test straight, curved and ascending shapes."""
        cases = [
            (((0, 0), 5, None, None), 'north_south'),
            (((0, 0), 5, None, ((1, 0), 5)), 'east_west'),
            (((0, 0), 5, ((0, 1), 5), None), 'north_south'),
            (((1, 0), 5, ((0, 0), 5), ((2, 0), 5)), 'east_west'),
            (((0, 1), 5, ((0, 0), 5), ((0, 2), 5)), 'north_south'),
            (((3, 0), 5, ((2, 0), 5), ((3, 1), 5)), 'south_west'),
            (((3, 0), 5, ((4, 0), 5), ((3, -1), 5)), 'north_east'),
            (((0, 0), 5, None, ((1, 0), 6)), 'ascending_east'),
            (((0, 0), 5, ((0, -1), 6), ((0, 1), 5)), 'ascending_north'),
            (((0, 0), 5, ((-1, 0), 4), ((1, 0), 6)), 'ascending_east'),
        ]
        for args, shape in cases:
            with self.subTest(args=args):
                self.assertEqual(railways.rail_shape(*args), shape)


class RailwayTest(EditorTestCase):
    """Test railway and roller coaster generation."""

    def test_straight_railway(self):
        """Test rails, gravel and sleepers along a straight line."""
        generate_railways(self.editor, build_way({'railway': 'rail'},
                                                 [(0, 0), (5, 0)]))
        for x in range(6):
            with self.subTest(x=x):
                self.assertEqual(self.editor.get_block_absolute(x, -61, 0),
                                 RAIL)
                self.assertEqual(
                    self.editor.get_properties_absolute(x, -61, 0),
                    {'shape': 'east_west'})
                self.assertIsNone(self.editor.get_block_absolute(x, -60, 0))
                self.assertEqual(self.editor.get_block_absolute(x, -62, 0),
                                 OAK_LOG if x % 4 == 0 else GRAVEL)

    def test_powered_rails(self):
        """Test that every eighth straight rail is powered."""
        generate_railways(self.editor, build_way({'railway': 'rail'},
                                                 [(0, 0), (10, 0)]))
        self.assertEqual(self.editor.get_block_absolute(7, -61, 0),
                         POWERED_RAIL)
        self.assertEqual(self.editor.get_properties_absolute(7, -61, 0),
                         {'shape': 'east_west', 'powered': 'true'})
        self.assertEqual(self.editor.get_block_absolute(7, -62, 0),
                         REDSTONE_BLOCK)
        self.assertEqual(self.editor.get_block_absolute(8, -62, 0), OAK_LOG)
        self.assertEqual(self.editor.get_block_absolute(6, -61, 0), RAIL)

    def test_corner(self):
        """Test that rails curve where the way turns."""
        generate_railways(self.editor, build_way({'railway': 'rail'},
                                                 [(0, 0), (3, 0), (3, 3)]))
        self.assertEqual(self.editor.get_properties_absolute(3, -61, 0),
                         {'shape': 'south_west'})
        self.assertEqual(self.editor.get_properties_absolute(3, -61, 2),
                         {'shape': 'north_south'})

    def test_overrides_existing_blocks(self):
        """Test that railways replace whatever is in their way."""
        self.editor.set_block_absolute(STONE, 2, -61, 0)
        self.editor.set_block_absolute(STONE, 2, -60, 0)
        self.editor.set_block_absolute(STONE, 2, -62, 0)
        generate_railways(self.editor, build_way({'railway': 'rail'},
                                                 [(0, 0), (5, 0)]))
        self.assertEqual(self.editor.get_block_absolute(2, -61, 0), RAIL)
        self.assertIsNone(self.editor.get_block_absolute(2, -60, 0))
        self.assertEqual(self.editor.get_block_absolute(2, -62, 0), GRAVEL)

    def test_skipped_railways(self):
        """Test that disused and underground railways are not built."""
        for tags in ({'railway': 'abandoned'}, {'railway': 'proposed'},
                     {'railway': 'rail', 'tunnel': 'yes'},
                     {'railway': 'rail', 'subway': 'yes'}, {}):
            with self.subTest(tags=tags):
                generate_railways(self.editor,
                                  build_way(tags, [(0, 0), (5, 0)]))
                self.assertEqual(self.editor.modified_chunks(), [])

    def test_roller_coaster(self):
        """Test the elevated track and its pillars."""
        generate_roller_coaster(self.editor, build_way(
            {'roller_coaster': 'track'}, [(0, 0), (6, 0)]))
        for x in range(7):
            with self.subTest(x=x):
                self.assertEqual(self.editor.get_block(x, 4, 0), IRON_BLOCK)
                self.assertEqual(self.editor.get_block(x, 5, 0), RAIL)
        for y in range(1, 4):
            self.assertEqual(self.editor.get_block(0, y, 0), IRON_BLOCK)
            self.assertEqual(self.editor.get_block(6, y, 0), IRON_BLOCK)
            self.assertIsNone(self.editor.get_block(3, y, 0))

    def test_skipped_roller_coasters(self):
        """Test that indoor and underground tracks are not built."""
        for tags in ({'roller_coaster': 'track', 'indoor': 'yes'},
                     {'roller_coaster': 'track', 'layer': '-1'},
                     {'roller_coaster': 'station'}):
            with self.subTest(tags=tags):
                generate_roller_coaster(self.editor,
                                        build_way(tags, [(0, 0), (6, 0)]))
                self.assertEqual(self.editor.modified_chunks(), [])


class PowerTest(EditorTestCase):
    """Test power line generation."""

    ground = Ground.flat(0)

    def test_power_line(self):
        """Test poles and oriented wires of a power line."""
        generate_power_lines(self.editor, build_way({'power': 'line'},
                                                    [(0, 0), (5, 0)]))
        for x in (0, 5):
            with self.subTest(x=x):
                self.assertEqual(self.editor.get_block_absolute(x, 1, 0),
                                 STONE_BRICKS)
                for y in range(2, power.MAIN_LINE_HEIGHT + 1):
                    self.assertEqual(self.editor.get_block_absolute(x, y, 0),
                                     OAK_FENCE)
                self.assertIsNone(self.editor.get_block_absolute(x, 11, 0))
        for x in range(1, 5):
            with self.subTest(x=x):
                self.assertEqual(self.editor.get_block_absolute(x, 10, 0),
                                 CHAIN)
                self.assertEqual(
                    self.editor.get_properties_absolute(x, 10, 0),
                    {'axis': 'x'})

    def test_nodes(self):
        """Test stand-alone towers and poles."""
        generate_power_node(self.editor,
                            ProcessedNode(1, {'power': 'pole'}, 3, 3))
        generate_power_node(self.editor,
                            ProcessedNode(2, {'power': 'tower'}, 8, 8))
        generate_power_node(self.editor,
                            ProcessedNode(3, {'power': 'substation'}, 12, 12))
        self.assertEqual(self.editor.get_block(3, 6, 3), OAK_FENCE)
        self.assertIsNone(self.editor.get_block(3, 7, 3))
        self.assertEqual(self.editor.get_block(8, 10, 8), OAK_FENCE)
        self.assertIsNone(self.editor.get_block(12, 1, 12))

    def test_chain_axis(self):
        """Test the axis chosen for chain links."""
        self.assertEqual(power.chain_axis((0, 0, 0), (0, 1, 0), (0, 2, 0)),
                         'y')
        self.assertEqual(power.chain_axis((0, 0, 0), (0, 0, 1), None), 'z')
        self.assertEqual(power.chain_axis(None, (0, 0, 0), (1, 1, 0)), 'x')
        self.assertEqual(power.chain_axis(None, (0, 0, 0), None), 'y')


class WaterwayTest(EditorTestCase):
    """Test waterway generation."""

    ground = Ground.flat(0)
    bbox = XZBBox.from_lengths(120, 120)

    def test_width_tag_with_units(self):
        """Test a river with an explicit width."""
        generate_waterways(self.editor, build_way(
            {'waterway': 'river', 'width': '30 m'}, [(50, 20), (50, 80)]))
        self.assertTrue(self.editor.check_for_block(35, 0, 50, [WATER]))
        self.assertFalse(self.editor.check_for_block(67, 0, 50, [WATER]))

    def test_riverbank_metadata(self):
        """Test a width taken from riverbank metadata."""
        generate_waterways(self.editor, build_way(
            {'waterway': 'river', 'riverbank:width': '40'},
            [(60, 20), (60, 80)]))
        self.assertTrue(self.editor.check_for_block(40, 0, 50, [WATER]))
        self.assertFalse(self.editor.check_for_block(82, 0, 50, [WATER]))

    def test_default_width(self):
        """Test a river without width metadata."""
        generate_waterways(self.editor, build_way({'waterway': 'river'},
                                                  [(70, 20), (70, 80)]))
        self.assertTrue(self.editor.check_for_block(55, 0, 50, [WATER]))
        self.assertFalse(self.editor.check_for_block(53, 0, 50, [WATER]))

    def test_channel_profile(self):
        """Test the floor, banks and vegetation clearing of a channel."""
        self.editor.set_block(WHEAT, 10, 1, 10)
        self.editor.set_block(STONE, 11, 1, 10)
        generate_waterways(self.editor, build_way(
            {'waterway': 'canal', 'width': '4'}, [(10, 10), (10, 11)]))
        self.assertEqual(self.editor.get_block(10, 0, 10), WATER)
        self.assertEqual(self.editor.get_block(10, -1, 10), WATER)
        self.assertEqual(self.editor.get_block(10, -3, 10), DIRT)
        self.assertIsNone(self.editor.get_block(10, 1, 10))
        self.assertEqual(self.editor.get_block(11, 1, 10), STONE)
        # The bank is one block shallower than the channel.
        self.assertEqual(self.editor.get_block(13, 0, 10), WATER)
        self.assertIsNone(self.editor.get_block(13, -1, 10))
        self.assertEqual(self.editor.get_block(13, -2, 10), DIRT)
        self.assertIsNone(self.editor.get_block(14, 0, 10))

    def test_skipped_layers(self):
        """Test that underground waterways are not dug."""
        generate_waterways(self.editor, build_way(
            {'waterway': 'stream', 'layer': '-1'}, [(10, 10), (10, 20)]))
        self.assertEqual(self.editor.modified_chunks(), [])

    def test_parse_width(self):
        """Test width parsing with units."""
        cases = [('30 m', 30), ('12ft', 12 * 0.3048), ("10'", 3.048),
                 ('1,5 km', 1500), ('2.5', 2.5), ('wide', None), ('', None)]
        for value, expected in cases:
            with self.subTest(value=value):
                if expected is None:
                    self.assertIsNone(waterways.parse_width_meters(value))
                else:
                    self.assertAlmostEqual(
                        waterways.parse_width_meters(value), expected)

    def test_infer_width(self):
        """Test choosing a width from tags."""
        infer = waterways.infer_width_from_tags
        self.assertEqual(infer({'width': '10 ft'}, 8, 1.0), 3)
        self.assertEqual(infer({'width': 'abc', 'est_width': '7'}, 8, 1.0), 7)
        self.assertEqual(infer({'width': '2.5'}, 8, 2.0), 5)
        self.assertEqual(infer({'width': '0.1'}, 8, 1.0), 1)
        self.assertEqual(infer({}, 8, 1.0), 8)
        self.assertEqual(waterways.waterway_dimensions('brook'), (4, 2))
        self.assertEqual(waterways.waterway_dimensions('lagoon'), (8, 2))


class WaterAreaTest(EditorTestCase):
    """Test filling water areas."""

    bbox = XZBBox.from_lengths(20, 20)
    square = [(0, 0), (10, 0), (10, 10), (0, 10)]

    def assert_water(self, columns, y=0):
        for x, z in columns:
            with self.subTest(x=x, z=z):
                self.assertTrue(self.editor.check_for_block(x, y, z,
                                                            [WATER]))

    def test_lake_way(self):
        """Test that a closed lake way is filled with water."""
        generate_water_area_from_way(self.editor, build_ring(
            {'natural': 'water', 'water': 'reservoir'}, self.square))
        self.assert_water((x, z) for x in range(1, 10) for z in range(1, 10))
        self.assertFalse(self.editor.check_for_block(12, 0, 5, [WATER]))
        self.assertIsNone(self.editor.get_block(5, 1, 5))
        self.assertEqual(self.editor.get_biome_absolute(5, -62, 5),
                         biomes.OCEAN)

    def test_riverbank_relation(self):
        """Test that outer ways are joined into a ring before filling."""
        nodes = [ProcessedNode(i, {}, x, z)
                 for i, (x, z) in enumerate(self.square)]
        first = ProcessedWay(1, nodes[:3], {})
        second = ProcessedWay(2, nodes[2:] + nodes[:1], {})
        generate_water_areas(self.editor, ProcessedRelation(
            1, [ProcessedMember('outer', first),
                ProcessedMember('outer', second)],
            {'waterway': 'riverbank'}))
        self.assert_water((x, z) for x in range(1, 10) for z in range(1, 10))

    def test_inner_ring(self):
        """Test that islands are left dry."""
        outer = build_ring({}, self.square, 1)
        inner = build_ring({}, [(3, 3), (7, 3), (7, 7), (3, 7)], 2)
        generate_water_areas(self.editor, ProcessedRelation(
            1, [ProcessedMember('outer', outer),
                ProcessedMember('inner', inner)],
            {'natural': 'water'}))
        self.assert_water([(1, 1), (2, 5), (8, 8)])
        self.assertFalse(self.editor.check_for_block(5, 0, 5, [WATER]))

    def test_flood_to_lowest_shore(self):
        """Test that higher ground is flooded up to its surface."""
        ground = Ground.from_heights(0, [[5] * 10 + [3] * 10] * 20)
        self.editor.set_ground(ground)
        for x in range(20):
            for z in range(20):
                for y in range(ground.level(x, z) + 1):
                    self.editor.set_block_absolute(DIRT, x, y, z)

        generate_water_areas(self.editor, ProcessedRelation(
            1, [ProcessedMember('outer', build_ring(
                {}, [(0, 0), (19, 0), (19, 19), (0, 19)]))],
            {'waterway': 'riverbank'}))
        for x in range(1, 19):
            for z in range(1, 19):
                with self.subTest(x=x, z=z):
                    self.assertEqual(self.editor.get_block_absolute(x, 3, z),
                                     WATER)
                    if x < 10:
                        self.assertEqual(
                            self.editor.get_block_absolute(x, 5, z), WATER)
                    else:
                        self.assertIsNone(
                            self.editor.get_block_absolute(x, 4, z))

    def test_skipped_areas(self):
        """Test that dry, underground and open areas are not filled."""
        ways = [build_ring({'landuse': 'forest'}, self.square),
                build_ring({'natural': 'water', 'layer': '-1'}, self.square),
                build_way({'natural': 'water'}, self.square)]
        for way in ways:
            with self.subTest(tags=way.tags):
                generate_water_area_from_way(self.editor, way)
                self.assertEqual(self.editor.modified_chunks(), [])

    def test_merge_rings(self):
        """Test joining segments in either direction."""
        a, b, c, d = (ProcessedNode(i, {}, x, z)
                      for i, (x, z) in enumerate(self.square))
        rings, leftovers = water_areas.merge_rings(
            [[a, b], [c, b], [c, d, a], [a, c]])
        self.assertEqual([[n.id for n in ring] for ring in rings],
                         [[0, 1, 2, 3, 0]])
        self.assertEqual(leftovers, [[a, c]])


class BarrierFillTest(EditorTestCase):
    """Test filling open outlines and coastlines from barriers."""

    bbox = XZBBox.from_lengths(10, 10)

    def crossing_nodes(self):
        return [ProcessedNode(i, {}, x, 5)
                for i, x in enumerate((-5, 5, 15), 1)]

    def assert_upper_half_flooded(self):
        for x, z in [(1, 1), (5, 2), (9, 4)]:
            with self.subTest(x=x, z=z):
                self.assertTrue(self.editor.check_for_block(x, 0, z,
                                                            [WATER]))
        for x, z in [(5, 5), (5, 8), (0, 0), (10, 3)]:
            with self.subTest(x=x, z=z):
                self.assertFalse(self.editor.check_for_block(x, 0, z,
                                                             [WATER]))

    def test_open_way(self):
        """Test that an open way crossing the box is sealed by its border."""
        generate_water_area_from_way(self.editor, ProcessedWay(
            1, self.crossing_nodes(), {'natural': 'water'}))
        self.assert_upper_half_flooded()

    def test_open_relation(self):
        """Test that relations with unclosed outers use the barriers too."""
        west, middle, east = self.crossing_nodes()
        members = [ProcessedMember('outer', ProcessedWay(way_id, nodes, {}))
                   for way_id, nodes in [(1, [west, middle]),
                                         (2, [middle, east])]]
        generate_water_areas(self.editor, ProcessedRelation(
            1, members, {'natural': 'water', 'water': 'river'}))
        self.assert_upper_half_flooded()
        self.assertEqual(self.editor.get_biome_absolute(5, -62, 2),
                         biomes.RIVER)

    def test_open_shape_inside_box(self):
        """Test that an outline open to the border encloses nothing."""
        generate_water_area_from_way(self.editor, build_way(
            {'natural': 'water'}, [(2, 2), (8, 2), (8, 8), (2, 8)]))
        self.assertEqual(self.editor.modified_chunks(), [])

    def test_coastline(self):
        """Test that coastlines flood everything outside their ring."""
        coast = build_ring({'natural': 'coastline'},
                           [(2, 2), (8, 2), (8, 8), (2, 8)])
        water_areas.generate_coastlines(self.editor, [coast.nodes])
        self.assertTrue(self.editor.check_for_block(0, 0, 0, [WATER]))
        self.assertTrue(self.editor.check_for_block(9, 0, 9, [WATER]))
        self.assertTrue(self.editor.check_for_block(2, 0, 5, [WATER]))
        self.assertFalse(self.editor.check_for_block(5, 0, 5, [WATER]))
        self.assertEqual(self.editor.get_biome_absolute(0, -62, 0),
                         biomes.OCEAN)

    def test_coastline_ways_are_processed(self):
        """Test that process_elements floods around coastline ways."""
        coast = build_ring({'natural': 'coastline'},
                           [(2, 2), (8, 2), (8, 8), (2, 8)])
        process_elements(self.editor, [], [coast])
        self.assertTrue(self.editor.check_for_block(1, 0, 9, [WATER]))
        self.assertFalse(self.editor.check_for_block(4, 0, 6, [WATER]))

    def test_sealing(self):
        """Test that seals follow the shorter way around the border."""
        grid = water_areas.BarrierGrid(self.bbox)
        self.assertEqual(water_areas.seal_along_border(grid, (0, 2), (3, 0)),
                         6)
        marked = sorted(grid.column(i) for i, cell in enumerate(grid.cells)
                        if cell)
        self.assertEqual(marked, [(0, 0), (0, 1), (0, 2), (1, 0), (2, 0),
                                  (3, 0)])


class UnboundedBarrierFillTest(EditorTestCase):
    """Test barrier fills on an editor without a bounding box."""

    def test_no_bbox(self):
        """Test that open outlines are skipped with a warning."""
        with self.assertLogs('elements.water_areas', 'WARNING'):
            generate_water_area_from_way(self.editor, build_way(
                {'natural': 'water'}, [(0, 0), (5, 0), (5, 5)]))
        self.assertEqual(self.editor.modified_chunks(), [])


class BiomeTest(EditorTestCase):
    """Test biome painting."""

    def test_open_way(self):
        """Test that biomes are painted along an open way."""
        biome = generate_biomes(self.editor, build_way(
            {'landuse': 'forest'}, [(0, 0), (12, 0)]))
        self.assertEqual(biome, biomes.FOREST)
        self.assertEqual(self.editor.get_biome_absolute(9, -62, 0),
                         biomes.FOREST)
        self.assertEqual(self.editor.get_biome_absolute(9, -62, 8),
                         biomes.PLAINS)

    def test_closed_way(self):
        """Test that closed ways are painted over their whole area."""
        generate_biomes(self.editor, build_way(
            {'natural': 'sand'}, [(0, 0), (8, 0), (8, 8), (0, 0)]))
        self.assertEqual(self.editor.get_biome_absolute(6, -62, 6),
                         biomes.DESERT)

    def test_no_biome_tags(self):
        """Test that ways without biome tags are ignored."""
        self.assertIsNone(generate_biomes(self.editor, build_way(
            {'highway': 'primary'}, [(0, 0), (8, 0)])))
        self.assertEqual(self.editor.modified_chunks(), [])


class ProcessElementsTest(EditorTestCase):
    """Test dispatching elements to their generators."""

    def test_process(self):
        """Test that every element is generated."""
        elements = load_elements(io.StringIO(json.dumps({
            'nodes': [{'id': 1, 'x': 20, 'z': 20, 'tags': {'power': 'pole'}},
                      {'id': 2, 'x': 0, 'z': 0},
                      {'id': 3, 'x': 5, 'z': 0},
                      {'id': 4, 'x': 30, 'z': 30},
                      {'id': 5, 'x': 36, 'z': 30},
                      {'id': 6, 'x': 36, 'z': 36}],
            'ways': [{'id': 1, 'nodes': [2, 3], 'tags': {'railway': 'rail'}},
                     {'id': 2, 'nodes': [2, 3],
                      'tags': {'landuse': 'forest'}},
                     {'id': 3, 'nodes': [4, 5, 6, 4]}],
            'relations': [{'id': 1, 'tags': {'natural': 'water'},
                           'members': [{'role': 'outer', 'way': 3}]}],
        })))
        process_elements(self.editor, *elements)
        self.assertEqual(self.editor.get_block(20, 6, 20), OAK_FENCE)
        self.assertEqual(self.editor.get_block(3, 1, 0), RAIL)
        self.assertEqual(self.editor.get_biome_absolute(3, -62, 0),
                         biomes.FOREST)
        self.assertTrue(self.editor.check_for_block(35, 0, 31, [WATER]))
        self.assertFalse(self.editor.check_for_block(31, 0, 35, [WATER]))


if __name__ == '__main__':
    unittest.main()
