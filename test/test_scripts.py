#!/usr/bin/python3

"""Test the mcedit, mcregion and mcvisualise scripts."""

import csv
import json
import os
import tempfile
import unittest

import png

import mcedit
import mcregion
import mcvisualise

ELEMENTS = {
    'nodes': [{'id': 1, 'x': 0, 'z': 0}, {'id': 2, 'x': 5, 'z': 0}],
    'ways': [{'id': 1, 'nodes': [1, 2], 'tags': {'railway': 'rail'}}],
}


class ArgumentTest(unittest.TestCase):
    """Test the scripts' argument parsing and error checking."""

    def test_world_is_required(self):
        """Test that every script needs a world directory."""
        with self.assertRaises(SystemExit):
            mcedit.handle_args(['elements.json'])
        with self.assertRaises(SystemExit):
            mcregion.handle_args(['surface'])
        with self.assertRaises(SystemExit):
            mcvisualise.handle_args([])

    def test_extract_data(self):
        """Test error checking of the data type to extract."""
        with self.assertRaises(SystemExit):
            mcregion.handle_args(['-w', 'world', 'entities'])
        args = mcregion.handle_args(['-w', 'world', '-p', '+1', 'blocks'])
        self.assertEqual((args.plane, args.extract_data), ('+1', 'blocks'))

    def test_mcedit_args(self):
        """Test the defaults of mcedit's options."""
        args = mcedit.handle_args(['-w', 'world', '-vv', '-'])
        self.assertEqual(args.verbose, 2)
        self.assertEqual(args.elements, '-')
        self.assertIsNone(args.config)

    def test_visualise_limits(self):
        """Test that Y limits must be integers."""
        with self.assertRaises(SystemExit):
            mcvisualise.handle_args(['-w', 'world', '-0', 'low'])
        args = mcvisualise.handle_args(['-w', 'world', '--min-value=-64',
                                        '-9', '100'])
        self.assertEqual((args.min_value, args.max_value), (-64, 100))


class ScriptTest(unittest.TestCase):
    """Run the scripts on a freshly generated world."""

    def setUp(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = tmp.name
        self.world = os.path.join(self.tmp, 'world')

    def path(self, name):
        return os.path.join(self.tmp, name)

    def write_file(self, name, contents):
        with open(self.path(name), 'wt') as f:
            f.write(contents)
        return self.path(name)

    def generate(self, *extra_args):
        elements = self.write_file('elements.json', json.dumps(ELEMENTS))
        return mcedit.main(['-w', self.world, *extra_args, elements])

    def read_csv(self, *args):
        out = self.path('out.csv')
        self.assertEqual(mcregion.main(['-w', self.world, '-o', out, *args]),
                         0)
        with open(out, 'rt', newline='') as csvfile:
            return list(csv.DictReader(csvfile))

    def test_generate_and_extract(self):
        """Test that generated rails show up on the world's surface."""
        self.assertEqual(self.generate(), 0)
        self.assertTrue(os.path.isfile(
            os.path.join(self.world, 'region', 'r.0.0.mca')))

        surface = self.read_csv('surface')
        self.assertEqual(len(surface), 6)
        for row in surface:
            with self.subTest(row=row):
                self.assertEqual(row['y'], '-61')
                self.assertEqual(row['name'], 'minecraft:rail')

        self.assertEqual(len(self.read_csv('blocks')), 12)
        below = self.read_csv('-p', '-1', 'blocks')
        self.assertEqual(sorted((int(row['x']), row['name'])
                                for row in below),
                         [(0, 'minecraft:oak_log'), (1, 'minecraft:gravel'),
                          (2, 'minecraft:gravel'), (3, 'minecraft:gravel'),
                          (4, 'minecraft:oak_log'), (5, 'minecraft:gravel')])

    def test_config(self):
        """Test that the configured ground level and bbox are used."""
        config = self.write_file('world.ini', (
            '[world]\n'
            'ground_level = -30\n'
            '// min_x, min_z, max_x, max_z\n'
            'bbox = 0, 0, 3, 15\n'))
        self.assertEqual(self.generate('-c', config), 0)
        surface = self.read_csv('surface')
        self.assertEqual(sorted(int(row['x']) for row in surface),
                         [0, 1, 2, 3])
        self.assertEqual({row['y'] for row in surface}, {'-29'})

    def test_visualise(self):
        """Test rendering the generated world to a PNG file."""
        self.assertEqual(self.generate(), 0)
        colors = self.write_file('colors.ini', '[colors]\nrail = #fff\n')
        out = self.path('out.png')
        self.assertEqual(mcvisualise.main(['-w', self.world, '-m', colors,
                                           '-o', out]), 0)
        width, height, rows, _ = png.Reader(filename=out).read()
        self.assertEqual((width, height), (6, 1))
        self.assertEqual(list(next(iter(rows)))[:4], [255, 255, 255, 255])

        self.assertEqual(mcvisualise.main(['-w', self.world, '-o', out]), 0)

    def test_visualise_unwritable_output(self):
        """Test the exit code when the PNG file cannot be created."""
        self.assertEqual(self.generate(), 0)
        out = os.path.join(self.tmp, 'missing', 'out.png')
        self.assertEqual(mcvisualise.main(['-w', self.world, '-o', out]), 2)
        self.assertFalse(os.path.exists(out))

    def test_invalid_input(self):
        """Test the exit codes for bad or missing input."""
        bad_json = self.write_file('bad.json', '{"nodes": [')
        self.assertEqual(mcedit.main(['-w', self.world, bad_json]), 1)
        self.assertEqual(mcedit.main(['-w', self.world,
                                      self.path('missing.json')]), 2)
        bad_config = self.write_file('bad.ini', '[world]\nbbox = 1, 2\n')
        self.assertEqual(self.generate('-c', bad_config), 1)

        self.assertEqual(mcregion.main(['-w', self.world, 'surface']), 2)
        self.assertEqual(mcvisualise.main(['-w', self.world, '-o',
                                           self.path('out.png')]), 2)

        os.makedirs(os.path.join(self.world, 'region'))
        self.assertEqual(mcvisualise.main(['-w', self.world, '-o',
                                           self.path('out.png')]), 1)
        self.assertEqual(mcregion.main(['-w', self.world, '-o',
                                        self.path('out.csv'), '-p', 'abc',
                                        'blocks']), 1)


if __name__ == '__main__':
    unittest.main()
