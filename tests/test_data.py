"""
Tests for point sources: regular polygons and TSPLIB instances.
"""

import math
import tempfile
import unittest
from pathlib import Path

from route_ga.data import load_instance, load_tsplib_instances, shape_instance
from route_ga.exceptions import ConfigurationError
from route_ga.route import Point, Route
from route_ga.shapes import SHAPES, regular_polygon


SQUARE_TSP = """NAME : square4
TYPE : TSP
COMMENT : 10 x 10 square
DIMENSION : 4
EDGE_WEIGHT_TYPE : EUC_2D
NODE_COORD_SECTION
1 0 0
2 10 10
3 10 0
4 0 10
EOF
"""

SQUARE_TOUR = """NAME : square4.opt.tour
TYPE : TOUR
DIMENSION : 4
TOUR_SECTION
1
3
2
4
-1
EOF
"""

DUPLICATE_TSP = """NAME : dup3
TYPE : TSP
DIMENSION : 3
EDGE_WEIGHT_TYPE : EUC_2D
NODE_COORD_SECTION
1 0 0
2 5 5
3 0 0
EOF
"""


class TestShapes(unittest.TestCase):

    def test_regular_polygon_sides(self):
        points = regular_polygon(6, 10.0, center=(0.0, 0.0))
        self.assertEqual(len(points), 6)
        self.assertAlmostEqual(points[0].x, 0.0)
        self.assertAlmostEqual(points[0].y, 10.0)
        for i in range(6):
            self.assertAlmostEqual(points[i].distance_to(points[(i + 1) % 6]), 10.0)

    def test_invalid_polygon(self):
        with self.assertRaises(ValueError):
            regular_polygon(2, 10.0)
        with self.assertRaises(ValueError):
            regular_polygon(5, 0.0)

    def test_named_shapes(self):
        expected = {"heptagon": (7, 560.0), "dodecagon": (12, 960.0), "icosagon": (20, 800.0)}
        for name, (count, perimeter) in expected.items():
            with self.subTest(shape=name):
                instance = shape_instance(name)
                self.assertEqual(len(instance.points), count)
                self.assertAlmostEqual(instance.optimum, perimeter, places=6)
                self.assertAlmostEqual(Route(instance.points).length(), perimeter, places=6)
                self.assertEqual(instance.graph.number_of_nodes(), count)
        self.assertEqual(set(SHAPES), set(expected))

    def test_unknown_shape(self):
        with self.assertRaises(ValueError):
            shape_instance("hexadecagon")


class TestTsplib(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_load_instance_with_optimum(self):
        path = self.root / "square4.tsp"
        path.write_text(SQUARE_TSP)
        (self.root / "square4.opt.tour").write_text(SQUARE_TOUR)
        instance = load_instance(path)
        self.assertEqual(instance.name, "square4")
        self.assertEqual(instance.points[1], Point(10.0, 10.0))
        self.assertAlmostEqual(instance.optimum, 40.0)
        self.assertAlmostEqual(instance.graph[0][1]["weight"], math.hypot(10, 10))

    def test_load_instance_without_optimum(self):
        path = self.root / "square4.tsp"
        path.write_text(SQUARE_TSP)
        self.assertIsNone(load_instance(path).optimum)

    def test_duplicate_coordinates_rejected(self):
        path = self.root / "dup3.tsp"
        path.write_text(DUPLICATE_TSP)
        with self.assertRaises(ConfigurationError):
            load_instance(path)

    def test_load_directory_with_limits(self):
        (self.root / "square4.tsp").write_text(SQUARE_TSP)
        (self.root / "other4.tsp").write_text(SQUARE_TSP.replace("square4", "other4"))
        self.assertEqual(len(load_tsplib_instances(self.root)), 2)
        self.assertEqual(len(load_tsplib_instances(self.root, max_instances=1)), 1)
        self.assertEqual(load_tsplib_instances(self.root, max_nodes=3), [])


if __name__ == '__main__':
    unittest.main()
