"""
Fixed point sets shaped as regular polygons.

Vertex ``i`` of an ``n``-gon sits at angle ``2*pi*i/n`` from the +y axis, so
walking the vertices in order traces the polygon's perimeter, which is the
shortest closed tour over them.
"""

from typing import Callable, Dict, List, Tuple

import numpy as np

from .route import Point


DEFAULT_CENTER = (200.0, 250.0)


def regular_polygon(
    sides: int, side_length: float, center: Tuple[float, float] = DEFAULT_CENTER
) -> List[Point]:
    if sides < 3:
        raise ValueError("A polygon needs at least 3 sides.")
    if side_length <= 0:
        raise ValueError("side_length must be positive.")
    # Circumradius: distance from the centre to each vertex.
    radius = (side_length / 2.0) / np.sin(np.pi / sides)
    theta = 2.0 * np.pi * np.arange(sides) / sides
    xs = center[0] + radius * np.sin(theta)
    ys = center[1] + radius * np.cos(theta)
    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]


def heptagon(center: Tuple[float, float] = DEFAULT_CENTER) -> List[Point]:
    return regular_polygon(7, 80.0, center)


def dodecagon(center: Tuple[float, float] = DEFAULT_CENTER) -> List[Point]:
    return regular_polygon(12, 80.0, center)


def icosagon(center: Tuple[float, float] = DEFAULT_CENTER) -> List[Point]:
    return regular_polygon(20, 40.0, center)


SHAPES: Dict[str, Callable[..., List[Point]]] = {
    "heptagon": heptagon,
    "dodecagon": dodecagon,
    "icosagon": icosagon,
}
