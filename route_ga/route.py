import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence

import networkx as nx

from .exceptions import ConfigurationError


# Tours shorter than this are treated as degenerate.
MIN_LENGTH = 1e-12


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


def validate_points(points: Sequence[Point]) -> List[Point]:
    points = list(points)
    if len(points) < 3:
        raise ConfigurationError(
            "At least 3 points are required", {"count": len(points)}
        )
    if len(set(points)) != len(points):
        raise ConfigurationError(
            "Points must be pairwise distinct",
            {"count": len(points), "distinct": len(set(points))},
        )
    return points


def distance_graph(points: Sequence[Point]) -> nx.Graph:
    """Complete graph over point indices, weighted by Euclidean distance."""
    graph = nx.complete_graph(len(points))
    for i, p in enumerate(points):
        graph.nodes[i]["coord"] = (p.x, p.y)
    for a, b in graph.edges():
        graph[a][b]["weight"] = points[a].distance_to(points[b])
    return graph


def tour_length(graph: nx.Graph, tour: Sequence[int]) -> float:
    """Closed-cycle length of an index tour over ``distance_graph`` nodes."""
    if len(tour) < 2:
        return 0.0
    cycle = list(tour) + [tour[0]]
    return float(nx.path_weight(graph, cycle, weight="weight"))


class Route:
    """
    One candidate tour: an ordered permutation of the target points,
    read as a closed cycle.
    """

    def __init__(self, points: Iterable[Point] = ()):
        self.points: List[Point] = list(points)

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, idx):
        return self.points[idx]

    def __iter__(self):
        return iter(self.points)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Route):
            return NotImplemented
        return self.points == other.points

    __hash__ = None

    def __repr__(self) -> str:
        path = "->".join(f"({p.x:g}, {p.y:g})" for p in self.points)
        return f"Route({path})"

    def length(self) -> float:
        n = len(self.points)
        total = 0.0
        for i in range(n):
            total += self.points[i].distance_to(self.points[(i + 1) % n])
        return total

    def fitness(self) -> float:
        # Higher is better. Zero-length tours saturate instead of dividing by zero.
        dist = self.length()
        if dist <= MIN_LENGTH:
            return float("inf")
        return 1.0 / dist

    def copy(self) -> "Route":
        return Route(self.points)

    def swap(self, i: int, j: int) -> None:
        self.points[i], self.points[j] = self.points[j], self.points[i]

    def rotated(self, k: int) -> "Route":
        if not self.points:
            return Route()
        k %= len(self.points)
        return Route(self.points[k:] + self.points[:k])

    def reversed(self) -> "Route":
        return Route(self.points[::-1])

    def is_permutation_of(self, points: Sequence[Point]) -> bool:
        return len(self.points) == len(points) and set(self.points) == set(points)

    def indices(self, points: Sequence[Point]) -> List[int]:
        """Positions of this route's points within a fixed point table."""
        index = {p: i for i, p in enumerate(points)}
        return [index[p] for p in self.points]

    @classmethod
    def from_indices(cls, points: Sequence[Point], tour: Sequence[int]) -> "Route":
        return cls(points[i] for i in tour)
