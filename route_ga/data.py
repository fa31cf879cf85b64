from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import networkx as nx
import tsplib95

from .route import Point, distance_graph, tour_length, validate_points
from .shapes import SHAPES


@dataclass
class Instance:
    name: str
    points: List[Point]
    graph: nx.Graph
    optimum: Optional[float]
    path: Optional[Path] = None


def shape_instance(name: str) -> Instance:
    if name not in SHAPES:
        raise ValueError(f"Unknown shape {name!r}; choose from {', '.join(sorted(SHAPES))}.")
    points = validate_points(SHAPES[name]())
    graph = distance_graph(points)
    # Vertex order is the perimeter walk.
    optimum = tour_length(graph, list(range(len(points))))
    return Instance(name=name, points=points, graph=graph, optimum=optimum)


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _point_count(path: Path) -> Optional[int]:
    """DIMENSION from the specification header, without parsing coordinates."""
    with path.open("r") as f:
        for line in f:
            key, sep, value = line.partition(":")
            if not sep:
                # First data section; the header is over.
                return None
            if key.strip().upper() == "DIMENSION":
                value = value.strip()
                return int(value) if value.isdigit() else None
    return None


def _load_optimum(graph: nx.Graph, node_index: Dict[int, int], path: Path) -> Optional[float]:
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        try:
            tour_file = tsplib95.parse(candidate.read_text())
            tour = [node_index[n] for n in tour_file.tours[0]]
        except Exception:
            continue
        if sorted(tour) != list(range(len(node_index))):
            continue
        return tour_length(graph, tour)
    return None


def load_instance(path: Path) -> Instance:
    path = Path(path)
    problem = tsplib95.load(path)
    coords = problem.node_coords
    if not coords:
        raise ValueError(f"{path} has no NODE_COORD_SECTION; only coordinate instances are supported.")
    nodes = sorted(coords)
    node_index = {n: i for i, n in enumerate(nodes)}
    points = validate_points([Point(float(coords[n][0]), float(coords[n][1])) for n in nodes])
    graph = distance_graph(points)
    optimum = _load_optimum(graph, node_index, path)
    name = problem.name or path.stem
    return Instance(name=name, points=points, graph=graph, optimum=optimum, path=path)


def load_tsplib_instances(
    root: Path, max_nodes: Optional[int] = None, max_instances: Optional[int] = None
) -> List[Instance]:
    """Coordinate instances under ``root`` in file-name order, one per NAME."""
    instances: List[Instance] = []
    seen = set()
    for path in sorted(Path(root).glob("*.tsp")):
        if max_instances is not None and len(instances) >= max_instances:
            break
        count = _point_count(path)
        if max_nodes is not None and count is not None and count > max_nodes:
            continue
        instance = load_instance(path)
        if instance.name in seen:
            continue
        seen.add(instance.name)
        instances.append(instance)
    return instances
