import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .exceptions import ConfigurationError, SelectionExhaustedError
from .population import Population
from .route import Point, Route, validate_points


@dataclass(frozen=True)
class EngineConfig:
    population_size: int = 100
    crossover_chance: float = 0.30
    mutation_chance: float = 0.05
    random_seed: Optional[int] = None
    max_selection_scans: int = 10_000

    def __post_init__(self):
        if not isinstance(self.population_size, int) or self.population_size <= 0:
            raise ConfigurationError(
                "population_size must be a positive integer",
                {"population_size": self.population_size},
            )
        for name in ("crossover_chance", "mutation_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must lie in [0, 1]", {name: value})
        if not isinstance(self.max_selection_scans, int) or self.max_selection_scans <= 0:
            raise ConfigurationError(
                "max_selection_scans must be a positive integer",
                {"max_selection_scans": self.max_selection_scans},
            )


def initial_population(
    points: Sequence[Point], population_size: int, rng: random.Random
) -> Population:
    """Generation 0: independent random permutations of ``points``."""
    points = validate_points(points)
    if population_size <= 0:
        raise ConfigurationError(
            "population_size must be a positive integer",
            {"population_size": population_size},
        )
    population = Population()
    for _ in range(population_size):
        shuffled = points[:]
        rng.shuffle(shuffled)
        population.append(Route(shuffled))
    return population


def ordered_crossover(parent_a: Route, parent_b: Route, lo: int, hi: int) -> Route:
    """
    Copy ``parent_a[lo..hi]`` (inclusive) into the child, then fill the rest
    cyclically from ``parent_b``, starting after ``hi`` on both sides and
    skipping points already taken.
    """
    n = len(parent_a)
    if len(parent_b) != n:
        raise ValueError("Parents must have the same length.")
    if not 0 <= lo <= hi < n:
        raise ValueError(f"Invalid crossover slice [{lo}, {hi}] for {n} points.")
    child: List[Optional[Point]] = [None] * n
    taken = set()
    for i in range(lo, hi + 1):
        child[i] = parent_a[i]
        taken.add(parent_a[i])
    missing = n - (hi - lo + 1)
    child_id = (hi + 1) % n
    parent_id = (hi + 1) % n
    for _ in range(n):
        if missing == 0:
            break
        gene = parent_b[parent_id]
        parent_id = (parent_id + 1) % n
        if gene in taken:
            continue
        child[child_id] = gene
        taken.add(gene)
        child_id = (child_id + 1) % n
        missing -= 1
    if missing:
        raise ValueError("Parents are not permutations of the same points.")
    return Route(child)


class GeneticEngine:
    """
    Breeds one generation of routes from the previous one: roulette
    selection by rejection sampling, ordered crossover, swap mutation.
    No elitism and no history are kept.
    """

    def __init__(self, config: EngineConfig, rng: random.Random = None):
        self.cfg = config
        self.rng = rng or random.Random(config.random_seed)

    def initial_population(self, points: Sequence[Point]) -> Population:
        return initial_population(points, self.cfg.population_size, self.rng)

    def _scan(self, population: Population, fitnesses: List[float], exclude: Route = None) -> Route:
        for _ in range(self.cfg.max_selection_scans):
            candidate = None
            for route, p in zip(population, fitnesses):
                # One draw per route per scan; a later acceptance replaces an earlier one.
                if self.rng.random() < p and (exclude is None or route != exclude):
                    candidate = route
            if candidate is not None:
                return candidate
        raise SelectionExhaustedError(
            "no candidate accepted",
            scans=self.cfg.max_selection_scans,
            population_size=len(population),
        )

    def select_parents(self, population: Population) -> Tuple[Route, Route]:
        if len(population) == 0:
            raise SelectionExhaustedError("population is empty", population_size=0)
        fitnesses = [route.fitness() for route in population]
        if not any(p > 0 for p in fitnesses):
            raise SelectionExhaustedError(
                "no route has positive fitness", population_size=len(population)
            )
        first = self._scan(population, fitnesses)
        if all(route == first for route in population):
            raise SelectionExhaustedError(
                "no route differs from the first parent",
                population_size=len(population),
            )
        second = self._scan(population, fitnesses, exclude=first)
        return first, second

    def crossover(self, parent_a: Route, parent_b: Route, chance: float = None) -> Route:
        if chance is None:
            chance = self.cfg.crossover_chance
        if self.rng.random() < chance:
            n = len(parent_a)
            i1 = self.rng.randrange(n)
            i2 = self.rng.randrange(n)
            return ordered_crossover(parent_a, parent_b, min(i1, i2), max(i1, i2))
        return parent_a.copy()

    def mutate(self, route: Route, chance: float = None) -> None:
        if chance is None:
            chance = self.cfg.mutation_chance
        if self.rng.random() < chance:
            n = len(route)
            route.swap(self.rng.randrange(n), self.rng.randrange(n))

    def breed(self, population: Population) -> Route:
        parent_a, parent_b = self.select_parents(population)
        child = self.crossover(parent_a, parent_b)
        self.mutate(child)
        return child

    def advance_generation(self, current: Population) -> Population:
        next_gen = Population()
        while len(next_gen) != len(current):
            next_gen.append(self.breed(current))
        return next_gen
