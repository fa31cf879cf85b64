import random
from dataclasses import asdict
from typing import Dict, List, Optional, Sequence, Tuple

from .engine import EngineConfig, GeneticEngine
from .evaluation import GenerationStats, summarize
from .exceptions import ConfigurationError
from .population import Population
from .route import Point, Route, validate_points


class Controller:
    """
    Holds the fixed points and the current generation, and advances it one
    generation per ``step()``.
    """

    def __init__(
        self,
        cfg: EngineConfig,
        points: Sequence[Point],
        optimum: Optional[float] = None,
        rng: random.Random = None,
    ):
        self.cfg = cfg
        self.points: List[Point] = validate_points(points)
        self.optimum = optimum
        self.engine = GeneticEngine(cfg, rng=rng)
        self.population: Population = self.engine.initial_population(self.points)
        self.generation = 0

    def step(self) -> None:
        self.population = self.engine.advance_generation(self.population)
        self.generation += 1

    def first(self) -> Route:
        return self.population.first()

    def best(self) -> Tuple[Route, float]:
        best_route = None
        best_fitness = float("-inf")
        for route in self.population:
            fitness = route.fitness()
            if best_route is None or fitness > best_fitness:
                best_route = route
                best_fitness = fitness
        return best_route, best_fitness

    def stats(self) -> GenerationStats:
        return summarize(self.population, self.generation, self.optimum)

    def to_state(self) -> Dict:
        return {
            "cfg": asdict(self.cfg),
            "generation": self.generation,
            "optimum": self.optimum,
            "points": [[p.x, p.y] for p in self.points],
            "population": [route.indices(self.points) for route in self.population],
        }

    @classmethod
    def from_state(cls, state: Dict, rng: random.Random = None) -> "Controller":
        cfg = EngineConfig(**state["cfg"])
        points = [Point(float(x), float(y)) for x, y in state["points"]]
        model = cls(cfg, points, optimum=state.get("optimum"), rng=rng)
        model.generation = state.get("generation", 0)
        tours = state.get("population", [])
        if tours:
            expected = list(range(len(model.points)))
            for i, tour in enumerate(tours):
                if sorted(tour) != expected:
                    raise ConfigurationError(
                        "Checkpoint route is not a permutation of the points",
                        {"route": i, "tour": tour},
                    )
            model.population = Population(Route.from_indices(model.points, t) for t in tours)
        return model
