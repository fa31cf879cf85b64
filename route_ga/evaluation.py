import math
from dataclasses import dataclass
from typing import Optional

from .population import Population


@dataclass
class GenerationStats:
    generation: int
    first_length: float
    best_length: float
    mean_length: float
    worst_length: float
    gap: float


def gap(length: float, optimum: Optional[float]) -> float:
    if optimum is None or math.isclose(optimum, 0.0):
        return float("inf")
    return (length - optimum) / optimum


def summarize(population: Population, generation: int = 0, optimum: Optional[float] = None) -> GenerationStats:
    if len(population) == 0:
        inf = float("inf")
        return GenerationStats(generation, inf, inf, inf, inf, inf)
    lengths = [route.length() for route in population]
    best = min(lengths)
    return GenerationStats(
        generation=generation,
        first_length=lengths[0],
        best_length=best,
        mean_length=sum(lengths) / len(lengths),
        worst_length=max(lengths),
        gap=gap(best, optimum),
    )
