"""
Genetic algorithm that evolves short closed tours over a fixed set of 2D points.
"""

__all__ = [
    "controller",
    "data",
    "engine",
    "evaluation",
    "population",
    "route",
    "shapes",
]
