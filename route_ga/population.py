from typing import Iterable, List, Optional

from .route import Route


class Population:
    """One generation of routes. Order carries no meaning."""

    def __init__(self, routes: Optional[Iterable[Route]] = None):
        self.routes: List[Route] = list(routes or [])

    def append(self, route: Route) -> None:
        self.routes.append(route)

    def clear(self) -> None:
        self.routes.clear()

    def first(self) -> Route:
        # Display representative, not necessarily the best route.
        return self.routes[0]

    def __len__(self) -> int:
        return len(self.routes)

    def __getitem__(self, idx: int) -> Route:
        return self.routes[idx]

    def __iter__(self):
        return iter(self.routes)

    def __repr__(self) -> str:
        return f"Population(size={len(self.routes)})"
