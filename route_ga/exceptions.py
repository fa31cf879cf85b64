"""
Exceptions raised by the route GA.
"""


class RouteGAError(Exception):
    """Base exception for the route GA."""

    def __init__(self, message: str = "", details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(RouteGAError, ValueError):
    """Raised for invalid engine settings or point sets."""


class SelectionExhaustedError(RouteGAError, RuntimeError):
    """Raised when parent selection cannot accept a candidate."""

    def __init__(self, reason: str, scans: int = None, population_size: int = None):
        details = {}
        if scans is not None:
            details["scans"] = scans
        if population_size is not None:
            details["population_size"] = population_size
        super().__init__(f"Parent selection failed: {reason}", details)
        self.reason = reason
