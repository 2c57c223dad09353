"""Exceptions raised by the seamviz engine."""


class SeamVizError(Exception):
    """Base exception for engine errors."""
    pass


class UnknownActionError(SeamVizError, ValueError):
    """A quotient action carried a tag the pullback layer does not know."""

    def __init__(self, action):
        self.action = action
        tag = getattr(action, "type", type(action).__name__)
        super().__init__(f"Unknown action type: {tag}")


class ConfigError(SeamVizError, ValueError):
    """Invalid engine configuration."""
    pass


__all__ = [
    "SeamVizError",
    "UnknownActionError",
    "ConfigError",
]
