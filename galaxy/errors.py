"""Errors raised by galaxy generation and simulation."""


class GalaxyConfigError(ValueError):
    """A generation or simulation parameter is out of its valid range."""


class BodyDataError(ValueError):
    """A supplied body array breaks the body data invariants."""
