"""Error types raised by the generation pipeline."""


class RouteSpecError(Exception):
    """Base class for every error routespec raises on purpose."""


class MalformedPathError(RouteSpecError):
    """A reduced route path still holds a doubled separator after cleanup."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Cannot normalize route path {path!r}: consecutive separators remain")


class ConfigurationError(RouteSpecError):
    """The generator cannot work out where the document should be written."""


class RouteInputError(RouteSpecError):
    """The route input file is missing, unreadable, or does not describe a route tree."""
