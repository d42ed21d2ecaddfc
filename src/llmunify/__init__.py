"""One request shape, one response shape, four text-generation vendors."""

__version__ = "0.1.0"
