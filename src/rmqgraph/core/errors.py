"""Exceptions raised while building a topology graph."""

from __future__ import annotations


class RmqGraphError(Exception):
    """Base class for all rmqgraph errors."""

    pass


class DefinitionsError(RmqGraphError):
    """Raised when a definitions file cannot be read or is malformed."""

    pass


class DuplicateEntityError(RmqGraphError):
    """Raised when two entities of one kind share a (vhost, name) identity."""

    pass


class ResolutionError(RmqGraphError):
    """Raised when a binding endpoint cannot be resolved."""

    pass


class AssemblyError(RmqGraphError):
    """Raised when an edge references a node that has not been created."""

    pass


class RenderError(RmqGraphError):
    """Raised when the graph cannot be rendered to the requested format."""

    pass
