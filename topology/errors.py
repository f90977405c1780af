"""
Exceptions raised by the topology layer.
"""


class MeshTopologyError(Exception):
    """Base class for all topology errors."""


class IndexOutOfRange(MeshTopologyError, IndexError):
    """A vertex, face or edge slot index is outside its valid range."""


class InvalidMeshError(MeshTopologyError, ValueError):
    """The mesh buffers cannot describe a triangle mesh."""

