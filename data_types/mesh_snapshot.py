from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np
import trimesh
from numpy.typing import NDArray

FloatBuffer = Union[NDArray[np.floating], Sequence[float]]
IndexBuffer = Union[NDArray[np.integer], Sequence[int]]


@dataclass
class MeshSnapshot:
    """
    Live view of a triangle mesh owned by the caller.

    The buffers are stored as given (no copy). The adjacency table of a
    topology only follows edits, in place or by assigning new buffers to the
    attributes, after its ``rebuild()``.

    Face and vertex queries read the index buffer through the view taken at
    the last rebuild. A contiguous numpy integer array is viewed directly, so
    in-place edits show up in those queries at once. A plain list, or an
    non-contiguous array, is copied at rebuild and stays frozen until
    the next one.
    """
    positions: FloatBuffer  # 3V flat x, y, z coordinates
    indices: Optional[IndexBuffer] = None  # 3F flat vertex *indices*, None for non-indexed layout

    @property
    def is_indexed(self) -> bool:
        return self.indices is not None

    @classmethod
    def from_trimesh(cls, mesh: trimesh.Trimesh) -> "MeshSnapshot":
        """Flatten a trimesh into position and index buffers."""
        positions = np.asarray(mesh.vertices, dtype=np.float64).reshape(-1)
        indices = np.asarray(mesh.faces, dtype=np.int64).reshape(-1)
        return cls(positions=positions, indices=indices)

    @classmethod
    def from_arrays(cls, vertices: NDArray[np.float64], faces: Optional[NDArray[np.int64]] = None) -> "MeshSnapshot":
        """Build a snapshot from V x 3 vertices and optional F x 3 faces."""
        positions = np.asarray(vertices, dtype=np.float64).reshape(-1)
        indices = None if faces is None else np.asarray(faces, dtype=np.int64).reshape(-1)
        return cls(positions=positions, indices=indices)
