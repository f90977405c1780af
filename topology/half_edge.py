"""
Half-edge topology queries over a triangle mesh snapshot.

The topology keeps references to the snapshot's buffers and an adjacency
table built from them. It never notices changes to those buffers on its
own: after editing the mesh, call ``rebuild()`` before querying again.
"""

from collections import deque
from typing import List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from data_types.mesh_snapshot import MeshSnapshot
from utils.logging_utils import get_logger

from .adjacency import EDGE_SLOTS, AdjacencyTable, HalfEdge, build_adjacency
from .errors import IndexOutOfRange, InvalidMeshError

_log = get_logger("mesh_topology.half_edge")


def _check_index(value, upper: int, kind: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or not 0 <= value < upper:
        raise IndexOutOfRange(f"{kind} index {value!r} out of range [0, {upper})")
    return int(value)


class HalfEdgeTopology:
    """
    Connectivity queries and traversals for a triangle mesh.

    Half-edges are addressed as ``(face, slot)`` pairs, see
    :class:`topology.adjacency.HalfEdge`.
    """

    def __init__(self, snapshot: MeshSnapshot, match_positions: bool = False, show_progress: bool = False):
        self._snapshot = snapshot
        self.match_positions = match_positions
        self.show_progress = show_progress
        self._positions: Optional[NDArray] = None
        self._faces: Optional[NDArray] = None
        self._vertex_count = 0
        self._face_count = 0
        self._adjacency: Optional[AdjacencyTable] = None
        self.rebuild()

    # -- utility accessors --

    @property
    def snapshot(self) -> MeshSnapshot:
        return self._snapshot

    @property
    def adjacency(self) -> AdjacencyTable:
        return self._adjacency

    @property
    def vertex_count(self) -> int:
        return self._vertex_count

    @property
    def face_count(self) -> int:
        return self._face_count

    def rebuild(self) -> None:
        """Re-read the snapshot buffers and rebuild the adjacency table."""
        positions = np.asarray(self._snapshot.positions)
        if positions.ndim != 1 or len(positions) % 3 != 0:
            raise InvalidMeshError(f"Position buffer must be flat with a length divisible by 3, got shape {positions.shape}")
        if positions.size and not np.issubdtype(positions.dtype, np.number):
            raise InvalidMeshError(f"Position buffer must hold numbers, got dtype {positions.dtype}")
        vertex_count = len(positions) // 3

        if self._snapshot.indices is None:
            if vertex_count % EDGE_SLOTS != 0:
                raise InvalidMeshError(f"Non-indexed mesh needs a multiple of 3 vertices, got {vertex_count}")
            faces = np.arange(vertex_count, dtype=np.int64).reshape(-1, EDGE_SLOTS)
        else:
            faces = self._faces_from_indices(self._snapshot.indices, vertex_count)

        self._positions = positions
        self._faces = faces
        self._vertex_count = vertex_count
        self._face_count = len(faces)
        self._adjacency = build_adjacency(
            faces,
            positions=positions,
            match_positions=self.match_positions,
            show_progress=self.show_progress,
        )
        _log.debug("Topology rebuilt: %d vertices, %d faces", self._vertex_count, self._face_count)

    @staticmethod
    def _faces_from_indices(indices, vertex_count: int) -> NDArray:
        index_array = np.asarray(indices)
        if index_array.size == 0:
            return np.zeros((0, EDGE_SLOTS), dtype=np.int64)
        if index_array.ndim != 1 or len(index_array) % EDGE_SLOTS != 0:
            raise InvalidMeshError(f"Index buffer must be flat with a length divisible by 3, got shape {index_array.shape}")
        if not np.issubdtype(index_array.dtype, np.integer):
            raise InvalidMeshError(f"Index buffer must hold integers, got dtype {index_array.dtype}")
        if index_array.min() < 0 or index_array.max() >= vertex_count:
            raise InvalidMeshError(f"Index buffer references vertices outside [0, {vertex_count})")
        # a view for contiguous arrays, so the faces keep following the caller's buffer
        return index_array.reshape(-1, EDGE_SLOTS)

    # -- face queries --

    def face_vertex_indices(self, face: int) -> Tuple[int, int, int]:
        face = _check_index(face, self._face_count, "face")
        v0, v1, v2 = self._faces[face].tolist()
        return v0, v1, v2

    def face_neighbors(self, face: int) -> List[int]:
        """Faces sharing an edge with ``face``, in edge slot order."""
        face = _check_index(face, self._face_count, "face")
        neighbors = []
        for slot in range(EDGE_SLOTS):
            sibling = self._adjacency.sibling(face, slot)
            if sibling is not None:
                neighbors.append(sibling.face)
        return neighbors

    def face_edges(self, face: int) -> List[HalfEdge]:
        face = _check_index(face, self._face_count, "face")
        return [HalfEdge(face, slot) for slot in range(EDGE_SLOTS)]

    def is_face_on_boundary(self, face: int) -> bool:
        face = _check_index(face, self._face_count, "face")
        return any(self._adjacency.is_boundary(face, slot) for slot in range(EDGE_SLOTS))

    def walk_around_face(self, face: int) -> List[Optional[int]]:
        """Neighbouring face across each edge slot, None where the edge is boundary."""
        face = _check_index(face, self._face_count, "face")
        result = []
        for slot in range(EDGE_SLOTS):
            sibling = self._adjacency.sibling(face, slot)
            result.append(None if sibling is None else sibling.face)
        return result

    # -- edge queries --

    def _check_half_edge(self, face: int, slot: int) -> Tuple[int, int]:
        return _check_index(face, self._face_count, "face"), _check_index(slot, EDGE_SLOTS, "edge slot")

    def edge_faces(self, face: int, slot: int) -> List[int]:
        face, slot = self._check_half_edge(face, slot)
        sibling = self._adjacency.sibling(face, slot)
        if sibling is None:
            return [face]
        return [face, sibling.face]

    def edge_vertices(self, face: int, slot: int) -> Tuple[int, int]:
        face, slot = self._check_half_edge(face, slot)
        face_verts = self.face_vertex_indices(face)
        return face_verts[slot], face_verts[(slot + 1) % EDGE_SLOTS]

    def opposite_half_edge(self, face: int, slot: int) -> Optional[HalfEdge]:
        face, slot = self._check_half_edge(face, slot)
        return self._adjacency.sibling(face, slot)

    def is_edge_on_boundary(self, face: int, slot: int) -> bool:
        face, slot = self._check_half_edge(face, slot)
        return self._adjacency.is_boundary(face, slot)

    # -- vertex queries --

    def vertex_incident_faces(self, vertex: int) -> List[int]:
        """All faces containing ``vertex``, found by scanning every face."""
        vertex = _check_index(vertex, self._vertex_count, "vertex")
        return np.nonzero(np.any(self._faces == vertex, axis=1))[0].tolist()

    def vertex_neighbors(self, vertex: int) -> List[int]:
        """
        Distinct vertices sharing a face with ``vertex``.

        Ordered by first appearance: incident faces in ascending order, then
        the vertices' positions within each face.
        """
        neighbors = {}
        for face in self.vertex_incident_faces(vertex):
            for v in self._faces[face].tolist():
                if v != vertex:
                    neighbors[v] = None
        return list(neighbors)

    def vertex_incident_edges(self, vertex: int) -> List[HalfEdge]:
        """The outgoing and incoming half-edge of ``vertex`` in each incident face."""
        edges = []
        for face in self.vertex_incident_faces(vertex):
            pos = self._faces[face].tolist().index(vertex)
            edges.append(HalfEdge(face, pos))
            edges.append(HalfEdge(face, (pos + 2) % EDGE_SLOTS))
        return edges

    def vertex_valence(self, vertex: int) -> int:
        return len(self.vertex_neighbors(vertex))

    # -- traversal --

    def walk_around_vertex(self, vertex: int, start_face: Optional[int] = None) -> List[int]:
        """
        Collect the faces around ``vertex`` in connectivity order.

        Starting from ``start_face`` (default: the first incident face), step
        across the half-edge that ends at ``vertex`` into the neighbouring
        face. The walk goes in this one direction only and stops at a
        boundary edge, at a face not containing ``vertex``, or at a face
        already visited. Fans interrupted by a boundary are therefore only
        partially enumerated, and a ``start_face`` without ``vertex`` walks
        to just ``[start_face]``.
        """
        incident_faces = self.vertex_incident_faces(vertex)
        if start_face is not None:
            start_face = _check_index(start_face, self._face_count, "face")
        if not incident_faces:
            return []

        incident = set(incident_faces)
        current = incident_faces[0] if start_face is None else start_face
        visited = set()
        ordered_faces = []
        while current not in visited:
            visited.add(current)
            ordered_faces.append(current)

            face_verts = self._faces[current].tolist()
            if vertex not in face_verts:
                break
            pos = face_verts.index(vertex)
            sibling = self._adjacency.sibling(current, (pos + 2) % EDGE_SLOTS)
            if sibling is None or sibling.face not in incident:
                break
            current = sibling.face
        return ordered_faces

    def find_shortest_path(self, start: int, end: int) -> Optional[List[int]]:
        """
        Breadth-first search for the path with the fewest edges from
        ``start`` to ``end``. Returns None when the vertices are not
        connected.
        """
        start = _check_index(start, self._vertex_count, "vertex")
        end = _check_index(end, self._vertex_count, "vertex")
        if start == end:
            return [start]

        visited = set()
        queue = deque([(start, [start])])
        while queue:
            vertex, path = queue.popleft()
            if vertex in visited:
                continue
            visited.add(vertex)

            if vertex == end:
                return path

            for neighbor in self.vertex_neighbors(vertex):
                if neighbor not in visited:
                    queue.append((neighbor, path + [neighbor]))
        return None


def create_topology(snapshot: MeshSnapshot, **options) -> HalfEdgeTopology:
    """Build a :class:`HalfEdgeTopology` for ``snapshot``."""
    return HalfEdgeTopology(snapshot, **options)
