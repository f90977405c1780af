"""
Adjacency table construction for triangle meshes.

Every half-edge ``(face, slot)`` runs from the face's vertex at ``slot`` to
the vertex at ``(slot + 1) % 3``. The table records, for every half-edge,
the half-edge of the neighbouring face lying on the same undirected edge,
or ``None`` when the edge is on the boundary.

Edges shared by more than two faces are paired consecutively in discovery
order (face index ascending, then slot ascending): the first two
descriptors become siblings, then the next two, and an odd one out is left
as a boundary half-edge.
"""

from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np
from numpy.typing import NDArray
from tqdm import tqdm

from utils.logging_utils import get_logger

EDGE_SLOTS = 3
POSITION_PRECISION = 6  # decimals kept when matching edges by vertex position

_log = get_logger("mesh_topology.adjacency")


class HalfEdge(NamedTuple):
    face: int
    slot: int


class AdjacencyTable:
    """Sibling lookup for every half-edge of a triangle mesh."""

    def __init__(self, siblings: List[Optional[HalfEdge]], non_manifold_edge_count: int = 0):
        if len(siblings) % EDGE_SLOTS != 0:
            raise ValueError(f"Sibling list length {len(siblings)} is not a multiple of {EDGE_SLOTS}")
        self._siblings = siblings
        self.non_manifold_edge_count = non_manifold_edge_count

    @property
    def face_count(self) -> int:
        return len(self._siblings) // EDGE_SLOTS

    def __len__(self) -> int:
        return len(self._siblings)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AdjacencyTable):
            return NotImplemented
        return self._siblings == other._siblings

    def __iter__(self) -> Iterator[Tuple[HalfEdge, Optional[HalfEdge]]]:
        for i, sibling in enumerate(self._siblings):
            yield HalfEdge(i // EDGE_SLOTS, i % EDGE_SLOTS), sibling

    def sibling(self, face: int, slot: int) -> Optional[HalfEdge]:
        return self._siblings[face * EDGE_SLOTS + slot]

    def is_boundary(self, face: int, slot: int) -> bool:
        return self._siblings[face * EDGE_SLOTS + slot] is None

    def boundary_half_edges(self) -> List[HalfEdge]:
        return [half_edge for half_edge, sibling in self if sibling is None]


def weld_vertices_by_position(positions: NDArray[np.float64], precision: int = POSITION_PRECISION) -> NDArray[np.int64]:
    """
    Map every vertex to a representative id shared by all vertices at the
    same position (after rounding to ``precision`` decimals).
    """
    points = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
    # adding 0.0 folds -0.0 into 0.0
    rounded = np.round(points, precision) + 0.0
    _, inverse = np.unique(rounded, axis=0, return_inverse=True)
    return inverse.reshape(-1).astype(np.int64)


def build_adjacency(
    faces: NDArray[np.int64],
    positions: Optional[NDArray[np.float64]] = None,
    match_positions: bool = False,
    show_progress: bool = False,
) -> AdjacencyTable:
    """
    Build the adjacency table of a triangle mesh.

    Args:
        faces: F x 3 array of vertex indices.
        positions: flat or V x 3 vertex coordinates, only needed when
            ``match_positions`` is set.
        match_positions: match edges by vertex position instead of vertex
            index, so unwelded (non-indexed) meshes are stitched together.
        show_progress: display a progress bar over the faces.

    Returns:
        AdjacencyTable with one entry per half-edge.
    """
    faces = np.asarray(faces, dtype=np.int64).reshape(-1, EDGE_SLOTS)
    face_count = len(faces)

    if match_positions and positions is None:
        raise ValueError("match_positions requires vertex positions")
    if match_positions and face_count:
        vertex_keys = weld_vertices_by_position(positions)[faces]
    else:
        vertex_keys = faces

    # Group half-edges by undirected edge, preserving discovery order
    edge_to_half_edges: Dict[Tuple[int, int], List[HalfEdge]] = {}
    for face_idx in tqdm(range(face_count), desc="Building adjacency", disable=not show_progress):
        keys = vertex_keys[face_idx].tolist()
        for slot in range(EDGE_SLOTS):
            v1, v2 = keys[slot], keys[(slot + 1) % EDGE_SLOTS]
            if v1 == v2:
                continue  # degenerate edge, stays boundary
            edge = (v1, v2) if v1 < v2 else (v2, v1)
            edge_to_half_edges.setdefault(edge, []).append(HalfEdge(face_idx, slot))

    siblings: List[Optional[HalfEdge]] = [None] * (face_count * EDGE_SLOTS)
    non_manifold = 0
    for half_edges in edge_to_half_edges.values():
        if len(half_edges) > 2:
            non_manifold += 1
        for a, b in zip(half_edges[0::2], half_edges[1::2]):
            siblings[a.face * EDGE_SLOTS + a.slot] = b
            siblings[b.face * EDGE_SLOTS + b.slot] = a

    table = AdjacencyTable(siblings, non_manifold_edge_count=non_manifold)
    _log.debug(
        "Adjacency built: %d half-edges, %d boundary, %d non-manifold edges",
        len(table), sum(1 for s in siblings if s is None), non_manifold,
    )
    if non_manifold:
        _log.warning("%d non-manifold edges found; extra faces were paired in discovery order", non_manifold)
    return table
