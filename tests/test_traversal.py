"""
Test script to verify vertex walks and shortest path search.
"""

import os
import sys
import networkx as nx
import numpy as np
import pytest
import trimesh

# Add the parent directory to the Python path so we can import the topology module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from data_types import MeshSnapshot
from graphs import vertex_graph
from topology import IndexOutOfRange, create_topology


def create_quad():
    """Two triangles (0, 1, 2) and (0, 2, 3) sharing edge (0, 2)."""
    positions = np.zeros(12)
    indices = np.array([0, 1, 2, 0, 2, 3])
    return create_topology(MeshSnapshot(positions=positions, indices=indices))


def create_sphere():
    mesh = trimesh.creation.icosphere(subdivisions=1)
    return create_topology(MeshSnapshot.from_trimesh(mesh))


def test_walk_around_interior_vertex_visits_whole_fan():
    """On a closed sphere the walk returns to its start after visiting every incident face."""
    topology = create_sphere()
    for vertex in range(topology.vertex_count):
        walk = topology.walk_around_vertex(vertex)
        incident = topology.vertex_incident_faces(vertex)
        assert walk[0] == incident[0]
        assert sorted(walk) == incident
        for current, following in zip(walk, walk[1:] + walk[:1]):
            assert following in topology.face_neighbors(current)


def test_walk_from_given_start_face():
    topology = create_sphere()
    incident = topology.vertex_incident_faces(0)
    walk = topology.walk_around_vertex(0, start_face=incident[-1])
    assert walk[0] == incident[-1]
    assert sorted(walk) == incident


def test_walk_stops_at_boundary_in_one_direction():
    """The walk only moves forward, so starting past the shared edge sees a single face."""
    topology = create_quad()
    assert topology.walk_around_vertex(0) == [0, 1]
    assert topology.walk_around_vertex(0, start_face=1) == [1]
    assert topology.walk_around_vertex(2) == [0]
    assert topology.walk_around_vertex(2, start_face=1) == [1, 0]


def test_walk_around_isolated_vertex_is_empty():
    positions = np.zeros(15)
    topology = create_topology(MeshSnapshot(positions=positions, indices=np.array([0, 1, 2, 0, 2, 3])))
    assert topology.walk_around_vertex(4) == []


def test_walk_from_face_without_vertex_stops_at_start():
    """A start face that does not contain the vertex is the whole walk."""
    topology = create_quad()
    assert topology.walk_around_vertex(1, start_face=1) == [1]
    assert topology.walk_around_vertex(3, start_face=0) == [0]


def test_walk_from_start_face_around_isolated_vertex_is_empty():
    positions = np.zeros(15)
    topology = create_topology(MeshSnapshot(positions=positions, indices=np.array([0, 1, 2, 0, 2, 3])))
    assert topology.walk_around_vertex(4, start_face=0) == []


def test_walk_rejects_out_of_range_start_face():
    topology = create_quad()
    with pytest.raises(IndexOutOfRange):
        topology.walk_around_vertex(0, start_face=5)
    with pytest.raises(IndexOutOfRange):
        topology.walk_around_vertex(7)


def test_walk_terminates_on_non_manifold_fan():
    """Faces stacked on one edge cannot trap the walk in a cycle."""
    positions = np.zeros(18)
    indices = np.array([0, 1, 2, 1, 0, 3, 0, 1, 4, 1, 0, 5])
    topology = create_topology(MeshSnapshot(positions=positions, indices=indices))
    walk = topology.walk_around_vertex(0)
    assert len(walk) == len(set(walk))
    assert set(walk) <= set(topology.vertex_incident_faces(0))


def test_shortest_path_single_triangle():
    topology = create_topology(MeshSnapshot(positions=np.zeros(9)))
    assert topology.find_shortest_path(0, 2) == [0, 2]


def test_shortest_path_same_vertex():
    topology = create_quad()
    for vertex in range(topology.vertex_count):
        assert topology.find_shortest_path(vertex, vertex) == [vertex]


def test_shortest_path_across_quad():
    """Opposite corners of the quad are two hops apart, through 0 or 2."""
    topology = create_quad()
    path = topology.find_shortest_path(1, 3)
    assert len(path) == 3
    assert path[0] == 1 and path[-1] == 3
    assert path[1] in (0, 2)
    # neighbours are explored in vertex_neighbors order, so 0 is reached first
    assert path == [1, 0, 3]


def test_shortest_path_disconnected():
    """Two separate triangles have no path between them."""
    positions = np.zeros(18)
    topology = create_topology(MeshSnapshot(positions=positions))
    assert topology.find_shortest_path(0, 4) is None
    assert topology.find_shortest_path(3, 5) == [3, 5]


def test_shortest_path_length_is_minimal():
    """BFS path lengths agree with networkx on the vertex graph."""
    topology = create_sphere()
    graph = vertex_graph(topology)
    for start, end in [(0, 41), (3, 17), (10, 11), (20, 5), (41, 0)]:
        path = topology.find_shortest_path(start, end)
        assert path[0] == start and path[-1] == end
        assert len(path) - 1 == nx.shortest_path_length(graph, start, end)
        for a, b in zip(path, path[1:]):
            assert b in topology.vertex_neighbors(a)


def test_shortest_path_out_of_range():
    topology = create_quad()
    with pytest.raises(IndexOutOfRange):
        topology.find_shortest_path(0, 4)
    with pytest.raises(IndexOutOfRange):
        topology.find_shortest_path(-1, 0)
