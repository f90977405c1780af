from .mesh_graphs import face_components, face_graph, vertex_graph
