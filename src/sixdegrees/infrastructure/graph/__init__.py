"""In-memory bipartite graph store and its NetworkX projection."""
