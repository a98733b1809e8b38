"""followgraph — users, directed follow edges, and queries over the graph."""

__version__ = "0.1.0"
