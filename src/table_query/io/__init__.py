"""I/O layer: driver connections for the query builder."""
