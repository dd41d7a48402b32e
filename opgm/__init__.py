"""Pattern queries, pattern graphs, planning and byte buffers for property graph matching."""

__version__ = "0.1.0"