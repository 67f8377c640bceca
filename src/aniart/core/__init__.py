"""Core matching and caching logic (no I/O)."""
