"""HTTP API for fare quotes."""
