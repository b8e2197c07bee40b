"""In-memory persistence adapters for tests, demos and single-process runs."""
