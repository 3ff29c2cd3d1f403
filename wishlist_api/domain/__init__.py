"""Domain schemas and helpers (validation, username normalization)."""
