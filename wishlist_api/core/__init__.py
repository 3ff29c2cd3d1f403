"""
Core utilities shared across the wish list API.

This package hosts:
- configuration helpers (env vars, data paths, default passwords)
- logging setup
- id/timestamp helpers

Routers and services depend on these primitives instead of reading the
environment or the clock directly.
"""
