"""Connectors (user-facing front-ends)."""
