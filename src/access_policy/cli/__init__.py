"""Command line interface for access-policy."""
