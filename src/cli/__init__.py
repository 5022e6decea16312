"""Command line interface for yaml-enrich."""
