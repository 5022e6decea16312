"""Core event model, configuration, and shared types.

This package holds the event, timestamp, and field reference models
plus configuration, logging, and error definitions used everywhere.
"""
