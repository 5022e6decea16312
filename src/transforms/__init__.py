"""Event transform stages.

This package decodes YAML payloads and merges them into events.
"""
