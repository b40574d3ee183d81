"""Greeting function with schema-validated handler dispatch."""
