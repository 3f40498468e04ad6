"""Fixture loading tests.

Covers:
- Tag scanning and rendering over scalar strings and YAML trees
- REF / ENV tag resolution
- YAML reading, variant annotations, and path handling
- StructLoader typed loading and lookups
"""
