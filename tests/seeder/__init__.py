"""DatabaseSeeder tests.

Covers:
- Label store append-only semantics
- Document-order insertion with synchronous and asynchronous callbacks
- Cross-file REF resolution and failure propagation
"""
