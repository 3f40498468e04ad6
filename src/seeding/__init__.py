"""YAML fixture loading and database seeding.

Fixture files map record labels to record bodies. String values may embed
tags that are resolved before the records are validated:
- ${{ REF(label) }}: id of a record inserted by an earlier populate call
- ${{ ENV(NAME:-default) }}: environment variable with optional fallback

Usage:
    from seeding import DatabaseSeeder, StructLoader

    seeder = DatabaseSeeder(base_dir="fixtures")
    seeder.populate("companies.yml", Company, insert_company)
    await seeder.populate_async("users.yml", User, insert_user)

    users = StructLoader("users.yml", User, base_dir="fixtures").load(seeder.labels)
"""
from seeding.errors import (
    AlreadyLoadedError,
    DeserializationError,
    DuplicateLabelError,
    FixtureNotFoundError,
    FixtureParseError,
    InsertionError,
    LabelNotFoundError,
    MalformedTagError,
    NotLoadedError,
    SeedingError,
    UnresolvedReferenceError,
)
from seeding.labels import LabelStore
from seeding.loader import StructLoader, load_records
from seeding.seed import DatabaseSeeder

__all__ = [
    "AlreadyLoadedError",
    "DatabaseSeeder",
    "DeserializationError",
    "DuplicateLabelError",
    "FixtureNotFoundError",
    "FixtureParseError",
    "InsertionError",
    "LabelNotFoundError",
    "LabelStore",
    "MalformedTagError",
    "NotLoadedError",
    "SeedingError",
    "StructLoader",
    "UnresolvedReferenceError",
    "load_records",
]
