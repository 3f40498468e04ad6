"""Environment-driven defaults for seeding sessions.

Environment variables:
    SEEDING_FIXTURES_DIR: base directory for relative fixture paths.
        Defaults to the current working directory.
"""
from __future__ import annotations

import os
from pathlib import Path

FIXTURES_DIR_ENV: str = "SEEDING_FIXTURES_DIR"

# Discriminator key written into nodes carrying a YAML `!Variant` tag.
VARIANT_KEY: str = "kind"


def default_base_dir() -> Path:
    """Return the base directory used when a session does not set one."""
    configured = os.getenv(FIXTURES_DIR_ENV, "").strip()
    if configured:
        return Path(configured)
    return Path.cwd()
