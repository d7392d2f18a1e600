"""
Content hashing — SHA-256 digests for files and configs.

Shared by the renderer (manifest) and by plugins that stamp
provenance into generated files.
"""

from __future__ import annotations

import hashlib
import json

from lattice.core.models.config import ProjectConfig


def compute_sha256(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


def canonical_config(config: ProjectConfig) -> str:
    """Compact, sorted-key JSON of the config. Unset optionals are dropped."""
    data = config.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(data, sort_keys=True, separators=(",", ":"))


def compute_config_hash(config: ProjectConfig) -> str:
    """SHA-256 of the canonical config serialization.

    Structurally equal configs hash the same regardless of how they
    were built.
    """
    return compute_sha256(canonical_config(config).encode("utf-8"))
