"""
Manifest and render result — the record of one generation run.

The manifest is what downstream tooling (pack writer, verifier)
consumes. Its JSON form uses camelCase keys::

    {
      "generatorVersion": "0.1.0",
      "policyVersion": "1.0.0",
      "configHash": "<sha256 hex>",
      "files": [{"path": "...", "sha256": "..."}]
    }
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ManifestEntry(BaseModel):
    """One generated file and the hash of its normalized bytes."""

    model_config = ConfigDict(frozen=True)

    path: str
    sha256: str


class Manifest(BaseModel):
    """Signed record of a generation run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    generator_version: str = Field(alias="generatorVersion")
    policy_version: str = Field(alias="policyVersion")
    config_hash: str = Field(alias="configHash")
    files: tuple[ManifestEntry, ...] = ()

    @property
    def paths(self) -> list[str]:
        return [entry.path for entry in self.files]

    def get(self, path: str) -> ManifestEntry | None:
        """Look up a manifest entry by path."""
        for entry in self.files:
            if entry.path == path:
                return entry
        return None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Serialized form written to ``.lattice/manifest.json``."""
        return json.dumps(self.to_dict(), indent=2) + "\n"


@dataclass(frozen=True)
class RenderResult:
    """Sorted file map plus manifest. The only value a render returns."""

    files: Mapping[str, bytes]
    manifest: Manifest

    @property
    def paths(self) -> list[str]:
        return list(self.files)

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": self.paths,
            "manifest": self.manifest.to_dict(),
        }
