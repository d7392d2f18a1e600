"""
Pack operations — write, read, verify and apply generated packs.

A pack is a directory holding the generated files plus
``.lattice/manifest.json``. This module is the only place the
generator touches the filesystem; the engine itself stays pure.

    generate → write_pack(result, out)        pack on disk
    verify   → verify_pack(out)               manifest vs. disk
    apply    → apply_pack(out, target)        additive copy
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from lattice.core.models.manifest import Manifest, RenderResult

logger = logging.getLogger(__name__)

MANIFEST_DIR = ".lattice"
MANIFEST_FILE = "manifest.json"

# Never scanned as existing repository content
_SCAN_SKIP_DIRS = frozenset({".git", "node_modules", MANIFEST_DIR})


class PackError(Exception):
    """Raised when a pack cannot be read, written or applied."""


@dataclass
class ApplyReport:
    """Result of applying a pack to a target directory."""

    target: str = ""
    added: list[str] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.conflicts

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "added": self.added,
            "conflicts": self.conflicts,
            "added_count": len(self.added),
            "conflict_count": len(self.conflicts),
        }


def manifest_path(pack_dir: Path) -> Path:
    return pack_dir / MANIFEST_DIR / MANIFEST_FILE


def _safe_join(root: Path, rel: str) -> Path:
    """Join a manifest path onto ``root``, refusing escapes."""
    target = (root / rel).resolve()
    if not target.is_relative_to(root.resolve()):
        raise PackError(f"Path escapes pack root: {rel}")
    return target


def write_pack(result: RenderResult, output_dir: Path) -> Path:
    """Write generated files and the manifest to ``output_dir``.

    The manifest is written last, atomically, so a pack with a
    manifest is always complete.

    Returns:
        Path to the written manifest.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    for path, content in result.files.items():
        target = _safe_join(output_dir, path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.debug("Wrote %s", path)

    dest = manifest_path(output_dir)
    dest.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=dest.parent, prefix=".manifest_", suffix=".tmp")
    os.close(fd)
    tmp = Path(tmp_path)
    try:
        tmp.write_text(result.manifest.to_json(), encoding="utf-8")
        tmp.replace(dest)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise

    logger.info("Wrote %d files to %s", len(result.files), output_dir)
    return dest


def load_manifest(pack_dir: Path) -> Manifest:
    """Read and validate ``.lattice/manifest.json`` from a pack.

    Raises:
        PackError: If the manifest is missing or malformed.
    """
    path = manifest_path(pack_dir)
    if not path.is_file():
        raise PackError(f"Failed to read manifest: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Manifest.model_validate(data)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        raise PackError(f"Invalid manifest {path}: {e}") from e


def verify_pack(pack_dir: Path) -> list[str]:
    """Compare a pack on disk with its manifest.

    Returns:
        Problems found (empty = pack matches its manifest).
    """
    manifest = load_manifest(pack_dir)
    problems: list[str] = []

    paths = manifest.paths
    if paths != sorted(paths):
        problems.append("Manifest files are not sorted by path")

    for entry in manifest.files:
        target = _safe_join(pack_dir, entry.path)
        if not target.is_file():
            problems.append(f"Missing file: {entry.path}")
            continue
        digest = hashlib.sha256(target.read_bytes()).hexdigest()
        if digest != entry.sha256:
            problems.append(f"Hash mismatch: {entry.path}")

    logger.info("Verified %s: %d problem(s)", pack_dir, len(problems))
    return problems


def apply_pack(pack_dir: Path, target_dir: Path) -> ApplyReport:
    """Copy a pack's files into ``target_dir`` without overwriting.

    Files that already exist in the target are left alone and listed
    as conflicts.
    """
    manifest = load_manifest(pack_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    report = ApplyReport(target=str(target_dir.resolve()))

    for entry in manifest.files:
        source = _safe_join(pack_dir, entry.path)
        target = _safe_join(target_dir, entry.path)
        if target.exists():
            report.conflicts.append(entry.path)
            continue
        if not source.is_file():
            raise PackError(f"Pack is missing {entry.path}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(source.read_bytes())
        report.added.append(entry.path)

    if report.conflicts:
        logger.warning(
            "Skipped %d existing file(s) in %s", len(report.conflicts), target_dir
        )
    logger.info("Applied %d file(s) to %s", len(report.added), target_dir)
    return report


def scan_existing_files(root: Path) -> dict[str, bytes]:
    """Read a directory tree into a path → bytes map for seeding a render.

    Paths use forward slashes relative to ``root``. Version control,
    dependency and pack metadata directories are skipped.
    """
    files: dict[str, bytes] = {}
    if not root.is_dir():
        return files

    for path in sorted(root.rglob("*")):
        rel = path.relative_to(root)
        if any(part in _SCAN_SKIP_DIRS for part in rel.parts):
            continue
        if path.is_file():
            files[rel.as_posix()] = path.read_bytes()

    logger.debug("Scanned %d existing file(s) under %s", len(files), root)
    return files
