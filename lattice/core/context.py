"""
Generation context — the in-memory file map plugins write into.

One context exists per render call.  The Renderer owns it and hands it
to each plugin in turn:

    - Plugins:   add_file / has_file / get_file, read config and policy
    - Renderer:  _writing_as(plugin_id) around each apply, then reads
                 files and writers(path) once every phase has run

Design notes:
    - No I/O.  Files that already exist on disk enter only through the
      ``existing_files`` seed supplied by the caller.
    - add_file overwrites: last write in call order wins.
    - Writes made while a plugin is active are attributed to it; seeded
      files carry no writer.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from types import MappingProxyType

from lattice.core.models.config import ProjectConfig
from lattice.core.models.policy import Policy


class GenerationContext:
    """Path → bytes accumulator for a single render."""

    def __init__(
        self,
        config: ProjectConfig,
        policy: Policy,
        existing_files: Mapping[str, bytes] | None = None,
    ):
        self._config = config
        self._policy = policy
        self._files: dict[str, bytes] = dict(existing_files or {})
        self._writers: dict[str, list[str]] = {}
        self._active: str | None = None

    @property
    def config(self) -> ProjectConfig:
        return self._config

    @property
    def policy(self) -> Policy:
        return self._policy

    @property
    def files(self) -> Mapping[str, bytes]:
        """Read-only view of the current file map."""
        return MappingProxyType(self._files)

    def add_file(self, path: str, content: bytes) -> None:
        """Store ``content`` at ``path``, replacing any previous content."""
        if not isinstance(content, (bytes, bytearray)):
            raise TypeError(
                f"Content for {path} must be bytes, got {type(content).__name__}"
            )
        self._files[path] = bytes(content)
        if self._active is not None:
            writers = self._writers.setdefault(path, [])
            if self._active not in writers:
                writers.append(self._active)

    def has_file(self, path: str) -> bool:
        return path in self._files

    def get_file(self, path: str) -> bytes | None:
        return self._files.get(path)

    def writers(self, path: str) -> list[str]:
        """Plugin ids that wrote ``path`` during this run, in write order."""
        return list(self._writers.get(path, []))

    def written_paths(self) -> list[str]:
        """Paths written by at least one plugin, sorted."""
        return sorted(self._writers)

    @contextmanager
    def _writing_as(self, plugin_id: str) -> Iterator[GenerationContext]:
        """Attribute every write inside the block to ``plugin_id``.

        Renderer-only; not part of the plugin surface.
        """
        previous = self._active
        self._active = plugin_id
        try:
            yield self
        finally:
            self._active = previous
