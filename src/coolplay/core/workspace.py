"""Workspace roots and path helpers.

A workspace is an ordered set of root folders. The first root owns the
metadata directory (``.coolplay`` by default) where the status and rules
stores persist their JSON files.
"""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from coolplay.core.config import MarkersConfig, StoreConfig, default_config, get_cached_config
from coolplay.core.file_io import ensure_directory

PathLike = Union[str, Path]


class Workspace:
    """An ordered set of canonical root directories plus the effective config."""

    def __init__(self, roots: Iterable[PathLike] = (), *, config: Optional[Mapping[str, Any]] = None) -> None:
        seen: list[Path] = []
        for root in roots:
            resolved = Path(root).expanduser().resolve()
            if resolved not in seen:
                seen.append(resolved)
        self.roots: Tuple[Path, ...] = tuple(seen)
        self.config: Mapping[str, Any] = config if config is not None else default_config()

    @classmethod
    def load(cls, root: PathLike, *extra_roots: PathLike) -> "Workspace":
        """Workspace rooted at ``root`` using its layered project configuration."""
        root_path = Path(root).expanduser().resolve()
        return cls((root_path, *extra_roots), config=get_cached_config(root_path))

    @classmethod
    def from_cwd(cls) -> "Workspace":
        from coolplay.core.utils.paths import resolve_project_root

        return cls.load(resolve_project_root())

    def __repr__(self) -> str:
        return f"Workspace(roots={[str(r) for r in self.roots]!r})"

    @cached_property
    def markers_config(self) -> MarkersConfig:
        return MarkersConfig(config=self.config)

    @cached_property
    def store_config(self) -> StoreConfig:
        return StoreConfig(config=self.config)

    @property
    def root(self) -> Optional[Path]:
        """First root (owner of the metadata directory), or None for an empty workspace."""
        return self.roots[0] if self.roots else None

    def canonical(self, path: PathLike) -> Path:
        return Path(path).expanduser().resolve()

    def containing_root(self, path: PathLike) -> Optional[Path]:
        target = self.canonical(path)
        for root in self.roots:
            if target == root or root in target.parents:
                return root
        return None

    def relative_path(self, path: PathLike) -> str:
        """Path relative to the first containing root (POSIX separators).

        Paths outside every root fall back to their base name.
        """
        target = self.canonical(path)
        root = self.containing_root(target)
        if root is None:
            return target.name
        return target.relative_to(root).as_posix()

    def absolute_path(self, path: PathLike) -> Path:
        """Resolve a workspace-relative path against the first root."""
        candidate = Path(path)
        if candidate.is_absolute() or self.root is None:
            return self.canonical(candidate)
        return self.canonical(self.root / candidate)

    def store_dir(self, create: bool = True) -> Optional[Path]:
        """Metadata directory under the first root; None when there are no roots."""
        if self.root is None:
            return None
        path = self.root / self.store_config.dir_name
        if create:
            ensure_directory(path)
        return path


__all__ = ["Workspace"]
