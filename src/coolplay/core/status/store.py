"""
Per-file workflow status store.

Statuses live in ``<metadata dir>/file-statuses.json`` as a list of
``{filePath, status, lastModified}`` records keyed by workspace-relative
path. Looking up a file that has no record creates a DRAFT record.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from coolplay.core.schemas import SchemaValidationError, validate_payload
from coolplay.core.utils import read_json, write_json_atomic

from .models import DECORATIONS, ICONS, FileStatusRecord, FileStatusValue, StatusDecoration, now_ms

if TYPE_CHECKING:
    from coolplay.core.workspace import Workspace

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileStatusStore:
    def __init__(self, workspace: "Workspace") -> None:
        self.workspace = workspace
        self._records: Dict[str, FileStatusRecord] = {}
        self.load()

    @property
    def path(self) -> Optional[Path]:
        store_dir = self.workspace.store_dir(create=False)
        if store_dir is None:
            return None
        return store_dir / self.workspace.store_config.file_statuses

    def load(self) -> None:
        """(Re)load records from disk; a missing or malformed file yields no records."""
        self._records = {}
        path = self.path
        if path is None or not path.exists():
            return
        try:
            data = read_json(path)
            validate_payload(data, "file-statuses")
        except (OSError, json.JSONDecodeError, SchemaValidationError) as exc:
            logger.warning("Ignoring unreadable status file %s: %s", path, exc)
            return

        migrated = False
        for raw in data:
            record = FileStatusRecord.from_dict(raw)
            if os.path.isabs(record.file_path):
                rel = self.workspace.relative_path(record.file_path)
                record = FileStatusRecord(rel, record.status, record.last_modified)
                migrated = True
            self._records[record.file_path] = record
        if migrated:
            logger.info("Migrated absolute paths in %s to workspace-relative", path)
            self.save()

    def save(self) -> bool:
        """Persist all records; failures are logged and reported as False."""
        store_dir = self.workspace.store_dir(create=True)
        if store_dir is None:
            logger.warning("No workspace root; file statuses are not persisted")
            return False
        path = store_dir / self.workspace.store_config.file_statuses
        try:
            write_json_atomic(path, [r.to_dict() for r in self._records.values()])
        except OSError as exc:
            logger.error("Failed to save file statuses to %s: %s", path, exc)
            return False
        return True

    def _key(self, path: PathLike) -> str:
        return self.workspace.relative_path(path)

    def get(self, path: PathLike) -> FileStatusValue:
        """Status of ``path``; unknown files are recorded as DRAFT."""
        key = self._key(path)
        record = self._records.get(key)
        if record is None:
            record = FileStatusRecord(key, FileStatusValue.DRAFT, now_ms())
            self._records[key] = record
            self.save()
        return record.status

    def set(self, path: PathLike, status: Union[str, FileStatusValue]) -> FileStatusRecord:
        key = self._key(path)
        record = FileStatusRecord(key, FileStatusValue.parse(status), now_ms())
        self._records[key] = record
        self.save()
        logger.debug("Status of %s set to %s", key, record.status.value)
        return record

    def cycle(self, path: PathLike) -> FileStatusValue:
        return self.set(path, self.get(path).next()).status

    def all(self) -> List[FileStatusRecord]:
        return list(self._records.values())

    def decoration(self, path: PathLike) -> Optional[StatusDecoration]:
        """Badge for ``path``, or None when it has no record (no record is created)."""
        record = self._records.get(self._key(path))
        if record is None:
            return None
        return DECORATIONS[record.status]

    @staticmethod
    def icon(status: Union[str, FileStatusValue]) -> str:
        return ICONS[FileStatusValue.parse(status)]

    def active_item(self, active_document: Optional[PathLike]) -> Optional[Dict[str, Any]]:
        """Single tree item describing the active document's status."""
        if not active_document:
            return None
        status = self.get(active_document)
        rel = self._key(active_document)
        return {
            "label": f"{rel} - {status.value}",
            "filePath": rel,
            "status": status.value,
            "icon": self.icon(status),
        }


__all__ = ["FileStatusStore"]
