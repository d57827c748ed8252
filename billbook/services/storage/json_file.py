"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON object file maps keys to blobs, the same
shape as browser local storage. The ledger lives under one key.

TRADEOFFS:
- Every write rewrites the whole file (fine for a household ledger)
- No locking - one process owns the file at a time
- Writes go to a temporary file first and are then renamed over the
  original, so a crash never leaves a half-written ledger behind
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog

from billbook.errors import StorageError
from billbook.services.storage.interface import BlobStorageInterface


logger = structlog.get_logger(__name__)


class JsonFileBlobStorage(BlobStorageInterface):
    """
    File-backed key-value blob storage.

    The file is created on first write. A missing file reads as empty.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Load the whole key-value map."""
        if not self._path.exists():
            return {}

        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {self._path}: {e}") from e

        if not text.strip():
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageError(f"Storage file {self._path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self._path} does not hold a JSON object")

        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        """Atomically replace the file with the given key-value map."""
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=directory,
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {self._path}: {e}") from e

        logger.debug("storage_file_written", path=str(self._path), keys=len(data))

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> bool:
        data = self._read_all()
        if key not in data:
            return False
        del data[key]
        self._write_all(data)
        return True
