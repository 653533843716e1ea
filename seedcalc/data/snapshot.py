"""On-disk snapshot of the result matrix."""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..errors import AcquisitionError, DataCorruptionError
from ..models.matrix import ResultMatrix
from .cache_policy import SnapshotMeta

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Reads and atomically replaces the JSON match data file."""

    def __init__(self, path: str):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def meta(self) -> Optional[SnapshotMeta]:
        """Size and mtime of the snapshot, or None when it does not exist."""
        try:
            stats = self.path.stat()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise DataCorruptionError(f"There was a problem reading the data file ({exc})") from exc
        return SnapshotMeta(size=stats.st_size, modified=datetime.fromtimestamp(stats.st_mtime))

    def load(self) -> ResultMatrix:
        try:
            with open(self.path, "rb") as f:
                data = f.read()
        except OSError as exc:
            raise DataCorruptionError(f"There was a problem reading the data file ({exc})") from exc
        return ResultMatrix.deserialize(data)

    def load_if_valid(self) -> Optional[ResultMatrix]:
        """Load the snapshot, returning None if it is missing or corrupt."""
        if not self.exists():
            return None
        try:
            return self.load()
        except DataCorruptionError as exc:
            logger.warning("Ignoring unreadable snapshot %s: %s", self.path, exc)
            return None

    def save(self, matrix: ResultMatrix) -> None:
        """Write the matrix to a temp file and rename it over the snapshot."""
        payload = matrix.serialize()
        directory = self.path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "wb", dir=directory, prefix=f".{self.path.name}.", suffix=".tmp", delete=False
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise AcquisitionError(f"Error writing updated data to file: {exc}") from exc
        logger.info("Wrote match data snapshot to %s (%d bytes)", self.path, len(payload))
