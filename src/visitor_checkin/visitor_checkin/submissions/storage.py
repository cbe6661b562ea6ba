from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Protocol

from werkzeug.utils import secure_filename

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


class ResumeStorage(Protocol):
    """Where uploaded resumes live; submissions only keep the returned key."""

    def save(self, *, filename: str, content_type: str, data: bytes) -> str:
        raise NotImplementedError

    def path_for(self, key: str) -> Path:
        raise NotImplementedError

    def exists(self, key: str) -> bool:
        raise NotImplementedError


class LocalResumeStorage(ResumeStorage):
    def __init__(self, root: str | Path):
        self._root = Path(root).resolve()

    def save(self, *, filename: str, content_type: str, data: bytes) -> str:
        key = f"{int(time.time() * 1000)}_{secure_filename(filename) or 'resume'}"
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            (self._root / key).write_bytes(data)
        except OSError as e:
            logger.error("Resume upload failed key=%s: %s", key, e)
            raise StorageError("Failed to store resume") from e
        logger.info("Resume uploaded key=%s type=%s bytes=%s", key, content_type, len(data))
        return key

    def path_for(self, key: str) -> Path:
        path = (self._root / secure_filename(key)).resolve()
        if path.parent != self._root:
            raise StorageError("Invalid resume key")
        return path

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()
