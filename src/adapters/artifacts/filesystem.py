"""
Filesystem artifact store - Implements ArtifactStore protocol.

Artifacts live under a root directory; keys are relative paths such as
"tickets/<ticket id>.pdf". Writes go to a temporary file first and are
moved into place, so a reader never sees a half-written ticket.
"""

import logging
import os
import tempfile
from pathlib import Path

from src.domain.exceptions import ArtifactNotFound

logger = logging.getLogger(__name__)


class FilesystemArtifactStore:
    """
    Implements ArtifactStore protocol on a local directory.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def write(self, key: str, content: bytes) -> str:
        """
        Store content under key and return its location (absolute path).

        Raises:
            OSError: If the directory or file cannot be written
        """
        target = self._resolve(key)
        target.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_path = tempfile.mkstemp(dir=target.parent, prefix=".tmp-", suffix=target.suffix)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(content)
            os.replace(tmp_path, target)
        except OSError:
            Path(tmp_path).unlink(missing_ok=True)
            raise

        logger.debug("Wrote %d bytes to %s", len(content), target)
        return str(target)

    def read(self, location: str) -> bytes:
        path = self._resolve(location)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise ArtifactNotFound(location) from None

    def _resolve(self, key: str) -> Path:
        path = (self._root / key).resolve()
        if not path.is_relative_to(self._root):
            raise ArtifactNotFound(key)
        return path
