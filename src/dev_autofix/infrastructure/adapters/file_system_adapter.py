import logging
import os
import stat
import tempfile
from pathlib import Path

from dev_autofix.domain.ports.file_system import FileSystemPort

logger = logging.getLogger(__name__)


class FileSystemAdapter(FileSystemPort):
    """Local disk implementation of FileSystemPort."""

    def read_file(self, file_path: str) -> str:
        try:
            with open(file_path, 'r', encoding='utf-8', newline='') as f:
                return f.read()
        except OSError as e:
            logger.error(f"Error reading file {file_path}: {e}")
            raise

    def write_file(self, file_path: str, content: str):
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory as the target so os.replace stays on one filesystem
        fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".autofix", dir=path.parent)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
                f.write(content)
            if path.exists():
                os.chmod(tmp_path, stat.S_IMODE(path.stat().st_mode))
            os.replace(tmp_path, path)
            logger.debug(f"Wrote {len(content)} characters to {file_path}")
        except OSError as e:
            logger.error(f"Error writing file {file_path}: {e}")
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def exists(self, path: str) -> bool:
        return Path(path).is_file()
