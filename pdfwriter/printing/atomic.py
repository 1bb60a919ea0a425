"""
Atomic File Writer

Writes files through a temporary file in the target directory that is
renamed onto the target path only after its content reached the disk.
Readers of the target path see either the previous file or the complete
new one.
"""

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional, Union

from django.conf import settings

from .errors import DocumentRenameFailed, DocumentWriteFailed, PermissionFixupFailed


logger = logging.getLogger(__name__)


# Configuration constants
FILE_CHUNK_SIZE = 8192  # Size in bytes for writing file chunks

# Owner may read and write, everybody else may read
WRITABLE_MODE = stat.S_IRUSR | stat.S_IWUSR | stat.S_IRGRP | stat.S_IROTH


class AtomicWriter:
    """
    Crash-safe writer for a single file.

    Usage:
        with AtomicWriter('/srv/reports/report.pdf') as writer:
            writer.write(pdf_bytes)
            writer.commit()

    Leaving the block without commit() (or with an exception) removes the
    temporary file and leaves the target path untouched.
    """

    def __init__(self, path: Union[str, Path], chunk_size: Optional[int] = None):
        """
        Create the temporary file next to the target path.

        Args:
            path: Target path of the file
            chunk_size: Size of write chunks (defaults to PDFWRITER_WRITE_CHUNK_SIZE setting)

        Raises:
            DocumentWriteFailed: If the temporary file cannot be created
        """
        self.path = Path(path)
        self.chunk_size = chunk_size or getattr(settings, 'PDFWRITER_WRITE_CHUNK_SIZE', FILE_CHUNK_SIZE)
        self.bytes_written = 0
        self.committed = False

        try:
            fd, temp_path = tempfile.mkstemp(
                prefix=f'.{self.path.name}.',
                suffix='.tmp',
                dir=self.path.parent
            )
        except OSError as e:
            raise DocumentWriteFailed(
                f"Cannot create temporary file for {self.path}: {e}", path=self.path
            ) from e

        self.temp_path = Path(temp_path)
        self._file = os.fdopen(fd, 'wb')

    def write(self, data: bytes) -> None:
        """
        Append data to the temporary file.

        Raises:
            DocumentWriteFailed: If writing fails (e.g., disk full)
        """
        view = memoryview(data)
        try:
            for offset in range(0, len(view), self.chunk_size):
                self._write_chunk(view[offset:offset + self.chunk_size])
        except OSError as e:
            raise DocumentWriteFailed(f"Failed to write {self.path}: {e}", path=self.path) from e

    def _write_chunk(self, chunk) -> None:
        self._file.write(chunk)
        self.bytes_written += len(chunk)

    def flush(self) -> None:
        """
        Flush buffered data to stable storage.

        Raises:
            DocumentWriteFailed: If flushing or syncing fails
        """
        try:
            self._file.flush()
            os.fsync(self._file.fileno())
        except OSError as e:
            raise DocumentWriteFailed(f"Failed to flush {self.path}: {e}", path=self.path) from e

    def commit(self) -> None:
        """
        Flush the temporary file and rename it onto the target path.

        Raises:
            DocumentWriteFailed: If the data cannot be flushed to disk
            DocumentRenameFailed: If the rename fails
        """
        self.flush()
        try:
            self._file.close()
        except OSError as e:
            raise DocumentWriteFailed(f"Failed to close {self.path}: {e}", path=self.path) from e

        try:
            os.replace(self.temp_path, self.path)
        except OSError as e:
            raise DocumentRenameFailed(
                f"Failed to move {self.temp_path} to {self.path}: {e}", path=self.path
            ) from e

        self.committed = True
        self._sync_directory()
        logger.debug(f"Committed {self.bytes_written} bytes to {self.path}")

    def _sync_directory(self) -> None:
        """
        Flush the rename to stable storage.

        The file is already in place when this runs, so a failure is only
        logged.
        """
        try:
            fd = os.open(self.path.parent, os.O_RDONLY)
            try:
                os.fsync(fd)
            finally:
                os.close(fd)
        except OSError as e:
            logger.warning(f"Failed to sync directory {self.path.parent}: {e}")

    def discard(self) -> None:
        """Close and remove the temporary file"""
        try:
            if not self._file.closed:
                self._file.close()
        except OSError as e:
            logger.warning(f"Failed to close temporary file {self.temp_path}: {e}")
        finally:
            self.temp_path.unlink(missing_ok=True)

    def __enter__(self) -> 'AtomicWriter':
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if not self.committed:
            self.discard()
        return False


def make_writable(path: Union[str, Path]) -> None:
    """
    Make sure the owner can read and write the file at path.

    Calling it again on the same file changes nothing.

    Raises:
        PermissionFixupFailed: If the mode cannot be read or changed
    """
    path = Path(path)
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
        wanted = mode | WRITABLE_MODE
        if wanted != mode:
            os.chmod(path, wanted)
    except OSError as e:
        raise PermissionFixupFailed(f"Cannot make {path} writable: {e}", path=path) from e
