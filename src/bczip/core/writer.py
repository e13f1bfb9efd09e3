# ============================================================================
# SOURCEFILE: writer.py
# RELPATH: bczip/src/bczip/core/writer.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION:
#   Output sinks that only publish complete results: AtomicFileWriter for
#   named destinations and SpooledStreamWriter for standard output.
# ============================================================================

"""
Output writers.

Both writers are context managers. Data written inside the ``with`` block
stays invisible until the block exits normally; an exception discards it
and leaves the final target exactly as it was.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO, Optional

from bczip.core.exceptions import OutputStreamError


logger = logging.getLogger(__name__)

SPOOL_MAX_BYTES = 8 * 1024 * 1024

# Fixed length, so a destination name at the filesystem limit still fits
TEMP_PREFIX = ".bczip."


class _WriterBase:
    """Shared bookkeeping for the two sinks."""

    def __init__(self, error_path: str):
        self.error_path = error_path
        self.bytes_written = 0
        self.committed = False

    def write(self, data: bytes) -> None:
        if not data:
            return
        try:
            self._handle.write(data)
        except OSError as e:
            raise OutputStreamError(self.error_path, f"write failed: {e.strerror or e}")
        self.bytes_written += len(data)

    def __enter__(self):
        self._open()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self._commit()
            self.committed = True
        else:
            self._abort()
        return False


class AtomicFileWriter(_WriterBase):
    """
    Writes to a temporary sibling file and renames it over the destination.

    The temporary file lives in the destination's directory so the final
    ``os.replace`` never crosses filesystems. Before the rename the data is
    fsynced and the permission bits of ``mode_from`` (the source file) are
    copied across.

    Attributes:
        destination: Final path
        temp_path: Path of the in-progress file while open
    """

    def __init__(self, destination: str, error_path: Optional[str] = None, mode_from: Optional[str] = None):
        super().__init__(error_path or destination)
        self.destination = Path(destination)
        self.mode_from = mode_from
        self.temp_path: Optional[Path] = None
        self._handle: Optional[BinaryIO] = None

    def _open(self) -> None:
        parent = self.destination.parent
        try:
            fd, name = tempfile.mkstemp(
                prefix=TEMP_PREFIX,
                suffix=".tmp",
                dir=str(parent),
            )
        except OSError as e:
            logger.debug("mkstemp in %s failed: %s", parent, e)
            raise OutputStreamError(self.error_path)
        self.temp_path = Path(name)
        self._handle = os.fdopen(fd, "wb")

    def _commit(self) -> None:
        try:
            self._handle.flush()
            os.fsync(self._handle.fileno())
            self._handle.close()
            if self.mode_from is not None:
                shutil.copymode(self.mode_from, self.temp_path)
            os.replace(self.temp_path, self.destination)
        except OSError as e:
            self._abort()
            raise OutputStreamError(self.error_path, f"can't finalize output: {e.strerror or e}")
        logger.debug("replaced %s (%d bytes)", self.destination, self.bytes_written)

    def _abort(self) -> None:
        if self._handle is not None and not self._handle.closed:
            self._handle.close()
        if self.temp_path is not None:
            try:
                self.temp_path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("could not remove temporary file %s: %s", self.temp_path, e)


class SpooledStreamWriter(_WriterBase):
    """
    Buffers output and copies it to ``target`` only on success.

    Small outputs stay in memory; larger ones roll over to an anonymous
    temporary file.
    """

    def __init__(self, target: BinaryIO, error_path: str, max_size: int = SPOOL_MAX_BYTES):
        super().__init__(error_path)
        self.target = target
        self.max_size = max_size
        self._handle = None

    def _open(self) -> None:
        self._handle = tempfile.SpooledTemporaryFile(max_size=self.max_size)

    def _commit(self) -> None:
        try:
            self._handle.seek(0)
            shutil.copyfileobj(self._handle, self.target)
            self.target.flush()
        except OSError as e:
            raise OutputStreamError(self.error_path, f"write failed: {e.strerror or e}")
        finally:
            self._handle.close()

    def _abort(self) -> None:
        self._handle.close()
