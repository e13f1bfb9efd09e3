# ============================================================================
# SOURCEFILE: executor.py
# RELPATH: bczip/src/bczip/core/executor.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Runs one compress/decompress job end to end
# ============================================================================

"""
Job Executor.

A job goes through these stages, stopping at the first failure:

    open source -> resolve destination -> check header (decompress)
    -> confirm overwrite -> stream transform into a private sink
    -> publish sink -> remove source

Nothing becomes visible at the destination before the publish stage, and
the source is only removed after it. Per-job errors are raised as JobError
subclasses inside and returned as Failed outcomes at the boundary.
"""

from __future__ import annotations

import logging
import os
import time
from typing import BinaryIO, Iterator, Optional

from bczip.core.console import Console
from bczip.core.container import HEADER_SIZE, Container, read_header
from bczip.core.exceptions import (
    CodecFormatError,
    JobError,
    NoSuchFileError,
    SourceReadError,
)
from bczip.core.logging import StructuredLogger
from bczip.core.models import (
    Failed,
    GlobalOptions,
    Job,
    Mode,
    Outcome,
    SkipReason,
    Skipped,
    Success,
)
from bczip.core.paths import SuffixResolver
from bczip.core.writer import AtomicFileWriter, SpooledStreamWriter


logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


class JobExecutor:
    """
    Performs single jobs.

    Attributes:
        console: Standard stream port (stdin data, prompts, stdout data)
        container: Framing plus the codec used for compression
        resolver: Destination path rules
        chunk_size: Read size for streaming
        session: Structured event log
        app_name: Program name used in prompts
    """

    def __init__(self,
                 console: Console,
                 container: Optional[Container] = None,
                 resolver: Optional[SuffixResolver] = None,
                 chunk_size: int = DEFAULT_CHUNK_SIZE,
                 session: Optional[StructuredLogger] = None,
                 app_name: str = "bczip"):
        self.console = console
        self.container = container or Container()
        self.resolver = resolver or SuffixResolver()
        self.chunk_size = chunk_size
        self.session = session or StructuredLogger()
        self.app_name = app_name

    def run(self, job: Job, options: GlobalOptions) -> Outcome:
        """
        Execute ``job`` and classify the result.

        Never raises for per-job conditions; those come back as Failed.
        """
        started = time.monotonic()
        try:
            outcome = self._execute(job, options)
        except JobError as e:
            logger.debug("job %s failed: %s", job.display_name, e.description)
            self.session.log_error(
                mode=job.mode.value,
                source=job.display_name,
                error_message=e.description,
                error_type=type(e).__name__,
                error_kind=e.kind.value,
            )
            return Failed(source=job.display_name, kind=e.kind, message=e.description)

        if isinstance(outcome, Success):
            self.session.log_job_complete(
                mode=job.mode.value,
                source=job.display_name,
                destination=outcome.destination,
                bytes_before=outcome.bytes_before,
                bytes_after=outcome.bytes_after,
                codec=self.container.codec.name,
                source_removed=self._removes_source(job, options),
                elapsed_ms=int((time.monotonic() - started) * 1000),
            )
        return outcome

    # ------------------------------------------------------------------
    # stages
    # ------------------------------------------------------------------

    def _execute(self, job: Job, options: GlobalOptions) -> Outcome:
        if job.is_stdin:
            return self._execute_stdin(job)

        source = job.source
        handle = self._open_source(source)
        with handle:
            destination = None if job.to_stdout else self._resolve_destination(job)
            self.session.log_job_start(job.mode.value, source, destination)

            codec_id = None
            if job.mode is Mode.DECOMPRESS:
                codec_id = read_header(handle, source)

            if destination is not None and not options.force and os.path.exists(destination):
                if not self._confirm_overwrite(destination):
                    self.console.write_out("\tnot overwritten\n")
                    self.session.log_job_skipped(source, destination, SkipReason.USER_DECLINED.value)
                    return Skipped(source=source, reason=SkipReason.USER_DECLINED)

            if destination is None:
                sink = SpooledStreamWriter(self.console.stdout, error_path=source)
            else:
                sink = AtomicFileWriter(destination, error_path=source, mode_from=source)
            bytes_before = self._transform(handle, job, codec_id, sink)

        if self._removes_source(job, options):
            self._remove_source(source)

        return Success(
            source=source,
            bytes_before=bytes_before,
            bytes_after=sink.bytes_written,
            destination=destination,
        )

    def _execute_stdin(self, job: Job) -> Outcome:
        """Stream standard input to standard output; no files are touched."""
        self.session.log_job_start(job.mode.value, job.display_name, None)
        reader = self.console.stdin
        codec_id = None
        if job.mode is Mode.DECOMPRESS:
            codec_id = read_header(reader, job.display_name)

        sink = SpooledStreamWriter(self.console.stdout, error_path=job.display_name)
        bytes_before = self._transform(reader, job, codec_id, sink)
        return Success(
            source=job.display_name,
            bytes_before=bytes_before,
            bytes_after=sink.bytes_written,
            destination=None,
        )

    def _open_source(self, source: str) -> BinaryIO:
        try:
            return open(source, "rb")
        except FileNotFoundError:
            raise NoSuchFileError(source)
        except IsADirectoryError:
            raise SourceReadError(source, "is a directory -- ignored")
        except OSError as e:
            raise SourceReadError(source, f"can't open: {e.strerror or e}")

    def _resolve_destination(self, job: Job) -> str:
        if job.mode is Mode.DECOMPRESS:
            return self.resolver.decompress_path(job.source)
        return self.resolver.compress_path(job.source)

    def _confirm_overwrite(self, destination: str) -> bool:
        question = f"{self.app_name}: '{destination}' already exists; do you want to overwrite (y/N)? "
        accepted = self.console.confirm(question)
        self.session.log_prompt(destination, accepted)
        return accepted

    def _transform(self, reader: BinaryIO, job: Job, codec_id: Optional[int], sink) -> int:
        """
        Stream ``reader`` through the codec into ``sink``.

        The sink publishes only if the whole stream succeeds. Returns the
        number of source bytes consumed, header included.
        """
        counter = _ByteCounter()
        chunks = self._read_chunks(reader, job.display_name, counter)
        try:
            with sink:
                if job.mode is Mode.COMPRESS:
                    pieces = self.container.encode_stream(chunks)
                else:
                    counter.total += HEADER_SIZE
                    pieces = self.container.decode_payload(codec_id, chunks)
                for piece in pieces:
                    sink.write(piece)
        except CodecFormatError as e:
            raise e.for_path(job.display_name)
        return counter.total

    def _read_chunks(self, reader: BinaryIO, name: str, counter: "_ByteCounter") -> Iterator[bytes]:
        while True:
            try:
                chunk = reader.read(self.chunk_size)
            except OSError as e:
                raise SourceReadError(name, f"read error: {e.strerror or e}")
            if not chunk:
                return
            counter.total += len(chunk)
            yield chunk

    @staticmethod
    def _removes_source(job: Job, options: GlobalOptions) -> bool:
        return not (job.is_stdin or job.to_stdout or options.keep)

    def _remove_source(self, source: str) -> None:
        try:
            os.unlink(source)
        except OSError as e:
            logger.warning("could not remove '%s': %s", source, e)
            self.session.log_error(
                mode="cleanup",
                source=source,
                error_message=str(e),
                error_type=type(e).__name__,
            )


class _ByteCounter:
    __slots__ = ("total",)

    def __init__(self):
        self.total = 0
