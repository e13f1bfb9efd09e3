# ============================================================================
# SOURCEFILE: logging.py
# RELPATH: bczip/src/bczip/core/logging.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Structured JSON logging for jobs and diagnostics
# ============================================================================

"""
Structured Logging Module.

Records one JSON object per job event. Entries always go to an in-memory
buffer; they are appended to a JSON-lines file only when a log directory is
configured, so a plain invocation leaves nothing behind on disk.
"""

from __future__ import annotations

import io
import json
import uuid
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Any, Iterable
from enum import Enum
import sys


def _ensure_stream_utf8(stream: Optional[io.TextIOBase]) -> Optional[io.TextIOBase]:
    """Ensure a text stream writes UTF-8, wrapping if necessary."""
    if stream is None:
        return None

    encoding = getattr(stream, "encoding", None)
    if isinstance(encoding, str) and encoding.lower() == "utf-8":
        return stream

    reconfigure = getattr(stream, "reconfigure", None)
    if callable(reconfigure):
        try:
            reconfigure(encoding="utf-8", errors="backslashreplace")
            return stream
        except (ValueError, io.UnsupportedOperation):
            # Fall back to wrapping below
            pass

    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        return stream

    stream.flush()
    wrapped = io.TextIOWrapper(buffer, encoding="utf-8", errors="backslashreplace")
    # Mark wrapper so we don't wrap repeatedly
    setattr(wrapped, "_bczip_utf8_wrapper", True)
    return wrapped


def configure_utf8_logging(force: bool = False, level: str = "WARNING") -> None:
    """Configure stderr and root logger handlers for UTF-8 output.

    Diagnostics quote file names verbatim, and names are not always ASCII.
    Only stderr is touched: stdout carries binary job output and is written
    through its buffer. Safe to call multiple times.
    """

    streams: Iterable[str] = ("stderr",)
    for name in streams:
        stream = getattr(sys, name, None)
        if stream is None:
            continue

        new_stream = _ensure_stream_utf8(stream)
        if new_stream is not None and new_stream is not stream:
            setattr(sys, name, new_stream)

    root = logging.getLogger()
    if force and not root.handlers:
        root.addHandler(logging.StreamHandler(sys.stderr))
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in root.handlers:
        stream = getattr(handler, "stream", None)
        if stream is None:
            continue
        new_stream = _ensure_stream_utf8(stream)
        if new_stream is not None and new_stream is not stream:
            handler.setStream(new_stream)


class LogEvent(Enum):
    """Enumeration of loggable events."""
    JOB_START = "job_start"
    JOB_COMPLETE = "job_complete"
    JOB_SKIPPED = "job_skipped"
    PROMPT = "prompt"
    ERROR = "error"


class StructuredLogger:
    """
    JSON-structured logger for bczip jobs.

    Attributes:
        log_dir: Directory for the session file, or None for memory only
        session_id: Identifier shared by every entry of this run
        log_file: Session file path when log_dir is set
        log_buffer: All entries of this session in order
    """

    def __init__(self, log_dir: Optional[str] = None, session_id: Optional[str] = None):
        self.log_dir = Path(log_dir) if log_dir else None
        self.session_id = session_id or str(uuid.uuid4())
        self.start_time = datetime.now(timezone.utc)
        self.log_file: Optional[Path] = None
        self.log_buffer: List[Dict] = []

        if self.log_dir is not None:
            timestamp = self.start_time.strftime("%Y%m%d_%H%M%S")
            self.log_file = self.log_dir / f"bczip_session_{timestamp}_{self.session_id[:8]}.json"
            self._ensure_log_file_exists()

    def _ensure_log_file_exists(self) -> None:
        """Create the log directory and touch the session file; never raises."""
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.log_file.touch(exist_ok=True)
        except OSError as e:
            print(f"Warning: Failed to create log file: {e}", file=sys.stderr)
            self.log_file = None

    def log_job_start(self, mode: str, source: str, destination: Optional[str]) -> None:
        """
        Log the start of a job.

        Args:
            mode: "compress" or "decompress"
            source: Source path or "stdin"
            destination: Destination path, or None for standard output
        """
        self._write_log_entry(self._create_log_entry(
            event=LogEvent.JOB_START,
            details={"mode": mode, "source": source, "destination": destination},
        ))

    def log_job_complete(self,
                         mode: str,
                         source: str,
                         destination: Optional[str],
                         bytes_before: int,
                         bytes_after: int,
                         codec: str,
                         source_removed: bool,
                         elapsed_ms: int) -> None:
        """
        Log successful completion of a job.

        Args:
            mode: "compress" or "decompress"
            source: Source path or "stdin"
            destination: Destination path, or None for standard output
            bytes_before: Bytes read
            bytes_after: Bytes written
            codec: Codec name used
            source_removed: Whether the source file was deleted
            elapsed_ms: Duration in milliseconds
        """
        self._write_log_entry(self._create_log_entry(
            event=LogEvent.JOB_COMPLETE,
            details={
                "mode": mode,
                "source": source,
                "destination": destination,
                "counts": {"bytesBefore": bytes_before, "bytesAfter": bytes_after},
                "codec": codec,
                "sourceRemoved": source_removed,
                "elapsedMs": elapsed_ms,
            },
        ))

    def log_job_skipped(self, source: str, destination: Optional[str], reason: str) -> None:
        self._write_log_entry(self._create_log_entry(
            event=LogEvent.JOB_SKIPPED,
            details={"source": source, "destination": destination, "reason": reason},
        ))

    def log_prompt(self, destination: str, accepted: bool) -> None:
        self._write_log_entry(self._create_log_entry(
            event=LogEvent.PROMPT,
            details={"destination": destination, "accepted": accepted},
        ))

    def log_error(self,
                  mode: str,
                  source: str,
                  error_message: str,
                  error_type: str,
                  error_kind: Optional[str] = None) -> None:
        """
        Log a failed job.

        Args:
            mode: "compress" or "decompress"
            source: Source path or "stdin"
            error_message: Diagnostic text
            error_type: Exception class name
            error_kind: ErrorKind value, if classified
        """
        self._write_log_entry(self._create_log_entry(
            event=LogEvent.ERROR,
            details={
                "mode": mode,
                "source": source,
                "errorMessage": error_message,
                "errorType": error_type,
                "errorKind": error_kind,
            },
        ))

    def _create_log_entry(self, event: LogEvent, details: Dict[str, Any]) -> Dict:
        return {
            "sessionId": self.session_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event": event.value,
            "details": details,
        }

    def _write_log_entry(self, entry: Dict) -> None:
        """
        Append an entry to the buffer and, if configured, the session file.

        Args:
            entry: Log entry to write
        """
        self.log_buffer.append(entry)

        if self.log_file is None:
            return
        try:
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(json.dumps(entry, ensure_ascii=False) + '\n')
        except OSError as e:
            # Log write failure shouldn't crash the application
            print(f"Warning: Failed to write log entry: {e}", file=sys.stderr)

    def get_session_logs(self) -> List[Dict]:
        return list(self.log_buffer)

    def export_session_summary(self) -> Dict:
        """
        Export session summary statistics.

        Returns:
            Summary dictionary with counts per event type
        """
        summary = {
            "sessionId": self.session_id,
            "startTime": self.start_time.isoformat(),
            "endTime": datetime.now(timezone.utc).isoformat(),
            "totalEvents": len(self.log_buffer),
            "eventCounts": {},
        }

        for entry in self.log_buffer:
            event_type = entry["event"]
            summary["eventCounts"][event_type] = summary["eventCounts"].get(event_type, 0) + 1

        return summary


def new_session(log_dir: Optional[str] = None) -> StructuredLogger:
    """Start the logging session for one invocation."""
    return StructuredLogger(log_dir)
