# ============================================================================
# SOURCEFILE: console.py
# RELPATH: bczip/src/bczip/core/console.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Injectable standard stream port and overwrite confirmation
# ============================================================================

"""
Console port.

Everything the tool reads from or writes to the standard streams goes
through a Console, so the driver and executor can be exercised with
in-memory streams.
"""

import sys
from typing import BinaryIO, Optional, TextIO


class Console:
    """
    Standard stream access.

    Attributes:
        stdin: Binary input stream (data for the stdin job, prompt answers)
        stdout: Binary output stream (job data, prompts, verbose lines)
        stderr: Text stream for diagnostics
    """

    def __init__(self,
                 stdin: Optional[BinaryIO] = None,
                 stdout: Optional[BinaryIO] = None,
                 stderr: Optional[TextIO] = None,
                 encoding: str = "utf-8"):
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.stderr = stderr if stderr is not None else sys.stderr
        self.encoding = encoding

    def stdin_is_tty(self) -> bool:
        isatty = getattr(self.stdin, "isatty", None)
        try:
            return bool(isatty()) if callable(isatty) else False
        except ValueError:
            # closed stream
            return False

    def write_out(self, text: str) -> None:
        """Write text to stdout, which is shared with binary job output."""
        self.stdout.write(text.encode(self.encoding, errors="surrogateescape"))
        self.stdout.flush()

    def write_err(self, text: str) -> None:
        self.stderr.write(text)
        self.stderr.flush()

    def read_line(self) -> str:
        """Read one line from stdin; empty string at end of stream."""
        line = self.stdin.readline()
        return line.decode(self.encoding, errors="replace")

    def confirm(self, question: str) -> bool:
        """
        Show ``question`` and read one answer line.

        Only an answer starting with ``y`` or ``Y`` confirms. An empty line
        or end of stream declines.
        """
        self.write_out(question)
        answer = self.read_line()
        return answer[:1] in ("y", "Y")
