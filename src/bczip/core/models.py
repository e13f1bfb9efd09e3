# ============================================================================
# SOURCEFILE: models.py
# RELPATH: bczip/src/bczip/core/models.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Core data models for options, jobs and outcomes
# ============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


STDIN_NAME = "stdin"


class Action(Enum):
    """What an invocation does once options are resolved."""
    HELP = "help"
    VERSION = "version"
    RUN = "run"


class Mode(Enum):
    COMPRESS = "compress"
    DECOMPRESS = "decompress"


class ErrorKind(Enum):
    """Classification of per-argument failures."""
    NO_SUCH_FILE = "no_such_file"
    ALREADY_HAS_SUFFIX = "already_has_suffix"
    UNKNOWN_SUFFIX = "unknown_suffix"
    NOT_IN_FORMAT = "not_in_format"
    FORMAT_ERROR = "format_error"
    IO_ERROR = "io_error"


class SkipReason(Enum):
    USER_DECLINED = "user_declined"


@dataclass(frozen=True)
class GlobalOptions:
    """
    Options resolved once per invocation.

    Attributes:
        action: HELP, VERSION or RUN after precedence resolution
        decompress: Operate in decompress mode
        keep: Do not delete sources after success
        force: Overwrite existing destinations without asking
        quiet: Suppress error and verbose text
        verbose: Report the size ratio of each job
        to_stdout: Write results to standard output, never delete sources
    """
    action: Action = Action.RUN
    decompress: bool = False
    keep: bool = False
    force: bool = False
    quiet: bool = False
    verbose: bool = False
    to_stdout: bool = False

    @property
    def mode(self) -> Mode:
        return Mode.DECOMPRESS if self.decompress else Mode.COMPRESS


@dataclass(frozen=True)
class Job:
    """
    One compress/decompress operation.

    Attributes:
        source: Source path, or None when reading standard input
        mode: Compress or decompress
        to_stdout: Destination is standard output
    """
    source: Optional[str]
    mode: Mode
    to_stdout: bool = False

    @classmethod
    def from_argument(cls, argument: str, options: GlobalOptions) -> "Job":
        return cls(source=argument, mode=options.mode, to_stdout=options.to_stdout)

    @classmethod
    def for_stdin(cls, options: GlobalOptions) -> "Job":
        return cls(source=None, mode=options.mode, to_stdout=True)

    @property
    def is_stdin(self) -> bool:
        return self.source is None

    @property
    def display_name(self) -> str:
        return STDIN_NAME if self.source is None else self.source


@dataclass(frozen=True)
class Outcome:
    """Base class for job results."""
    source: str

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True)
class Success(Outcome):
    """
    A completed job.

    Attributes:
        bytes_before: Bytes read from the source
        bytes_after: Bytes written to the destination
        destination: Destination path, or None for standard output
    """
    bytes_before: int = 0
    bytes_after: int = 0
    destination: Optional[str] = None

    @property
    def ok(self) -> bool:
        return True

    @property
    def ratio_percent(self) -> float:
        """Space saved as a percentage: ``100 * (1 - after / before)``."""
        if self.bytes_before == 0:
            return 0.0
        return 100.0 * (1.0 - self.bytes_after / self.bytes_before)


@dataclass(frozen=True)
class Skipped(Outcome):
    reason: SkipReason = SkipReason.USER_DECLINED


@dataclass(frozen=True)
class Failed(Outcome):
    """
    A job that did not complete.

    Attributes:
        kind: ErrorKind of the failure
        message: Diagnostic text without the program-name prefix
    """
    kind: ErrorKind = ErrorKind.IO_ERROR
    message: str = ""


@dataclass
class RunSummary:
    """Ordered outcomes of one invocation with processed/skipped/error counts."""
    outcomes: List[Outcome] = field(default_factory=list)

    def add(self, outcome: Outcome) -> None:
        self.outcomes.append(outcome)

    @property
    def processed(self) -> int:
        return sum(1 for o in self.outcomes if isinstance(o, Success))

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if isinstance(o, Skipped))

    @property
    def errors(self) -> int:
        return sum(1 for o in self.outcomes if isinstance(o, Failed))

    def as_stats(self) -> dict:
        return {"processed": self.processed, "skipped": self.skipped, "errors": self.errors}
