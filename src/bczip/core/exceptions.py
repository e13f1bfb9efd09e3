# ============================================================================
# FILE: exceptions.py
# RELPATH: bczip/src/bczip/core/exceptions.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Exception hierarchy for bczip
# ============================================================================

"""
Exception classes for bczip.

Per-argument failures derive from JobError and carry the ErrorKind and the
one-line description printed after the ``bczip: `` prefix. Everything else
(configuration, usage, codec lookup) is fatal to the invocation.
"""

from bczip.core.models import STDIN_NAME, ErrorKind


class BczipError(Exception):
    """Base exception for all bczip errors."""
    pass


# ============================================================================
# Per-Job Exceptions (soft errors)
# ============================================================================

class JobError(BczipError):
    """
    Base exception for errors confined to a single file argument.

    Attributes:
        path: Display name of the source ("stdin" for piped input)
        kind: ErrorKind classifying the failure
        description: Diagnostic text without the program-name prefix
    """
    kind = ErrorKind.IO_ERROR

    def __init__(self, path: str, description: str):
        self.path = path
        self.description = description
        super().__init__(description)


class NoSuchFileError(JobError):
    """Raised when a source path does not exist."""
    kind = ErrorKind.NO_SUCH_FILE

    def __init__(self, path: str):
        super().__init__(path, f"no such file '{path}'")


class AlreadyHasSuffixError(JobError):
    """
    Raised when a compression source already carries the extension.

    Attributes:
        suffix: The offending suffix, including the leading dot
    """
    kind = ErrorKind.ALREADY_HAS_SUFFIX

    def __init__(self, path: str, suffix: str):
        self.suffix = suffix
        super().__init__(path, f"'{path}' already has {suffix} suffix")


class UnknownSuffixError(JobError):
    """Raised when a decompression source lacks the extension."""
    kind = ErrorKind.UNKNOWN_SUFFIX

    def __init__(self, path: str):
        super().__init__(path, f"'{path}' has unknown suffix")


class NotInFormatError(JobError):
    """
    Raised when the container header is missing or does not match.

    Covers both empty and garbage input; the two are indistinguishable.
    """
    kind = ErrorKind.NOT_IN_FORMAT

    def __init__(self, path: str = STDIN_NAME, app_name: str = "bczip"):
        self.app_name = app_name
        if path == STDIN_NAME:
            description = f"stdin not in {app_name} format"
        else:
            description = f"'{path}' not in {app_name} format"
        super().__init__(path, description)


class CodecFormatError(JobError):
    """
    Raised when a payload behind a valid header cannot be decoded.

    Attributes:
        reason: Codec-level explanation (corrupt, truncated, trailing data)
    """
    kind = ErrorKind.FORMAT_ERROR

    def __init__(self, reason: str, path: str = STDIN_NAME):
        self.reason = reason
        shown = path if path == STDIN_NAME else f"'{path}'"
        super().__init__(path, f"{shown} corrupt input: {reason}")

    def for_path(self, path: str) -> "CodecFormatError":
        """Return a copy of this error attributed to ``path``."""
        return CodecFormatError(self.reason, path=path)


class OutputStreamError(JobError):
    """Raised when the destination cannot be opened or finalized."""
    kind = ErrorKind.IO_ERROR

    def __init__(self, path: str, reason: str = "can't open output stream"):
        self.reason = reason
        super().__init__(path, f"'{path}' {reason}")


class SourceReadError(JobError):
    """Raised when an existing source cannot be opened or read."""
    kind = ErrorKind.IO_ERROR

    def __init__(self, path: str, reason: str):
        self.reason = reason
        super().__init__(path, f"'{path}' {reason}")


# ============================================================================
# Codec Registry Exceptions
# ============================================================================

class CodecError(BczipError):
    """Base exception for codec registry errors."""
    pass


class CodecNotFoundError(CodecError):
    """
    Raised when a requested codec name is not registered.

    Attributes:
        codec_name: Requested name
        available_codecs: Registered codec names
    """
    def __init__(self, codec_name: str, available_codecs: list = None):
        self.codec_name = codec_name
        self.available_codecs = available_codecs or []

        msg = f"Codec '{codec_name}' not found"
        if self.available_codecs:
            msg += f". Available codecs: {', '.join(self.available_codecs)}"
        super().__init__(msg)


# ============================================================================
# Configuration-Related Exceptions
# ============================================================================

class ConfigError(BczipError):
    """Base exception for configuration-related errors."""
    pass


class ConfigLoadError(ConfigError):
    """
    Raised when configuration file cannot be loaded.

    Attributes:
        config_file: Path to the configuration file
        reason: Explanation of the failure
    """
    def __init__(self, config_file: str, reason: str):
        self.config_file = config_file
        self.reason = reason
        super().__init__(f"Failed to load config '{config_file}': {reason}")


class ConfigValidationError(ConfigError):
    """
    Raised when configuration data fails validation.

    Attributes:
        key: Configuration key that failed validation
        value: The invalid value
        reason: Explanation of why validation failed
    """
    def __init__(self, key: str, value: object, reason: str):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# ============================================================================
# Usage Exceptions (fatal)
# ============================================================================

class UsageError(BczipError):
    """Base exception for command-line usage errors."""
    pass


class InvalidOptionError(UsageError):
    """
    Raised when an unrecognized option is given.

    Attributes:
        option: The offending token as typed
    """
    def __init__(self, option: str):
        self.option = option
        super().__init__(f"invalid option '{option}'")
