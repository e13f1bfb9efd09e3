# ============================================================================
# SOURCEFILE: paths.py
# RELPATH: bczip/src/bczip/core/paths.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Destination path resolution by suffix add/strip
# ============================================================================

"""
Path resolution.

Destinations are derived from sources by appending or stripping the
extension. Matching is an exact, case-sensitive string suffix test on the
argument as typed; nothing is normalized or resolved against the
filesystem.
"""

from bczip.core.exceptions import AlreadyHasSuffixError, UnknownSuffixError


DEFAULT_EXTENSION = "bc"


class SuffixResolver:
    """
    Computes destination paths for one fixed extension.

    Attributes:
        extension: Extension without the leading dot (e.g. ``"bc"``)
    """

    def __init__(self, extension: str = DEFAULT_EXTENSION):
        if not extension or "." in extension or "/" in extension:
            raise ValueError(f"Invalid extension: {extension!r}")
        self.extension = extension

    @property
    def suffix(self) -> str:
        return "." + self.extension

    def has_suffix(self, path: str) -> bool:
        return path.endswith(self.suffix)

    def compress_path(self, src: str) -> str:
        """
        Return ``src`` with the suffix appended.

        Raises:
            AlreadyHasSuffixError: If ``src`` already ends with the suffix
        """
        if self.has_suffix(src):
            raise AlreadyHasSuffixError(src, self.suffix)
        return src + self.suffix

    def decompress_path(self, src: str) -> str:
        """
        Return ``src`` with the suffix removed.

        A name that is only the suffix (e.g. ``.bc``) has nothing left to
        restore and is rejected.

        Raises:
            UnknownSuffixError: If ``src`` does not end with the suffix
        """
        stem = src[:-len(self.suffix)]
        if not self.has_suffix(src) or not stem:
            raise UnknownSuffixError(src)
        return stem


_default_resolver = SuffixResolver()


def compress_path(src: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Convenience wrapper around SuffixResolver.compress_path."""
    resolver = _default_resolver if extension == DEFAULT_EXTENSION else SuffixResolver(extension)
    return resolver.compress_path(src)


def decompress_path(src: str, extension: str = DEFAULT_EXTENSION) -> str:
    """Convenience wrapper around SuffixResolver.decompress_path."""
    resolver = _default_resolver if extension == DEFAULT_EXTENSION else SuffixResolver(extension)
    return resolver.decompress_path(src)
