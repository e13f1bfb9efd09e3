# ============================================================================
# SOURCEFILE: __init__.py
# RELPATH: bczip/src/bczip/__init__.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Package constants
# ============================================================================

"""bczip: a gzip-like single-file compressor with a 2-byte container header."""

APP_NAME = "bczip"
EXTENSION = "bc"
VERSION = "1.0"

__version__ = "1.0.0"
