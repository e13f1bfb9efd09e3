# ============================================================================
# SOURCEFILE: __main__.py
# RELPATH: bczip/src/bczip/__main__.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Entry point for ``python -m bczip``
# ============================================================================

from bczip.cli import main


if __name__ == "__main__":
    main()
