# ============================================================================
# FILE: conftest.py
# RELPATH: bczip/tests/conftest.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Pytest fixtures for the bczip test suite
# ============================================================================

"""
Pytest configuration and shared fixtures.

Provides in-memory consoles, preconfigured executors and sample files so
jobs can be run without a terminal or a subprocess.
"""

import io
import json
import shutil
import tempfile
from pathlib import Path

import pytest

from bczip.core.codecs.store import StoreCodec
from bczip.core.config import ConfigManager
from bczip.core.console import Console
from bczip.core.container import Container
from bczip.core.driver import Driver
from bczip.core.executor import JobExecutor
from bczip.core.logging import StructuredLogger


class FakeConsole(Console):
    """Console over in-memory streams with convenience accessors."""

    def __init__(self, stdin_data: bytes = b"", tty: bool = False):
        super().__init__(
            stdin=io.BytesIO(stdin_data),
            stdout=io.BytesIO(),
            stderr=io.StringIO(),
        )
        self.tty = tty

    def stdin_is_tty(self) -> bool:
        return self.tty

    @property
    def out(self) -> bytes:
        return self.stdout.getvalue()

    @property
    def err(self) -> str:
        return self.stderr.getvalue()


# ============================================================================
# Console / Executor Fixtures
# ============================================================================

@pytest.fixture
def make_console():
    """Factory for FakeConsole instances."""
    def _make(stdin_data: bytes = b"", tty: bool = False) -> FakeConsole:
        return FakeConsole(stdin_data, tty=tty)
    return _make


@pytest.fixture
def console():
    """FakeConsole with empty stdin."""
    return FakeConsole()


@pytest.fixture
def session():
    """Memory-only structured logger."""
    return StructuredLogger()


@pytest.fixture
def make_executor(session):
    """Factory for executors bound to a console; zlib codec unless given."""
    def _make(console, codec=None, chunk_size: int = 16) -> JobExecutor:
        container = Container(codec) if codec is not None else Container()
        return JobExecutor(console, container=container, chunk_size=chunk_size, session=session)
    return _make


@pytest.fixture
def make_driver(make_executor):
    """Factory for a Driver over a fresh executor."""
    def _make(console, codec=None) -> Driver:
        return Driver(make_executor(console, codec=codec), console)
    return _make


@pytest.fixture
def store_container():
    """Container using the identity codec."""
    return Container(StoreCodec())


# ============================================================================
# Filesystem Fixtures
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory for test file operations."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    # Cleanup
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_file(temp_dir):
    """A small text file to compress."""
    path = temp_dir / "hello.txt"
    path.write_bytes(b"Hello world!" * 2)
    return path


@pytest.fixture
def temp_config(temp_dir):
    """ConfigManager backed by a file in temp_dir (not yet written)."""
    return ConfigManager(str(temp_dir / "bczip.json"))


@pytest.fixture
def make_config(temp_dir):
    """Factory writing a JSON config file into temp_dir and loading it."""
    def _make(data: dict) -> ConfigManager:
        path = temp_dir / "bczip.json"
        path.write_text(json.dumps(data), encoding='utf-8')
        return ConfigManager(str(path))
    return _make
