# ============================================================================
# SOURCEFILE: base.py
# RELPATH: bczip/src/bczip/core/codecs/base.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Abstract codec contract and incremental stream interfaces
# ============================================================================

"""
Codec base classes.

A codec turns raw bytes into an encoded payload and back. Both directions
are incremental: ``compressor()`` and ``decompressor()`` return objects fed
chunk by chunk through ``process()`` and closed with ``flush()``, so a codec
can sit behind pipes of arbitrary length. ``encode``/``decode`` are
whole-buffer conveniences built on the same objects.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Iterator


class StreamCompressor(ABC):
    """Incremental encoder."""

    @abstractmethod
    def process(self, chunk: bytes) -> bytes:
        """Feed raw bytes; return whatever encoded output is ready."""

    @abstractmethod
    def flush(self) -> bytes:
        """Finish the stream and return the remaining encoded output."""


class StreamDecompressor(ABC):
    """
    Incremental decoder.

    Implementations raise CodecFormatError from ``process`` on corrupt input
    and from ``flush`` when the stream is truncated or followed by trailing
    data.
    """

    @abstractmethod
    def process(self, chunk: bytes) -> bytes:
        """Feed encoded bytes; return whatever raw output is ready."""

    @abstractmethod
    def flush(self) -> bytes:
        """Verify the stream ended cleanly and return remaining output."""


class CodecBase(ABC):
    """
    Abstract base class for codecs.

    Subclasses set ``name`` and ``codec_id``. The id (0-15) is stored in the
    reserved high nibble of the second header byte so decompression can pick
    the right codec.
    """

    name: str = ""
    codec_id: int = -1

    def __init__(self, level: int = None):
        self.level = level

    @abstractmethod
    def compressor(self) -> StreamCompressor:
        """Return a fresh incremental encoder."""

    @abstractmethod
    def decompressor(self) -> StreamDecompressor:
        """Return a fresh incremental decoder."""

    def encode(self, data: bytes) -> bytes:
        return b"".join(self.encode_stream([data]))

    def decode(self, data: bytes) -> bytes:
        """
        Decode a complete payload.

        Raises:
            CodecFormatError: If the payload cannot be reconstructed
        """
        return b"".join(self.decode_stream([data]))

    def encode_stream(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        enc = self.compressor()
        for chunk in chunks:
            out = enc.process(chunk)
            if out:
                yield out
        tail = enc.flush()
        if tail:
            yield tail

    def decode_stream(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        dec = self.decompressor()
        for chunk in chunks:
            out = dec.process(chunk)
            if out:
                yield out
        tail = dec.flush()
        if tail:
            yield tail

    def validate_level(self) -> None:
        """Raise ValueError if the configured level is out of range."""
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(level={self.level!r})"

