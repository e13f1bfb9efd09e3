# ============================================================================
# SOURCEFILE: zstd_codec.py
# RELPATH: bczip/src/bczip/core/codecs/zstd_codec.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Zstandard codec backed by the zstandard package
# ============================================================================

import zstandard as zstd

from bczip.core.codecs.base import CodecBase, StreamCompressor, StreamDecompressor
from bczip.core.exceptions import CodecFormatError


class _ZstdCompressor(StreamCompressor):
    def __init__(self, level: int):
        self._obj = zstd.ZstdCompressor(level=level).compressobj()

    def process(self, chunk: bytes) -> bytes:
        return self._obj.compress(chunk)

    def flush(self) -> bytes:
        return self._obj.flush()


class _ZstdDecompressor(StreamDecompressor):
    """
    Single-frame decoder.

    A decompressobj stops at the end of the first frame; any bytes after it
    are reported as trailing garbage.
    """

    def __init__(self):
        self._obj = zstd.ZstdDecompressor().decompressobj()

    def process(self, chunk: bytes) -> bytes:
        if not chunk:
            return b""
        if self._obj.eof:
            raise CodecFormatError("trailing garbage after compressed data")
        try:
            out = self._obj.decompress(chunk)
        except zstd.ZstdError as e:
            raise CodecFormatError(str(e))
        if self._obj.unused_data:
            raise CodecFormatError("trailing garbage after compressed data")
        return out

    def flush(self) -> bytes:
        if not self._obj.eof:
            raise CodecFormatError("unexpected end of compressed data")
        return b""


class ZstdCodec(CodecBase):
    """Zstandard frames (header id 1)."""

    name = "zstd"
    codec_id = 1
    DEFAULT_LEVEL = 3

    def __init__(self, level: int = None):
        super().__init__(self.DEFAULT_LEVEL if level is None else level)

    def compressor(self) -> StreamCompressor:
        return _ZstdCompressor(self.level)

    def decompressor(self) -> StreamDecompressor:
        return _ZstdDecompressor()

    def validate_level(self) -> None:
        top = zstd.MAX_COMPRESSION_LEVEL
        if not isinstance(self.level, int) or not 1 <= self.level <= top:
            raise ValueError(f"zstd level must be between 1 and {top}, got {self.level!r}")
