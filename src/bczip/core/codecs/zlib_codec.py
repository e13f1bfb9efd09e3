# ============================================================================
# SOURCEFILE: zlib_codec.py
# RELPATH: bczip/src/bczip/core/codecs/zlib_codec.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Default DEFLATE codec backed by the zlib module
# ============================================================================

import zlib

from bczip.core.codecs.base import CodecBase, StreamCompressor, StreamDecompressor
from bczip.core.exceptions import CodecFormatError


class _ZlibCompressor(StreamCompressor):
    def __init__(self, level: int):
        self._obj = zlib.compressobj(level)

    def process(self, chunk: bytes) -> bytes:
        return self._obj.compress(chunk)

    def flush(self) -> bytes:
        return self._obj.flush(zlib.Z_FINISH)


class _ZlibDecompressor(StreamDecompressor):
    def __init__(self):
        self._obj = zlib.decompressobj()

    def process(self, chunk: bytes) -> bytes:
        if not chunk:
            return b""
        if self._obj.eof:
            raise CodecFormatError("trailing garbage after compressed data")
        try:
            out = self._obj.decompress(chunk)
        except zlib.error as e:
            raise CodecFormatError(str(e))
        if self._obj.unused_data:
            raise CodecFormatError("trailing garbage after compressed data")
        return out

    def flush(self) -> bytes:
        try:
            out = self._obj.flush()
        except zlib.error as e:
            raise CodecFormatError(str(e))
        if not self._obj.eof:
            raise CodecFormatError("unexpected end of compressed data")
        return out


class ZlibCodec(CodecBase):
    """DEFLATE in a zlib wrapper; the default codec (header id 0)."""

    name = "zlib"
    codec_id = 0
    DEFAULT_LEVEL = 9

    def __init__(self, level: int = None):
        super().__init__(self.DEFAULT_LEVEL if level is None else level)

    def compressor(self) -> StreamCompressor:
        return _ZlibCompressor(self.level)

    def decompressor(self) -> StreamDecompressor:
        return _ZlibDecompressor()

    def validate_level(self) -> None:
        if not isinstance(self.level, int) or not -1 <= self.level <= 9:
            raise ValueError(f"zlib level must be between -1 and 9, got {self.level!r}")
