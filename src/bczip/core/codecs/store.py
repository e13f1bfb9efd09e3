# ============================================================================
# SOURCEFILE: store.py
# RELPATH: bczip/src/bczip/core/codecs/store.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Identity codec (no compression)
# ============================================================================

from bczip.core.codecs.base import CodecBase, StreamCompressor, StreamDecompressor


class _Passthrough(StreamCompressor, StreamDecompressor):
    def process(self, chunk: bytes) -> bytes:
        return bytes(chunk)

    def flush(self) -> bytes:
        return b""


class StoreCodec(CodecBase):
    """Stores bytes unchanged behind the container header (header id 2)."""

    name = "store"
    codec_id = 2

    def compressor(self) -> StreamCompressor:
        return _Passthrough()

    def decompressor(self) -> StreamDecompressor:
        return _Passthrough()
