# ============================================================================
# SOURCEFILE: __init__.py
# RELPATH: bczip/src/bczip/core/codecs/__init__.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Built-in codecs
# ============================================================================

from bczip.core.codecs.base import CodecBase, StreamCompressor, StreamDecompressor
from bczip.core.codecs.store import StoreCodec
from bczip.core.codecs.zlib_codec import ZlibCodec
from bczip.core.codecs.zstd_codec import ZstdCodec

__all__ = [
    "CodecBase",
    "StreamCompressor",
    "StreamDecompressor",
    "StoreCodec",
    "ZlibCodec",
    "ZstdCodec",
]
