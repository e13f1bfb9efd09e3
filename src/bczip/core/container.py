# ============================================================================
# SOURCEFILE: container.py
# RELPATH: bczip/src/bczip/core/container.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Container framing with codec registry and header detection
# ============================================================================

"""
Container Module.

A bczip container is a 2-byte header followed by the codec payload:

    byte 0          0xBC
    byte 1, low     0x9 (format tag)
    byte 1, high    codec id (reserved for the in-format check)

The in-format check looks only at the fixed fields and runs before any
codec sees the payload. The codec id then selects the decoder.
"""

from typing import BinaryIO, Dict, Iterable, Iterator, List, Optional, Tuple, Type

from bczip.core.codecs.base import CodecBase
from bczip.core.codecs.store import StoreCodec
from bczip.core.codecs.zlib_codec import ZlibCodec
from bczip.core.codecs.zstd_codec import ZstdCodec
from bczip.core.exceptions import CodecFormatError, CodecNotFoundError, NotInFormatError
from bczip.core.models import STDIN_NAME


MAGIC = 0xBC
FORMAT_TAG = 0x9
HEADER_SIZE = 2


class CodecRegistry:
    """
    Registry of available codecs.

    Codecs are looked up by name (configuration) or by the id stored in the
    container header (decompression).
    """

    def __init__(self):
        """Initialize registry with built-in codecs."""
        self._codecs: Dict[str, Type[CodecBase]] = {}
        self._register_builtin_codecs()

    def _register_builtin_codecs(self):
        self.register(ZlibCodec)
        self.register(ZstdCodec)
        self.register(StoreCodec)

    def register(self, codec_class: Type[CodecBase]) -> None:
        """
        Register a codec class.

        Raises:
            TypeError: If codec_class is not a CodecBase subclass
            ValueError: If its id does not fit the header nibble or is taken
                by a codec with another name
        """
        if not isinstance(codec_class, type) or not issubclass(codec_class, CodecBase):
            raise TypeError(f"{codec_class!r} must be a CodecBase subclass")

        if not 0 <= codec_class.codec_id <= 0xF:
            raise ValueError(f"Codec id {codec_class.codec_id} does not fit in 4 bits")

        for name, existing in self._codecs.items():
            if existing.codec_id == codec_class.codec_id and name != codec_class.name:
                raise ValueError(f"Codec id {codec_class.codec_id} already used by '{name}'")

        # Re-registration under the same name replaces the previous class
        self._codecs[codec_class.name] = codec_class

    def get(self, codec_name: str, level: int = None) -> CodecBase:
        """
        Get a codec instance by name.

        Raises:
            CodecNotFoundError: If no codec has that name
        """
        if codec_name not in self._codecs:
            raise CodecNotFoundError(codec_name, self.list_codecs())
        return self._codecs[codec_name](level=level)

    def get_by_id(self, codec_id: int) -> CodecBase:
        """
        Get a codec instance by header id, with its default level.

        Raises:
            CodecFormatError: If no codec has that id
        """
        for codec_class in self._codecs.values():
            if codec_class.codec_id == codec_id:
                return codec_class()
        raise CodecFormatError(f"unknown codec id {codec_id}")

    def list_codecs(self) -> List[str]:
        return list(self._codecs.keys())


def make_header(codec_id: int = 0) -> bytes:
    if not 0 <= codec_id <= 0xF:
        raise ValueError(f"Codec id {codec_id} does not fit in 4 bits")
    return bytes((MAGIC, (codec_id << 4) | FORMAT_TAG))


def is_in_format(data: bytes) -> bool:
    """True iff ``data`` starts with a valid container header."""
    return len(data) >= HEADER_SIZE and data[0] == MAGIC and (data[1] & 0x0F) == FORMAT_TAG


def frame(payload: bytes, codec_id: int = 0) -> bytes:
    return make_header(codec_id) + payload


def unframe(data: bytes, path: str = STDIN_NAME) -> Tuple[int, bytes]:
    """
    Split a container into codec id and payload.

    Raises:
        NotInFormatError: If ``data`` is shorter than the header or the
            fixed fields do not match
    """
    if not is_in_format(data):
        raise NotInFormatError(path)
    return data[1] >> 4, data[HEADER_SIZE:]


def read_header(stream: BinaryIO, path: str = STDIN_NAME) -> int:
    """
    Consume the header from a binary stream and return the codec id.

    Raises:
        NotInFormatError: On a short read or mismatching fixed fields
    """
    head = stream.read(HEADER_SIZE)
    # Pipes may return short reads
    while head and len(head) < HEADER_SIZE:
        more = stream.read(HEADER_SIZE - len(head))
        if not more:
            break
        head += more
    codec_id, _ = unframe(head, path)
    return codec_id


class Container:
    """
    Frames codec output and unframes container input.

    Compression always uses the configured codec; decompression uses
    whichever registered codec the header names.

    A header whose codec id has no registered codec passes the in-format
    check but is rejected with CodecFormatError before any output is
    produced; ids are never guessed.
    """

    def __init__(self, codec: Optional[CodecBase] = None, registry: Optional[CodecRegistry] = None):
        self.registry = registry or CodecRegistry()
        self.codec = codec or self.registry.get(ZlibCodec.name)

    def encode_stream(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        """Yield the header followed by the encoded payload."""
        yield make_header(self.codec.codec_id)
        yield from self.encode_payload(chunks)

    def encode_payload(self, chunks: Iterable[bytes]) -> Iterator[bytes]:
        return self.codec.encode_stream(chunks)

    def decode_payload(self, codec_id: int, chunks: Iterable[bytes]) -> Iterator[bytes]:
        """
        Yield decoded bytes of a payload whose header has been consumed.

        Raises:
            CodecFormatError: If the id is unknown or the payload is corrupt
        """
        codec = self.registry.get_by_id(codec_id)
        return codec.decode_stream(chunks)

    def pack(self, data: bytes) -> bytes:
        return b"".join(self.encode_stream([data]))

    def unpack(self, data: bytes, path: str = STDIN_NAME) -> bytes:
        """
        Decode a complete container.

        Raises:
            NotInFormatError: On a header mismatch
            CodecFormatError: On a corrupt payload
        """
        codec_id, payload = unframe(data, path)
        try:
            return b"".join(self.decode_payload(codec_id, [payload]))
        except CodecFormatError as e:
            raise e.for_path(path)
