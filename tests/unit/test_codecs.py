# ============================================================================
# FILE: test_codecs.py
# RELPATH: bczip/tests/unit/test_codecs.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Unit tests for the built-in codecs
# ============================================================================

"""
Unit tests for codecs.

Covers whole-buffer and chunked operation, level validation and the
corrupt/truncated/trailing-data failure modes of each decoder.
"""

import zlib

import pytest

from bczip.core.codecs import CodecBase, StoreCodec, ZlibCodec, ZstdCodec
from bczip.core.exceptions import CodecFormatError


SAMPLE = b"Hello world!" * 50 + bytes(range(256))


def _chunks(data, size):
    return [data[i:i + size] for i in range(0, len(data), size)]


class TestCodecContract:
    """Behaviour shared by every codec."""

    @pytest.mark.parametrize("codec_class", [ZlibCodec, ZstdCodec, StoreCodec])
    def test_chunked_decode_matches_input(self, codec_class):
        codec = codec_class()
        encoded = codec.encode(SAMPLE)

        decoded = b"".join(codec.decode_stream(_chunks(encoded, 7)))

        assert decoded == SAMPLE

    @pytest.mark.parametrize("codec_class", [ZlibCodec, ZstdCodec, StoreCodec])
    def test_empty_input(self, codec_class):
        codec = codec_class()
        assert codec.decode(codec.encode(b"")) == b""

    def test_ids_are_distinct_nibbles(self):
        ids = {ZlibCodec.codec_id, ZstdCodec.codec_id, StoreCodec.codec_id}
        assert ids == {0, 1, 2}

    def test_base_is_abstract(self):
        with pytest.raises(TypeError):
            CodecBase()

    def test_repr_shows_level(self):
        assert repr(ZlibCodec(level=4)) == "ZlibCodec(level=4)"


class TestZlibCodec:
    """Tests for the default DEFLATE codec."""

    def test_default_level(self):
        assert ZlibCodec().level == 9

    def test_payload_is_zlib_stream(self):
        assert zlib.decompress(ZlibCodec().encode(SAMPLE)) == SAMPLE

    def test_compresses_repetitive_data(self):
        data = b"a" * 10000
        assert len(ZlibCodec().encode(data)) < len(data) // 10

    @pytest.mark.parametrize("level", [-1, 0, 9])
    def test_valid_levels(self, level):
        ZlibCodec(level=level).validate_level()

    @pytest.mark.parametrize("level", [10, -2, "9"])
    def test_invalid_levels(self, level):
        with pytest.raises(ValueError):
            ZlibCodec(level=level).validate_level()

    def test_corrupt_payload(self):
        with pytest.raises(CodecFormatError):
            ZlibCodec().decode(b"\x00\x01\x02\x03garbage")

    def test_truncated_payload(self):
        encoded = ZlibCodec().encode(SAMPLE)
        with pytest.raises(CodecFormatError) as exc:
            ZlibCodec().decode(encoded[:-4])
        assert "unexpected end" in exc.value.reason

    def test_trailing_garbage(self):
        encoded = ZlibCodec().encode(SAMPLE)
        with pytest.raises(CodecFormatError) as exc:
            ZlibCodec().decode(encoded + b"junk")
        assert "trailing garbage" in exc.value.reason

    def test_trailing_garbage_in_separate_chunk(self):
        encoded = ZlibCodec().encode(SAMPLE)
        with pytest.raises(CodecFormatError):
            b"".join(ZlibCodec().decode_stream([encoded, b"junk"]))

    def test_empty_payload_is_truncated(self):
        with pytest.raises(CodecFormatError):
            ZlibCodec().decode(b"")


class TestZstdCodec:
    """Tests for the zstandard codec."""

    def test_default_level(self):
        assert ZstdCodec().level == 3

    def test_frame_magic(self):
        # Zstandard frame magic number, little endian
        assert ZstdCodec().encode(SAMPLE)[:4] == b"\x28\xb5\x2f\xfd"

    @pytest.mark.parametrize("level", [0, -5, "3"])
    def test_invalid_levels(self, level):
        with pytest.raises(ValueError):
            ZstdCodec(level=level).validate_level()

    def test_valid_level(self):
        ZstdCodec(level=19).validate_level()

    def test_corrupt_payload(self):
        with pytest.raises(CodecFormatError):
            ZstdCodec().decode(b"not a zstd frame at all")

    def test_truncated_payload(self):
        encoded = ZstdCodec().encode(SAMPLE)
        with pytest.raises(CodecFormatError):
            ZstdCodec().decode(encoded[:len(encoded) // 2])

    def test_trailing_garbage(self):
        encoded = ZstdCodec().encode(SAMPLE)
        with pytest.raises(CodecFormatError):
            ZstdCodec().decode(encoded + b"junk")


class TestStoreCodec:
    """Tests for the identity codec."""

    def test_encode_is_identity(self):
        assert StoreCodec().encode(SAMPLE) == SAMPLE

    def test_level_is_ignored(self):
        StoreCodec(level=123).validate_level()
