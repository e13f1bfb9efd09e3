# ============================================================================
# FILE: test_paths.py
# RELPATH: bczip/tests/unit/test_paths.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Unit tests for destination path resolution
# ============================================================================

import pytest

from bczip.core.exceptions import AlreadyHasSuffixError, UnknownSuffixError
from bczip.core.models import ErrorKind
from bczip.core.paths import SuffixResolver, compress_path, decompress_path


class TestCompressPath:
    """Tests for appending the extension."""

    @pytest.mark.parametrize("src,expected", [
        ("a", "a.bc"),
        ("a.txt", "a.txt.bc"),
        ("dir/a", "dir/a.bc"),
        ("a.BC", "a.BC.bc"),
        ("a.bcx", "a.bcx.bc"),
    ])
    def test_appends_suffix(self, src, expected):
        assert compress_path(src) == expected

    def test_rejects_existing_suffix(self):
        with pytest.raises(AlreadyHasSuffixError) as exc:
            compress_path("a.bc")
        assert str(exc.value) == "'a.bc' already has .bc suffix"
        assert exc.value.kind is ErrorKind.ALREADY_HAS_SUFFIX


class TestDecompressPath:
    """Tests for stripping the extension."""

    @pytest.mark.parametrize("src,expected", [
        ("a.bc", "a"),
        ("a.txt.bc", "a.txt"),
        ("dir/a.bc", "dir/a"),
        ("a.bc.bc", "a.bc"),
    ])
    def test_strips_suffix(self, src, expected):
        assert decompress_path(src) == expected

    @pytest.mark.parametrize("src", ["a", "a.txt", "a.BC", "a.bc.txt", ".bc", "bc"])
    def test_rejects_unknown_suffix(self, src):
        with pytest.raises(UnknownSuffixError) as exc:
            decompress_path(src)
        assert str(exc.value) == f"'{src}' has unknown suffix"

    @pytest.mark.parametrize("src", ["a", "x.y", "dir/name"])
    def test_compress_then_decompress_restores_name(self, src):
        assert decompress_path(compress_path(src)) == src


class TestSuffixResolver:
    """Tests for resolvers with other extensions."""

    def test_custom_extension(self):
        resolver = SuffixResolver("zz")
        assert resolver.suffix == ".zz"
        assert resolver.compress_path("f") == "f.zz"
        assert resolver.decompress_path("f.zz") == "f"

    def test_wrapper_with_custom_extension(self):
        assert compress_path("f", extension="zz") == "f.zz"

    @pytest.mark.parametrize("extension", ["", ".bc", "a/b"])
    def test_invalid_extension(self, extension):
        with pytest.raises(ValueError):
            SuffixResolver(extension)
