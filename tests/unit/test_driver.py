# ============================================================================
# FILE: test_driver.py
# RELPATH: bczip/tests/unit/test_driver.py
# PROJECT: bczip
# VERSION: 1.0.0
# LIFECYCLE: Stable
# DESCRIPTION: Unit tests for argument iteration and reporting
# ============================================================================

"""
Unit tests for Driver.

Tests ordering of jobs and diagnostics, quiet and verbose reporting, and
the implicit standard-input job.
"""

from bczip.core.codecs import StoreCodec
from bczip.core.models import GlobalOptions, Success


class TestDriverOrdering:
    """Tests for sequential processing."""

    def test_failure_does_not_stop_later_arguments(self, console, make_driver, temp_dir):
        good = temp_dir / "good"
        good.write_bytes(b"data")
        missing = temp_dir / "missing"

        summary = make_driver(console).run([str(missing), str(good)], GlobalOptions())

        assert summary.as_stats() == {"processed": 1, "skipped": 0, "errors": 1}
        assert (temp_dir / "good.bc").exists()
        assert console.err == f"bczip: no such file '{missing}'\n"

    def test_diagnostics_in_argument_order(self, console, make_driver, temp_dir):
        a = temp_dir / "a"
        b = temp_dir / "b.bc"
        b.write_bytes(b"x")

        make_driver(console).run([str(a), str(b)], GlobalOptions())

        assert console.err.splitlines() == [
            f"bczip: no such file '{a}'",
            f"bczip: '{b}' already has .bc suffix",
        ]

    def test_outcomes_keep_order(self, console, make_driver, temp_dir):
        names = []
        for name in ("c", "a", "b"):
            path = temp_dir / name
            path.write_bytes(name.encode())
            names.append(str(path))

        summary = make_driver(console).run(names, GlobalOptions(keep=True))

        assert [o.source for o in summary.outcomes] == names

    def test_empty_arguments_read_stdin(self, make_console, make_driver):
        console = make_console(b"abc")

        summary = make_driver(console, codec=StoreCodec()).run([], GlobalOptions())

        assert summary.outcomes[0].source == "stdin"
        assert console.out == b"\xbc\x29abc"

    def test_repeated_argument_second_fails(self, console, make_driver, temp_dir):
        path = temp_dir / "twice"
        path.write_bytes(b"x")

        summary = make_driver(console).run([str(path), str(path)], GlobalOptions())

        assert summary.processed == 1
        assert summary.errors == 1


class TestDriverReporting:
    """Tests for quiet and verbose output."""

    def test_quiet_suppresses_errors(self, console, make_driver, temp_dir):
        summary = make_driver(console).run([str(temp_dir / "missing")], GlobalOptions(quiet=True))

        assert summary.errors == 1
        assert console.err == ""

    def test_verbose_line(self, console, make_driver, sample_file):
        dest = f"{sample_file}.bc"

        make_driver(console, codec=StoreCodec()).run([str(sample_file)], GlobalOptions(verbose=True))

        # 24 bytes in, 26 bytes out
        assert console.out == f"bczip: '{sample_file}'\t-8.3% replaced with '{dest}'\n".encode()

    def test_verbose_decompress(self, console, make_driver, temp_dir):
        src = temp_dir / "f.bc"
        src.write_bytes(b"\xbc\x29" + b"x" * 98)

        make_driver(console).run([str(src)], GlobalOptions(verbose=True, decompress=True))

        expected = f"bczip: '{src}'\t2.0% replaced with '{temp_dir / 'f'}'\n"
        assert console.out == expected.encode()

    def test_verbose_empty_source(self, console, make_driver, temp_dir):
        src = temp_dir / "e"
        src.write_bytes(b"")

        make_driver(console, codec=StoreCodec()).run([str(src)], GlobalOptions(verbose=True))

        assert b"\t0.0% replaced with" in console.out

    def test_verbose_silent_for_stdout(self, console, make_driver, sample_file):
        make_driver(console, codec=StoreCodec()).run(
            [str(sample_file)], GlobalOptions(verbose=True, to_stdout=True)
        )

        assert b"replaced with" not in console.out

    def test_quiet_overrides_verbose(self, console, make_driver, sample_file):
        make_driver(console).run([str(sample_file)], GlobalOptions(verbose=True, quiet=True))

        assert console.out == b""

    def test_skipped_has_no_diagnostic(self, make_console, make_driver, sample_file):
        (sample_file.parent / "hello.txt.bc").write_bytes(b"old")
        console = make_console(b"n\n")

        summary = make_driver(console).run([str(sample_file)], GlobalOptions(verbose=True))

        assert summary.skipped == 1
        assert console.err == ""
        assert b"replaced with" not in console.out

    def test_report_success_without_verbose(self, console, make_driver):
        driver = make_driver(console)
        driver.report(Success("a", 10, 5, "a.bc"), GlobalOptions())

        assert console.out == b""
