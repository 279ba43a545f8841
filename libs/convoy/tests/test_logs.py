"""Unit tests for log retrieval."""

import pytest

from convoy.errors import LogNotFound
from convoy.logs import follow, tail_lines
from convoy.runtime import Context


class TestTailLines:
    """Tests for tail_lines."""

    def test_last_lines(self, tmp_path):
        """Test only the requested number of trailing lines is returned."""
        log = tmp_path / "proxy.log"
        log.write_text("".join(f"line {i}\n" for i in range(10)))

        assert tail_lines(log, 3) == ["line 7", "line 8", "line 9"]

    def test_fewer_lines_than_requested(self, tmp_path):
        """Test short files are returned whole."""
        log = tmp_path / "proxy.log"
        log.write_text("only\n")

        assert tail_lines(log, 50) == ["only"]

    def test_zero_lines(self, tmp_path):
        """Test asking for nothing returns nothing."""
        log = tmp_path / "proxy.log"
        log.write_text("a\nb\n")

        assert tail_lines(log, 0) == []

    def test_missing_file(self, tmp_path):
        """Test a missing log raises LogNotFound."""
        with pytest.raises(LogNotFound):
            tail_lines(tmp_path / "missing.log")


class TestFollow:
    """Tests for follow."""

    def test_streams_appended_lines_until_cancelled(self, tmp_path, make_clock):
        """Test lines appended after following starts are yielded."""
        log = tmp_path / "worker.log"
        log.write_text("before\n")
        ctx = Context()
        appended = iter(["first\n", "second\n"])

        def on_sleep(clock):
            chunk = next(appended, None)
            if chunk is None:
                ctx.cancel()
                return
            with open(log, "a") as f:
                f.write(chunk)

        lines = list(follow(log, ctx, clock=make_clock(on_sleep=on_sleep)))

        assert lines == ["first", "second"]

    def test_cancelled_context_yields_nothing(self, tmp_path, clock):
        """Test following stops immediately on a cancelled context."""
        log = tmp_path / "worker.log"
        log.write_text("before\n")
        ctx = Context()
        ctx.cancel()

        assert list(follow(log, ctx, clock=clock)) == []

    def test_missing_file(self, tmp_path, clock):
        """Test following a missing log raises LogNotFound."""
        with pytest.raises(LogNotFound):
            next(follow(tmp_path / "missing.log", Context(), clock=clock))
