"""Tests for bulk_encoder/buffer.py — BodyBuffer writes, truncation and readers."""

import pytest

from bulk_encoder.buffer import BodyBuffer


class TestWrite:
    def test_write_appends(self):
        buf = BodyBuffer()
        buf.write(b"abc")
        buf.write(b"def\n")
        assert buf.getvalue() == b"abcdef\n"
        assert len(buf) == 7

    def test_write_returns_length(self):
        buf = BodyBuffer()
        assert buf.write(b"hello") == 5

    def test_initial_content(self):
        buf = BodyBuffer(b"existing\n")
        buf.write(b"more\n")
        assert buf.getvalue() == b"existing\nmore\n"


class TestTruncate:
    def test_truncate_to_position(self):
        buf = BodyBuffer()
        buf.write(b"first\n")
        pos = len(buf)
        buf.write(b"partial")
        buf.truncate(pos)
        assert buf.getvalue() == b"first\n"

    def test_truncate_to_current_length_is_noop(self):
        buf = BodyBuffer(b"data")
        buf.truncate(4)
        assert buf.getvalue() == b"data"

    def test_truncate_out_of_range(self):
        buf = BodyBuffer(b"data")
        with pytest.raises(ValueError):
            buf.truncate(10)
        with pytest.raises(ValueError):
            buf.truncate(-1)

    def test_reset_empties(self):
        buf = BodyBuffer(b"data")
        buf.reset()
        assert len(buf) == 0
        assert buf.getvalue() == b""


class TestReader:
    def test_reader_reads_content(self):
        buf = BodyBuffer(b"line one\nline two\n")
        assert buf.reader().read() == b"line one\nline two\n"

    def test_reader_is_a_snapshot(self):
        buf = BodyBuffer(b"before\n")
        stream = buf.reader()
        buf.write(b"after\n")
        assert stream.read() == b"before\n"

    def test_flush_is_noop(self):
        buf = BodyBuffer(b"x")
        buf.flush()
        assert buf.getvalue() == b"x"
