# -*- coding: utf-8 -*-
"""Tests for IO modules (binary primitives, world files)."""
import io
import os
import tempfile
import pytest
from grdl_geocam.exceptions import FormatError
from grdl_geocam.io.binary import BinaryReader, BinaryWriter
from grdl_geocam.io.world_file import read_world_file, write_world_file


class TestBinary:
    def test_primitives(self):
        buf = io.BytesIO()
        writer = BinaryWriter(buf)
        writer.write_short(-2)
        writer.write_int(-70000)
        writer.write_uint(4)
        writer.write_byte(2)
        writer.write_double(0.1)
        writer.write_bool(True)
        assert len(buf.getvalue()) == 2 + 4 + 4 + 1 + 8 + 1

        buf.seek(0)
        reader = BinaryReader(buf)
        assert reader.read_short() == -2
        assert reader.read_int() == -70000
        assert reader.read_uint() == 4
        assert reader.read_byte() == 2
        assert reader.read_double() == 0.1
        assert reader.read_bool() is True

    def test_little_endian(self):
        buf = io.BytesIO()
        BinaryWriter(buf).write_short(1)
        assert buf.getvalue() == b'\x01\x00'

    def test_short_read(self):
        with pytest.raises(FormatError):
            BinaryReader(io.BytesIO(b'\x00\x00\x00')).read_double()


class TestWorldFile:
    def test_write_read(self):
        coefficients = (0.000277777777778, 0.0, 0.0, -0.000277777777778,
                        -73.0001388888889, 36.0001388888889)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "tile.tfw")
            write_world_file(path, coefficients)
            with open(path) as f:
                lines = f.read().splitlines()
            values = read_world_file(path)
        assert len(lines) == 6
        assert lines[1] == "0"
        assert values == pytest.approx(coefficients, rel=1e-11)

    def test_precision(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "tile.tfw")
            write_world_file(path, (1.0 / 3.0, 0, 0, -1, 0, 0))
            with open(path) as f:
                first = f.readline().strip()
        assert first == "0.333333333333"

    def test_wrong_count(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ValueError):
                write_world_file(os.path.join(tmpdir, "x.tfw"), [1.0, 2.0])

    def test_extra_tokens_ignored(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "tile.wld")
            with open(path, 'w') as f:
                f.write("1 0 0 -1 10 20 trailing\n")
            assert read_world_file(path) == (1.0, 0.0, 0.0, -1.0, 10.0, 20.0)

    def test_too_few_values(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "short.tfw")
            with open(path, 'w') as f:
                f.write("1.0\n0.0\n0.0\n")
            with pytest.raises(FormatError):
                read_world_file(path)

    def test_garbage(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "bad.tfw")
            with open(path, 'w') as f:
                f.write("1.0\nabc\n0.0\n-1.0\n0.0\n0.0\n")
            with pytest.raises(FormatError):
                read_world_file(path)

    def test_missing_file(self):
        with pytest.raises(FormatError):
            read_world_file("/nonexistent/dir/missing.tfw")
