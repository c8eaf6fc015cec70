"""Tests for the command-line front end."""

import io

import pytest

from cli import CountingStream, build_parser, main, run


def parse(*argv):
    return build_parser().parse_args(list(argv))


class TestParser:
    def test_defaults(self):
        args = parse()
        assert not args.decompress
        assert args.algorithm == "lz77"
        assert args.format == "xml"
        assert args.input == "-"
        assert args.output == "-"

    def test_decompress_flag(self):
        assert parse("-d").decompress
        assert not parse("-c").decompress

    def test_modes_are_exclusive(self):
        with pytest.raises(SystemExit):
            parse("-c", "-d")

    def test_unknown_algorithm(self):
        with pytest.raises(SystemExit):
            parse("-a", "gzip")


class TestRun:
    def test_streams_round_trip(self, text_data):
        packed = io.BytesIO()
        run(parse("-a", "lzw", "-f", "bits"), io.BytesIO(text_data), packed)
        assert packed.getvalue().startswith(b"DBLT\x03lzw")

        restored = io.BytesIO()
        run(parse("-d", "-f", "bits"), io.BytesIO(packed.getvalue()), restored)
        assert restored.getvalue() == text_data

    def test_verbose_reports_sizes(self, text_data):
        err = io.StringIO()
        run(parse("-v"), io.BytesIO(text_data), io.BytesIO(), err)
        lines = err.getvalue().splitlines()
        assert lines[0] == "Compressing with lz77/xml"
        assert lines[1].startswith("Size ")


class TestMain:
    def test_files_round_trip(self, tmp_path, random_data):
        source = tmp_path / "data.bin"
        packed = tmp_path / "data.xml"
        restored = tmp_path / "data.out"
        source.write_bytes(random_data)

        assert main(["-a", "lzw", str(source), str(packed)]) == 0
        assert packed.read_bytes().startswith(b"<?xml")
        assert main(["-d", "-v", str(packed), str(restored)]) == 0
        assert restored.read_bytes() == random_data

    def test_verbose_decompress_names_algorithm(self, tmp_path, capsys):
        source = tmp_path / "in"
        source.write_bytes(b"hello hello hello")
        main(["-f", "bits", str(source), str(tmp_path / "packed")])
        capsys.readouterr()
        assert main(["-d", "-f", "bits", "-v", str(tmp_path / "packed"), str(tmp_path / "out")]) == 0
        assert "Decompressing lz77/bits data" in capsys.readouterr().err

    def test_corrupt_input(self, tmp_path, capsys):
        source = tmp_path / "bad.xml"
        source.write_bytes(b"<compressedData algorithm='lz77'><oops/></compressedData>")
        assert main(["-d", str(source), str(tmp_path / "out")]) == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nowhere"), str(tmp_path / "out")]) == 1
        assert "Error: " in capsys.readouterr().err


def test_counting_stream():
    stream = CountingStream(io.BytesIO(b"abcdef"))
    stream.read(2)
    buffer = bytearray(3)
    assert stream.readinto(buffer) == 3
    assert stream.count == 5
    sink = CountingStream(io.BytesIO())
    sink.write(b"xyz")
    assert sink.count == 3
