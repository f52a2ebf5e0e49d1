import pytest

from huffman_compressor import cli


def _run(*argv):
	return cli.main([str(a) for a in argv])


def test_compress_then_uncompress(tmp_path, capsys):
	source = tmp_path / "input.txt"
	packed = tmp_path / "input.huff"
	restored = tmp_path / "restored.txt"
	source.write_bytes(b"Hello World!" * 30)

	assert _run("-i", source, "-o", packed, "compress") == 0
	out = capsys.readouterr().out
	assert f"Compressing {source}..." in out
	assert f"Writing compressed file {packed}..." in out

	assert _run("-i", packed, "-o", restored, "uncompress") == 0
	out = capsys.readouterr().out
	assert f"Uncompressing {packed}..." in out
	assert restored.read_bytes() == source.read_bytes()


def test_stats(tmp_path, capsys):
	source = tmp_path / "input.bin"
	source.write_bytes(b"a" * 800)

	assert _run("--stats", "-i", source, "-o", tmp_path / "out", "compress") == 0
	out = capsys.readouterr().out
	assert "Input bytes:             800" in out
	assert "Compression ratio:" in out


def test_missing_input(tmp_path, capsys):
	assert _run("-i", tmp_path / "nope", "-o", tmp_path / "out", "compress") == 1
	assert "cannot read input file" in capsys.readouterr().err
	assert not (tmp_path / "out").exists()


def test_corrupt_input(tmp_path, capsys):
	source = tmp_path / "bad.huff"
	source.write_bytes(b"\x00\x01\x02")

	assert _run("-i", source, "-o", tmp_path / "out", "uncompress") == 1
	assert "container truncated" in capsys.readouterr().err
	assert not (tmp_path / "out").exists()


def test_unknown_command(tmp_path):
	with pytest.raises(SystemExit) as excinfo:
		_run("-i", tmp_path / "a", "-o", tmp_path / "b", "explode")
	assert excinfo.value.code == 2
