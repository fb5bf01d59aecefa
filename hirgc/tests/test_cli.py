import shutil
import pytest

import decompress_hirgc as cli

def _stage(tmp_path, test_data_dir):
    shutil.copy(test_data_dir / "ref.fa", tmp_path / "ref.fa")
    shutil.copy(test_data_dir / "target.hirgc", tmp_path / "target.hirgc")

def test_cli_writes_output(tmp_path, monkeypatch, test_data_dir):
    _stage(tmp_path, test_data_dir)
    monkeypatch.chdir(tmp_path)
    assert cli.main(["-r", "ref.fa", "-t", "target.hirgc"]) == 0
    out = tmp_path / cli.OUTPUT_FILENAME
    assert out.read_text() == (test_data_dir / "expected.txt").read_text()

@pytest.mark.parametrize("argv, reason", [
    ([], "Invalid number of arguments."),
    (["-r", "ref.fa"], "Invalid number of arguments."),
    (["-r", "ref.fa", "-t", "target.hirgc", "-x"], "Invalid number of arguments."),
    (["-t", "target.hirgc", "-r", "ref.fa"], "Invalid arguments."),
    (["-r", "ref.fa", "-x", "target.hirgc"], "Invalid arguments."),
])
def test_cli_usage(argv, reason, capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    assert exc.value.code == 1
    out = capsys.readouterr().out
    assert f"Error: {reason}" in out
    assert "usage:" in out and "-r" in out and "-t" in out

def test_cli_missing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert cli.main(["-r", "nope.fa", "-t", "nope.txt"]) == 2
    assert "nope.fa" in capsys.readouterr().err
    assert not (tmp_path / cli.OUTPUT_FILENAME).exists()

def test_cli_decode_error_leaves_no_output(tmp_path, monkeypatch, capsys, test_data_dir):
    _stage(tmp_path, test_data_dir)
    (tmp_path / "ref.fa").write_text(">short\nACGT\n")
    monkeypatch.chdir(tmp_path)
    assert cli.main(["-r", "ref.fa", "-t", "target.hirgc"]) == 1
    assert "error:" in capsys.readouterr().err
    assert not (tmp_path / cli.OUTPUT_FILENAME).exists()

def test_cli_file_names_starting_with_dash(tmp_path, monkeypatch, test_data_dir):
    shutil.copy(test_data_dir / "ref.fa", tmp_path / "-ref.fa")
    shutil.copy(test_data_dir / "target.hirgc", tmp_path / "-target.hirgc")
    monkeypatch.chdir(tmp_path)
    assert cli.main(["-r", "-ref.fa", "-t", "-target.hirgc"]) == 0
    out = tmp_path / cli.OUTPUT_FILENAME
    assert out.read_text() == (test_data_dir / "expected.txt").read_text()
