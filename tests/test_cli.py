from __future__ import annotations

import json
from pathlib import Path

import pytest

from triegen import cli


@pytest.fixture()
def corpus(tmp_path: Path) -> Path:
    path = tmp_path / "corpus.txt"
    path.write_text("ababab", encoding="utf-8")
    return path


def test_generates_to_stdout(corpus: Path, capsys: pytest.CaptureFixture[str]) -> None:
    status = cli.main(["1", "6", str(corpus), "--seed", "0"])

    captured = capsys.readouterr()
    assert status == 0
    assert captured.out == "bababa"
    assert "Loaded 6 characters" in captured.err
    assert "5 transitions, 2 contexts" in captured.err
    assert "Emitted 6 characters, 0 window resets" in captured.err


def test_quiet_silences_progress(corpus: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["1", "3", str(corpus), "--quiet"])

    captured = capsys.readouterr()
    assert captured.out == "bab"
    assert captured.err == ""


def test_dump_goes_to_stderr(corpus: Path, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["1", "1", str(corpus), "--quiet", "--dump"])

    captured = capsys.readouterr()
    assert captured.out == "b"
    assert "{0}" in captured.err
    assert "[a]. " in captured.err


def test_same_seed_same_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "corpus.txt"
    path.write_text("the quick brown fox jumps over the lazy dog and the quiet cat", encoding="utf-8")

    cli.main(["2", "200", str(path), "--seed", "11", "--quiet"])
    first = capsys.readouterr().out
    cli.main(["2", "200", str(path), "--seed", "11", "--quiet"])
    second = capsys.readouterr().out

    assert first == second
    assert 0 < len(first) <= 200


def test_short_input_produces_no_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "tiny.txt"
    path.write_text("ab", encoding="utf-8")

    status = cli.main(["4", "10", str(path)])

    captured = capsys.readouterr()
    assert status == 0
    assert captured.out == ""
    assert "10 window resets" in captured.err


def test_config_file_supplies_settings(corpus: Path, tmp_path: Path,
                                       capsys: pytest.CaptureFixture[str]) -> None:
    config = tmp_path / "triegen.json"
    config.write_text(json.dumps({
        "context_length": 1,
        "output_length": 4,
        "input_path": str(corpus),
        "quiet": True,
    }), encoding="utf-8")

    status = cli.main(["--config", str(config)])
    assert status == 0
    assert capsys.readouterr().out == "baba"

    cli.main(["1", "2", "--config", str(config)])
    assert capsys.readouterr().out == "ba"


@pytest.mark.parametrize("argv", [["0", "5"], ["1", "-3"], ["1"], []])
def test_invalid_arguments_exit_with_usage(corpus: Path, argv: list,
                                           capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv + [str(corpus)] if len(argv) == 2 else argv)

    assert excinfo.value.code == 2
    assert "usage: triegen" in capsys.readouterr().err


def test_config_file_with_bad_encoding_type(corpus: Path, tmp_path: Path,
                                            capsys: pytest.CaptureFixture[str]) -> None:
    config = tmp_path / "triegen.json"
    config.write_text(json.dumps({
        "context_length": 1,
        "output_length": 3,
        "input_path": str(corpus),
        "encoding": 5,
    }), encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--config", str(config)])

    assert excinfo.value.code == 2
    assert "encoding must be a string" in capsys.readouterr().err


def test_missing_input_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    status = cli.main(["2", "5", str(tmp_path / "nope.txt")])

    assert status == 1
    assert "cannot read" in capsys.readouterr().err
