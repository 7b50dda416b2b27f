from pathlib import Path
import sys

import pytest

from math_bingo import cli
from math_bingo.config import DEFAULT_HEADER
from math_bingo.core.parser import PoolSourceError


def _write_data(tmp_path: Path) -> Path:
    path = tmp_path / "data.txt"
    path.write_text("1/2\n3/4\n! from:1 to:30 step:1\n---\nPI\n", encoding="utf-8")
    return path


def test_main_writes_pdf(tmp_path: Path):
    data = _write_data(tmp_path)
    out = tmp_path / "cards"

    code = cli.main(["4", "4", "5", "2", "Math Bingo", "--data", str(data), "--output", str(out), "--seed", "1"])

    assert code == 0
    assert (tmp_path / "cards.pdf").read_bytes().startswith(b"%PDF-")


def test_main_writes_numbered_copies(tmp_path: Path):
    data = _write_data(tmp_path)
    out = tmp_path / "bingo"

    cli.main(["--data", str(data), "--output", str(out), "--copies", "2"])

    assert (tmp_path / "bingo_1.pdf").exists()
    assert (tmp_path / "bingo_2.pdf").exists()
    assert not (tmp_path / "bingo.pdf").exists()


def test_main_missing_data_file(tmp_path: Path):
    with pytest.raises(PoolSourceError):
        cli.main(["--data", str(tmp_path / "missing.txt"), "--output", str(tmp_path / "x")])
    assert not (tmp_path / "x.pdf").exists()


def test_no_positionals_use_default_configuration():
    args = cli._build_parser().parse_args([])
    config = cli._config_from_args(args)
    assert (config.rows, config.cols, config.num_cards, config.cards_per_page) == (5, 5, 1, 3)
    assert config.header == DEFAULT_HEADER


def test_positionals_are_truncated_and_header_optional():
    args = cli._build_parser().parse_args(["6.7", "4.2", "10", "4"])
    config = cli._config_from_args(args)
    assert (config.rows, config.cols, config.num_cards, config.cards_per_page) == (6, 4, 10, 4)
    assert config.header is None


def test_run_reports_errors(tmp_path: Path, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["math-bingo", "--data", str(tmp_path / "missing.txt")])
    with pytest.raises(SystemExit) as excinfo:
        cli.run()
    assert excinfo.value.code == 2
    assert "ERROR: Cannot read data from" in capsys.readouterr().err
