import pytest

from math_bingo.core.output import save_pdf


def test_save_single_copy(tmp_path):
    paths = save_pdf(b"%PDF-1.4 test", tmp_path / "bingo")
    assert paths == [tmp_path / "bingo.pdf"]
    assert paths[0].read_bytes() == b"%PDF-1.4 test"


def test_save_keeps_existing_pdf_suffix(tmp_path):
    paths = save_pdf(b"%PDF-", tmp_path / "cards.pdf")
    assert paths == [tmp_path / "cards.pdf"]


def test_save_numbered_copies(tmp_path):
    paths = save_pdf(b"%PDF-1.4 copies", tmp_path / "bingo", copies=3)

    assert paths == [tmp_path / "bingo_1.pdf", tmp_path / "bingo_2.pdf", tmp_path / "bingo_3.pdf"]
    assert not (tmp_path / "bingo.pdf").exists()
    for path in paths:
        assert path.read_bytes() == b"%PDF-1.4 copies"


def test_save_rejects_zero_copies(tmp_path):
    with pytest.raises(ValueError):
        save_pdf(b"%PDF-", tmp_path / "bingo", copies=0)
    assert list(tmp_path.iterdir()) == []
