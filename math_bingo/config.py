from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path


DEFAULT_HEADER = "Simple Math Bingo Card :-)"
DEFAULT_DATA_FILENAME = "data.txt"
DEFAULT_OUTPUT_NAME = "bingo"

FONT_ENV_VAR = "MATH_BINGO_FONT"
DATA_ENV_VAR = "MATH_BINGO_DATA"


@dataclass(frozen=True)
class BingoConfig:
    rows: int = 5
    cols: int = 5
    num_cards: int = 1
    cards_per_page: int = 1
    header: str | None = None
    seed: int | None = None

    @property
    def use_header(self) -> bool:
        return bool(self.header)

    @property
    def pages(self) -> int:
        return -(-self.num_cards // self.cards_per_page)

    @classmethod
    def from_values(
        cls,
        *,
        rows: float = 5,
        cols: float = 5,
        num_cards: float = 1,
        cards_per_page: float = 1,
        header: str | None = None,
        seed: int | None = None,
    ) -> "BingoConfig":
        num_cards = int(num_cards)
        cards_per_page = int(cards_per_page)
        if num_cards <= 0:
            raise ValueError("num_cards must be > 0")
        if cards_per_page <= 0:
            raise ValueError("cards_per_page must be > 0")

        header = (header or "").strip() or None
        return cls(
            rows=max(1, int(rows)),
            cols=max(1, int(cols)),
            num_cards=num_cards,
            cards_per_page=cards_per_page,
            header=header,
            seed=seed,
        )


DEFAULT_CONFIG = BingoConfig(rows=5, cols=5, num_cards=1, cards_per_page=3, header=DEFAULT_HEADER)


def default_font_path() -> Path | None:
    value = os.environ.get(FONT_ENV_VAR, "").strip()
    return Path(value).expanduser() if value else None


def default_data_path() -> Path:
    value = os.environ.get(DATA_ENV_VAR, "").strip()
    return Path(value).expanduser() if value else Path(DEFAULT_DATA_FILENAME)
