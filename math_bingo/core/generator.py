from __future__ import annotations

from collections import deque
import logging
import random
from typing import Protocol

from ..config import BingoConfig
from .layout import CardGeometry
from .parser import parse_pool_text


logger = logging.getLogger(__name__)


class CardSurface(Protocol):
    def set_line_width(self, width: float) -> None: ...

    def draw_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, *, line_width: float) -> None: ...

    def draw_text_box(
        self,
        text: str,
        *,
        x: float,
        y: float,
        width: float,
        height: float,
        font_size: float,
        leading: float,
    ) -> None: ...

    def new_page(self) -> None: ...


def header_word(words: list[str], col: int, cols: int) -> str:
    idx = col - (cols - len(words)) // 2
    if idx < 0 or idx >= len(words):
        return ""
    return words[idx]


def _pop_value(priority: deque[str], filler: deque[str]) -> str:
    if priority:
        return priority.popleft()
    if filler:
        return filler.popleft()
    return ""


def _layout_card(
    surface: CardSurface,
    pool_text: str,
    geometry: CardGeometry,
    config: BingoConfig,
    coordinates: list[tuple[int, int]],
    card_index: int,
    rng: random.Random,
) -> None:
    pools = parse_pool_text(pool_text, rng=rng)
    priority = deque(pools.priority)
    filler = deque(pools.filler)
    words = config.header.split() if config.header else []
    header_row = geometry.rows - 1

    # Random walk so the priority values land on random cells before filler.
    for row, col in rng.sample(coordinates, k=len(coordinates)):
        x, y = geometry.cell_origin(card_index, row, col)
        is_header = config.use_header and row == header_row

        surface.draw_rect(x, y, geometry.cell_width, geometry.cell_height)
        if is_header:
            surface.draw_line(x, y, x + geometry.cell_width, y, line_width=2.0 * geometry.line_width)

        text = header_word(words, col, geometry.cols) if is_header else _pop_value(priority, filler)

        box = geometry.text_box(x, y, header=is_header)
        surface.draw_text_box(
            text,
            x=box.x,
            y=box.y,
            width=box.width,
            height=box.height,
            font_size=geometry.font_size,
            leading=geometry.leading,
        )


def layout_cards(
    surface: CardSurface,
    pool_text: str,
    config: BingoConfig,
    *,
    rng: random.Random | None = None,
) -> int:
    """Draw every card onto `surface` and return how many were generated."""
    if rng is None:
        rng = random.Random(config.seed)

    geometry = CardGeometry.compute(rows=config.rows, cols=config.cols, cards_per_page=config.cards_per_page)
    logger.debug(
        "Cell %.1fx%.1f pt, gap %.1f pt, line width %.2f, leading %.2f",
        geometry.cell_width,
        geometry.cell_height,
        geometry.card_gap,
        geometry.line_width,
        geometry.leading,
    )

    coordinates = [(row, col) for row in range(geometry.rows) for col in range(geometry.cols)]
    generated = 0

    for page in range(config.pages):
        if page:
            surface.new_page()
        surface.set_line_width(geometry.line_width)

        for card_index in range(config.cards_per_page):
            _layout_card(surface, pool_text, geometry, config, coordinates, card_index, rng)
            generated += 1
            if generated == config.num_cards:
                break

        logger.debug("Page %d/%d done (%d cards so far)", page + 1, config.pages, generated)

    logger.info("Generated %d bingo cards on %d pages", generated, config.pages)
    return generated
