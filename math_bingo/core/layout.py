"""
Card geometry.

All sizes are in PDF points and scaled against a reference configuration of
two 5x5 cards on an A4 page with a 1 cm margin, so that stroke width and text
leading keep the same visual density for any grid or card count.

Coordinates use the PDF convention: the origin is the bottom-left corner of
the usable page area, cards stack upward from the bottom margin and rows stack
upward within a card.
"""

from __future__ import annotations

from dataclasses import dataclass
import math

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm


PAGE_MARGIN = 1 * cm

# Gap between cards is 1 cm for 2 cards per page and shrinks with more cards.
CARD_GAP_BASE = 1 * cm
CARD_GAP_BASE_NUM = 2.0

# Approximate cell area of a 5x5 grid with 2 cards per page.
LINE_BASE_AREA = 8150.0
LINE_BASE_WIDTH = 3.0
LINE_BASE_SPACING = 5.0

TEXT_BOX_WIDTH = 0.9
# Text boxes are at least this many times wider than high, so short values
# don't get a gigantic font size.
TEXT_BOX_WH_RATIO = 8.5
HEADER_MAX_HEIGHT = 0.6


@dataclass(frozen=True)
class TextBox:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class CardGeometry:
    rows: int
    cols: int
    cards_per_page: int
    origin_x: float
    origin_y: float
    card_gap: float
    card_width: float
    card_height: float

    @classmethod
    def compute(
        cls,
        *,
        rows: int,
        cols: int,
        cards_per_page: int,
        page_size: tuple[float, float] = A4,
        margin: float = PAGE_MARGIN,
    ) -> "CardGeometry":
        rows = max(1, int(rows))
        cols = max(1, int(cols))
        cards_per_page = max(1, int(cards_per_page))

        page_w, page_h = page_size
        usable_w = max(0.0, page_w - 2 * margin)
        usable_h = max(0.0, page_h - 2 * margin)

        gap = CARD_GAP_BASE / math.sqrt(cards_per_page / CARD_GAP_BASE_NUM)
        card_height = max(0.0, (usable_h - (cards_per_page - 1) * gap) / cards_per_page)

        return cls(
            rows=rows,
            cols=cols,
            cards_per_page=cards_per_page,
            origin_x=margin,
            origin_y=margin,
            card_gap=gap,
            card_width=usable_w,
            card_height=card_height,
        )

    @property
    def cell_width(self) -> float:
        return self.card_width / self.cols

    @property
    def cell_height(self) -> float:
        return self.card_height / self.rows

    @property
    def cell_area(self) -> float:
        return self.cell_width * self.cell_height

    @property
    def _density(self) -> float:
        return math.sqrt(self.cell_area / LINE_BASE_AREA)

    @property
    def line_width(self) -> float:
        return self._density * LINE_BASE_WIDTH

    @property
    def leading(self) -> float:
        return self._density * LINE_BASE_SPACING

    @property
    def font_size(self) -> float:
        """Upper bound for cell text; the surface shrinks it to fit the box."""
        return max(self.cell_width, self.cell_height)

    @property
    def text_box_height_ratio(self) -> float:
        if self.cell_height <= 0:
            return 1.0
        return min(1.0, (self.cell_width / TEXT_BOX_WH_RATIO) / self.cell_height)

    def cell_origin(self, card_index: int, row: int, col: int) -> tuple[float, float]:
        """Bottom-left corner of a cell on the current page."""
        x = self.origin_x + col * self.cell_width
        y = self.origin_y + card_index * (self.card_height + self.card_gap) + row * self.cell_height
        return x, y

    def text_box(self, x: float, y: float, *, header: bool = False) -> TextBox:
        """Centered text box inside the cell whose bottom-left corner is (x, y)."""
        height_ratio = HEADER_MAX_HEIGHT if header else self.text_box_height_ratio
        width = self.cell_width * TEXT_BOX_WIDTH
        height = self.cell_height * height_ratio
        return TextBox(
            x=x + (self.cell_width - width) / 2,
            y=y + (self.cell_height - height) / 2,
            width=width,
            height=height,
        )
