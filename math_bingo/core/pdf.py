from __future__ import annotations

from io import BytesIO
import logging
from pathlib import Path
from types import TracebackType

from reportlab.lib.enums import TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Paragraph

from ..config import BingoConfig
from .generator import layout_cards
from .parser import parse_pool_text


logger = logging.getLogger(__name__)

DEFAULT_FONT = "Helvetica"

# Line height relative to the font size for a single line of cell text.
_LINE_HEIGHT_RATIO = 1.2
# Wide enough that measuring never wraps.
_MEASURE_WIDTH = 1e6


def register_font(font_path: Path) -> str:
    name = font_path.stem
    if name in pdfmetrics.getRegisteredFontNames():
        return name
    pdfmetrics.registerFont(TTFont(name, str(font_path)))
    logger.debug("Registered font %s from %s", name, font_path)
    return name


def _style(font_name: str, size: float, leading: float) -> ParagraphStyle:
    return ParagraphStyle(
        "BingoCell",
        fontName=font_name,
        fontSize=size,
        leading=leading,
        alignment=TA_LEFT,
    )


class PdfCardSurface:
    """reportlab-backed drawing surface for `layout_cards`.

    Owns one in-progress document. Used as a context manager it renders
    exactly once on a clean exit and discards the document on error.
    """

    def __init__(self, *, font_name: str = DEFAULT_FONT, pagesize: tuple[float, float] = A4) -> None:
        self.font_name = font_name
        self._buf = BytesIO()
        self._canvas = Canvas(self._buf, pagesize=pagesize)
        self._line_width = 1.0
        self._pdf: bytes | None = None

    def __enter__(self) -> "PdfCardSurface":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc_type is None and self._pdf is None:
            self.finish()
        return False

    @property
    def pdf_bytes(self) -> bytes:
        if self._pdf is None:
            raise RuntimeError("Document has not been rendered yet")
        return self._pdf

    def set_line_width(self, width: float) -> None:
        self._line_width = width
        self._canvas.setLineWidth(width)

    def draw_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._canvas.rect(x, y, width, height, stroke=1, fill=0)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, *, line_width: float) -> None:
        self._canvas.setLineWidth(line_width)
        self._canvas.line(x1, y1, x2, y2)
        self._canvas.setLineWidth(self._line_width)

    def fit_font_size(self, text: str, *, width: float, height: float, font_size: float, leading: float) -> float:
        """Largest size <= font_size at which `text` fits the box on one line."""
        if not text or width <= 0 or height <= 0 or font_size <= 0:
            return 0.0

        para = Paragraph(text, _style(self.font_name, font_size, font_size * _LINE_HEIGHT_RATIO))
        para.wrap(_MEASURE_WIDTH, _MEASURE_WIDTH)
        natural_width = max(para.getActualLineWidths0() or [0.0])
        if natural_width <= 0:
            return 0.0

        # Width and height both scale linearly with the font size.
        line_height = font_size * _LINE_HEIGHT_RATIO + leading
        scale = min(1.0, width / natural_width, height / line_height)
        return font_size * scale

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
    ) -> None:
        size = self.fit_font_size(text, width=width, height=height, font_size=font_size, leading=leading)
        if size <= 0:
            return

        scale = size / font_size
        para = Paragraph(text, _style(self.font_name, size, size * _LINE_HEIGHT_RATIO + leading * scale))
        para.wrap(_MEASURE_WIDTH, height)
        line_width = max(para.getActualLineWidths0() or [0.0])
        _, para_height = para.wrap(line_width + 1, height)
        para.drawOn(self._canvas, x + (width - line_width) / 2, y + (height - para_height) / 2)

    def new_page(self) -> None:
        self._canvas.showPage()

    def finish(self) -> bytes:
        if self._pdf is None:
            self._canvas.save()
            self._pdf = self._buf.getvalue()
        return self._pdf


def render_bingo_pdf(pool_text: str, config: BingoConfig, *, font_path: Path | None = None) -> bytes:
    # Fail on malformed input before a document exists.
    parse_pool_text(pool_text)

    font_name = register_font(font_path) if font_path else DEFAULT_FONT
    with PdfCardSurface(font_name=font_name) as surface:
        layout_cards(surface, pool_text, config)
    return surface.pdf_bytes
