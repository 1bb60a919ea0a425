"""
ReportLab Renderer Implementation

Adapter for producing PDF documents with the ReportLab canvas.
"""

from io import BytesIO
import logging

from django.conf import settings
from reportlab.lib import pagesizes
from reportlab.lib.units import cm, inch, mm
from reportlab.pdfgen.canvas import Canvas

from .interfaces import IPdfRenderer
from .options import ConformanceMode, Orientation, Unit


logger = logging.getLogger(__name__)


# Page formats known to ReportLab, keyed by upper-case name (A4, LETTER, ...)
PAGE_FORMATS = {
    name: size
    for name, size in vars(pagesizes).items()
    if name.isupper() and isinstance(size, tuple)
}

# Points per user unit
UNIT_SCALES = {
    Unit.CENTIMETER: cm,
    Unit.INCH: inch,
    Unit.MILLIMETER: mm,
    Unit.POINT: 1,
}

# PDF/A-1 is based on PDF 1.4, PDF/A-2 and PDF/A-3 on PDF 1.7
PDF_VERSIONS = {
    ConformanceMode.NONE: None,
    ConformanceMode.PDF_A1B: (1, 4),
    ConformanceMode.PDF_A2: (1, 7),
    ConformanceMode.PDF_A3: (1, 7),
}


class ReportLabRenderer(IPdfRenderer):
    """
    PDF renderer using the ReportLab canvas.

    The canvas is exposed as `canvas` for drawing content. Coordinates passed
    to the helper methods are in the configured unit.
    """

    page_formats = PAGE_FORMATS

    def __init__(self, orientation, unit, page_format, use_unicode=True,
                 encoding='utf-8', conformance=ConformanceMode.NONE):
        super().__init__(orientation, unit, page_format, use_unicode, encoding, conformance)

        size = self.page_formats[page_format]
        if orientation == Orientation.LANDSCAPE:
            self.pagesize = pagesizes.landscape(size)
        else:
            self.pagesize = pagesizes.portrait(size)

        self.unit_scale = UNIT_SCALES[unit]
        self.buffer = BytesIO()
        self.canvas = Canvas(
            self.buffer,
            pagesize=self.pagesize,
            pdfVersion=PDF_VERSIONS[conformance],
            invariant=1 if getattr(settings, 'PDFWRITER_INVARIANT', False) else 0,
        )

    def to_points(self, value: float) -> float:
        """Convert a length in the configured unit to points"""
        return value * self.unit_scale

    def draw_text(self, x: float, y: float, text) -> None:
        """
        Draw a single line of text.

        Args:
            x: Horizontal position in the configured unit
            y: Vertical position in the configured unit (from the bottom edge)
            text: Text as str, or bytes in the configured encoding
        """
        if isinstance(text, bytes):
            text = text.decode(self.encoding, errors='replace')
        if not self.use_unicode:
            # Standard Type 1 fonts cover Latin-1 only
            text = text.encode('latin-1', errors='replace').decode('latin-1')
        self.canvas.drawString(self.to_points(x), self.to_points(y), text)

    def new_page(self) -> None:
        """Finish the current page and start a new one"""
        self.canvas.showPage()

    def set_author(self, author: str) -> None:
        self.canvas.setAuthor(author)

    def set_creator(self, creator: str) -> None:
        self.canvas.setCreator(creator)

    def set_title(self, title: str) -> None:
        self.canvas.setTitle(title)

    def render_pdf(self) -> bytes:
        """
        Render the canvas to PDF bytes.

        The canvas must not be drawn on afterwards.

        Returns:
            PDF content as bytes

        Raises:
            Exception: If rendering fails
        """
        try:
            pdf_bytes = self.canvas.getpdfdata()
            logger.info(f"Successfully rendered PDF: {len(pdf_bytes)} bytes")
            return pdf_bytes
        except Exception as e:
            logger.error(f"Failed to render PDF: {e}", exc_info=True)
            raise
