"""
Data Transfer Objects for the Printing Framework
"""

from dataclasses import dataclass
from typing import Optional

from django.db import models
from django.http import HttpResponse
from django.utils.cache import patch_cache_control


class Disposition(models.TextChoices):
    """How a browser should treat a delivered PDF"""
    ATTACHMENT = 'attachment', 'Force download'
    INLINE = 'inline', 'Show in browser'


@dataclass
class DocumentMetadata:
    """
    Document information written into the PDF.

    None means the field was never populated.
    """

    author: Optional[str] = None
    creator: Optional[str] = None
    title: Optional[str] = None


@dataclass
class PdfResult:
    """
    Result of PDF rendering operation.

    Contains the PDF bytes and metadata for HTTP responses.
    """

    pdf_bytes: bytes
    filename: str
    content_type: str = "application/pdf"
    disposition: str = Disposition.ATTACHMENT

    @property
    def as_attachment(self) -> bool:
        """True if the consumer should show a save dialog"""
        return self.disposition == Disposition.ATTACHMENT

    def to_response(self) -> HttpResponse:
        """
        Build an HTTP response delivering the PDF.

        Attachments force a 'Save as' dialog. Inline results are shown by the
        browser's PDF viewer if one is available, and the filename is used
        when the viewer offers to save the document.
        """
        response = HttpResponse(self.pdf_bytes, content_type=self.content_type)
        filename = self.filename.replace('"', '')
        response['Content-Disposition'] = f'{self.disposition}; filename="{filename}"'
        response['Content-Length'] = str(len(self.pdf_bytes))
        patch_cache_control(response, private=True, must_revalidate=True, max_age=1)
        return response

    def __len__(self) -> int:
        """Return the size of PDF in bytes"""
        return len(self.pdf_bytes)
