"""
PDF Writer Service

Owns a rendering engine built from a validated DocumentConfig, fills in the
document information and delivers the rendered document to disk, to a
browser or as raw bytes.
"""

from pathlib import Path
from typing import Callable, Optional, Type, Union
import logging

from django.conf import settings
from django.utils.crypto import get_random_string
from django.utils.module_loading import import_string

from pdfwriter import __version__

from .atomic import AtomicWriter, make_writable
from .dto import Disposition, DocumentMetadata, PdfResult
from .errors import DocumentStorageError, MetadataLocked, PermissionFixupFailed
from .interfaces import IPdfRenderer
from .options import DocumentConfig, normalize_format


logger = logging.getLogger(__name__)


DEFAULT_RENDERER = 'pdfwriter.printing.reportlab_renderer.ReportLabRenderer'
PDF_EXTENSION = '.pdf'
RANDOM_NAME_LENGTH = 8


def get_default_product_identifier() -> str:
    """Identifier used as author and creator when none is given"""
    return getattr(settings, 'PDFWRITER_PRODUCT_IDENTIFIER', f'pdfwriter {__version__}')


class PdfWriter:
    """
    Configuration and lifecycle wrapper around a PDF rendering engine.

    Responsibilities:
    1. Construct the engine from validated options
    2. Default author, creator and title
    3. Deliver the document (disk, download, inline view, bytes)

    The document is rendered once, on the first output call. Later output
    calls reuse the same bytes, and document information can no longer be
    changed.

    Instances are not safe for concurrent use.

    Usage:
        writer = PdfWriter(DocumentConfig(orientation='landscape', page_format='letter'))
        writer.renderer.draw_text(20, 20, 'Hello')
        writer.set_document_information(title='Greeting')
        return writer.stream_for_download('greeting').to_response()
    """

    def __init__(
        self,
        config: Optional[DocumentConfig] = None,
        *,
        renderer_class: Optional[Type[IPdfRenderer]] = None,
        product_identifier: Optional[str] = None,
        random_string: Optional[Callable[[int], str]] = None,
        writer_class: Type[AtomicWriter] = AtomicWriter
    ):
        """
        Initialize the writer.

        Args:
            config: Validated options (defaults to DocumentConfig.from_settings())
            renderer_class: Engine implementation (defaults to PDFWRITER_RENDERER setting)
            product_identifier: Default author/creator (defaults to PDFWRITER_PRODUCT_IDENTIFIER setting)
            random_string: Callable returning a random string of the given length
            writer_class: Writer used by save_to_disk

        Raises:
            InvalidFormat: If the engine does not know the configured page format
        """
        self.config = config if config is not None else DocumentConfig.from_settings()
        self.product_identifier = product_identifier or get_default_product_identifier()
        self.random_string = random_string or get_random_string
        self.writer_class = writer_class
        self.metadata = DocumentMetadata()
        self._pdf_bytes: Optional[bytes] = None

        renderer_class = renderer_class or self._get_default_renderer_class()
        # The config may have been validated against another table
        normalize_format(self.config.page_format, renderer_class.page_formats)

        self.renderer = renderer_class(
            self.config.orientation,
            self.config.unit,
            self.config.page_format,
            self.config.use_unicode,
            self.config.encoding,
            self.config.conformance,
        )

        self.set_document_information()

    @property
    def canvas(self):
        """Drawing surface of the engine (None if the engine has none)"""
        return self.renderer.canvas

    @property
    def is_rendered(self) -> bool:
        return self._pdf_bytes is not None

    def set_document_information(
        self,
        author: Optional[str] = None,
        creator: Optional[str] = None,
        title: Optional[str] = None
    ) -> DocumentMetadata:
        """
        Set author, creator and title of the document.

        A field given as None keeps its stored value, or gets its default
        if nothing was stored yet. Given values (including '') always
        replace the stored ones. The resulting values are passed on to the
        engine on every call.

        Returns:
            The document information now in effect

        Raises:
            MetadataLocked: If the document was already rendered
        """
        if self.is_rendered:
            logger.warning("Document information changed after the PDF was rendered")
            raise MetadataLocked("Document information cannot change after the PDF was rendered")

        metadata = self.metadata

        if author is None:
            if not metadata.author:
                metadata.author = self.product_identifier
        else:
            metadata.author = author

        if creator is None:
            if not metadata.creator:
                metadata.creator = self.product_identifier
        else:
            metadata.creator = creator

        if title is None:
            if not metadata.title:
                metadata.title = ''
        else:
            metadata.title = title

        self.renderer.set_author(metadata.author)
        self.renderer.set_creator(metadata.creator)
        self.renderer.set_title(metadata.title)

        return metadata

    def compute_download_name(self, candidate: Optional[str] = '') -> str:
        """
        Return a filename for delivering the PDF.

        An empty candidate gets a random 8 character name. Otherwise '.pdf'
        is appended unless the candidate already ends with it.
        """
        if not candidate:
            return self.random_string(RANDOM_NAME_LENGTH) + PDF_EXTENSION
        if not candidate.endswith(PDF_EXTENSION):
            return candidate + PDF_EXTENSION
        return candidate

    def get_bytes(self) -> bytes:
        """
        Return the rendered PDF.

        Raises:
            Exception: If the engine fails to render
        """
        if self._pdf_bytes is None:
            try:
                logger.debug(
                    f"Rendering {self.config.page_format} document "
                    f"({self.config.orientation.label}, {self.config.unit})"
                )
                self._pdf_bytes = self.renderer.render_pdf()
            except Exception as e:
                logger.error(f"Failed to render PDF: {e}", exc_info=True)
                raise
        return self._pdf_bytes

    def save_to_disk(self, path: Union[str, Path]) -> Path:
        """
        Save the PDF at the given path.

        The file is written to a temporary file next to path and renamed
        into place after it was flushed to disk. On failure nothing is left
        at path (an existing file stays as it was).

        Returns:
            Path of the saved file

        Raises:
            DocumentWriteFailed: If the data cannot be written
            DocumentRenameFailed: If the temporary file cannot be moved into place
            PermissionFixupFailed: If the saved file's mode cannot be adjusted
                (the file is complete in that case)
        """
        path = Path(path)
        pdf_bytes = self.get_bytes()

        try:
            with self.writer_class(path) as writer:
                writer.write(pdf_bytes)
                writer.commit()
        except DocumentStorageError as e:
            logger.error(f"Failed to save PDF to {path}: {e}", exc_info=True)
            raise

        try:
            make_writable(path)
        except PermissionFixupFailed as e:
            logger.warning(f"Saved PDF to {path}, but could not adjust permissions: {e}")
            raise

        logger.info(f"Successfully saved PDF: {path} ({len(pdf_bytes)} bytes)")
        return path

    def stream_for_download(self, name: Optional[str] = '') -> PdfResult:
        """
        Deliver the PDF as an attachment, forcing a 'Save as' dialog.

        Args:
            name: Download filename ('.pdf' is appended if missing, random if empty)
        """
        return self._stream(name, Disposition.ATTACHMENT)

    def stream_for_inline_view(self, name: Optional[str] = '') -> PdfResult:
        """
        Deliver the PDF for display in the browser.

        Browsers without a PDF viewer download the file instead. If the
        viewer offers to save the document, the resolved name is suggested.

        Args:
            name: Filename ('.pdf' is appended if missing, random if empty)
        """
        return self._stream(name, Disposition.INLINE)

    def _stream(self, name: Optional[str], disposition: str) -> PdfResult:
        filename = self.compute_download_name(name)
        result = PdfResult(
            pdf_bytes=self.get_bytes(),
            filename=filename,
            content_type='application/pdf',
            disposition=disposition
        )
        logger.info(f"Delivering PDF {result.filename} as {disposition} ({len(result)} bytes)")
        return result

    def _get_default_renderer_class(self) -> Type[IPdfRenderer]:
        """
        Get the configured renderer class.

        Returns:
            Class named by the PDFWRITER_RENDERER setting (ReportLab by default)
        """
        return import_string(getattr(settings, 'PDFWRITER_RENDERER', DEFAULT_RENDERER))
