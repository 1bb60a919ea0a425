"""
Interfaces for the Printing Framework

Defines the contract a PDF rendering engine has to fulfil so the writer
can hand it validated options and document information.
"""

from abc import ABC, abstractmethod
from typing import Mapping

from .options import ConformanceMode, Orientation, Unit


class IPdfRenderer(ABC):
    """
    Interface for PDF rendering engines.

    Implementations are constructed with already validated options and turn
    whatever was drawn on them into PDF bytes.
    """

    # Page formats the engine can lay out, keyed by upper-case name
    page_formats: Mapping = {}

    # Drawing surface handed to callers, None if the engine has none
    canvas = None

    def __init__(
        self,
        orientation: Orientation,
        unit: Unit,
        page_format: str,
        use_unicode: bool = True,
        encoding: str = 'utf-8',
        conformance: ConformanceMode = ConformanceMode.NONE,
    ):
        """
        Initialize the renderer.

        Args:
            orientation: Page orientation
            unit: User measure unit for drawing operations
            page_format: Name of a page format known to the engine (e.g., 'A4')
            use_unicode: Whether text input is unicode
            encoding: Character encoding of byte text input
            conformance: PDF/A conformance level
        """
        self.orientation = orientation
        self.unit = unit
        self.page_format = page_format
        self.use_unicode = use_unicode
        self.encoding = encoding
        self.conformance = conformance

    @abstractmethod
    def set_author(self, author: str) -> None:
        """Set the author entry of the document information dictionary"""
        pass

    @abstractmethod
    def set_creator(self, creator: str) -> None:
        """Set the creator entry of the document information dictionary"""
        pass

    @abstractmethod
    def set_title(self, title: str) -> None:
        """Set the title entry of the document information dictionary"""
        pass

    @abstractmethod
    def render_pdf(self) -> bytes:
        """
        Produce the PDF document.

        Returns:
            PDF content as bytes

        Raises:
            Exception: If rendering fails
        """
        pass
