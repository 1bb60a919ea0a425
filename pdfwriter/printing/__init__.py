"""
PDF Writer Printing Framework

Provides PDF generation on top of the ReportLab canvas with validated page
options, document information defaults and atomic saving to disk.
"""

from .service import PdfWriter
from .dto import Disposition, DocumentMetadata, PdfResult
from .interfaces import IPdfRenderer
from .options import (
    ConformanceMode,
    DocumentConfig,
    Orientation,
    Unit,
    normalize_conformance,
    normalize_encoding,
    normalize_format,
    normalize_orientation,
    normalize_unit,
    normalize_use_unicode,
)
from .errors import (
    PdfWriterError,
    ConfigurationError,
    InvalidOrientation,
    InvalidUnit,
    InvalidFormat,
    InvalidConformanceMode,
    InvalidEncoding,
    InvalidUnicodeFlag,
    MetadataLocked,
    DocumentStorageError,
    DocumentWriteFailed,
    DocumentRenameFailed,
    PermissionFixupFailed,
)

__all__ = [
    'PdfWriter',
    'PdfResult',
    'Disposition',
    'DocumentMetadata',
    'IPdfRenderer',
    'DocumentConfig',
    'Orientation',
    'Unit',
    'ConformanceMode',
    'normalize_orientation',
    'normalize_unit',
    'normalize_format',
    'normalize_conformance',
    'normalize_encoding',
    'normalize_use_unicode',
    'PdfWriterError',
    'ConfigurationError',
    'InvalidOrientation',
    'InvalidUnit',
    'InvalidFormat',
    'InvalidConformanceMode',
    'InvalidEncoding',
    'InvalidUnicodeFlag',
    'MetadataLocked',
    'DocumentStorageError',
    'DocumentWriteFailed',
    'DocumentRenameFailed',
    'PermissionFixupFailed',
]
