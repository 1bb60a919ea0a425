"""
PDF writer exceptions
"""


class PdfWriterError(Exception):
    """Base exception for PDF writer errors"""
    pass


class ConfigurationError(PdfWriterError, ValueError):
    """Raised when a document option cannot be normalized"""

    def __init__(self, option: str, value):
        self.option = option
        self.value = value
        super().__init__(f"Invalid value `{value}` for {option} set.")


class InvalidOrientation(ConfigurationError):
    """Raised when the page orientation is not portrait or landscape"""

    def __init__(self, value):
        super().__init__('orientation', value)


class InvalidUnit(ConfigurationError):
    """Raised when the measurement unit is not supported"""

    def __init__(self, value):
        super().__init__('unit', value)


class InvalidFormat(ConfigurationError):
    """Raised when the page format is not in the page-format table"""

    def __init__(self, value):
        super().__init__('page_format', value)


class InvalidConformanceMode(ConfigurationError):
    """Raised when the PDF/A conformance mode is unknown"""

    def __init__(self, value):
        super().__init__('conformance', value)


class InvalidEncoding(ConfigurationError):
    """Raised when the character encoding is unknown"""

    def __init__(self, value):
        super().__init__('encoding', value)


class InvalidUnicodeFlag(ConfigurationError):
    """Raised when the unicode flag is not a boolean"""

    def __init__(self, value):
        super().__init__('use_unicode', value)


class MetadataLocked(PdfWriterError):
    """Raised when document information is changed after the document was rendered"""
    pass


class DocumentStorageError(PdfWriterError, OSError):
    """Base exception for errors while saving a document to disk"""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path


class DocumentWriteFailed(DocumentStorageError):
    """Raised when the document cannot be written to the temporary file"""
    pass


class DocumentRenameFailed(DocumentStorageError):
    """Raised when the temporary file cannot be moved onto the target path"""
    pass


class PermissionFixupFailed(DocumentStorageError):
    """
    Raised when the saved file's permissions cannot be adjusted.

    The document itself has been written completely when this is raised.
    """
    pass
