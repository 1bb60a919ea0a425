"""
Document Options

Normalization and validation of the options handed to the rendering engine.
Validation happens when a DocumentConfig is built, so an engine is never
constructed with bad input.
"""

import codecs
from dataclasses import dataclass, field
from typing import Mapping, Optional

from django.conf import settings
from django.db import models

from .errors import (
    InvalidConformanceMode,
    InvalidEncoding,
    InvalidFormat,
    InvalidOrientation,
    InvalidUnicodeFlag,
    InvalidUnit,
)


class Orientation(models.TextChoices):
    """Page orientation"""
    PORTRAIT = 'P', 'Portrait'
    LANDSCAPE = 'L', 'Landscape'


class Unit(models.TextChoices):
    """User measure unit"""
    CENTIMETER = 'cm', 'Centimeter'
    INCH = 'in', 'Inch'
    MILLIMETER = 'mm', 'Millimeter'
    POINT = 'pt', 'Point'


class ConformanceMode(models.IntegerChoices):
    """PDF/A conformance level (0 disables PDF/A)"""
    NONE = 0, 'None'
    PDF_A1B = 1, 'PDF/A-1b'
    PDF_A2 = 2, 'PDF/A-2'
    PDF_A3 = 3, 'PDF/A-3'


ORIENTATION_ALIASES = {
    'p': Orientation.PORTRAIT,
    'portrait': Orientation.PORTRAIT,
    'l': Orientation.LANDSCAPE,
    'landscape': Orientation.LANDSCAPE,
}

UNIT_ALIASES = {
    'cm': Unit.CENTIMETER,
    'centimeter': Unit.CENTIMETER,
    'in': Unit.INCH,
    'inch': Unit.INCH,
    'mm': Unit.MILLIMETER,
    'millimeter': Unit.MILLIMETER,
    'pt': Unit.POINT,
    'point': Unit.POINT,
}

CONFORMANCE_ALIASES = {
    'none': ConformanceMode.NONE,
    'pdfa1b': ConformanceMode.PDF_A1B,
    'pdfa2': ConformanceMode.PDF_A2,
    'pdfa3': ConformanceMode.PDF_A3,
}


def normalize_orientation(raw) -> Orientation:
    """
    Normalize a page orientation.

    Accepts 'l', 'landscape', 'p' and 'portrait' in any case.

    Raises:
        InvalidOrientation: For any other value
    """
    if isinstance(raw, Orientation):
        return raw
    if not isinstance(raw, str):
        raise InvalidOrientation(raw)
    try:
        return ORIENTATION_ALIASES[raw.lower()]
    except KeyError:
        raise InvalidOrientation(raw) from None


def normalize_unit(raw) -> Unit:
    """
    Normalize a measurement unit.

    Accepts cm, centimeter, in, inch, mm, millimeter, pt and point in any case.

    Raises:
        InvalidUnit: For any other value
    """
    if isinstance(raw, Unit):
        return raw
    if not isinstance(raw, str):
        raise InvalidUnit(raw)
    try:
        return UNIT_ALIASES[raw.lower()]
    except KeyError:
        raise InvalidUnit(raw) from None


def normalize_format(raw, formats: Optional[Mapping] = None) -> str:
    """
    Normalize a page format name.

    Args:
        raw: Page format name, e.g. 'a4' or 'Letter'
        formats: Table of known page formats keyed by upper-case name.
            Defaults to the ReportLab page-size table.

    Returns:
        The upper-cased format name

    Raises:
        InvalidFormat: If the name is not in the table
    """
    if formats is None:
        # Import here to avoid circular imports
        from .reportlab_renderer import PAGE_FORMATS
        formats = PAGE_FORMATS

    if not isinstance(raw, str):
        raise InvalidFormat(raw)

    page_format = raw.upper()
    if page_format not in formats:
        raise InvalidFormat(raw)
    return page_format


def normalize_conformance(raw) -> ConformanceMode:
    """Normalize a PDF/A conformance mode. None and False disable PDF/A."""
    if raw is None or raw is False:
        return ConformanceMode.NONE
    if isinstance(raw, str):
        key = raw.lower().replace('/', '').replace('-', '').replace('_', '')
        if key in CONFORMANCE_ALIASES:
            return CONFORMANCE_ALIASES[key]
        raise InvalidConformanceMode(raw)
    # True is an int as well, but has no level attached
    if isinstance(raw, int) and not isinstance(raw, bool) and raw in ConformanceMode.values:
        return ConformanceMode(raw)
    raise InvalidConformanceMode(raw)


def normalize_use_unicode(raw) -> bool:
    """Check the unicode flag. Only real booleans are accepted."""
    if not isinstance(raw, bool):
        raise InvalidUnicodeFlag(raw)
    return raw


def normalize_encoding(raw) -> str:
    """Resolve an encoding name to its canonical codec name."""
    if not isinstance(raw, str):
        raise InvalidEncoding(raw)
    try:
        return codecs.lookup(raw).name
    except LookupError:
        raise InvalidEncoding(raw) from None


@dataclass(frozen=True)
class DocumentConfig:
    """
    Validated options for constructing a rendering engine.

    All fields are normalized to their canonical form on construction.
    An invalid value raises a ConfigurationError subclass.
    """

    orientation: Orientation = Orientation.PORTRAIT
    unit: Unit = Unit.MILLIMETER
    page_format: str = 'A4'
    use_unicode: bool = True
    encoding: str = 'UTF-8'
    conformance: ConformanceMode = ConformanceMode.NONE
    formats: Optional[Mapping] = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'orientation', normalize_orientation(self.orientation))
        object.__setattr__(self, 'unit', normalize_unit(self.unit))
        object.__setattr__(self, 'page_format', normalize_format(self.page_format, self.formats))
        object.__setattr__(self, 'use_unicode', normalize_use_unicode(self.use_unicode))
        object.__setattr__(self, 'encoding', normalize_encoding(self.encoding))
        object.__setattr__(self, 'conformance', normalize_conformance(self.conformance))

    @classmethod
    def from_settings(cls, **overrides) -> 'DocumentConfig':
        """
        Build a config from the PDFWRITER_DEFAULTS setting.

        Keyword arguments override values from settings.
        """
        options = dict(getattr(settings, 'PDFWRITER_DEFAULTS', {}))
        options.update(overrides)
        return cls(**options)
