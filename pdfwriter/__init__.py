"""
pdfwriter

Django app wrapping a PDF rendering engine with validated page options,
document information defaults and crash-safe delivery.
"""

__version__ = '0.1.0'
