"""
Loaders Module - Statement text extraction from PDF and text files.
"""

from .pdf_loader import (
    load_pdf,
    load_text_file,
    load_statement_text,
    StatementLoadError
)

__all__ = [
    'load_pdf',
    'load_text_file',
    'load_statement_text',
    'StatementLoadError',
]
