"""
Output Module - JSON import payload and PDF preview report.
"""

from .writer import (
    PDFReportWriter,
    build_import_payload,
    generate_pdf_report,
    summarize,
    write_json
)

__all__ = [
    'PDFReportWriter',
    'build_import_payload',
    'generate_pdf_report',
    'summarize',
    'write_json',
]
