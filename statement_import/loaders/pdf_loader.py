"""
Statement Loader Module
Turns a statement file into the single text blob the extractor consumes.
PDF text is extracted with PyMuPDF (fitz); plain-text exports are read as-is.
"""

import fitz  # PyMuPDF
import logging
from pathlib import Path

from statement_import.config import config

logger = logging.getLogger(__name__)


class StatementLoadError(Exception):
    """Custom exception for statement loading errors."""
    pass


def load_pdf(file_path: str) -> str:
    """
    Extract text from all pages of a PDF file.

    Args:
        file_path: Path to the PDF file

    Returns:
        Combined text from all pages as a single string

    Raises:
        StatementLoadError: If the PDF cannot be loaded or read
    """
    doc = None
    try:
        doc = fitz.open(file_path)

        if doc.page_count == 0:
            logger.error(f"PDF has no pages: {file_path}")
            raise StatementLoadError(f"PDF has no pages: {file_path}")

        logger.info(f"Loading PDF: {file_path} ({doc.page_count} pages)")

        text_chunks = []
        empty_pages = 0

        for page_num in range(doc.page_count):
            text = doc[page_num].get_text()

            if text.strip():
                text_chunks.append(text)
                logger.debug(f"Page {page_num + 1}: extracted {len(text)} characters")
            else:
                empty_pages += 1
                logger.warning(f"Page {page_num + 1}: empty or no extractable text")

        if not text_chunks:
            raise StatementLoadError(f"No text could be extracted from PDF: {file_path}")

        combined_text = "\n".join(text_chunks)

        logger.info(
            f"Extraction complete: {len(combined_text)} characters from "
            f"{len(text_chunks)} pages ({empty_pages} empty pages skipped)"
        )

        return combined_text

    except fitz.FileDataError as e:
        logger.error(f"Invalid or corrupted PDF file: {file_path}", exc_info=True)
        raise StatementLoadError(f"Invalid or corrupted PDF file: {file_path}") from e

    except StatementLoadError:
        raise

    except Exception as e:
        logger.error(f"Unexpected error loading PDF {file_path}: {e}", exc_info=True)
        raise StatementLoadError(f"Failed to load PDF {file_path}: {str(e)}") from e

    finally:
        if doc is not None:
            doc.close()


def load_text_file(file_path: str) -> str:
    """
    Read a plain-text statement export.

    Raises:
        StatementLoadError: If the file cannot be read or decoded
    """
    try:
        text = Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read text statement {file_path}: {e}")
        raise StatementLoadError(f"Failed to read {file_path}: {str(e)}") from e

    logger.info(f"Loaded text statement: {file_path} ({len(text)} characters)")
    return text


def load_statement_text(file_path: str) -> str:
    """
    Load the text of a statement file, dispatching on its suffix.

    Args:
        file_path: Path to a .pdf or .txt statement

    Returns:
        Statement text

    Raises:
        StatementLoadError: If the file is missing, unsupported, too large,
            empty, or unreadable
    """
    path = Path(file_path)
    if not path.exists():
        logger.error(f"Statement file not found: {file_path}")
        raise StatementLoadError(f"Statement file not found: {file_path}")

    is_valid, error = config.validate_file(path.name, path.stat().st_size)
    if not is_valid:
        logger.error(f"Rejected statement file {file_path}: {error}")
        raise StatementLoadError(error)

    if path.suffix.lower() == ".pdf":
        return load_pdf(str(path))
    return load_text_file(str(path))
