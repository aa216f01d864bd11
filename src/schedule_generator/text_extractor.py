#!/usr/bin/env python3
"""
Quote document text extraction.
Plain text files are read as-is; PDFs go through pdfplumber with the
pdftotext command-line tool as a fallback. No OCR is attempted.
"""

import re
import shutil
import logging
import subprocess
from pathlib import Path
from typing import Union

import pdfplumber

from .exceptions import TextExtractionError

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {'.txt', '.text'}


class QuoteTextExtractor:
    """Extracts plain text from quote documents using several strategies."""

    def __init__(self):
        self.extraction_methods = [
            self._extract_with_pdfplumber,
            self._extract_with_pdftotext,
        ]

    def extract_text(self, path: Union[str, Path]) -> str:
        """
        Extract text from a quote document.

        Args:
            path: Path to a .pdf or .txt file

        Returns:
            Cleaned text

        Raises:
            TextExtractionError: when the file is missing or yields no text
        """
        path = Path(path)
        if not path.exists():
            raise TextExtractionError(f"File not found: {path}")

        if path.suffix.lower() in TEXT_SUFFIXES:
            text = path.read_text(encoding='utf-8', errors='replace')
        else:
            text = self._extract_pdf_text(path)

        text = self.clean_text(text)
        if not text.strip():
            raise TextExtractionError(f"No text extracted from {path.name}")

        logger.info(f"Extracted {len(text)} characters from {path.name}")
        return text

    def _extract_pdf_text(self, path: Path) -> str:
        for method in self.extraction_methods:
            try:
                text = method(path)
            except Exception as e:
                logger.warning(f"Method {method.__name__} failed: {e}")
                continue
            if text and text.strip():
                logger.debug(f"Extracted text using {method.__name__}")
                return text

        logger.error("All extraction methods failed")
        return ""

    def _extract_with_pdfplumber(self, path: Path) -> str:
        with pdfplumber.open(path) as pdf:
            pages = []
            for page in pdf.pages:
                page_text = page.extract_text()
                if not page_text:
                    page_text = page.extract_text(layout=True, x_tolerance=3, y_tolerance=3)
                if page_text:
                    pages.append(page_text)
            return '\n'.join(pages)

    def _extract_with_pdftotext(self, path: Path) -> str:
        if shutil.which('pdftotext') is None:
            logger.debug("pdftotext not available")
            return ""

        result = subprocess.run(
            ['pdftotext', '-layout', str(path), '-'],
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            logger.warning(f"pdftotext failed: {result.stderr}")
            return ""
        return result.stdout

    def clean_text(self, text: str) -> str:
        """
        Remove encoding artifacts while keeping line structure and column gaps,
        which the schedule parser relies on.
        """
        if not text:
            return ""

        # CID encoding artifacts from custom fonts
        text = re.sub(r'\(cid:\d+\)', '', text)

        text = text.replace('\r\n', '\n').replace('\r', '\n')
        text = text.replace('\f', '\n')

        lines = [line.rstrip() for line in text.split('\n')]
        return '\n'.join(lines).strip('\n')


def extract_quote_text(path: Union[str, Path]) -> str:
    """Convenience function to extract text from a quote document."""
    return QuoteTextExtractor().extract_text(path)
