#!/usr/bin/env python3
"""
Quote Text Parser
Extracts purchased line items and header information from quote text.

Two document shapes are supported:
1. Sales order / quote text (priced lines ending in a taxed total)
2. Electrical schedule text (an already completed schedule table)
"""

import re
import logging
from typing import List, Optional
from decimal import Decimal, InvalidOperation

from .models import QuoteData, QuoteLineItem

logger = logging.getLogger(__name__)

SALES_ORDER = "sales_order"
ELECTRICAL_SCHEDULE = "electrical_schedule"

UNKNOWN = "Unknown"
UNKNOWN_PROJECT = "Unknown Project"

# Electrical columns that follow the description in a schedule table
SCHEDULE_ELECTRICAL_COLUMNS = ("HP", "PHASE", "VOLTS", "AMPS", "C.B.")


class QuoteTextParser:
    """Parses plain quote text into a QuoteData record."""

    def __init__(self, default_country: str = "USA"):
        self.default_country = default_country

        # Both markers must be present for the tabular schedule layout
        self.schedule_markers = ['PROJECT ITEM #', 'EQUIPMENT REQUIREMENTS']

        # Item section of a sales order, between the column header and the subtotal.
        # Multi-page quotes keep going past page footers.
        self.item_section_pattern = re.compile(
            r'Item\s+Description\s+Qty\s+Unit\s+Price\s+Total\s+(.*?)(?=Subtotal|$)',
            re.IGNORECASE | re.DOTALL,
        )

        # Page footers and the column header repeated at the top of each page
        self.page_break_pattern = re.compile(
            r'^[ \t]*(?:Page\s+\d+(?:\s+of\s+\d+)?|Item\s+Description\s+Qty\s+Unit\s+Price\s+Total)[ \t]*$',
            re.IGNORECASE | re.MULTILINE,
        )

        # End of one priced item: qty, unit price, total with the tax marker
        # e.g. "1 5,385.00 5,385.00T"
        self.block_boundary_pattern = re.compile(
            r'(?<![\d.,])(\d+)\s+([\d,]+\.\d{2})\s+([\d,]+\.\d{2})T\b'
        )

        # Leading part number of a block
        self.part_number_pattern = re.compile(r'^([A-Z0-9][A-Z0-9._-]*)(?:\s+|$)(.*)$', re.DOTALL)

        # Schedule table: from the column header down to the TOTAL row
        self.table_section_pattern = re.compile(r'PROJECT ITEM #.*?TOTAL', re.DOTALL)

        # Schedule row: sequence#, project item#, part#, qty, description...
        self.schedule_row_pattern = re.compile(
            r'^\s*\d+\s+(\d+[A-Z]*)\s+([A-Z0-9][A-Z0-9._-]*)\s+(\d+)\s+(.+?)\s*$'
        )

        # Trailing HP, PHASE, VOLTS, AMPS and C.B. cells of a schedule row. At most
        # one cell per column is stripped so a number ending the description stays.
        self.trailing_columns_pattern = re.compile(
            r'(?:\s+(?:-|\d+(?:[./]\d+)?)){1,%d}\s*$' % len(SCHEDULE_ELECTRICAL_COLUMNS)
        )

        self.acknowledgment_patterns = [
            r'Acknowledgment\s+Number:?\s*(\d+)',
            r'Quote\s*(?:Number|No\.?|#)\s*:?\s*(\d+)',
            r'PROJECT\s*#\s*:?\s*([A-Z0-9][A-Z0-9-]*)',
        ]

        self.ship_to_pattern = re.compile(
            r'Ship\s+To\s*:?\s*(.+?)'
            r'(?=A\.V\.W\.|Customer\s+PO|Bill\s+To|Sales\s*person|Ship\s+Via|Item\s+Description|$)',
            re.IGNORECASE | re.DOTALL,
        )

        self.schedule_title_pattern = re.compile(r'"([^"\n]+)"\s*-\s*SCHEDULE', re.IGNORECASE)
        self.car_wash_pattern = re.compile(r'PROJECT[^\n]*?([A-Z][A-Z ]*CAR\s+WASH)')

        # Country keywords, checked in order against the upper-cased address
        self.country_keywords = [
            ('USA', ['USA', 'UNITED STATES']),
            ('Canada', ['CANADA']),
            ('Australia', ['AUSTRALIA']),
            ('UK', ['UNITED KINGDOM', 'UK']),
            ('Mexico', ['MEXICO']),
        ]

    def normalize_whitespace(self, text: str) -> str:
        """Collapse runs of whitespace into single spaces."""
        return re.sub(r'\s+', ' ', text or '').strip()

    def normalize_quantity(self, quantity_str: str) -> int:
        """Parse a quantity cell; anything unparsable counts as zero."""
        if not quantity_str:
            return 0
        try:
            value = Decimal(quantity_str.replace(',', '').strip())
        except InvalidOperation:
            logger.warning(f"Invalid quantity format: {quantity_str}")
            return 0
        if value < 0:
            return 0
        return int(value)

    def detect_document_type(self, text: str) -> str:
        if all(marker in text for marker in self.schedule_markers):
            return ELECTRICAL_SCHEDULE
        return SALES_ORDER

    def parse(self, text: str) -> QuoteData:
        """Main method to parse quote text into structured quote data."""
        logger.info(f"Parsing quote text, length: {len(text)}")

        document_type = self.detect_document_type(text)
        if document_type == ELECTRICAL_SCHEDULE:
            logger.info("📋 Detected: ELECTRICAL SCHEDULE document")
            items = self.extract_schedule_items(text)
        else:
            logger.info("🧾 Detected: SALES ORDER/QUOTE document")
            items = self.extract_sales_order_items(text)

        ship_to_address = self.extract_ship_to_address(text)
        project_name = self.extract_project_name(text, document_type)
        acknowledgment_number = self.extract_acknowledgment_number(text)
        country = self.detect_country(ship_to_address or text)

        logger.info(f"Project: {project_name} | Ack #: {acknowledgment_number} | Country: {country}")

        if not items:
            logger.warning("No equipment items found in quote text")
            logger.debug(f"Quote text preview: {text[:1000]}")
        else:
            logger.info(f"Extracted {len(items)} equipment items")

        return QuoteData(
            acknowledgment_number=acknowledgment_number,
            project_name=project_name,
            ship_to_address=ship_to_address,
            country=country,
            document_type=document_type,
            items=tuple(items),
        )

    def extract_sales_order_items(self, text: str) -> List[QuoteLineItem]:
        """Extract items from priced sales order text."""
        section_match = self.item_section_pattern.search(text)
        if section_match:
            section = section_match.group(1)
        else:
            logger.debug("No item column header found, scanning the whole text")
            section = text
        section = self.page_break_pattern.sub('', section)

        items = []
        block_start = 0
        for boundary in self.block_boundary_pattern.finditer(section):
            block = section[block_start:boundary.start()]
            block_start = boundary.end()

            item = self._parse_sales_order_block(block, boundary.group(1))
            if item is None:
                logger.debug(f"Skipping block without part number: {block.strip()[:60]!r}")
                continue

            items.append(item)
            logger.debug(f"Item {len(items)}: {item.part_number} - {item.description[:50]}")

        return items

    def _parse_sales_order_block(self, block: str, quantity_str: str) -> Optional[QuoteLineItem]:
        match = self.part_number_pattern.match(block.strip())
        if not match:
            return None

        return QuoteLineItem(
            part_number=match.group(1),
            description=self.normalize_whitespace(match.group(2)),
            quantity=self.normalize_quantity(quantity_str),
        )

    def extract_schedule_items(self, text: str) -> List[QuoteLineItem]:
        """Extract main equipment items from an electrical schedule table."""
        table_match = self.table_section_pattern.search(text)
        if not table_match:
            logger.warning("Could not find equipment table")
            return []

        items = []
        for line in table_match.group(0).split('\n'):
            match = self.schedule_row_pattern.match(line)
            if not match:
                continue

            project_item_number, part_number, quantity_str, description = match.groups()

            # Lettered sub-items (2A, 4AA) are expanded from the catalog instead
            if not project_item_number.isdigit():
                continue

            description = self.trailing_columns_pattern.sub('', description)
            items.append(QuoteLineItem(
                part_number=part_number,
                description=self.normalize_whitespace(description),
                quantity=self.normalize_quantity(quantity_str),
            ))
            logger.debug(f"Main item {project_item_number}: {part_number} - {description}")

        return items

    def extract_acknowledgment_number(self, text: str) -> str:
        for pattern in self.acknowledgment_patterns:
            match = re.search(pattern, text, re.IGNORECASE)
            if match:
                return match.group(1)
        return UNKNOWN

    def _find_ship_to_block(self, text: str) -> str:
        match = self.ship_to_pattern.search(text)
        return match.group(1).strip() if match else ''

    def extract_ship_to_address(self, text: str) -> str:
        """Return the ship-to block as a single whitespace-normalized line."""
        return self.normalize_whitespace(self._find_ship_to_block(text))

    def extract_project_name(self, text: str, document_type: str = SALES_ORDER) -> str:
        if document_type == ELECTRICAL_SCHEDULE:
            for pattern in (self.schedule_title_pattern, self.car_wash_pattern):
                match = pattern.search(text)
                if match:
                    return self.normalize_whitespace(match.group(1))

        # First line of the ship-to block. Single-line text extraction
        # separates the address fields with wide gaps instead of newlines.
        for line in self._find_ship_to_block(text).split('\n'):
            first_segment = re.split(r'\s{2,}', line.strip())[0].strip()
            if first_segment:
                return first_segment

        return UNKNOWN_PROJECT

    def detect_country(self, address: str) -> str:
        """Detect the destination country from a shipping address."""
        address_upper = (address or '').upper()
        for country, keywords in self.country_keywords:
            for keyword in keywords:
                if re.search(r'\b' + re.escape(keyword) + r'\b', address_upper):
                    return country
        return self.default_country


def parse_quote_text(text: str, default_country: str = "USA") -> QuoteData:
    """Convenience function to parse quote text."""
    return QuoteTextParser(default_country).parse(text)
