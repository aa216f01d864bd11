"""
Electrical Schedule Generator

Turns supplier quote documents into hierarchically numbered electrical
equipment schedules.
"""

__version__ = "1.0.0"

from .catalog import CatalogIndex, CatalogMatch, load_catalog
from .config import ScheduleConfig
from .electrical import VoltageMap, derive_electrical
from .exceptions import (
    CatalogLoadError,
    EmptyQuoteError,
    HierarchyError,
    ScheduleError,
    TextExtractionError,
)
from .generator import ScheduleGenerator, generate_schedule_from_text
from .hierarchy import HierarchyExpander
from .models import (
    CatalogEntry,
    CatalogRecord,
    QuoteData,
    QuoteLineItem,
    Schedule,
    ScheduleLineItem,
    VoltageTable,
)
from .parser import QuoteTextParser, parse_quote_text

__all__ = [
    "CatalogIndex",
    "CatalogMatch",
    "load_catalog",
    "ScheduleConfig",
    "VoltageMap",
    "derive_electrical",
    "ScheduleError",
    "EmptyQuoteError",
    "CatalogLoadError",
    "HierarchyError",
    "TextExtractionError",
    "ScheduleGenerator",
    "generate_schedule_from_text",
    "HierarchyExpander",
    "CatalogEntry",
    "CatalogRecord",
    "QuoteData",
    "QuoteLineItem",
    "Schedule",
    "ScheduleLineItem",
    "VoltageTable",
    "QuoteTextParser",
    "parse_quote_text",
]
