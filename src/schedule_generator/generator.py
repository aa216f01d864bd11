#!/usr/bin/env python3
"""
Schedule Generator
Runs quote text through extraction, filtering, catalog resolution, hierarchy
expansion, electrical derivation and motor labeling, and folds the rows into
a Schedule.
"""

import logging
from typing import List, Optional

from .catalog import CatalogIndex
from .config import ScheduleConfig
from .electrical import VoltageMap, sum_amps
from .exceptions import EmptyQuoteError
from .filters import FilterDecision, ItemFilter, OccurrenceTracker, describe_item
from .hierarchy import HierarchyExpander
from .models import QuoteData, QuoteLineItem, Schedule, ScheduleLineItem, VoltageTable
from .motors import MotorCounter
from .parser import QuoteTextParser

logger = logging.getLogger(__name__)


class PipelineContext:
    """Counters for one generate call. Never shared between requests."""

    def __init__(self, motor_keywords):
        self.next_item_number = 1
        self.motors = MotorCounter(motor_keywords)
        self.occurrences = OccurrenceTracker()

    def take_item_number(self) -> int:
        number = self.next_item_number
        self.next_item_number += 1
        return number


class ScheduleAggregator:
    """Collects emitted rows and diagnostics into an immutable Schedule."""

    def __init__(self):
        self.items: List[ScheduleLineItem] = []
        self.not_found_items: List[str] = []
        self.excluded_items: List[str] = []
        self.repeated_items: List[str] = []

    def add_row(self, row: ScheduleLineItem):
        self.items.append(row)

    def add_not_found(self, item: QuoteLineItem):
        self.not_found_items.append(describe_item(item))

    def add_excluded(self, item: QuoteLineItem):
        self.excluded_items.append(describe_item(item))

    def add_repeated(self, item: QuoteLineItem, occurrence: int):
        self.repeated_items.append(f"{describe_item(item)} (occurrence {occurrence})")

    @property
    def total_motors(self) -> int:
        return sum(1 for item in self.items if item.motor_label)

    @property
    def total_amps(self) -> float:
        return sum_amps(item.electrical.amps for item in self.items)

    def build(self, quote: QuoteData, country: str, voltage: VoltageTable) -> Schedule:
        return Schedule(
            project_name=quote.project_name,
            acknowledgment_number=quote.acknowledgment_number,
            country=country,
            voltage=voltage,
            items=tuple(self.items),
            total_motors=self.total_motors,
            total_amps=self.total_amps,
            not_found_items=tuple(self.not_found_items),
            excluded_items=tuple(self.excluded_items),
            repeated_items=tuple(self.repeated_items),
        )


class ScheduleGenerator:
    """
    Builds electrical schedules from quote text.

    The catalog and voltage map are loaded once and only read afterwards, so
    one generator can serve any number of requests.
    """

    def __init__(self, catalog: CatalogIndex, config: Optional[ScheduleConfig] = None,
                 voltage_map: Optional[VoltageMap] = None):
        self.config = config or ScheduleConfig()
        self.catalog = catalog
        self.voltage_map = voltage_map or VoltageMap.from_json(
            self.config.voltage_map_path, self.config.default_country
        )
        self.parser = QuoteTextParser(self.config.default_country)
        self.item_filter = ItemFilter(self.config.excluded_part_numbers)
        self.expander = HierarchyExpander(motor_keywords=self.config.motor_keywords)

    @classmethod
    def from_config(cls, config: Optional[ScheduleConfig] = None) -> "ScheduleGenerator":
        config = config or ScheduleConfig.from_env()
        return cls(CatalogIndex.from_json(config.catalog_path), config)

    def generate_schedule(self, quote_text: str, country_code: Optional[str] = None) -> Schedule:
        """Main method: quote text in, schedule out."""
        if not quote_text or not quote_text.strip():
            raise EmptyQuoteError("No quote text provided")

        quote = self.parser.parse(quote_text)
        return self.generate_from_quote(quote, country_code)

    def generate_from_quote(self, quote: QuoteData, country_code: Optional[str] = None) -> Schedule:
        """Build the schedule for already extracted quote data."""
        country = self.voltage_map.resolve_country(country_code or quote.country)
        voltage = self.voltage_map.tables[country]

        context = PipelineContext(self.config.motor_keywords)
        aggregator = ScheduleAggregator()

        logger.info(f"Generating schedule for {len(quote.items)} quote items "
                    f"({country}: {voltage.three_phase}V / {voltage.one_phase}V)")

        for quote_item in quote.items:
            self._process_item(quote_item, voltage, context, aggregator)

        schedule = aggregator.build(quote, country, voltage)

        logger.info(f"✓ Generated: {len(schedule.items)} rows, {schedule.total_motors} motors, "
                    f"{schedule.total_amps:.2f} amps")
        logger.info(f"✓ Not found: {len(schedule.not_found_items)} items")
        logger.info(f"✓ Excluded: {len(schedule.excluded_items)} items")
        return schedule

    def _process_item(self, quote_item: QuoteLineItem, voltage: VoltageTable,
                      context: PipelineContext, aggregator: ScheduleAggregator):
        logger.debug(f"Processing: {quote_item.part_number}")

        decision = self.item_filter.classify(quote_item)
        if decision is FilterDecision.EXCLUDE:
            aggregator.add_excluded(quote_item)
            return
        if decision is FilterDecision.DEDUP_SKIP:
            return

        match = self.catalog.resolve(quote_item.part_number)
        if match is None:
            logger.warning(f"⚠️  NOT FOUND - SKIPPING: {quote_item.part_number}")
            aggregator.add_not_found(quote_item)
            return

        entry = match.entry
        occurrence = context.occurrences.record(entry.key)
        if occurrence > 1:
            aggregator.add_repeated(quote_item, occurrence)

        logger.debug(f"  ✓ Found: {entry.main.description} "
                     f"({len(entry.sub_components)} sub-components, {match.strategy} match)")

        rows = self.expander.expand(
            entry,
            main_number=context.take_item_number(),
            quantity=quote_item.quantity,
            voltage=voltage,
            occurrence=occurrence,
        )
        for row in rows:
            aggregator.add_row(context.motors.label(row))


def generate_schedule_from_text(quote_text: str, country_code: Optional[str] = None,
                                catalog: Optional[CatalogIndex] = None,
                                config: Optional[ScheduleConfig] = None) -> Schedule:
    """Convenience function to build a schedule in one call."""
    config = config or ScheduleConfig.from_env()
    if catalog is None:
        catalog = CatalogIndex.from_json(config.catalog_path)
    return ScheduleGenerator(catalog, config).generate_schedule(quote_text, country_code)
