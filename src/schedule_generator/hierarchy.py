#!/usr/bin/env python3
"""
Hierarchy Expander
Turns one catalog entry into a main schedule row followed by its lettered
sub-component rows (5, 5A, 5B, 5BA, ...).

Sub-components are first arranged into a two-level tree: a device such as a
blower, a control panel or an electrical panel adopts the devices that
immediately follow it and belong to it. Top-level nodes are lettered A, B,
C...; adopted devices get a second letter under their parent (BA, BB...).

Only this pairing rule decides nesting. Catalog descriptions that start with
"--" are not treated as a nesting marker and are kept as written.
"""

import re
import logging
import string
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from .config import MOTOR_KEYWORDS
from .electrical import derive_electrical
from .exceptions import HierarchyError
from .models import CatalogEntry, CatalogRecord, ScheduleLineItem, VoltageTable
from .motors import is_motor

logger = logging.getLogger(__name__)

LETTERS = string.ascii_uppercase

# Placeholder quantity for a main item quoted without a count
UNSPECIFIED_QUANTITY = '#'

RecordPredicate = Callable[[CatalogRecord], bool]


@dataclass(frozen=True)
class GroupingRule:
    """A parent device and the kind of devices that nest under it."""
    name: str
    is_parent: RecordPredicate
    is_child: RecordPredicate
    max_children: Optional[int] = None


@dataclass(frozen=True)
class ComponentNode:
    """A top-level sub-component and the sub-components nested under it."""
    record: CatalogRecord
    children: Tuple[CatalogRecord, ...] = ()
    rule: Optional[str] = None


def _text(record: CatalogRecord) -> str:
    return f"{record.part_number} {record.description}".upper()


def _part_has_code(record: CatalogRecord, code: str) -> bool:
    return re.search(r'(?:^|[-_ ])' + code + r'(?:$|[-_ \d])', record.part_number.upper()) is not None


def default_grouping_rules(motor_keywords: Iterable[str] = MOTOR_KEYWORDS) -> List[GroupingRule]:
    """Rules in priority order; the first rule whose parent and first child match wins."""
    motor_keywords = tuple(motor_keywords)

    def motor_like(record: CatalogRecord) -> bool:
        return is_motor(record.description, record.hp, motor_keywords)

    def blower(record: CatalogRecord) -> bool:
        if motor_like(record):
            return False
        return 'BLOWER' in _text(record) or _part_has_code(record, 'BLW')

    def control_panel(record: CatalogRecord) -> bool:
        description = record.description.upper()
        return 'CONTROL PANEL' in description or 'ENCLOSURE' in description

    def solenoid(record: CatalogRecord) -> bool:
        return 'SOLENOID' in record.description.upper() or _part_has_code(record, 'SOL')

    def electrical(record: CatalogRecord) -> bool:
        return 'ELECTRICAL' in record.description.upper() or _part_has_code(record, 'ELEC')

    return [
        GroupingRule('blower', blower, motor_like, max_children=1),
        GroupingRule('control_panel', control_panel, solenoid),
        GroupingRule('electrical', electrical, motor_like),
    ]


def build_component_tree(records: Sequence[CatalogRecord],
                         rules: Sequence[GroupingRule]) -> List[ComponentNode]:
    """Group sub-components, in catalog order, into a two-level tree."""
    nodes = []
    index = 0
    while index < len(records):
        parent = records[index]
        index += 1

        rule = None
        if index < len(records):
            rule = next(
                (r for r in rules if r.is_parent(parent) and r.is_child(records[index])),
                None,
            )

        children = []
        if rule is not None:
            while index < len(records) and rule.is_child(records[index]):
                if rule.max_children is not None and len(children) >= rule.max_children:
                    break
                children.append(records[index])
                index += 1

        nodes.append(ComponentNode(
            record=parent,
            children=tuple(children),
            rule=rule.name if rule else None,
        ))
    return nodes


def letter(index: int) -> str:
    if not 0 <= index < len(LETTERS):
        raise HierarchyError(f"No item letter for sub-component position {index + 1}")
    return LETTERS[index]


def label_tree(nodes: Sequence[ComponentNode]) -> List[Tuple[str, CatalogRecord]]:
    """Flatten the tree into (letter path, record) pairs in emission order."""
    labeled = []
    for top_index, node in enumerate(nodes):
        top_letter = letter(top_index)
        labeled.append((top_letter, node.record))
        for child_index, child in enumerate(node.children):
            labeled.append((top_letter + letter(child_index), child))
    return labeled


class HierarchyExpander:
    """Expands resolved catalog entries into schedule rows."""

    def __init__(self, rules: Optional[Sequence[GroupingRule]] = None,
                 motor_keywords: Iterable[str] = MOTOR_KEYWORDS):
        self.rules = list(rules) if rules is not None else default_grouping_rules(motor_keywords)

    def expand(self, entry: CatalogEntry, main_number: int, quantity: int,
               voltage: VoltageTable, occurrence: int = 1) -> List[ScheduleLineItem]:
        """
        Rows for one catalog entry: the main row first, then every
        sub-component in catalog order. Motor labels are not attached here.
        """
        main_item_number = str(main_number)
        rows = [self.create_row(
            entry.main,
            item_number=main_item_number,
            quantity=quantity if quantity else UNSPECIFIED_QUANTITY,
            voltage=voltage,
            is_sub_component=False,
            occurrence=occurrence,
        )]

        nodes = build_component_tree(entry.sub_components, self.rules)
        for letter_path, record in label_tree(nodes):
            rows.append(self.create_row(
                record,
                item_number=main_item_number + letter_path,
                quantity='',
                voltage=voltage,
                is_sub_component=True,
                occurrence=occurrence,
            ))

        grouped = sum(len(node.children) for node in nodes)
        logger.debug(f"{entry.key}: {len(nodes)} sub-components, {grouped} nested")
        return rows

    def create_row(self, record: CatalogRecord, item_number: str, quantity: Union[str, int],
                   voltage: VoltageTable, is_sub_component: bool,
                   occurrence: int = 1) -> ScheduleLineItem:
        return ScheduleLineItem(
            item_number=item_number,
            part_number=record.part_number,
            quantity=quantity,
            description=record.description,
            electrical=derive_electrical(record, voltage),
            is_sub_component=is_sub_component,
            occurrence=occurrence,
        )
