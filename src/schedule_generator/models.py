"""
Data models for the Electrical Schedule Generator.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

# Placeholder the schedule spreadsheet shows for a missing electrical value
MISSING = "-"


@dataclass(frozen=True)
class QuoteLineItem:
    """Represents a single purchased line in a quote."""
    part_number: str
    description: str
    quantity: int


@dataclass(frozen=True)
class QuoteData:
    """Line items plus the header information scanned from a quote."""
    acknowledgment_number: str
    project_name: str
    ship_to_address: str
    country: str
    document_type: str
    items: Tuple[QuoteLineItem, ...] = ()


@dataclass(frozen=True)
class CatalogRecord:
    """One physical device as described by the equipment catalog."""
    part_number: str
    description: str
    hp: Any = None
    phase: Optional[int] = None
    volts: Any = None
    amps: Any = None
    breaker_rating: Any = None
    port: Any = None
    cold_water: Any = None
    hot_water: Any = None
    reclaim: Any = None
    flow_rate_gpm: Any = None
    heat_output_btuh: Any = None


@dataclass(frozen=True)
class CatalogEntry:
    """A purchasable part: the main record and its ordered sub-components."""
    key: str
    main: CatalogRecord
    sub_components: Tuple[CatalogRecord, ...] = ()


@dataclass(frozen=True)
class VoltageTable:
    """Supply voltages used in a destination country."""
    three_phase: int
    one_phase: int

    def to_dict(self) -> Dict[str, int]:
        return {"3phase": self.three_phase, "1phase": self.one_phase}


@dataclass(frozen=True)
class ElectricalAttributes:
    """Electrical and utility values of a schedule row after derivation."""
    hp: Any = None
    phase: Optional[int] = None
    volts: Any = None
    amps: Any = None
    breaker_rating: Any = None
    port: Any = None
    cold_water: Any = None
    hot_water: Any = None
    reclaim: Any = None
    flow_rate_gpm: Any = None
    heat_output_btuh: Any = None


@dataclass(frozen=True)
class ScheduleLineItem:
    """Represents a single row of the electrical schedule."""
    item_number: str
    part_number: str
    quantity: Union[str, int]
    description: str
    electrical: ElectricalAttributes
    is_sub_component: bool
    motor_label: Optional[str] = None
    occurrence: int = 1

    def to_dict(self) -> Dict[str, Any]:
        """Row in the shape the spreadsheet writer reads."""
        attrs = self.electrical
        return {
            "itemNumber": self.item_number,
            "partNumber": self.part_number,
            "quantity": self.quantity,
            "description": self.description,
            "hp": _display(attrs.hp),
            "phase": _display(attrs.phase),
            "volts": _display(attrs.volts),
            "amps": _display(attrs.amps),
            "cb": _display(attrs.breaker_rating),
            "port": attrs.port,
            "cold": attrs.cold_water,
            "hot": attrs.hot_water,
            "reclaim": attrs.reclaim,
            "galMin": attrs.flow_rate_gpm,
            "btuh": attrs.heat_output_btuh,
            "isSubComponent": self.is_sub_component,
            "motorLabel": self.motor_label,
        }


@dataclass(frozen=True)
class Schedule:
    """The finished electrical schedule for one quote."""
    project_name: str
    acknowledgment_number: str
    country: str
    voltage: VoltageTable
    items: Tuple[ScheduleLineItem, ...] = ()
    total_motors: int = 0
    total_amps: float = 0.0
    not_found_items: Tuple[str, ...] = ()
    excluded_items: Tuple[str, ...] = ()
    repeated_items: Tuple[str, ...] = ()

    @property
    def main_items(self) -> List[ScheduleLineItem]:
        return [item for item in self.items if not item.is_sub_component]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "projectName": self.project_name,
            "acknowledgmentNumber": self.acknowledgment_number,
            "country": self.country,
            "voltage": self.voltage.to_dict(),
            "items": [item.to_dict() for item in self.items],
            "totalMotors": self.total_motors,
            "totalAmps": self.total_amps,
            "notFoundItems": list(self.not_found_items),
            "excludedItems": list(self.excluded_items),
            "repeatedItems": list(self.repeated_items),
        }


def _display(value: Any) -> Any:
    if value is None or value == "":
        return MISSING
    return value
