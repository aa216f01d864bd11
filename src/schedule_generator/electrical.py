#!/usr/bin/env python3
"""
Electrical Parameter Deriver
Converts catalog nameplate values to the supply voltages of the destination
country.
"""

import json
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .exceptions import CatalogLoadError
from .models import CatalogRecord, ElectricalAttributes, VoltageTable

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal('0.01')


class VoltageMap:
    """Destination country → supply voltages, with a fallback country."""

    def __init__(self, tables: Dict[str, VoltageTable], default_country: str = "USA"):
        if default_country not in tables:
            raise CatalogLoadError(f"Default country {default_country} has no voltage table")
        self.tables = dict(tables)
        self.default_country = default_country
        self._by_upper = {code.upper(): code for code in self.tables}

    @classmethod
    def from_dict(cls, data: Dict[str, Dict[str, Any]], default_country: str = "USA") -> "VoltageMap":
        tables = {}
        for country, voltages in data.items():
            try:
                tables[country] = VoltageTable(
                    three_phase=int(voltages['3phase']),
                    one_phase=int(voltages['1phase']),
                )
            except (KeyError, TypeError, ValueError) as e:
                raise CatalogLoadError(f"Invalid voltage table for {country}: {e}") from e
        return cls(tables, default_country)

    @classmethod
    def from_json(cls, path: Union[str, Path], default_country: str = "USA") -> "VoltageMap":
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogLoadError(f"Could not read voltage mappings {path}: {e}") from e
        return cls.from_dict(data, default_country)

    def resolve_country(self, country_code: Optional[str]) -> str:
        """Canonical country code, or the default one for unknown codes."""
        code = self._by_upper.get((country_code or '').strip().upper())
        if code is None:
            logger.warning(f"No voltage table for country {country_code!r}, using {self.default_country}")
            return self.default_country
        return code

    def for_country(self, country_code: Optional[str]) -> VoltageTable:
        return self.tables[self.resolve_country(country_code)]


def to_decimal(value: Any) -> Optional[Decimal]:
    """Parse a numeric catalog cell; returns None for blanks and junk."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).replace(',', '').strip())
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def derive_volts(record: CatalogRecord, voltage: VoltageTable) -> Any:
    if record.phase == 3:
        return voltage.three_phase
    if record.phase == 1:
        return voltage.one_phase
    return record.volts


def derive_amps(native_volts: Any, native_amps: Any, derived_volts: Any) -> Any:
    """
    Re-derive current draw at a new supply voltage.

    Holds apparent power (volts x amps) constant, which approximates but does
    not replace nameplate data for the new voltage. Values that cannot be
    converted are passed through untouched.
    """
    volts = to_decimal(native_volts)
    amps = to_decimal(native_amps)
    new_volts = to_decimal(derived_volts)

    if volts is None or amps is None or new_volts is None:
        return native_amps
    if not volts or not amps or not new_volts or volts == new_volts:
        return native_amps

    derived = (volts * amps / new_volts).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    return float(derived)


def derive_electrical(record: CatalogRecord, voltage: VoltageTable) -> ElectricalAttributes:
    """Electrical attributes of a catalog record at the destination voltages."""
    volts = derive_volts(record, voltage)
    amps = derive_amps(record.volts, record.amps, volts)

    if amps != record.amps:
        logger.debug(f"{record.part_number}: {record.volts}V/{record.amps}A → {volts}V/{amps}A")

    return ElectricalAttributes(
        hp=record.hp,
        phase=record.phase,
        volts=volts,
        amps=amps,
        breaker_rating=record.breaker_rating,
        port=record.port,
        cold_water=record.cold_water,
        hot_water=record.hot_water,
        reclaim=record.reclaim,
        flow_rate_gpm=record.flow_rate_gpm,
        heat_output_btuh=record.heat_output_btuh,
    )


def sum_amps(values) -> float:
    """Total of the numeric amp values, rounded to two places."""
    total = Decimal('0')
    for value in values:
        amps = to_decimal(value)
        if amps is not None:
            total += amps
    return float(total.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))
