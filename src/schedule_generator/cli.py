#!/usr/bin/env python3
"""
Electrical Schedule Generator CLI
Builds an electrical equipment schedule from a quote document.
"""

import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .catalog import CatalogIndex
from .config import ScheduleConfig
from .electrical import VoltageMap
from .exceptions import ScheduleError
from .generator import ScheduleGenerator
from .models import Schedule
from .text_extractor import extract_quote_text

logger = logging.getLogger(__name__)

console = Console()


def configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def render_schedule(schedule: Schedule):
    """Print a preview of the schedule rows and its summary."""
    table = Table(title=f'"{schedule.project_name}" - SCHEDULE', show_lines=False)
    for column in ['', 'ITEM #', 'PART #', '#', 'DESCRIPTION', 'HP', 'PHASE', 'VOLTS', 'AMPS', 'C.B.']:
        table.add_column(column)

    for item in schedule.items:
        row = item.to_dict()
        table.add_row(
            item.motor_label or '',
            row['itemNumber'],
            row['partNumber'],
            str(row['quantity']),
            row['description'],
            str(row['hp']),
            str(row['phase']),
            str(row['volts']),
            str(row['amps']),
            str(row['cb']),
            style='bold' if not item.is_sub_component else None,
        )
    console.print(table)

    voltage = schedule.voltage
    summary = (
        f"[bold]Ack #:[/bold] {schedule.acknowledgment_number}\n"
        f"[bold]Country:[/bold] {schedule.country} "
        f"({voltage.three_phase}V 3Ø / {voltage.one_phase}V 1Ø)\n"
        f"[bold]Total Motors:[/bold] {schedule.total_motors}\n"
        f"[bold]Total Amps:[/bold] Σ {schedule.total_amps:.2f}"
    )
    console.print(Panel(summary, title="Summary", border_style="blue"))

    if schedule.not_found_items:
        console.print(Panel('\n'.join(schedule.not_found_items),
                            title="Not found in catalog", border_style="yellow"))
    if schedule.excluded_items:
        console.print(Panel('\n'.join(schedule.excluded_items),
                            title="Excluded (non-electrical)", border_style="dim"))
    if schedule.repeated_items:
        console.print(Panel('\n'.join(schedule.repeated_items),
                            title="Repeated purchases", border_style="cyan"))


@click.group()
@click.version_option(package_name="electrical-schedule-generator")
def cli():
    """Electrical Schedule Generator - quote documents to equipment schedules."""


@cli.command()
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--country', '-c', help='Destination country (default: detected from ship-to address)')
@click.option('--catalog', type=click.Path(exists=True, dir_okay=False), help='Catalog JSON file')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Output JSON file path')
@click.option('--no-preview', is_flag=True, help='Do not print the schedule table')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def generate(input_path: str, country: Optional[str], catalog: Optional[str],
             output: Optional[str], no_preview: bool, verbose: bool):
    """Generate an electrical schedule from a quote PDF or text file."""
    configure_logging(verbose)

    try:
        config = ScheduleConfig.from_env(catalog_path=catalog)
        generator = ScheduleGenerator.from_config(config)
        text = extract_quote_text(input_path)
        schedule = generator.generate_schedule(text, country)
    except ScheduleError as e:
        console.print(f"[red]❌ Error generating schedule: {e}[/red]")
        raise click.Abort()

    if not schedule.items:
        console.print("[yellow]⚠️  No equipment rows were generated. "
                      "Check that the document is a sales order or electrical schedule.[/yellow]")

    if not no_preview:
        render_schedule(schedule)

    if output:
        with open(output, 'w', encoding='utf-8') as f:
            json.dump(schedule.to_dict(), f, indent=2, ensure_ascii=False)
        console.print(f"[green]💾 Schedule saved to: {output}[/green]")
    elif no_preview:
        click.echo(json.dumps(schedule.to_dict(), indent=2, ensure_ascii=False))


@cli.command()
@click.argument('part_number')
@click.option('--catalog', type=click.Path(exists=True, dir_okay=False), help='Catalog JSON file')
def lookup(part_number: str, catalog: Optional[str]):
    """Show how a part number resolves against the catalog."""
    configure_logging(False)

    try:
        config = ScheduleConfig.from_env(catalog_path=catalog)
        index = CatalogIndex.from_json(config.catalog_path)
    except ScheduleError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise click.Abort()

    match = index.resolve(part_number)
    if match is None:
        console.print(f"[yellow]⚠️  {part_number} is not in the catalog[/yellow]")
        sys.exit(1)

    entry = match.entry
    console.print(f"[green]✓ {part_number} → {entry.key}[/green] [dim]({match.strategy} match)[/dim]")
    console.print(f"  {entry.main.description}")
    for record in entry.sub_components:
        console.print(f"    - {record.part_number}: {record.description}")


@cli.command()
def countries():
    """List destination countries and their supply voltages."""
    configure_logging(False)

    config = ScheduleConfig.from_env()
    try:
        voltage_map = VoltageMap.from_json(config.voltage_map_path, config.default_country)
    except ScheduleError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise click.Abort()

    table = Table(title="Voltage Configurations")
    table.add_column("Country")
    table.add_column("3 Phase")
    table.add_column("1 Phase")
    for code, voltage in voltage_map.tables.items():
        marker = " (default)" if code == voltage_map.default_country else ""
        table.add_row(f"{code}{marker}", f"{voltage.three_phase}V", f"{voltage.one_phase}V")
    console.print(table)


def main():
    """Main CLI entry point."""
    cli()


if __name__ == '__main__':
    main()
