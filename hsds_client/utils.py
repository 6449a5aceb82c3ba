"""
Utility functions for the HSDS command-line interface.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional, Sequence

import click

from .config import DEFAULT_LOG_LEVEL


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


def setup_logging(verbose: bool = False, quiet: bool = False, level: Optional[str] = None) -> None:
    """
    Configure root logging for the CLI.

    ``verbose`` and ``quiet`` win over ``level`` (typically HS_LOG_LEVEL).
    """
    if verbose:
        log_level = logging.DEBUG
    elif quiet:
        log_level = logging.ERROR
    else:
        name = (level or DEFAULT_LOG_LEVEL).upper()
        log_level = getattr(logging, name, logging.WARNING)
        if not isinstance(log_level, int):
            log_level = logging.WARNING

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


def print_success(message: str) -> None:
    click.echo(click.style("✓ ", fg="green") + message)


def print_error(message: str, details: Optional[str] = None) -> None:
    click.echo(click.style("✗ Error: ", fg="red", bold=True) + message, err=True)
    if details:
        click.echo(f"  {details}", err=True)


def print_warning(message: str) -> None:
    click.echo(click.style("! ", fg="yellow") + message)


def print_info(message: str) -> None:
    click.echo(click.style("ℹ ", fg="blue") + message)


def print_json(data: Any, indent: int = 2) -> None:
    click.echo(json.dumps(data, indent=indent, default=str))


def print_table(headers: Sequence[str], rows: List[Sequence[Any]]) -> None:
    """Print rows as a plain aligned text table."""
    str_rows = [["-" if cell is None else str(cell) for cell in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in str_rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(click.unstyle(cell)))

    def fmt(cells: Sequence[str]) -> str:
        return "  ".join(
            cell + " " * (widths[i] - len(click.unstyle(cell))) for i, cell in enumerate(cells)
        ).rstrip()

    click.echo(fmt([click.style(h, bold=True) for h in headers]))
    click.echo("  ".join("-" * w for w in widths))
    for row in str_rows:
        click.echo(fmt(row))


def format_timestamp(value: Optional[float]) -> str:
    """Format an HSDS epoch timestamp."""
    if value is None:
        return "-"
    return datetime.fromtimestamp(value, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def truncate_string(s: str, max_length: int = 50) -> str:
    if len(s) <= max_length:
        return s
    return s[:max_length - 3] + "..."


def parse_typed_value(value: str) -> Any:
    """
    Parse a command-line value as JSON, falling back to the raw string.

    "42" -> 42, "[1, 2]" -> [1, 2], "true" -> True, "hello" -> "hello".
    """
    value = value.strip()
    try:
        return json.loads(value)
    except ValueError:
        return value


def array_dims(value: Any) -> List[int]:
    """
    Dimensions of a value parsed from JSON.

    A scalar has no dimensions; nested lists must be rectangular.

    Raises:
        ValueError: If sibling lists differ in length or depth
    """
    if not isinstance(value, list):
        return []
    if not value:
        return [0]
    inner = [array_dims(item) for item in value]
    if any(dims != inner[0] for dims in inner[1:]):
        raise ValueError("array is not rectangular")
    return [len(value)] + inner[0]


def confirm_action(message: str, default: bool = False) -> bool:
    return click.confirm(message, default=default)
