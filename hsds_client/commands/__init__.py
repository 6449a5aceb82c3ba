"""
Command modules for the HSDS CLI.

Shared context object, option decorators and output helpers used by every
command module.
"""

import sys
from typing import Optional

import click

from ..api import HsdsClient
from ..config import ConfigManager
from ..utils import (
    OutputFormat,
    print_error,
    print_info,
    print_json,
    print_success,
    print_table,
    print_warning,
)


class HsdsContext:
    """CLI context object for sharing state between commands."""

    def __init__(self):
        self.config_manager: ConfigManager = None  # type: ignore[assignment]
        self.client: Optional[HsdsClient] = None

    def get_client(self) -> HsdsClient:
        """Build a client from the effective configuration."""
        if self.client is None:
            self.client = HsdsClient(config=self.config_manager.get())
        return self.client


pass_context = click.make_pass_decorator(HsdsContext, ensure=True)


def common_options(f):
    """Common options for all commands."""
    f = click.option(
        '-v', '--verbose',
        is_flag=True,
        help='Enable verbose output'
    )(f)
    f = click.option(
        '-q', '--quiet',
        is_flag=True,
        help='Suppress non-essential output'
    )(f)
    f = click.option(
        '-f', '--format',
        'output_format',
        type=click.Choice([fmt.value for fmt in OutputFormat]),
        default=OutputFormat.TABLE.value,
        help='Output format'
    )(f)
    return f


def require_config(f):
    """Decorator to require a configured endpoint."""
    @click.pass_context
    def wrapper(click_ctx, *args, **kwargs):
        ctx = click_ctx.ensure_object(HsdsContext)
        config = ctx.config_manager.get()

        if not config.is_configured():
            print_error(
                "HSDS endpoint is not configured.",
                "Run 'hsds configure --endpoint URL' or set HS_ENDPOINT."
            )
            sys.exit(1)

        return click_ctx.invoke(f, *args, **kwargs)

    wrapper.__name__ = f.__name__
    wrapper.__doc__ = f.__doc__
    return wrapper


__all__ = [
    "HsdsContext",
    "pass_context",
    "common_options",
    "require_config",
    "OutputFormat",
    "print_error",
    "print_info",
    "print_json",
    "print_success",
    "print_table",
    "print_warning",
]
