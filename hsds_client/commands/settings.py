"""
Configuration/settings commands for the HSDS CLI.

Commands:
- configure: Configure connection settings
- config-clear: Clear all configuration
"""

from typing import Optional

import click

from .. import __prog_name__
from ..config import DEFAULT_ENDPOINT
from . import (
    HsdsContext,
    pass_context,
    print_success,
    print_info,
    print_warning,
)


def register_settings_commands(cli: click.Group) -> None:
    """Register configuration commands with the CLI."""

    @cli.command('configure')
    @click.option(
        '--endpoint', '-e',
        help=f'HSDS server URL (default: {DEFAULT_ENDPOINT})'
    )
    @click.option('--username', '-u', help='Username for basic authentication')
    @click.option('--password', '-p', help='Password for basic authentication')
    @click.option('--token', help='Bearer token (used instead of username/password)')
    @click.option(
        '--timeout', '-t',
        type=int,
        help='Request timeout in seconds'
    )
    @click.option(
        '--no-verify-ssl',
        is_flag=True,
        help='Disable SSL certificate verification'
    )
    @click.option(
        '--log-level',
        type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
        help='Default log level'
    )
    @click.option(
        '--show',
        is_flag=True,
        help='Show current configuration'
    )
    @pass_context
    def configure(
        ctx: HsdsContext,
        endpoint: Optional[str],
        username: Optional[str],
        password: Optional[str],
        token: Optional[str],
        timeout: Optional[int],
        no_verify_ssl: bool,
        log_level: Optional[str],
        show: bool
    ):
        """
        Configure HSDS connection settings.

        \b
        Examples:
          hsds configure --endpoint http://localhost:5101
          hsds configure -u admin -p admin
          hsds configure --show
        """
        config_manager = ctx.config_manager

        if show:
            config = config_manager.get()
            click.echo("\nCurrent Configuration:")
            click.echo(f"  Endpoint:        {config.endpoint or '(not configured)'}")
            click.echo(f"  Username:        {config.username or '(not set)'}")
            click.echo(f"  Password:        {'*' * 10 if config.password else '(not set)'}")
            click.echo(f"  Token:           {'*' * 20 + '...' if config.token else '(not set)'}")
            click.echo(f"  Timeout:         {config.timeout}s")
            click.echo(f"  Verify SSL:      {config.verify_ssl}")
            click.echo(f"  Log Level:       {config.log_level}")
            click.echo(f"  Config Path:     {config_manager.get_config_path()}")
            return

        # Interactive configuration if no options provided
        if not any([endpoint, username, password, token, timeout, no_verify_ssl, log_level]):
            click.echo("Interactive configuration setup:")

            current = config_manager.get()

            endpoint = click.prompt(
                "HSDS endpoint",
                default=current.endpoint or DEFAULT_ENDPOINT
            )
            username = click.prompt(
                "Username (leave empty for anonymous access)",
                default=current.username or '',
                show_default=False
            )
            if username:
                password = click.prompt("Password", hide_input=True)
            timeout = click.prompt(
                "Request timeout (seconds)",
                default=current.timeout,
                type=int
            )

        # Update configuration
        updates = {}
        if endpoint:
            updates['endpoint'] = endpoint
        if username:
            updates['username'] = username
        if password:
            updates['password'] = password
        if token:
            updates['token'] = token
        if timeout:
            updates['timeout'] = timeout
        if no_verify_ssl:
            updates['verify_ssl'] = False
            print_warning("SSL certificate verification disabled.")
        if log_level:
            updates['log_level'] = log_level.upper()

        if updates:
            config_manager.update(**updates)
            print_success("Configuration saved successfully.")
            print_info(f"Run '{__prog_name__} domain info /home' to check the connection.")
        else:
            print_info("No changes made.")

    @cli.command('config-clear')
    @click.confirmation_option(prompt='Are you sure you want to clear all configuration?')
    @pass_context
    def config_clear(ctx: HsdsContext):
        """Clear all stored configuration."""
        ctx.config_manager.clear()
        print_success("Configuration cleared.")
