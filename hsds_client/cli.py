"""
HSDS CLI - Command Line Interface for the HDF Scalable Data Service.

This module provides the main CLI entry point. Commands are registered from:
- commands.settings: configure, config-clear
- commands.domains: domain info / create / delete / ls / acls
- commands.objects: group, link, dataset and attr commands
"""

import sys
import logging
from pathlib import Path
from typing import Optional

import click

from . import __version__, __prog_name__
from .config import get_config_manager
from .commands import HsdsContext
from .commands.domains import register_domain_commands
from .commands.objects import register_object_commands
from .commands.settings import register_settings_commands
from .utils import print_error

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name=__prog_name__)
@click.option(
    '--config-dir',
    type=click.Path(path_type=Path),
    envvar='HS_CONFIG_DIR',
    help='Custom configuration directory'
)
@click.pass_context
def cli(ctx, config_dir: Optional[Path]):
    """
    HSDS CLI - HDF Scalable Data Service client.

    Browse and edit domains, groups, links, datasets and attributes on an
    HSDS server.

    \b
    Quick Start:
      1. Configure server:   hsds configure --endpoint http://localhost:5101
      2. Add credentials:    hsds configure -u admin -p admin
      3. List a folder:      hsds domain ls /home/admin/
      4. Browse a domain:    hsds link ls /home/admin/test.h5

    \b
    Environment Variables:
      HS_ENDPOINT     - HSDS server URL
      HS_USERNAME     - Username for basic authentication
      HS_PASSWORD     - Password for basic authentication
      HS_TOKEN        - Bearer token
      HS_LOG_LEVEL    - Default log level
      HS_CONFIG_DIR   - Custom configuration directory
    """
    ctx.ensure_object(HsdsContext)
    ctx.obj.config_manager = get_config_manager(config_dir)


register_settings_commands(cli)
register_domain_commands(cli)
register_object_commands(cli)


def main():
    """Main entry point for the CLI."""
    try:
        cli(auto_envvar_prefix='HS')
    except KeyboardInterrupt:
        click.echo("\nAborted.")
        sys.exit(130)
    except Exception as e:
        logger.exception("Unexpected error")
        print_error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
