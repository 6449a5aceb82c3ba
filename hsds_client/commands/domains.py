"""
Domain commands for the HSDS CLI.

Commands:
- domain info: Show domain metadata
- domain create: Create a domain or folder
- domain delete: Delete a domain or folder
- domain ls: List the domains in a folder
- domain acls: Show access control lists
"""

import sys
from dataclasses import asdict
from typing import Optional

import click

from ..exceptions import HsdsError
from ..utils import confirm_action, format_timestamp, setup_logging
from . import (
    HsdsContext,
    OutputFormat,
    common_options,
    pass_context,
    print_error,
    print_info,
    print_json,
    print_success,
    print_table,
    require_config,
)


def _yes_no(value: Optional[bool]) -> str:
    if value is None:
        return '-'
    return 'Yes' if value else 'No'


def register_domain_commands(cli: click.Group) -> None:
    """Register domain commands with the CLI."""

    @cli.group('domain')
    def domain_group():
        """Domain and folder operations."""

    @domain_group.command('info')
    @common_options
    @click.argument('domain')
    @pass_context
    @require_config
    def domain_info(ctx: HsdsContext, verbose: bool, quiet: bool, output_format: str, domain: str):
        """
        Show domain metadata.

        \b
        Examples:
          hsds domain info /home/admin/test.h5
          hsds domain info /home -f json
        """
        setup_logging(verbose, quiet, ctx.config_manager.get().log_level)
        fmt = OutputFormat(output_format)

        try:
            with ctx.get_client() as client:
                info = client.domains.get(domain)
        except HsdsError as e:
            print_error(str(e), e.details)
            sys.exit(1)

        if fmt == OutputFormat.JSON:
            print_json(asdict(info))
            return

        click.echo(f"\nDomain: {domain}\n")
        click.echo(f"  Class:          {info.domain_class.value if info.domain_class else '-'}")
        click.echo(f"  Owner:          {info.owner or '-'}")
        click.echo(f"  Root group:     {info.root or '-'}")
        click.echo(f"  Created:        {format_timestamp(info.created)}")
        click.echo(f"  Last modified:  {format_timestamp(info.last_modified)}")

    @domain_group.command('create')
    @common_options
    @click.argument('domain')
    @click.option('--folder', is_flag=True, help='Create a folder instead of a domain')
    @pass_context
    @require_config
    def domain_create(
        ctx: HsdsContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        domain: str,
        folder: bool
    ):
        """
        Create a domain or folder.

        \b
        Examples:
          hsds domain create /home/admin/test.h5
          hsds domain create /home/admin/data --folder
        """
        setup_logging(verbose, quiet, ctx.config_manager.get().log_level)
        fmt = OutputFormat(output_format)

        try:
            with ctx.get_client() as client:
                if folder:
                    created = client.domains.create_folder(domain)
                else:
                    created = client.domains.create(domain)
        except HsdsError as e:
            print_error(str(e), e.details)
            sys.exit(1)

        if fmt == OutputFormat.JSON:
            print_json(asdict(created))
        else:
            print_success(f"Created {'folder' if folder else 'domain'}: {domain}")
            if created.root and not quiet:
                click.echo(f"  Root group: {created.root}")

    @domain_group.command('delete')
    @click.argument('domain')
    @click.option('--yes', '-y', is_flag=True, help='Skip confirmation')
    @click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
    @pass_context
    @require_config
    def domain_delete(ctx: HsdsContext, domain: str, yes: bool, verbose: bool):
        """Delete a domain or an empty folder."""
        setup_logging(verbose, False, ctx.config_manager.get().log_level)

        if not yes and not confirm_action(f"Delete {domain}?"):
            print_info("Cancelled.")
            return

        try:
            with ctx.get_client() as client:
                client.domains.delete(domain)
        except HsdsError as e:
            print_error(str(e), e.details)
            sys.exit(1)

        print_success(f"Deleted: {domain}")

    @domain_group.command('ls')
    @common_options
    @click.argument('folder', required=False)
    @click.option('--limit', '-n', type=int, help='Maximum number of entries')
    @pass_context
    @require_config
    def domain_ls(
        ctx: HsdsContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        folder: Optional[str],
        limit: Optional[int]
    ):
        """
        List the domains in a folder.

        \b
        Examples:
          hsds domain ls /home/admin/
          hsds domain ls /home/ --limit 10 -f json
        """
        setup_logging(verbose, quiet, ctx.config_manager.get().log_level)
        fmt = OutputFormat(output_format)

        if folder and not folder.endswith('/'):
            folder += '/'

        try:
            with ctx.get_client() as client:
                listing = client.domains.list(folder, limit=limit)
        except HsdsError as e:
            print_error(str(e), e.details)
            sys.exit(1)

        if fmt == OutputFormat.JSON:
            print_json([asdict(entry) for entry in listing.domains])
            return

        if not quiet:
            click.echo(f"\nDomains in {folder or '/'} ({len(listing.domains)}):\n")
        print_table(
            ["Name", "Class", "Owner", "Last Modified"],
            [
                [
                    entry.name,
                    entry.domain_class.value if entry.domain_class else None,
                    entry.owner,
                    format_timestamp(entry.last_modified),
                ]
                for entry in listing.domains
            ],
        )

    @domain_group.command('acls')
    @common_options
    @click.argument('domain')
    @pass_context
    @require_config
    def domain_acls(ctx: HsdsContext, verbose: bool, quiet: bool, output_format: str, domain: str):
        """Show the access control lists of a domain."""
        setup_logging(verbose, quiet, ctx.config_manager.get().log_level)
        fmt = OutputFormat(output_format)

        try:
            with ctx.get_client() as client:
                acls = client.domains.get_acls(domain)
        except HsdsError as e:
            print_error(str(e), e.details)
            sys.exit(1)

        if fmt == OutputFormat.JSON:
            print_json([asdict(acl) for acl in acls.acls])
            return

        print_table(
            ["User", "Create", "Read", "Update", "Delete", "Read ACL", "Update ACL"],
            [
                [
                    acl.user_name,
                    _yes_no(acl.create),
                    _yes_no(acl.read),
                    _yes_no(acl.update),
                    _yes_no(acl.delete),
                    _yes_no(acl.read_acl),
                    _yes_no(acl.update_acl),
                ]
                for acl in acls.acls
            ],
        )
