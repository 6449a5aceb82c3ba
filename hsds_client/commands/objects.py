"""
Object commands for the HSDS CLI.

Commands:
- group ls / info / create
- link ls / create
- dataset ls / info / read
- attr ls / get / put
"""

import sys
from dataclasses import asdict
from typing import Any, Optional

import click

from ..exceptions import HsdsError
from ..models import (
    AttributeCreateRequest,
    Collection,
    DataType,
    GroupCreateRequest,
    LinkCreateRequest,
    LinkRequest,
)
from ..utils import array_dims, format_timestamp, parse_typed_value, setup_logging, truncate_string
from . import (
    HsdsContext,
    OutputFormat,
    common_options,
    pass_context,
    print_error,
    print_json,
    print_success,
    print_table,
    require_config,
)


def _type_name(type_spec: Any) -> str:
    if type_spec is None:
        return '-'
    if isinstance(type_spec, DataType):
        return type_spec.base or type_spec.type_class
    return str(type_spec)


def _fail(e: HsdsError) -> None:
    print_error(str(e), e.details)
    sys.exit(1)


def register_object_commands(cli: click.Group) -> None:
    """Register group, link, dataset and attribute commands with the CLI."""

    # ========== Groups ==========

    @cli.group('group')
    def group_group():
        """Group operations."""

    @group_group.command('ls')
    @common_options
    @click.argument('domain')
    @pass_context
    @require_config
    def group_ls(ctx: HsdsContext, verbose: bool, quiet: bool, output_format: str, domain: str):
        """List the group ids in a domain."""
        setup_logging(verbose, quiet, ctx.config_manager.get().log_level)
        try:
            with ctx.get_client() as client:
                groups = client.groups.list(domain)
        except HsdsError as e:
            _fail(e)

        if OutputFormat(output_format) == OutputFormat.JSON:
            print_json(groups.groups)
        else:
            print_table(["Group ID"], [[group_id] for group_id in groups.groups])

    @group_group.command('info')
    @common_options
    @click.argument('domain')
    @click.argument('group_id')
    @click.option('--alias', is_flag=True, help='Show the paths the group is reachable by')
    @pass_context
    @require_config
    def group_info(
        ctx: HsdsContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        domain: str,
        group_id: str,
        alias: bool
    ):
        """Show group metadata."""
        setup_logging(verbose, quiet, ctx.config_manager.get().log_level)
        try:
            with ctx.get_client() as client:
                group = client.groups.get(domain, group_id, get_alias=alias)
        except HsdsError as e:
            _fail(e)

        if OutputFormat(output_format) == OutputFormat.JSON:
            print_json(asdict(group))
            return

        click.echo(f"\nGroup: {group.id}\n")
        click.echo(f"  Links:          {group.link_count if group.link_count is not None else '-'}")
        click.echo(f"  Attributes:     {group.attribute_count if group.attribute_count is not None else '-'}")
        click.echo(f"  Created:        {format_timestamp(group.created)}")
        click.echo(f"  Last modified:  {format_timestamp(group.last_modified)}")
        if group.alias:
            click.echo(f"  Alias:          {', '.join(group.alias)}")

    @group_group.command('create')
    @click.argument('domain')
    @click.option('--parent', help='Parent group id to link the new group into')
    @click.option('--name', help='Link name in the parent group')
    @pass_context
    @require_config
    def group_create(ctx: HsdsContext, domain: str, parent: Optional[str], name: Optional[str]):
        """
        Create a group.

        \b
        Examples:
          hsds group create /home/admin/test.h5
          hsds group create /home/admin/test.h5 --parent g-1234 --name data
        """
        setup_logging(False, False, ctx.config_manager.get().log_level)
        if bool(parent) != bool(name):
            print_error("--parent and --name must be given together.")
            sys.exit(1)

        request = GroupCreateRequest(link=LinkRequest(parent, name)) if parent and name else None
        try:
            with ctx.get_client() as client:
                group = client.groups.create(domain, request)
        except HsdsError as e:
            _fail(e)

        print_success(f"Created group: {group.id}")

    # ========== Links ==========

    @cli.group('link')
    def link_group():
        """Link operations."""

    @link_group.command('ls')
    @common_options
    @click.argument('domain')
    @click.argument('group_id', required=False)
    @click.option('--limit', '-n', type=int, help='Maximum number of links')
    @click.option('--marker', help='Link name to continue listing after')
    @pass_context
    @require_config
    def link_ls(
        ctx: HsdsContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        domain: str,
        group_id: Optional[str],
        limit: Optional[int],
        marker: Optional[str]
    ):
        """
        List the links of a group (the root group by default).

        \b
        Examples:
          hsds link ls /home/admin/test.h5
          hsds link ls /home/admin/test.h5 g-1234 --limit 10
        """
        setup_logging(verbose, quiet, ctx.config_manager.get().log_level)
        try:
            with ctx.get_client() as client:
                if not group_id:
                    group_id = client.domains.get(domain).root
                    if not group_id:
                        print_error(f"{domain} has no root group (is it a folder?)")
                        sys.exit(1)
                links = client.links.list(domain, group_id, limit=limit, marker=marker)
        except HsdsError as e:
            _fail(e)

        if OutputFormat(output_format) == OutputFormat.JSON:
            print_json([asdict(link) for link in links.links])
            return

        print_table(
            ["Name", "Class", "Target"],
            [
                [
                    link.title,
                    link.link_class.value if link.link_class else None,
                    link.id or link.h5path,
                ]
                for link in links.links
            ],
        )

    @link_group.command('create')
    @click.argument('domain')
    @click.argument('group_id')
    @click.argument('name')
    @click.option('--target-id', help='Object id for a hard link')
    @click.option('--h5path', help='Target path for a soft or external link')
    @click.option('--h5domain', help='Target domain for an external link')
    @pass_context
    @require_config
    def link_create(
        ctx: HsdsContext,
        domain: str,
        group_id: str,
        name: str,
        target_id: Optional[str],
        h5path: Optional[str],
        h5domain: Optional[str]
    ):
        """
        Create a hard, soft or external link.

        \b
        Examples:
          hsds link create /home/admin/test.h5 g-1234 data --target-id d-5678
          hsds link create /home/admin/test.h5 g-1234 alias --h5path /data
          hsds link create /home/admin/test.h5 g-1234 ext --h5path /data --h5domain /home/admin/other.h5
        """
        setup_logging(False, False, ctx.config_manager.get().log_level)
        if bool(target_id) == bool(h5path):
            print_error("Give exactly one of --target-id or --h5path.")
            sys.exit(1)
        if h5domain and not h5path:
            print_error("--h5domain requires --h5path.")
            sys.exit(1)

        request = LinkCreateRequest(id=target_id, h5path=h5path, h5domain=h5domain)
        try:
            with ctx.get_client() as client:
                client.links.create(domain, group_id, name, request)
        except HsdsError as e:
            _fail(e)

        print_success(f"Created link: {name}")

    # ========== Datasets ==========

    @cli.group('dataset')
    def dataset_group():
        """Dataset operations."""

    @dataset_group.command('ls')
    @common_options
    @click.argument('domain')
    @pass_context
    @require_config
    def dataset_ls(ctx: HsdsContext, verbose: bool, quiet: bool, output_format: str, domain: str):
        """List the dataset ids in a domain."""
        setup_logging(verbose, quiet, ctx.config_manager.get().log_level)
        try:
            with ctx.get_client() as client:
                datasets = client.datasets.list(domain)
        except HsdsError as e:
            _fail(e)

        if OutputFormat(output_format) == OutputFormat.JSON:
            print_json(datasets.datasets)
        else:
            print_table(["Dataset ID"], [[dataset_id] for dataset_id in datasets.datasets])

    @dataset_group.command('info')
    @common_options
    @click.argument('domain')
    @click.argument('dataset_id')
    @pass_context
    @require_config
    def dataset_info(
        ctx: HsdsContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        domain: str,
        dataset_id: str
    ):
        """Show dataset metadata."""
        setup_logging(verbose, quiet, ctx.config_manager.get().log_level)
        try:
            with ctx.get_client() as client:
                dataset = client.datasets.get(domain, dataset_id)
        except HsdsError as e:
            _fail(e)

        if OutputFormat(output_format) == OutputFormat.JSON:
            print_json(asdict(dataset))
            return

        shape = dataset.shape
        click.echo(f"\nDataset: {dataset.id}\n")
        click.echo(f"  Type:           {_type_name(dataset.type)}")
        click.echo(f"  Shape:          {shape.dims if shape and shape.dims is not None else (shape.shape_class if shape else '-')}")
        if shape and shape.maxdims:
            click.echo(f"  Max dims:       {shape.maxdims}")
        click.echo(f"  Attributes:     {dataset.attribute_count if dataset.attribute_count is not None else '-'}")
        click.echo(f"  Created:        {format_timestamp(dataset.created)}")

    @dataset_group.command('read')
    @click.argument('domain')
    @click.argument('dataset_id')
    @click.option('--select', '-s', help='Hyperslab selection, e.g. "[0:10,2:4]"')
    @click.option('--query', help='Query condition for compound datasets')
    @click.option('--limit', '-n', type=int, help='Maximum number of query results')
    @pass_context
    @require_config
    def dataset_read(
        ctx: HsdsContext,
        domain: str,
        dataset_id: str,
        select: Optional[str],
        query: Optional[str],
        limit: Optional[int]
    ):
        """Read dataset values as JSON."""
        setup_logging(False, False, ctx.config_manager.get().log_level)
        try:
            with ctx.get_client() as client:
                result = client.datasets.read_values_json(
                    domain, dataset_id, select=select, query=query, limit=limit
                )
        except HsdsError as e:
            _fail(e)

        print_json(result.get('value', result) if isinstance(result, dict) else result)

    # ========== Attributes ==========

    collection_choice = click.Choice([c.value for c in Collection])

    @cli.group('attr')
    def attr_group():
        """Attribute operations."""

    @attr_group.command('ls')
    @common_options
    @click.argument('domain')
    @click.argument('collection', type=collection_choice)
    @click.argument('obj_id')
    @pass_context
    @require_config
    def attr_ls(
        ctx: HsdsContext,
        verbose: bool,
        quiet: bool,
        output_format: str,
        domain: str,
        collection: str,
        obj_id: str
    ):
        """
        List the attributes of an object.

        \b
        Examples:
          hsds attr ls /home/admin/test.h5 groups g-1234
          hsds attr ls /home/admin/test.h5 datasets d-5678 -f json
        """
        setup_logging(verbose, quiet, ctx.config_manager.get().log_level)
        try:
            with ctx.get_client() as client:
                attrs = client.attributes.list(domain, collection, obj_id, include_data=True)
        except HsdsError as e:
            _fail(e)

        if OutputFormat(output_format) == OutputFormat.JSON:
            print_json([asdict(attr) for attr in attrs.attributes])
            return

        print_table(
            ["Name", "Type", "Value"],
            [
                [attr.name, _type_name(attr.type), truncate_string(str(attr.value), 60)]
                for attr in attrs.attributes
            ],
        )

    @attr_group.command('get')
    @click.argument('domain')
    @click.argument('collection', type=collection_choice)
    @click.argument('obj_id')
    @click.argument('name')
    @pass_context
    @require_config
    def attr_get(ctx: HsdsContext, domain: str, collection: str, obj_id: str, name: str):
        """Print an attribute as JSON."""
        setup_logging(False, False, ctx.config_manager.get().log_level)
        try:
            with ctx.get_client() as client:
                attr = client.attributes.get(domain, collection, obj_id, name)
        except HsdsError as e:
            _fail(e)

        print_json(asdict(attr))

    @attr_group.command('put')
    @click.argument('domain')
    @click.argument('collection', type=collection_choice)
    @click.argument('obj_id')
    @click.argument('name')
    @click.argument('value')
    @click.option('--type', 'type_name', default='H5T_STD_I32LE', show_default=True,
                  help='Predefined HDF5 type, or H5T_STRING for a variable-length UTF-8 string')
    @click.option('--replace', is_flag=True, help='Overwrite an existing attribute')
    @pass_context
    @require_config
    def attr_put(
        ctx: HsdsContext,
        domain: str,
        collection: str,
        obj_id: str,
        name: str,
        value: str,
        type_name: str,
        replace: bool
    ):
        """
        Write a scalar or array attribute.

        VALUE is parsed as JSON when possible ("42", "[1, 2, 3]", "[[1, 2], [3, 4]]").
        Arrays must be rectangular; their shape is taken from the nesting.

        \b
        Examples:
          hsds attr put /home/admin/test.h5 groups g-1234 count 42
          hsds attr put /home/admin/test.h5 groups g-1234 title Hello --type H5T_STRING
        """
        setup_logging(False, False, ctx.config_manager.get().log_level)
        if type_name == 'H5T_STRING':
            parsed: Any = value
            request = AttributeCreateRequest(type=DataType.variable_utf8(), value=parsed)
        else:
            parsed = parse_typed_value(value)
            try:
                dims = array_dims(parsed)
            except ValueError as e:
                print_error(f"Invalid value: {e}")
                sys.exit(1)
            shape = dims or None
            request = AttributeCreateRequest(type=type_name, shape=shape, value=parsed)

        try:
            with ctx.get_client() as client:
                client.attributes.put(domain, collection, obj_id, name, request, replace=replace)
        except HsdsError as e:
            _fail(e)

        print_success(f"Wrote attribute: {name}")
