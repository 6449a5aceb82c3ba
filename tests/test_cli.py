"""
Tests for CLI commands.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from hsds_client.cli import cli
from hsds_client.config import ConfigManager, HsdsConfig
from hsds_client.exceptions import ObjectNotFoundError
from hsds_client.models import (
    Attribute,
    Attributes,
    Dataset,
    DataType,
    Domain,
    DomainClass,
    DomainEntry,
    DomainListing,
    Group,
    Groups,
    Link,
    LinkClass,
    Links,
    Shape,
)

DOMAIN = "/home/test_user/test.h5"


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_dir(tmp_path):
    """Create a configured config directory."""
    directory = tmp_path / "config"
    ConfigManager(directory).save(HsdsConfig(endpoint="http://hsds.test:5101", username="admin", password="admin"))
    return directory


@pytest.fixture
def mock_client():
    """Patch the client used by the commands."""
    with patch('hsds_client.commands.HsdsClient') as mock_class:
        mock_instance = MagicMock()
        mock_instance.__enter__ = MagicMock(return_value=mock_instance)
        mock_instance.__exit__ = MagicMock(return_value=False)
        mock_class.return_value = mock_instance
        yield mock_instance


def invoke(runner, config_dir, args, **kwargs):
    return runner.invoke(cli, ['--config-dir', str(config_dir)] + args, **kwargs)


class TestCLI:
    """Tests for main CLI."""

    def test_version(self, runner):
        """Test version option."""
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert 'hsds' in result.output.lower()

    def test_help(self, runner):
        """Test help output."""
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'HSDS CLI' in result.output
        for command in ('configure', 'domain', 'group', 'link', 'dataset', 'attr'):
            assert command in result.output


class TestConfigureCommand:
    """Tests for configure command."""

    def test_configure_show(self, runner, config_dir):
        """Test showing current configuration."""
        result = invoke(runner, config_dir, ['configure', '--show'])
        assert result.exit_code == 0
        assert 'http://hsds.test:5101' in result.output
        assert 'admin' in result.output

    def test_configure_options(self, runner, tmp_path):
        """Test configuration with options."""
        result = invoke(runner, tmp_path, [
            'configure', '--endpoint', 'http://new:5101', '--token', 'tok', '--timeout', '60'
        ])
        assert result.exit_code == 0
        stored = json.loads((tmp_path / 'config.json').read_text())
        assert stored['endpoint'] == 'http://new:5101'
        assert stored['token'] == 'tok'
        assert stored['timeout'] == 60

    def test_configure_interactive(self, runner, tmp_path):
        """Test interactive prompts when no options are given."""
        result = invoke(runner, tmp_path, ['configure'], input='http://prompted:5101\nbob\nsecret\n30\n')
        assert result.exit_code == 0
        config = ConfigManager(tmp_path).get()
        assert config.endpoint == 'http://prompted:5101'
        assert config.username == 'bob'
        assert config.password == 'secret'

    def test_config_clear(self, runner, config_dir):
        result = invoke(runner, config_dir, ['config-clear', '--yes'])
        assert result.exit_code == 0
        assert not (config_dir / 'config.json').exists()


class TestDomainCommands:
    """Tests for domain commands."""

    def test_not_configured(self, runner, tmp_path):
        """Test commands fail cleanly without an endpoint."""
        ConfigManager(tmp_path).save(HsdsConfig(endpoint=""))
        result = invoke(runner, tmp_path, ['domain', 'info', DOMAIN])
        assert result.exit_code == 1
        assert 'not configured' in result.output.lower()

    def test_info(self, runner, config_dir, mock_client):
        mock_client.domains.get.return_value = Domain(
            root="g-1", owner="admin", domain_class=DomainClass.DOMAIN, created=1700000000.0
        )

        result = invoke(runner, config_dir, ['domain', 'info', DOMAIN])

        assert result.exit_code == 0
        assert 'g-1' in result.output
        mock_client.domains.get.assert_called_once_with(DOMAIN)

    def test_info_json(self, runner, config_dir, mock_client):
        mock_client.domains.get.return_value = Domain(root="g-1", domain_class=DomainClass.DOMAIN)

        result = invoke(runner, config_dir, ['domain', 'info', DOMAIN, '-f', 'json'])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data['root'] == 'g-1'
        assert data['domain_class'] == 'domain'

    def test_info_not_found(self, runner, config_dir, mock_client):
        mock_client.domains.get.side_effect = ObjectNotFoundError("Object not found: nope", status_code=404)

        result = invoke(runner, config_dir, ['domain', 'info', DOMAIN])

        assert result.exit_code == 1
        assert 'not found' in result.output.lower()

    def test_create_folder(self, runner, config_dir, mock_client):
        mock_client.domains.create_folder.return_value = Domain(domain_class=DomainClass.FOLDER)

        result = invoke(runner, config_dir, ['domain', 'create', '/home/test_user/sub', '--folder'])

        assert result.exit_code == 0
        mock_client.domains.create_folder.assert_called_once_with('/home/test_user/sub')

    def test_delete_with_confirmation(self, runner, config_dir, mock_client):
        result = invoke(runner, config_dir, ['domain', 'delete', DOMAIN], input='y\n')

        assert result.exit_code == 0
        mock_client.domains.delete.assert_called_once_with(DOMAIN)

    def test_delete_cancelled(self, runner, config_dir, mock_client):
        result = invoke(runner, config_dir, ['domain', 'delete', DOMAIN], input='n\n')

        assert result.exit_code == 0
        mock_client.domains.delete.assert_not_called()

    def test_ls_appends_slash(self, runner, config_dir, mock_client):
        mock_client.domains.list.return_value = DomainListing(domains=[
            DomainEntry(name=DOMAIN, owner="test_user", domain_class=DomainClass.DOMAIN),
        ])

        result = invoke(runner, config_dir, ['domain', 'ls', '/home/test_user'])

        assert result.exit_code == 0
        assert DOMAIN in result.output
        mock_client.domains.list.assert_called_once_with('/home/test_user/', limit=None)


class TestObjectCommands:
    """Tests for group, link, dataset and attribute commands."""

    def test_group_ls(self, runner, config_dir, mock_client):
        mock_client.groups.list.return_value = Groups(groups=["g-1", "g-2"])

        result = invoke(runner, config_dir, ['group', 'ls', DOMAIN])

        assert result.exit_code == 0
        assert 'g-2' in result.output

    def test_group_create_linked(self, runner, config_dir, mock_client):
        mock_client.groups.create.return_value = Group(id="g-new")

        result = invoke(runner, config_dir, ['group', 'create', DOMAIN, '--parent', 'g-1', '--name', 'child'])

        assert result.exit_code == 0
        assert 'g-new' in result.output
        request = mock_client.groups.create.call_args.args[1]
        assert request.to_dict() == {"link": {"id": "g-1", "name": "child"}}

    def test_group_create_requires_both_link_options(self, runner, config_dir, mock_client):
        result = invoke(runner, config_dir, ['group', 'create', DOMAIN, '--parent', 'g-1'])

        assert result.exit_code == 1
        mock_client.groups.create.assert_not_called()

    def test_link_ls_defaults_to_root(self, runner, config_dir, mock_client):
        mock_client.domains.get.return_value = Domain(root="g-root")
        mock_client.links.list.return_value = Links(links=[
            Link(title="data", id="d-1", link_class=LinkClass.HARD),
        ])

        result = invoke(runner, config_dir, ['link', 'ls', DOMAIN])

        assert result.exit_code == 0
        assert 'data' in result.output
        mock_client.links.list.assert_called_once_with(DOMAIN, 'g-root', limit=None, marker=None)

    def test_link_create_soft(self, runner, config_dir, mock_client):
        result = invoke(runner, config_dir, ['link', 'create', DOMAIN, 'g-1', 'alias', '--h5path', '/data'])

        assert result.exit_code == 0
        request = mock_client.links.create.call_args.args[3]
        assert request.to_dict() == {"h5path": "/data"}

    def test_link_create_needs_one_target(self, runner, config_dir, mock_client):
        result = invoke(runner, config_dir, [
            'link', 'create', DOMAIN, 'g-1', 'x', '--target-id', 'd-1', '--h5path', '/data'
        ])

        assert result.exit_code == 1
        mock_client.links.create.assert_not_called()

    def test_dataset_info(self, runner, config_dir, mock_client):
        mock_client.datasets.get.return_value = Dataset(
            id="d-1", type="H5T_STD_I32LE", shape=Shape("H5S_SIMPLE", dims=[10])
        )

        result = invoke(runner, config_dir, ['dataset', 'info', DOMAIN, 'd-1'])

        assert result.exit_code == 0
        assert 'H5T_STD_I32LE' in result.output
        assert '[10]' in result.output

    def test_dataset_read(self, runner, config_dir, mock_client):
        mock_client.datasets.read_values_json.return_value = {"value": [1, 2, 3]}

        result = invoke(runner, config_dir, ['dataset', 'read', DOMAIN, 'd-1', '--select', '[0:3]'])

        assert result.exit_code == 0
        assert json.loads(result.output) == [1, 2, 3]
        mock_client.datasets.read_values_json.assert_called_once_with(
            DOMAIN, 'd-1', select='[0:3]', query=None, limit=None
        )

    def test_attr_ls(self, runner, config_dir, mock_client):
        mock_client.attributes.list.return_value = Attributes(attributes=[
            Attribute(name="units", type=DataType.variable_utf8(), value="kelvin"),
        ])

        result = invoke(runner, config_dir, ['attr', 'ls', DOMAIN, 'datasets', 'd-1'])

        assert result.exit_code == 0
        assert 'kelvin' in result.output

    def test_attr_put_number(self, runner, config_dir, mock_client):
        result = invoke(runner, config_dir, ['attr', 'put', DOMAIN, 'groups', 'g-1', 'count', '42'])

        assert result.exit_code == 0
        request = mock_client.attributes.put.call_args.args[4]
        assert request.to_dict() == {"type": "H5T_STD_I32LE", "value": 42}

    def test_attr_put_array(self, runner, config_dir, mock_client):
        result = invoke(runner, config_dir, [
            'attr', 'put', DOMAIN, 'groups', 'g-1', 'dims', '[1, 2, 3]', '--replace'
        ])

        assert result.exit_code == 0
        request = mock_client.attributes.put.call_args.args[4]
        assert request.to_dict()["shape"] == [3]
        assert mock_client.attributes.put.call_args.kwargs["replace"] is True

    def test_attr_put_two_dimensional(self, runner, config_dir, mock_client):
        """Test that a nested array value is written with its full shape."""
        result = invoke(runner, config_dir, [
            'attr', 'put', DOMAIN, 'groups', 'g-1', 'grid', '[[1, 2], [3, 4]]'
        ])

        assert result.exit_code == 0
        request = mock_client.attributes.put.call_args.args[4]
        assert request.to_dict()["shape"] == [2, 2]
        assert request.value == [[1, 2], [3, 4]]

    def test_attr_put_ragged_array(self, runner, config_dir, mock_client):
        result = invoke(runner, config_dir, [
            'attr', 'put', DOMAIN, 'groups', 'g-1', 'grid', '[[1, 2], [3]]'
        ])

        assert result.exit_code == 1
        assert 'not rectangular' in result.output
        mock_client.attributes.put.assert_not_called()

    @pytest.mark.parametrize("args", [
        ['group', 'create', DOMAIN],
        ['link', 'create', DOMAIN, 'g-1', 'alias', '--h5path', '/data'],
        ['dataset', 'read', DOMAIN, 'd-1'],
        ['attr', 'get', DOMAIN, 'groups', 'g-1', 'count'],
        ['attr', 'put', DOMAIN, 'groups', 'g-1', 'count', '1'],
    ])
    def test_commands_apply_configured_log_level(self, runner, config_dir, mock_client, args):
        """Test that commands without -v/-q still set up logging from the config."""
        mock_client.groups.create.return_value = Group(id="g-new")
        mock_client.datasets.read_values_json.return_value = {"value": []}
        mock_client.attributes.get.return_value = Attribute(name="count", value=1)

        with patch('hsds_client.commands.objects.setup_logging') as mock_setup:
            result = invoke(runner, config_dir, args)

        assert result.exit_code == 0
        mock_setup.assert_called_once_with(False, False, 'WARNING')

    def test_attr_put_string(self, runner, config_dir, mock_client):
        result = invoke(runner, config_dir, [
            'attr', 'put', DOMAIN, 'datasets', 'd-1', 'units', '42', '--type', 'H5T_STRING'
        ])

        assert result.exit_code == 0
        request = mock_client.attributes.put.call_args.args[4]
        assert request.value == "42"
        assert request.type == DataType.variable_utf8()

    def test_attr_invalid_collection(self, runner, config_dir, mock_client):
        result = invoke(runner, config_dir, ['attr', 'ls', DOMAIN, 'files', 'x'])

        assert result.exit_code == 2
