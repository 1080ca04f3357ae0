"""
Command-line interface for the OVHcloud Data SDK
Manage OVH API credentials, configurations and Data Integration resources
"""

import argparse
import getpass
import logging
import sys
import webbrowser
from typing import Any, Callable, List, Optional

from . import __version__
from .api import OvhDataClient, create_client
from .config import AllConfig, Config, Context, StoredCredentials
from .exceptions import ApiResponseError, ConfigError, OvhDataSDKError, ValidationError
from .log import SESSION_ID, session_log_path, setup_logging
from .models import (
    DestinationSpec,
    Parameter,
    SourceSpec,
    WorkflowPatch,
    WorkflowSpec,
)
from .output import OutputFormat, render, sort_records, table

logger = logging.getLogger(__name__)

PROG = 'ovhdata-cli'

OBJECT_OUTPUTS = [OutputFormat.JSON.value, OutputFormat.YAML.value, OutputFormat.DESCRIPTION.value]
LIST_OUTPUTS = [OutputFormat.JSON.value, OutputFormat.YAML.value, OutputFormat.TABLE.value]

# --sort choices mapped to record attributes
ENDPOINT_SORT_FIELDS = {
    'name': 'name',
    'age': 'creation_date',
    'update': 'last_update_date',
    'status': 'status',
    'connector': 'connector_id',
}
CONNECTOR_SORT_FIELDS = {'name': 'name', 'version': 'version'}
WORKFLOW_SORT_FIELDS = {
    'name': 'name',
    'last-execution': 'last_execution_date',
    'status': 'status',
    'enabled': 'enabled',
    'source-name': 'source_name',
    'destination-name': 'destination_name',
}
JOB_SORT_FIELDS = {'age': 'created_at', 'status': 'status'}

HELP_LOGIN_HOW_TO = (
    "To log in, create an application key, an application secret and a consumer key at:\n"
    "  {create_token_url}"
)


class CliSession:
    """Configuration and context loaded for one invocation"""

    def __init__(self, all_config: AllConfig, context: Context, service_name: Optional[str] = None):
        self.all_config = all_config
        self.context = context
        self._service_name = service_name

    @classmethod
    def load(cls, service_name: Optional[str] = None) -> 'CliSession':
        return cls(AllConfig.load(), Context.load(), service_name)

    @property
    def config_name(self) -> str:
        return self.all_config.current_config_name

    @property
    def config(self):
        return self.all_config.current_config()

    def client(self, credentials: Optional[StoredCredentials] = None) -> OvhDataClient:
        """
        Client for the current configuration.

        Raises:
            ConfigError: If there are no stored credentials
        """
        credentials = credentials or self.context.get_credentials(self.config_name)
        if credentials is None or not credentials.complete:
            raise ConfigError(
                f"You are not logged in for config '{self.config_name}', run `{PROG} login`", "NOT_LOGGED_IN"
            )
        return create_client(
            self.config.ovhapiv6.endpoint_url,
            credentials.application_key,
            credentials.application_secret,
            credentials.consumer_key,
        )

    def service_name(self) -> str:
        """
        Cloud project to work on: --service-name, or the one saved in the context.

        Raises:
            ConfigError: If none is selected
        """
        service_name = self._service_name or self.context.get_service_name(self.config_name)
        if not service_name:
            raise ConfigError(
                f"No service name selected, use --service-name or run `{PROG} config service-name NAME`",
                "NO_SERVICE_NAME",
            )
        return service_name


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog=PROG,
        description='OVHcloud Data command-line interface for Data Integration'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'OVHcloud Data CLI {__version__}'
    )
    parser.add_argument('--service-name', help='Cloud project service name to use for this command')
    parser.add_argument(
        '-v', '--verbose',
        action='count',
        default=0,
        help='Increase verbosity (-v info, -vv debug, -vvv debug including HTTP internals)'
    )
    parser.add_argument('--json-log', action='store_true', help='Write logs as JSON lines')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    setup_auth_parsers(subparsers)
    setup_debug_parser(subparsers)
    setup_config_parser(subparsers)
    setup_di_parser(subparsers)

    return parser


def _add_output(parser, choices: List[str]):
    parser.add_argument('-o', '--output', choices=choices, help='Output format')


def _add_list_options(parser, sort_fields):
    parser.add_argument('--sort', choices=sorted(sort_fields), help='Sort on this field')
    parser.add_argument('--desc', action='store_true', help='Sort in descending order')
    _add_output(parser, LIST_OUTPUTS)


def _add_script(parser):
    parser.add_argument('--script', action='store_true', help='Do not ask for confirmation')


def _add_parameters(parser):
    parser.add_argument(
        '-p', '--parameter',
        dest='parameters',
        action='append',
        default=[],
        metavar='NAME=VALUE',
        help='Parameter, can be repeated'
    )


def setup_auth_parsers(subparsers):
    """Setup login, logout and me subcommands."""
    login_parser = subparsers.add_parser('login', help='Log in with OVH API credentials')
    login_parser.add_argument('-a', '--application-key', help='Application key')
    login_parser.add_argument('-c', '--consumer-key', help='Consumer key')
    login_parser.add_argument('-s', '--application-secret', help='Application secret')
    _add_output(login_parser, OBJECT_OUTPUTS)
    login_parser.set_defaults(handler=handle_login_command)

    logout_parser = subparsers.add_parser('logout', help='Forget the credentials of the current config')
    logout_parser.set_defaults(handler=handle_logout_command)

    me_parser = subparsers.add_parser('me', help='Show the logged in account')
    _add_output(me_parser, OBJECT_OUTPUTS)
    me_parser.set_defaults(handler=handle_me_command)


def setup_debug_parser(subparsers):
    """Setup debug subcommand."""
    debug_parser = subparsers.add_parser('debug', help='Print the log file of a previous command')
    debug_parser.add_argument('session_id', help='Session id printed by the failed command')
    debug_parser.set_defaults(handler=handle_debug_command)


def setup_config_parser(subparsers):
    """Setup configuration subcommands."""
    config_parser = subparsers.add_parser('config', help='Configuration management')
    config_subparsers = config_parser.add_subparsers(dest='config_command', help='Configuration operations')

    list_parser = config_subparsers.add_parser('list', help='List configurations')
    _add_output(list_parser, LIST_OUTPUTS)
    list_parser.set_defaults(handler=handle_config_list_command)

    get_parser = config_subparsers.add_parser('get', help='Show a configuration')
    get_parser.add_argument('name', nargs='?', help='Configuration name (default: current)')
    _add_output(get_parser, OBJECT_OUTPUTS)
    get_parser.set_defaults(handler=handle_config_get_command)

    set_parser = config_subparsers.add_parser('set', help='Select the configuration to use')
    set_parser.add_argument('name', help='Configuration name')
    set_parser.set_defaults(handler=handle_config_set_command)

    service_parser = config_subparsers.add_parser('service-name', help='Select the cloud project to use')
    service_parser.add_argument('name', help='Cloud project service name')
    service_parser.set_defaults(handler=handle_config_service_name_command)


def setup_di_parser(subparsers):
    """Setup data integration subcommands."""
    di_parser = subparsers.add_parser('di', help='Data Integration')
    di_subparsers = di_parser.add_subparsers(dest='di_command', help='Data Integration resources')

    setup_source_parser(di_subparsers)
    setup_destination_parser(di_subparsers)
    setup_connector_parsers(di_subparsers)
    setup_workflow_parser(di_subparsers)
    setup_job_parser(di_subparsers)


def setup_source_parser(subparsers):
    source_parser = subparsers.add_parser('source', help='Sources')
    source_subparsers = source_parser.add_subparsers(dest='source_command', help='Source operations')

    list_parser = source_subparsers.add_parser('list', aliases=['ls'], help='List sources')
    _add_list_options(list_parser, ENDPOINT_SORT_FIELDS)
    list_parser.set_defaults(handler=handle_source_list_command)

    get_parser = source_subparsers.add_parser('get', help='Show a source')
    get_parser.add_argument('id', help='Source id')
    _add_output(get_parser, OBJECT_OUTPUTS)
    get_parser.set_defaults(handler=handle_source_get_command)

    status_parser = source_subparsers.add_parser('status', help='Test the connection to a source')
    status_parser.add_argument('id', help='Source id')
    _add_output(status_parser, OBJECT_OUTPUTS)
    status_parser.set_defaults(handler=handle_source_status_command)

    create_parser_ = source_subparsers.add_parser('create', help='Create a source')
    create_parser_.add_argument('name', help='Source name')
    create_parser_.add_argument('--connector-id', required=True, help='Source connector id')
    _add_parameters(create_parser_)
    _add_output(create_parser_, OBJECT_OUTPUTS)
    create_parser_.set_defaults(handler=handle_source_create_command)

    update_parser = source_subparsers.add_parser('update', help='Update a source')
    update_parser.add_argument('id', help='Source id')
    update_parser.add_argument('name', nargs='?', help='New name (default: unchanged)')
    _add_parameters(update_parser)
    _add_output(update_parser, OBJECT_OUTPUTS)
    update_parser.set_defaults(handler=handle_source_update_command)

    delete_parser = source_subparsers.add_parser('delete', aliases=['rm'], help='Delete a source')
    delete_parser.add_argument('id', help='Source id')
    _add_script(delete_parser)
    delete_parser.set_defaults(handler=handle_source_delete_command)

    metadata_parser = source_subparsers.add_parser('metadata', help='Source metadata')
    metadata_subparsers = metadata_parser.add_subparsers(dest='metadata_command', help='Metadata operations')

    meta_get_parser = metadata_subparsers.add_parser('get', help='Show the extracted metadata')
    meta_get_parser.add_argument('id', help='Source id')
    _add_output(meta_get_parser, LIST_OUTPUTS)
    meta_get_parser.set_defaults(handler=handle_source_metadata_get_command)

    meta_extract_parser = metadata_subparsers.add_parser('extract', help='Trigger a metadata extraction')
    meta_extract_parser.add_argument('id', help='Source id')
    _add_output(meta_extract_parser, LIST_OUTPUTS)
    meta_extract_parser.set_defaults(handler=handle_source_metadata_extract_command)


def setup_destination_parser(subparsers):
    dest_parser = subparsers.add_parser('destination', help='Destinations')
    dest_subparsers = dest_parser.add_subparsers(dest='destination_command', help='Destination operations')

    list_parser = dest_subparsers.add_parser('list', aliases=['ls'], help='List destinations')
    _add_list_options(list_parser, ENDPOINT_SORT_FIELDS)
    list_parser.set_defaults(handler=handle_destination_list_command)

    get_parser = dest_subparsers.add_parser('get', help='Show a destination')
    get_parser.add_argument('id', help='Destination id')
    _add_output(get_parser, OBJECT_OUTPUTS)
    get_parser.set_defaults(handler=handle_destination_get_command)

    status_parser = dest_subparsers.add_parser('status', help='Test the connection to a destination')
    status_parser.add_argument('id', help='Destination id')
    _add_output(status_parser, OBJECT_OUTPUTS)
    status_parser.set_defaults(handler=handle_destination_status_command)

    create_parser_ = dest_subparsers.add_parser('create', help='Create a destination')
    create_parser_.add_argument('name', help='Destination name')
    create_parser_.add_argument('--connector-id', required=True, help='Destination connector id')
    _add_parameters(create_parser_)
    _add_output(create_parser_, OBJECT_OUTPUTS)
    create_parser_.set_defaults(handler=handle_destination_create_command)

    update_parser = dest_subparsers.add_parser('update', help='Update a destination')
    update_parser.add_argument('id', help='Destination id')
    update_parser.add_argument('name', nargs='?', help='New name (default: unchanged)')
    _add_parameters(update_parser)
    _add_output(update_parser, OBJECT_OUTPUTS)
    update_parser.set_defaults(handler=handle_destination_update_command)

    delete_parser = dest_subparsers.add_parser('delete', aliases=['rm'], help='Delete a destination')
    delete_parser.add_argument('id', help='Destination id')
    _add_script(delete_parser)
    delete_parser.set_defaults(handler=handle_destination_delete_command)


def setup_connector_parsers(subparsers):
    for kind in ('source', 'destination'):
        connector_parser = subparsers.add_parser(f'{kind}-connector', help=f'{kind.capitalize()} connectors')
        connector_subparsers = connector_parser.add_subparsers(
            dest='connector_command', help='Connector operations'
        )

        list_parser = connector_subparsers.add_parser('list', aliases=['ls'], help=f'List {kind} connectors')
        _add_list_options(list_parser, CONNECTOR_SORT_FIELDS)
        list_parser.set_defaults(handler=handle_connector_list_command, connector_kind=kind)

        get_parser = connector_subparsers.add_parser('get', help=f'Show a {kind} connector')
        get_parser.add_argument('id', help='Connector id')
        _add_output(get_parser, OBJECT_OUTPUTS)
        get_parser.set_defaults(handler=handle_connector_get_command, connector_kind=kind)


def setup_workflow_parser(subparsers):
    workflow_parser = subparsers.add_parser('workflow', help='Workflows')
    workflow_subparsers = workflow_parser.add_subparsers(dest='workflow_command', help='Workflow operations')

    list_parser = workflow_subparsers.add_parser('list', aliases=['ls'], help='List workflows')
    _add_list_options(list_parser, WORKFLOW_SORT_FIELDS)
    list_parser.set_defaults(handler=handle_workflow_list_command)

    get_parser = workflow_subparsers.add_parser('get', help='Show a workflow')
    get_parser.add_argument('id', help='Workflow id')
    _add_output(get_parser, OBJECT_OUTPUTS)
    get_parser.set_defaults(handler=handle_workflow_get_command)

    create_parser_ = workflow_subparsers.add_parser('create', help='Create a workflow')
    create_parser_.add_argument('name', help='Workflow name')
    create_parser_.add_argument('--source-id', required=True, help='Source id')
    create_parser_.add_argument('--destination-id', required=True, help='Destination id')
    create_parser_.add_argument('-r', '--region', required=True, help='Region the jobs run in')
    create_parser_.add_argument('-d', '--description', help='Description')
    create_parser_.add_argument('-s', '--schedule', help='Cron schedule')
    create_parser_.add_argument('--disabled', action='store_true', help='Create the workflow disabled')
    _add_output(create_parser_, OBJECT_OUTPUTS)
    create_parser_.set_defaults(handler=handle_workflow_create_command)

    update_parser = workflow_subparsers.add_parser('update', help='Update a workflow')
    update_parser.add_argument('id', help='Workflow id')
    update_parser.add_argument('-n', '--name', help='New name')
    update_parser.add_argument('-d', '--description', help='New description')
    update_parser.add_argument('-s', '--schedule', help='New cron schedule')
    update_parser.add_argument('-e', '--enabled', type=_parse_bool, help='true or false')
    _add_output(update_parser, OBJECT_OUTPUTS)
    update_parser.set_defaults(handler=handle_workflow_update_command)

    delete_parser = workflow_subparsers.add_parser('delete', aliases=['rm'], help='Delete a workflow')
    delete_parser.add_argument('id', help='Workflow id')
    _add_script(delete_parser)
    delete_parser.set_defaults(handler=handle_workflow_delete_command)

    for name, enabled in (('enable', True), ('disable', False)):
        toggle_parser = workflow_subparsers.add_parser(name, help=f'{name.capitalize()} a workflow')
        toggle_parser.add_argument('id', help='Workflow id')
        _add_output(toggle_parser, OBJECT_OUTPUTS)
        toggle_parser.set_defaults(handler=handle_workflow_toggle_command, enabled=enabled)

    run_parser = workflow_subparsers.add_parser('run', help='Start a job for a workflow')
    run_parser.add_argument('id', help='Workflow id')
    _add_output(run_parser, OBJECT_OUTPUTS)
    run_parser.set_defaults(handler=handle_workflow_run_command)


def setup_job_parser(subparsers):
    job_parser = subparsers.add_parser('job', help='Workflow jobs')
    job_subparsers = job_parser.add_subparsers(dest='job_command', help='Job operations')

    list_parser = job_subparsers.add_parser('list', aliases=['ls'], help='List the jobs of a workflow')
    list_parser.add_argument('--workflow-id', required=True, help='Workflow id')
    _add_list_options(list_parser, JOB_SORT_FIELDS)
    list_parser.set_defaults(handler=handle_job_list_command)

    get_parser = job_subparsers.add_parser('get', help='Show a job')
    get_parser.add_argument('id', help='Job id')
    get_parser.add_argument('--workflow-id', required=True, help='Workflow id')
    _add_output(get_parser, OBJECT_OUTPUTS)
    get_parser.set_defaults(handler=handle_job_get_command)

    stop_parser = job_subparsers.add_parser('stop', help='Stop a running job')
    stop_parser.add_argument('id', help='Job id')
    stop_parser.add_argument('--workflow-id', required=True, help='Workflow id')
    _add_script(stop_parser)
    stop_parser.set_defaults(handler=handle_job_stop_command)


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ('true', 'yes', '1'):
        return True
    if lowered in ('false', 'no', '0'):
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: '{value}'")


def _parse_parameters(values: List[str]) -> List[Parameter]:
    try:
        return [Parameter.parse(value) for value in values]
    except ValueError as e:
        raise ValidationError(str(e), "INVALID_PARAMETER") from e


def confirm(message: str, script: bool = False) -> bool:
    """Ask for confirmation unless running as a script."""
    if script:
        return True
    response = input(f"{message} (y/N): ")
    return response.lower() in ['y', 'yes']


def print_result(value: Any, args) -> None:
    print(render(value, getattr(args, 'output', None)))


def print_sorted(records: List[Any], args, sort_fields) -> None:
    attribute = sort_fields.get(args.sort) if args.sort else None
    print_result(sort_records(records, attribute, args.desc), args)


# Authentication

def _check_stored_credentials(args, session: CliSession, credentials: StoredCredentials) -> None:
    """Show what the stored credentials give access to; an invalid key pair is only reported."""
    print("Current connection infos...")
    try:
        with session.client(credentials) as client:
            details = client.current_credential()
    except ApiResponseError as e:
        if e.http_status not in (401, 403):
            raise
        print(f"You are not authenticated, status_code={e.http_status}", file=sys.stderr)
        print(e.message, file=sys.stderr)
        return
    print_result(details, args)


def _open_create_token_page(url: str) -> None:
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        logger.warning(f"Unable to open a browser: {e}")
        return
    if not opened:
        logger.warning("No browser available to open the token creation page")


def handle_login_command(args, session: CliSession) -> int:
    """Handle login, prompting for the missing credentials."""
    application_key = args.application_key
    application_secret = args.application_secret
    consumer_key = args.consumer_key

    interactive = not (application_key and application_secret and consumer_key)
    if interactive:
        stored = session.context.get_credentials(session.config_name)
        if stored is not None and stored.complete:
            _check_stored_credentials(args, session, stored)
            if not confirm("Do you want to reset the current credentials?"):
                print("Maybe another day ;-)", file=sys.stderr)
                return 1

        create_token_url = session.config.ovhapiv6.create_token_url
        print(HELP_LOGIN_HOW_TO.format(create_token_url=create_token_url))
        _open_create_token_page(create_token_url)

        if not application_key:
            application_key = input("Application Key: ").strip()
        if not application_secret:
            application_secret = getpass.getpass("Application Secret: ").strip()
        if not consumer_key:
            consumer_key = input("Consumer Key: ").strip()

    if not (application_key and application_secret and consumer_key):
        raise ValidationError("Application key, application secret and consumer key are required")

    credentials = StoredCredentials(
        application_key=application_key,
        application_secret=application_secret,
        consumer_key=consumer_key,
    )

    with session.client(credentials) as client:
        details = client.current_credential()
    print_result(details, args)

    session.context.set_credentials(session.config_name, credentials)
    session.context.save()

    print()
    print("You are now logged in.")
    return 0


def handle_logout_command(args, session: CliSession) -> int:
    session.context.logout(session.config_name)
    session.context.save()
    print("You have successfully logged out!")
    return 0


def handle_me_command(args, session: CliSession) -> int:
    with session.client() as client:
        print_result(client.me(), args)
    return 0


def handle_debug_command(args, session: CliSession) -> int:
    """Print the log file of a previous session."""
    log_file = session_log_path(session.context.uuid, args.session_id)
    try:
        with open(log_file, 'r', encoding='utf-8') as f:
            for line in f:
                print(line.rstrip('\n'))
    except OSError as e:
        raise ConfigError(f"Unable to read log file {log_file}: {e}", "LOG_NOT_FOUND") from e

    print(f"\nDebug file path={log_file}")
    return 0


# Configuration

def handle_config_list_command(args, session: CliSession) -> int:
    names = session.all_config.list_configs()
    if args.output in ('json', 'yaml'):
        configs = [
            {'name': name, 'config': session.all_config.configs[name].to_dict()} for name in names
        ]
        print_result(configs, args)
        return 0

    rows = []
    for name in names:
        marker = '*' if name == session.config_name else ' '
        rows.append([marker, name, session.all_config.configs[name].ovhapiv6.endpoint_url])
    print(table(rows, ['', *Config.TABLE_HEADERS]))
    return 0


def handle_config_get_command(args, session: CliSession) -> int:
    name = args.name or session.config_name
    config = session.all_config.get_config(name)
    if config is None:
        raise ConfigError(f"Unable to find any config with name: {name}", "CONFIG_NAME_NOT_FOUND")

    credentials = session.context.get_credentials(name)
    description = {
        'name': name,
        'current': name == session.config_name,
        'auth_method': config.auth_method,
        'endpoint_url': config.ovhapiv6.endpoint_url,
        'service_name': session.context.get_service_name(name),
        'credentials': credentials.hide_secrets().to_dict() if credentials else None,
    }
    print_result(description, args)
    return 0


def handle_config_set_command(args, session: CliSession) -> int:
    session.all_config.set_current_config(args.name)
    session.all_config.save()
    print(f"Current configuration is now '{args.name}'")
    return 0


def handle_config_service_name_command(args, session: CliSession) -> int:
    session.context.set_service_name(session.config_name, args.name)
    session.context.save()
    print(f"Service name for configuration '{session.config_name}' is now '{args.name}'")
    return 0


# Sources

def handle_source_list_command(args, session: CliSession) -> int:
    with session.client() as client:
        sources = client.di_sources(session.service_name())
    print_sorted(sources, args, ENDPOINT_SORT_FIELDS)
    return 0


def handle_source_get_command(args, session: CliSession) -> int:
    with session.client() as client:
        print_result(client.di_source(session.service_name(), args.id), args)
    return 0


def handle_source_status_command(args, session: CliSession) -> int:
    with session.client() as client:
        print_result(client.di_source_status(session.service_name(), args.id), args)
    return 0


def handle_source_create_command(args, session: CliSession) -> int:
    spec = SourceSpec(
        name=args.name,
        connector_id=args.connector_id,
        parameters=_parse_parameters(args.parameters),
    )
    with session.client() as client:
        print_result(client.di_source_post(session.service_name(), spec), args)
    return 0


def handle_source_update_command(args, session: CliSession) -> int:
    service_name = session.service_name()
    with session.client() as client:
        current = client.di_source(service_name, args.id)
        spec = SourceSpec(
            name=args.name or current.name,
            parameters=_parse_parameters(args.parameters) or current.parameters,
        )
        print_result(client.di_source_update(service_name, args.id, spec), args)
    return 0


def handle_source_delete_command(args, session: CliSession) -> int:
    return _delete(args, session, "source", lambda client, sn: client.di_source_delete(sn, args.id))


def handle_source_metadata_get_command(args, session: CliSession) -> int:
    with session.client() as client:
        print_result(client.di_source_metadata(session.service_name(), args.id), args)
    return 0


def handle_source_metadata_extract_command(args, session: CliSession) -> int:
    with session.client() as client:
        print_result(client.di_source_metadata_post(session.service_name(), args.id), args)
    return 0


# Destinations

def handle_destination_list_command(args, session: CliSession) -> int:
    with session.client() as client:
        destinations = client.di_destinations(session.service_name())
    print_sorted(destinations, args, ENDPOINT_SORT_FIELDS)
    return 0


def handle_destination_get_command(args, session: CliSession) -> int:
    with session.client() as client:
        print_result(client.di_destination(session.service_name(), args.id), args)
    return 0


def handle_destination_status_command(args, session: CliSession) -> int:
    with session.client() as client:
        print_result(client.di_destination_status(session.service_name(), args.id), args)
    return 0


def handle_destination_create_command(args, session: CliSession) -> int:
    spec = DestinationSpec(
        name=args.name,
        connector_id=args.connector_id,
        parameters=_parse_parameters(args.parameters),
    )
    with session.client() as client:
        print_result(client.di_destination_post(session.service_name(), spec), args)
    return 0


def handle_destination_update_command(args, session: CliSession) -> int:
    service_name = session.service_name()
    with session.client() as client:
        current = client.di_destination(service_name, args.id)
        spec = DestinationSpec(
            name=args.name or current.name,
            parameters=_parse_parameters(args.parameters) or current.parameters,
        )
        print_result(client.di_destination_update(service_name, args.id, spec), args)
    return 0


def handle_destination_delete_command(args, session: CliSession) -> int:
    return _delete(args, session, "destination", lambda client, sn: client.di_destination_delete(sn, args.id))


# Connectors

def handle_connector_list_command(args, session: CliSession) -> int:
    with session.client() as client:
        if args.connector_kind == 'source':
            connectors = client.di_source_connectors(session.service_name())
        else:
            connectors = client.di_destination_connectors(session.service_name())
    print_sorted(connectors, args, CONNECTOR_SORT_FIELDS)
    return 0


def handle_connector_get_command(args, session: CliSession) -> int:
    with session.client() as client:
        if args.connector_kind == 'source':
            connector = client.di_source_connector(session.service_name(), args.id)
        else:
            connector = client.di_destination_connector(session.service_name(), args.id)
    print_result(connector, args)
    return 0


# Workflows

def handle_workflow_list_command(args, session: CliSession) -> int:
    with session.client() as client:
        workflows = client.di_workflows(session.service_name())
    print_sorted(workflows, args, WORKFLOW_SORT_FIELDS)
    return 0


def handle_workflow_get_command(args, session: CliSession) -> int:
    with session.client() as client:
        print_result(client.di_workflow(session.service_name(), args.id), args)
    return 0


def handle_workflow_create_command(args, session: CliSession) -> int:
    spec = WorkflowSpec(
        name=args.name,
        region=args.region,
        source_id=args.source_id,
        destination_id=args.destination_id,
        enabled=not args.disabled,
        description=args.description,
        schedule=args.schedule,
    )
    with session.client() as client:
        print_result(client.di_workflow_post(session.service_name(), spec), args)
    return 0


def handle_workflow_update_command(args, session: CliSession) -> int:
    patch = WorkflowPatch(
        name=args.name,
        description=args.description,
        schedule=args.schedule,
        enabled=args.enabled,
    )
    with session.client() as client:
        print_result(client.di_workflow_put(session.service_name(), args.id, patch), args)
    return 0


def handle_workflow_toggle_command(args, session: CliSession) -> int:
    with session.client() as client:
        workflow = client.di_workflow_put(session.service_name(), args.id, WorkflowPatch(enabled=args.enabled))
    print_result(workflow, args)
    return 0


def handle_workflow_delete_command(args, session: CliSession) -> int:
    return _delete(args, session, "workflow", lambda client, sn: client.di_workflow_delete(sn, args.id))


def handle_workflow_run_command(args, session: CliSession) -> int:
    with session.client() as client:
        print_result(client.di_job_post(session.service_name(), args.id), args)
    return 0


# Jobs

def handle_job_list_command(args, session: CliSession) -> int:
    with session.client() as client:
        jobs = client.di_jobs(session.service_name(), args.workflow_id)
    print_sorted(jobs, args, JOB_SORT_FIELDS)
    return 0


def handle_job_get_command(args, session: CliSession) -> int:
    with session.client() as client:
        print_result(client.di_job(session.service_name(), args.workflow_id, args.id), args)
    return 0


def handle_job_stop_command(args, session: CliSession) -> int:
    if not confirm(f"Are you sure you want to stop job '{args.id}'?", args.script):
        print("Operation cancelled")
        return 0
    with session.client() as client:
        client.di_job_delete(session.service_name(), args.workflow_id, args.id)
    print(f"Job '{args.id}' is stopping")
    return 0


def _delete(args, session: CliSession, kind: str, delete: Callable[[OvhDataClient, str], None]) -> int:
    if not confirm(f"Are you sure you want to delete {kind} '{args.id}'?", args.script):
        print("Operation cancelled")
        return 0
    service_name = session.service_name()
    with session.client() as client:
        delete(client, service_name)
    print(f"{kind.capitalize()} '{args.id}' deleted")
    return 0


def print_debug_hint(verbosity: int) -> None:
    if verbosity > 0:
        print(f"For more details, run `{PROG} debug {SESSION_ID}`", file=sys.stderr)
    else:
        print("Run the command again with -v for more details", file=sys.stderr)


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, 1 on error, 130 when interrupted)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    handler = getattr(args, 'handler', None)
    if handler is None:
        # No command specified, show help
        parser.print_help()
        return 1

    try:
        session = CliSession.load(args.service_name)
        setup_logging(args.verbose, session.context.uuid, args.json_log)
        return handler(args, session)

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except (OvhDataSDKError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        print_debug_hint(args.verbose)
        return 1


if __name__ == '__main__':
    sys.exit(main())
