"""
Ruhe Infrastructure - CLI Entry Point.

Thin command line front end over PulumiRunner.

Usage:
    python -m src.main configure --resource-group ruhe-prod --pguser ruheadmin
    python -m src.main preview
    python -m src.main up --stack prod
    python -m src.main outputs --show-secrets
    python -m src.main config
    python -m src.main destroy
"""

import argparse
import getpass
import json
import os
import sys
from pathlib import Path

import src.constants as CONSTANTS
from src import logger as log
from src.core.config_loader import (
    validate_admin_login,
    validate_db_name,
    validate_resource_group_name,
)
from src.core.exceptions import ConfigurationError, DeploymentError
from src.pulumi_runner import PulumiRunner


def get_project_path() -> Path:
    """Get the project root path (where Pulumi.yaml lives)."""
    return Path(__file__).parent.parent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ruhe-infra",
        description="Deploy the ruhe PostgreSQL, Hasura and jump-box stack on Azure",
    )
    parser.add_argument("--stack", default=CONSTANTS.DEFAULT_STACK_NAME, help="Pulumi stack name")
    parser.add_argument("--work-dir", default=None, help="Pulumi project directory")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("preview", help="Preview changes")
    sub.add_parser("up", help="Create or update resources")
    sub.add_parser("refresh", help="Refresh state from Azure")
    sub.add_parser("destroy", help="Destroy all resources")

    outputs = sub.add_parser("outputs", help="Show stack outputs")
    outputs.add_argument("--show-secrets", action="store_true", help="Reveal secret outputs")

    sub.add_parser("config", help="Show stack configuration (secrets masked)")

    configure = sub.add_parser("configure", help="Write stack configuration")
    configure.add_argument("--resource-group", required=True, help="Resource group name")
    configure.add_argument("--pguser", required=True, help="PostgreSQL admin login")
    configure.add_argument("--location", default=None, help=f"Azure region (default: {CONSTANTS.DEFAULT_LOCATION})")
    configure.add_argument("--dbname", default=None, help=f"Database name (default: {CONSTANTS.DEFAULT_DB_NAME})")

    return parser


def read_password() -> str:
    """Read the admin password from the environment, falling back to an interactive prompt."""
    password = os.environ.get(CONSTANTS.PG_PASSWORD_ENV_VAR)
    if password:
        return password
    return getpass.getpass("PostgreSQL admin password: ")


def configure_values(args) -> dict:
    """
    Validate ``configure`` arguments and build the config mapping.

    Raises:
        ConfigurationError: If a value fails validation or the password is empty
    """
    validate_resource_group_name(args.resource_group)
    validate_admin_login(args.pguser)

    values = {
        CONSTANTS.CONFIG_RESOURCE_GROUP: args.resource_group,
        CONSTANTS.CONFIG_PG_USER: args.pguser,
    }
    if args.location:
        values[CONSTANTS.CONFIG_LOCATION] = args.location
    if args.dbname:
        validate_db_name(args.dbname)
        values[CONSTANTS.CONFIG_DB_NAME] = args.dbname

    password = read_password()
    if not password:
        raise ConfigurationError("Password must not be empty", key=CONSTANTS.CONFIG_PG_PASSWORD)
    values[CONSTANTS.CONFIG_PG_PASSWORD] = password
    return values


def run_command(runner: PulumiRunner, args) -> None:
    if args.command == "preview":
        runner.preview()
    elif args.command == "up":
        runner.up()
    elif args.command == "refresh":
        runner.refresh()
    elif args.command == "destroy":
        runner.destroy()
    elif args.command == "outputs":
        print(json.dumps(runner.outputs(show_secrets=args.show_secrets), indent=2))
    elif args.command == "configure":
        runner.set_config(configure_values(args), secrets=CONSTANTS.SECRET_CONFIG_KEYS)
    elif args.command == "config":
        print(json.dumps(runner.get_config(), indent=2))


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logger = log.setup_logger(debug_mode=args.debug)

    work_dir = args.work_dir or str(get_project_path())

    try:
        runner = PulumiRunner(work_dir=work_dir, stack_name=args.stack)
        run_command(runner, args)
    except ValueError as e:
        logger.error(str(e))
        return 1
    except DeploymentError as e:
        logger.error(f"Error during '{args.command}': {e}")
        log.print_stack_trace()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
