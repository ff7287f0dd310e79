"""
Stack configuration loading.

Reads the Pulumi stack configuration (``Pulumi.<stack>.yaml``) and builds a
``StackSettings`` object. All validation happens here so resource factories
can assume well-formed values.

Configuration keys:
    resourceGroup  (required)  Azure resource group name
    pguser         (required)  PostgreSQL admin login
    pgpass         (required, secret)  PostgreSQL admin password
    location       (optional)  Azure region, default "West US 2"
    dbname         (optional)  Database name, default "ruhe"
    mode           (optional)  "DEBUG" enables debug logging

Usage:
    import pulumi
    from src.core.config_loader import load_stack_settings

    settings = load_stack_settings(pulumi.Config())
"""

import logging
import re
from typing import Optional

import src.constants as CONSTANTS
from .context import StackSettings
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Azure: 1-90 chars, alphanumerics, underscores, hyphens, periods, parentheses; no trailing period
_RESOURCE_GROUP_PATTERN = re.compile(r"^[-\w.()]{1,90}$")
_PG_LOGIN_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]{0,62}$")
_DB_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,63}$")


def _require(cfg, key: str, secret: bool = False):
    """
    Read a required key, raising ConfigurationError when it is absent.

    Args:
        cfg: ``pulumi.Config`` (or anything exposing ``get``/``get_secret``)
        key: Configuration key
        secret: Read with ``get_secret`` so the value stays an encrypted Output
    """
    value = cfg.get_secret(key) if secret else cfg.get(key)
    if value is None or value == "":
        hint = f"pulumi config set {'--secret ' if secret else ''}{key} <value>"
        raise ConfigurationError(
            f"Missing required configuration key '{key}' (set it with: {hint})",
            key=key,
        )
    return value


def validate_resource_group_name(name: str) -> None:
    if not _RESOURCE_GROUP_PATTERN.match(name) or name.endswith("."):
        raise ConfigurationError(
            f"Invalid resource group name '{name}': use 1-90 letters, digits, "
            f"'_', '-', '.', '(' or ')' and do not end with '.'",
            key=CONSTANTS.CONFIG_RESOURCE_GROUP,
        )


def validate_admin_login(login: str) -> None:
    """
    Check a PostgreSQL admin login against Azure's restrictions.

    Raises:
        ConfigurationError: If the login is malformed, reserved or starts with ``pg_``
    """
    if not _PG_LOGIN_PATTERN.match(login):
        raise ConfigurationError(
            f"Invalid admin login '{login}': must start with a letter and contain "
            f"only letters, digits and '_' (max 63 chars)",
            key=CONSTANTS.CONFIG_PG_USER,
        )
    if login.lower() in CONSTANTS.RESERVED_PG_LOGINS:
        raise ConfigurationError(
            f"Admin login '{login}' is reserved by Azure Database for PostgreSQL",
            key=CONSTANTS.CONFIG_PG_USER,
        )
    if login.lower().startswith("pg_"):
        raise ConfigurationError(
            f"Admin login '{login}' must not start with 'pg_'",
            key=CONSTANTS.CONFIG_PG_USER,
        )


def validate_db_name(name: str) -> None:
    if not _DB_NAME_PATTERN.match(name):
        raise ConfigurationError(
            f"Invalid database name '{name}': use 1-63 letters, digits, '_' or '-'",
            key=CONSTANTS.CONFIG_DB_NAME,
        )


def load_stack_settings(cfg) -> StackSettings:
    """
    Load and validate the stack configuration.

    Args:
        cfg: ``pulumi.Config`` for the project namespace

    Returns:
        StackSettings with every key resolved (defaults applied)

    Raises:
        ConfigurationError: If a required key is missing or a value is invalid
    """
    resource_group = _require(cfg, CONSTANTS.CONFIG_RESOURCE_GROUP)
    pg_user = _require(cfg, CONSTANTS.CONFIG_PG_USER)
    pg_password = _require(cfg, CONSTANTS.CONFIG_PG_PASSWORD, secret=True)

    location: Optional[str] = cfg.get(CONSTANTS.CONFIG_LOCATION) or CONSTANTS.DEFAULT_LOCATION
    db_name: Optional[str] = cfg.get(CONSTANTS.CONFIG_DB_NAME) or CONSTANTS.DEFAULT_DB_NAME
    mode: Optional[str] = cfg.get(CONSTANTS.CONFIG_MODE) or CONSTANTS.DEFAULT_MODE

    validate_resource_group_name(resource_group)
    validate_admin_login(pg_user)
    validate_db_name(db_name)

    logger.debug(
        f"Loaded stack settings: resource_group={resource_group}, location={location}, "
        f"db_name={db_name}, pg_user={pg_user}"
    )

    return StackSettings(
        resource_group=resource_group,
        pg_user=pg_user,
        pg_password=pg_password,
        location=location,
        db_name=db_name,
        mode=mode,
    )
